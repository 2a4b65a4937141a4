"""
Random-Walk Module

Per-chunk worker functions: bounded random-walk movement and same-chunk
pairwise collision scanning.
"""

from .mover import (
    move_particles_chunk,
    advance_chunk,
)
from .collisions import (
    count_chunk_collisions,
    find_chunk_collisions,
    scan_chunk,
)

__all__ = [
    "move_particles_chunk",
    "advance_chunk",
    "count_chunk_collisions",
    "find_chunk_collisions",
    "scan_chunk",
]
