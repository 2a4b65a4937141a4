"""
CollisiM: Threaded Colliding-Particle Random Walk

Particles random-walk inside a square enclosure; each tick they are
moved chunk by chunk on a fixed worker pool, then every pair inside the
same chunk is checked for proximity and counted.
"""

__version__ = "0.1.0"

from .particles import Particle, ParticleArray
from .counter import AtomicCounter
from .pool import WorkerPool, chunk_bounds
from .system import ParticleSystem
from .config import RunConfig, load_config
from .driver import RunResult, run_simulation

__all__ = [
    "Particle",
    "ParticleArray",
    "AtomicCounter",
    "WorkerPool",
    "chunk_bounds",
    "ParticleSystem",
    "RunConfig",
    "load_config",
    "RunResult",
    "run_simulation",
]
