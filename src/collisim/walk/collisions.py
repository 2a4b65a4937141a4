"""
Same-Chunk Collision Scanner

Pairwise O(k^2) proximity scan over one chunk. Only pairs inside the
same chunk are compared; a pair split across two chunks is never seen.
"""

import logging

import numpy as np
from numba import njit

from ..particles import particles_collide

logger = logging.getLogger(__name__)


# ==================== PAIRWISE SCAN ====================

@njit(nogil=True)
def count_chunk_collisions(x, y, threshold):
    """
    Count colliding pairs (i, j), i < j, within one chunk.

    Args:
        x: x coordinates of the chunk, shape (k,)
        y: y coordinates of the chunk, shape (k,)
        threshold: Collision distance (>= 0)

    Returns:
        n_collisions: Number of pairs with distance <= threshold
    """
    k = x.shape[0]
    n_collisions = 0

    for i in range(k):
        for j in range(i + 1, k):
            if particles_collide(x[i], y[i], x[j], y[j], threshold):
                n_collisions += 1

    return n_collisions


@njit(nogil=True)
def find_chunk_collisions(x, y, threshold):
    """
    List colliding pairs within one chunk.

    Same scan order as count_chunk_collisions.

    Args:
        x: x coordinates of the chunk, shape (k,)
        y: y coordinates of the chunk, shape (k,)
        threshold: Collision distance (>= 0)

    Returns:
        pairs: Chunk-local index pairs, shape (m, 2), int64
    """
    k = x.shape[0]
    max_pairs = k * (k - 1) // 2
    pairs = np.empty((max_pairs, 2), dtype=np.int64)
    m = 0

    for i in range(k):
        for j in range(i + 1, k):
            if particles_collide(x[i], y[i], x[j], y[j], threshold):
                pairs[m, 0] = i
                pairs[m, 1] = j
                m += 1

    return pairs[:m]


# ==================== WORKER ENTRY POINT ====================

def scan_chunk(x, y, threshold, counter, trace=False):
    """
    Worker task: scan one chunk and add its collisions to ``counter``.

    Particle data is only read. Without tracing the chunk total is added
    in a single atomic increment; with tracing each pair is logged and
    counted individually.

    Args:
        x: x coordinate view of the chunk
        y: y coordinate view of the chunk
        threshold: Collision distance (>= 0)
        counter: Shared AtomicCounter
        trace: Log every detected pair

    Returns:
        n_collisions: Collisions found in this chunk
    """
    if not trace:
        n_collisions = count_chunk_collisions(x, y, threshold)
        if n_collisions:
            counter.increment(n_collisions)
        return n_collisions

    pairs = find_chunk_collisions(x, y, threshold)
    for i, j in pairs:
        counter.increment()
        logger.debug(
            f"Collision detected between particles at "
            f"({x[i]}, {y[i]}) and ({x[j]}, {y[j]})"
        )

    return len(pairs)
