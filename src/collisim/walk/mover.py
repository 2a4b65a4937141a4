"""
Bounded Random-Walk Mover

Numba-compiled kernel that moves a chunk of particles in place. Each
particle takes a uniform step in (-1, +1) per axis; steps that would
leave the enclosure are rejected and redrawn.
"""

import logging

import numpy as np
from numba import njit

from ..constants import STEP_HALF_WIDTH

logger = logging.getLogger(__name__)


# ==================== RANDOM WALK ====================

@njit(nogil=True)
def move_particles_chunk(x, y, enclosure_size):
    """
    Move every particle of a chunk by one accepted random step.

    For each particle:
        dx, dy ~ U(-1, 1)           (drawn as (r - 0.5) * 2, r ~ U[0, 1))
        accept if x + dx and y + dy are both in [0, enclosure_size]
        otherwise redraw both components

    The retry loop is unbounded. It terminates with probability one for
    any particle inside the enclosure when enclosure_size > 0; callers
    must guarantee both conditions.

    Args:
        x: x coordinates of the chunk, shape (k,), modified in-place
        y: y coordinates of the chunk, shape (k,), modified in-place
        enclosure_size: Side length of the square enclosure

    Note:
        Runs without the GIL. Numba keeps a separate random state per
        thread, so concurrent chunks draw independent streams.
    """
    for i in range(x.shape[0]):
        while True:
            new_x = x[i] + (np.random.random() - 0.5) * 2.0 * STEP_HALF_WIDTH
            new_y = y[i] + (np.random.random() - 0.5) * 2.0 * STEP_HALF_WIDTH

            if (new_x >= 0.0 and new_x <= enclosure_size
                    and new_y >= 0.0 and new_y <= enclosure_size):
                x[i] = new_x
                y[i] = new_y
                break


# ==================== WORKER ENTRY POINT ====================

def advance_chunk(x, y, enclosure_size, trace=False):
    """
    Worker task: advance one chunk, optionally tracing every position.

    Args:
        x: x coordinate view of the chunk (modified in-place)
        y: y coordinate view of the chunk (modified in-place)
        enclosure_size: Side length of the square enclosure
        trace: Log each particle's position before and after the move
    """
    if not trace:
        move_particles_chunk(x, y, enclosure_size)
        return

    before = np.column_stack((x, y))
    move_particles_chunk(x, y, enclosure_size)

    for i in range(x.shape[0]):
        logger.debug(f"Current position: ({before[i, 0]}, {before[i, 1]})")
        logger.debug(f"New position: ({x[i]}, {y[i]})")
