"""
Particle Data Structures

Positions are kept in a Structure-of-Arrays (SoA) layout: one float64
array per axis. Worker kernels receive contiguous views of these arrays,
so a chunk is just ``(x[start:stop], y[start:stop])``.
"""

import numpy as np
from numba import njit


# ==================== PAIR PREDICATE ====================

@njit(nogil=True)
def particles_collide(x1, y1, x2, y2, threshold):
    """
    Proximity test between two points.

    Compares squared distance against squared threshold, so no square
    root is taken. The boundary is inclusive.

    Args:
        x1, y1: First position
        x2, y2: Second position
        threshold: Collision distance (>= 0)

    Returns:
        collide: True if |p1 - p2| <= threshold
    """
    dx = x1 - x2
    dy = y1 - y2
    return dx * dx + dy * dy <= threshold * threshold


class Particle:
    """
    A 2D position with a collision predicate.

    Particles have no identity beyond their index in a ``ParticleArray``;
    two particles with equal coordinates compare equal.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def collide(self, other: "Particle", threshold: float) -> bool:
        """True if ``other`` lies within ``threshold`` of this particle (inclusive)."""
        return bool(particles_collide(self.x, self.y, other.x, other.y, threshold))

    def __eq__(self, other):
        if not isinstance(other, Particle):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"Particle(x={self.x}, y={self.y})"


class ParticleArray:
    """
    Fixed-length particle container.

    The length is set at construction and never changes; element order is
    stable, which keeps chunk partitioning deterministic.

    Attributes:
        x: x coordinates, shape (n,)
        y: y coordinates, shape (n,)
    """

    def __init__(self, x, y):
        """
        Args:
            x: x coordinates, length n
            y: y coordinates, length n

        Raises:
            ValueError: If the coordinate arrays differ in length or are empty
        """
        x = np.ascontiguousarray(x, dtype=np.float64)
        y = np.ascontiguousarray(y, dtype=np.float64)

        if x.ndim != 1 or y.ndim != 1 or x.shape != y.shape:
            raise ValueError(
                f"x and y must be 1-D arrays of equal length, got shapes {x.shape} and {y.shape}"
            )
        if x.shape[0] == 0:
            raise ValueError("ParticleArray needs at least one particle")

        self.x = x
        self.y = y

    @classmethod
    def from_positions(cls, positions):
        """
        Build from an (n, 2) sequence of ``(x, y)`` pairs.

        Raises:
            ValueError: If positions is not shaped (n, 2)
        """
        positions = np.asarray(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"positions must have shape (n, 2), got {positions.shape}")
        return cls(positions[:, 0].copy(), positions[:, 1].copy())

    def positions(self):
        """Copy of all positions as an (n, 2) array."""
        return np.column_stack((self.x, self.y))

    def within(self, size_x, size_y):
        """True if every particle lies in [0, size_x] x [0, size_y]."""
        return bool(
            np.all(self.x >= 0.0) and np.all(self.x <= size_x)
            and np.all(self.y >= 0.0) and np.all(self.y <= size_y)
        )

    def __len__(self):
        return self.x.shape[0]

    def __getitem__(self, index):
        """Snapshot of one particle (not a live view)."""
        return Particle(self.x[index], self.y[index])

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __repr__(self):
        return f"ParticleArray(n_particles={len(self)})"


# ==================== HELPER FUNCTIONS ====================

def sample_uniform_positions(n_particles, max_x, max_y, rng=None):
    """
    Sample independent uniform positions in [0, max_x) x [0, max_y).

    Args:
        n_particles: Number of positions
        max_x: Upper x bound (exclusive)
        max_y: Upper y bound (exclusive)
        rng: numpy Generator (default: fresh unseeded generator)

    Returns:
        particles: ParticleArray of length n_particles
    """
    if rng is None:
        rng = np.random.default_rng()

    x = rng.uniform(0.0, max_x, size=n_particles)
    y = rng.uniform(0.0, max_y, size=n_particles)

    return ParticleArray(x, y)
