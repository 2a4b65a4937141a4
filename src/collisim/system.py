"""
Particle System

Owns the particle array and the shared collision counter, and drives the
two per-tick phases across a WorkerPool:

    advance            -> chunks moved in parallel, joined
    detect_collisions  -> chunks scanned in parallel, joined

Each phase blocks until every chunk task has finished, so a scan never
observes a particle mid-move.
"""

import logging

from .counter import AtomicCounter
from .particles import ParticleArray, sample_uniform_positions
from .pool import chunk_bounds
from .walk.mover import advance_chunk
from .walk.collisions import scan_chunk

logger = logging.getLogger(__name__)


class ParticleSystem:
    """
    Fixed population of random-walking particles with a collision tally.

    Attributes:
        particles: ParticleArray (length fixed at construction)
        collision_counter: AtomicCounter of all within-chunk collisions seen
        chunk_size: Comparison granularity; None means "pool size"
        trace: Log every move and every detected collision at DEBUG
    """

    def __init__(self, num_particles, max_x, max_y, chunk_size=None,
                 rng=None, trace=None):
        """
        Place ``num_particles`` uniformly in [0, max_x) x [0, max_y).

        Args:
            num_particles: Population size (>= 1)
            max_x: Width of the initial placement region (> 0)
            max_y: Height of the initial placement region (> 0)
            chunk_size: Fixed chunk length; None uses the pool's worker count
            rng: numpy Generator for initial placement
            trace: Debug tracing; None follows the logger's DEBUG level

        Raises:
            ValueError: If any size or count is not positive
        """
        if num_particles < 1:
            raise ValueError(f"num_particles must be >= 1, got {num_particles}")
        if not max_x > 0 or not max_y > 0:
            raise ValueError(f"Placement region must be positive, got {max_x} x {max_y}")

        particles = sample_uniform_positions(num_particles, max_x, max_y, rng=rng)
        self._init(particles, chunk_size, trace)

        if self.trace:
            for particle in self.particles:
                logger.debug(f"Particle at ({particle.x}, {particle.y})")

        logger.info(f"Created a particle system with {num_particles} particles")

    @classmethod
    def from_positions(cls, positions, chunk_size=None, trace=None):
        """
        Build a system from known positions instead of random placement.

        Args:
            positions: (n, 2) sequence of (x, y)
            chunk_size: Fixed chunk length; None uses the pool's worker count
            trace: Debug tracing; None follows the logger's DEBUG level
        """
        system = cls.__new__(cls)
        system._init(ParticleArray.from_positions(positions), chunk_size, trace)
        return system

    def _init(self, particles, chunk_size, trace):
        if chunk_size is not None and chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

        self.particles = particles
        self.collision_counter = AtomicCounter()
        self.chunk_size = chunk_size
        self.trace = logger.isEnabledFor(logging.DEBUG) if trace is None else bool(trace)

    # ==================== TICK PHASES ====================

    def advance(self, enclosure_size, pool):
        """
        Move every particle by one bounded random step.

        Chunks are dispatched to ``pool`` and joined before returning.

        Args:
            enclosure_size: Side length of the square enclosure (> 0)
            pool: WorkerPool

        Raises:
            ValueError: If enclosure_size <= 0 or a particle lies outside
                the enclosure (the move could never be accepted)
        """
        if not enclosure_size > 0:
            raise ValueError(f"enclosure_size must be positive, got {enclosure_size}")
        if not self.particles.within(enclosure_size, enclosure_size):
            raise ValueError(
                f"Particles lie outside the {enclosure_size} x {enclosure_size} enclosure"
            )

        x, y = self.particles.x, self.particles.y
        pool.run_batch(
            advance_chunk,
            [(x[start:stop], y[start:stop], enclosure_size, self.trace)
             for start, stop in self.chunks(pool)],
        )

    def detect_collisions(self, threshold, pool):
        """
        Count within-chunk pairs at distance <= threshold.

        Adds this call's total to ``collision_counter``; chunks are
        dispatched to ``pool`` and joined before returning.

        Args:
            threshold: Collision distance (>= 0)
            pool: WorkerPool

        Raises:
            ValueError: If threshold is negative
        """
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")

        x, y = self.particles.x, self.particles.y
        pool.run_batch(
            scan_chunk,
            [(x[start:stop], y[start:stop], threshold, self.collision_counter, self.trace)
             for start, stop in self.chunks(pool)],
        )

    def step(self, enclosure_size, threshold, pool):
        """
        One tick: advance, then detect collisions.

        Returns:
            n_new: Collisions added during this tick
        """
        before = self.collision_counter.load()
        self.advance(enclosure_size, pool)
        self.detect_collisions(threshold, pool)
        return self.collision_counter.load() - before

    # ==================== PARTITIONING ====================

    def effective_chunk_size(self, pool):
        """Chunk length used with ``pool``."""
        return self.chunk_size if self.chunk_size is not None else pool.num_workers

    def chunks(self, pool):
        """Contiguous (start, stop) chunk ranges used with ``pool``."""
        return chunk_bounds(len(self.particles), self.effective_chunk_size(pool))

    # ==================== STATE ====================

    @property
    def collision_count(self):
        """Total collisions observed so far."""
        return self.collision_counter.load()

    def positions(self):
        """Copy of all positions as an (n, 2) array."""
        return self.particles.positions()

    def __len__(self):
        return len(self.particles)

    def __repr__(self):
        return (f"ParticleSystem(n_particles={len(self)}, "
                f"collisions={self.collision_count}, chunk_size={self.chunk_size})")
