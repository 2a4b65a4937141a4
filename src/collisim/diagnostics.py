"""
Diagnostic utilities for collision runs.

This module provides:
- Per-tick collision tracking
- Pair-budget and boundary checks
- Step-distribution statistics
- Data export (CSV) and plotting
"""

import csv
import logging
from typing import Optional

import numpy as np
from numba import njit
from scipy import special, stats

from .constants import STEP_HALF_WIDTH
from .pool import chunk_bounds

logger = logging.getLogger(__name__)


def pairs_per_tick(n_particles: int, chunk_size: int) -> int:
    """
    Number of pair comparisons one collision phase performs.

    Sum of C(k, 2) over the chunk lengths k. Also the largest possible
    collision increase per tick.

    Args:
        n_particles: Population size
        chunk_size: Chunk length

    Returns:
        n_pairs: Pairs examined per call to detect_collisions
    """
    return int(sum(special.comb(stop - start, 2, exact=True)
                   for start, stop in chunk_bounds(n_particles, chunk_size)))


@njit
def boundary_violations(x, y, enclosure_size):
    """
    Count particles outside [0, enclosure_size]^2.

    Args:
        x: x coordinates (n,)
        y: y coordinates (n,)
        enclosure_size: Side length of the enclosure

    Returns:
        n_outside: Number of particles violating the boundary
    """
    n_outside = 0
    for i in range(x.shape[0]):
        if (x[i] < 0.0 or x[i] > enclosure_size
                or y[i] < 0.0 or y[i] > enclosure_size):
            n_outside += 1
    return n_outside


def displacement_uniformity(displacements, half_width: float = STEP_HALF_WIDTH):
    """
    Kolmogorov-Smirnov p-value of displacements against U(-w, w).

    Only meaningful for particles far enough from the walls that no step
    was rejected; near the walls the accepted steps are biased inward.

    Args:
        displacements: 1-D array of per-axis steps
        half_width: Step half width w

    Returns:
        p_value: KS test p-value
    """
    displacements = np.ravel(displacements)
    result = stats.kstest(displacements, "uniform", args=(-half_width, 2.0 * half_width))
    return float(result.pvalue)


class RunTracker:
    """
    Tracks collision diagnostics tick by tick.

    Storage grows as needed, since a wall-clock run does not know its
    tick count in advance.

    Usage:
        tracker = RunTracker()
        while running:
            system.step(...)
            tracker.record(tick, elapsed, system.collision_count)
        tracker.save_csv('ticks.csv')
        tracker.plot()
    """

    def __init__(self, capacity: int = 1024):
        """
        Args:
            capacity: Initial number of ticks to allocate
        """
        capacity = max(int(capacity), 1)
        self.n_records = 0

        self.tick = np.zeros(capacity, dtype=np.int64)
        self.elapsed = np.zeros(capacity)
        self.collisions_total = np.zeros(capacity, dtype=np.int64)
        self.collisions_tick = np.zeros(capacity, dtype=np.int64)

    def _grow(self):
        capacity = 2 * self.tick.shape[0]
        for name in ("tick", "elapsed", "collisions_total", "collisions_tick"):
            old = getattr(self, name)
            new = np.zeros(capacity, dtype=old.dtype)
            new[:old.shape[0]] = old
            setattr(self, name, new)

    def record(self, tick: int, elapsed: float, collisions_total: int):
        """
        Record the state after a completed tick.

        Args:
            tick: Tick number (1-based)
            elapsed: Wall-clock time since the run started [s]
            collisions_total: Cumulative collision count

        Raises:
            ValueError: If the cumulative count went down
        """
        previous = self.collisions_total[self.n_records - 1] if self.n_records else 0
        if collisions_total < previous:
            raise ValueError(
                f"Collision count decreased from {previous} to {collisions_total}"
            )

        if self.n_records >= self.tick.shape[0]:
            self._grow()

        idx = self.n_records
        self.tick[idx] = tick
        self.elapsed[idx] = elapsed
        self.collisions_total[idx] = collisions_total
        self.collisions_tick[idx] = collisions_total - previous

        self.n_records += 1

    def __len__(self):
        return self.n_records

    def tick_rate(self) -> float:
        """Ticks per second over the recorded span."""
        if self.n_records == 0 or self.elapsed[self.n_records - 1] <= 0:
            return 0.0
        return self.n_records / self.elapsed[self.n_records - 1]

    def mean_collisions_per_tick(self) -> float:
        if self.n_records == 0:
            return 0.0
        return float(np.mean(self.collisions_tick[:self.n_records]))

    def save_csv(self, filename: str):
        """
        Save per-tick data to a CSV file.

        Args:
            filename: Output CSV filename
        """
        with open(filename, 'w', newline='') as f:
            writer = csv.writer(f)

            writer.writerow(['tick', 'elapsed_s', 'collisions_total', 'collisions_tick'])

            for i in range(self.n_records):
                writer.writerow([
                    self.tick[i],
                    self.elapsed[i],
                    self.collisions_total[i],
                    self.collisions_tick[i],
                ])

        logger.info(f"Diagnostics saved to {filename}")

    def plot(self, show=True, save_filename: Optional[str] = None):
        """
        Plot cumulative and per-tick collisions.

        Args:
            show: Display plots interactively
            save_filename: Save figure to file (optional)
        """
        import matplotlib
        if not show:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        n = self.n_records
        fig, axes = plt.subplots(1, 2, figsize=(14, 5))

        ax = axes[0]
        ax.plot(self.elapsed[:n], self.collisions_total[:n], 'b-', linewidth=2)
        ax.set_xlabel('Time (s)', fontsize=12)
        ax.set_ylabel('Total Collisions', fontsize=12)
        ax.set_title('Cumulative Collisions', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)

        ax = axes[1]
        ax.plot(self.tick[:n], self.collisions_tick[:n], 'r-', linewidth=1, alpha=0.7)
        ax.axhline(y=self.mean_collisions_per_tick(), color='k', linestyle='--',
                   linewidth=1, label='Mean')
        ax.set_xlabel('Tick', fontsize=12)
        ax.set_ylabel('Collisions', fontsize=12)
        ax.set_title('Collisions per Tick', fontsize=14, fontweight='bold')
        ax.legend(fontsize=10)
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_filename:
            plt.savefig(save_filename, dpi=150, bbox_inches='tight')
            logger.info(f"Plot saved to {save_filename}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def summary(self):
        """
        Print summary statistics.
        """
        print("\n" + "="*60)
        print("RUN SUMMARY")
        print("="*60)

        if self.n_records == 0:
            print("\n  No ticks recorded.")
            print("="*60 + "\n")
            return

        idx = self.n_records - 1
        print(f"\n  Ticks:                {self.tick[idx]:,}")
        print(f"  Elapsed:              {self.elapsed[idx]:.3f} s")
        print(f"  Tick rate:            {self.tick_rate():.1f} ticks/s")
        print(f"  Total collisions:     {self.collisions_total[idx]:,}")
        print(f"  Mean per tick:        {self.mean_collisions_per_tick():.3f}")
        print(f"  Max in one tick:      {np.max(self.collisions_tick[:self.n_records]):,}")

        print("="*60 + "\n")
