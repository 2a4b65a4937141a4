"""
Example 01: Reference Run

Demonstrates:
- Building a ParticleSystem and a WorkerPool by hand
- Running fixed-duration ticks (move phase, then collision phase)
- Per-tick diagnostics and a summary plot

100 particles, enclosure 10, threshold 0.1, 4 workers, 10 seconds.
"""

import time

import numpy as np
import matplotlib.pyplot as plt

from collisim.constants import (
    COLLISION_THRESHOLD,
    ENCLOSURE_SIZE,
    NUM_PARTICLES,
    NUM_WORKERS,
    RUN_DURATION,
)
from collisim.diagnostics import RunTracker, boundary_violations, pairs_per_tick
from collisim.pool import WorkerPool
from collisim.system import ParticleSystem


def reference_run(duration=RUN_DURATION):
    print("\n" + "="*60)
    print("Example 1: Reference Run")
    print("="*60)

    system = ParticleSystem(NUM_PARTICLES, ENCLOSURE_SIZE, ENCLOSURE_SIZE)
    tracker = RunTracker()

    print(f"\n  Particles:       {NUM_PARTICLES}")
    print(f"  Workers:         {NUM_WORKERS}")
    print(f"  Pairs per tick:  {pairs_per_tick(NUM_PARTICLES, NUM_WORKERS)}")

    print("\n\nMoving particles...")
    ticks = 0
    start = time.monotonic()

    with WorkerPool(NUM_WORKERS) as pool:
        while time.monotonic() - start < duration:
            system.advance(ENCLOSURE_SIZE, pool)
            system.detect_collisions(COLLISION_THRESHOLD, pool)
            ticks += 1
            tracker.record(ticks, time.monotonic() - start, system.collision_count)

    n_outside = boundary_violations(system.particles.x, system.particles.y, ENCLOSURE_SIZE)

    print(f"Particles moved {ticks} times in {duration:g} seconds")
    print(f"Total number of collisions: {system.collision_count}")
    print(f"Particles outside enclosure: {n_outside}")

    tracker.summary()
    return system, tracker


def plot_final_positions(system, filename='01_final_positions.png'):
    positions = system.positions()

    fig, ax = plt.subplots(figsize=(7, 7))
    ax.scatter(positions[:, 0], positions[:, 1], s=12, c=np.arange(len(system)),
               cmap='viridis')
    ax.set_xlim(0, ENCLOSURE_SIZE)
    ax.set_ylim(0, ENCLOSURE_SIZE)
    ax.set_aspect('equal')
    ax.set_xlabel('x', fontsize=12)
    ax.set_ylabel('y', fontsize=12)
    ax.set_title('Final Positions (colored by index)', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(filename, dpi=150)
    print(f"Plot saved to {filename}")


if __name__ == "__main__":
    system, tracker = reference_run()
    tracker.plot(show=False, save_filename='01_collisions.png')
    plot_final_positions(system)
