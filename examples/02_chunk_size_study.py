"""
Example 02: Chunk Size Study

Collision totals depend on the chunk length, since only particles in
the same chunk are ever compared. This sweeps the chunk length at a
fixed worker count and a fixed number of ticks.

Expected: collisions per tick grow roughly linearly with chunk length
(pairs per tick = n/k * C(k, 2) ~ n*k/2).
"""

import time

import numpy as np
import matplotlib.pyplot as plt

from collisim.diagnostics import pairs_per_tick
from collisim.pool import WorkerPool
from collisim.system import ParticleSystem


N_PARTICLES = 400
ENCLOSURE = 10.0
THRESHOLD = 0.5
N_WORKERS = 4
N_TICKS = 500


def run_case(chunk_size, seed=0):
    system = ParticleSystem(N_PARTICLES, ENCLOSURE, ENCLOSURE, chunk_size=chunk_size,
                            rng=np.random.default_rng(seed), trace=False)

    with WorkerPool(N_WORKERS) as pool:
        t_start = time.time()
        for _ in range(N_TICKS):
            system.step(ENCLOSURE, THRESHOLD, pool)
        elapsed = time.time() - t_start

    return system.collision_count, elapsed


def main():
    print("\n" + "="*60)
    print("Example 2: Chunk Size Study")
    print("="*60)

    chunk_sizes = [2, 4, 8, 16, 32, 64, 128, 400]
    rates = []
    budgets = []

    print(f"\n{'chunk':>6s} {'pairs/tick':>11s} {'collisions':>11s} {'per tick':>9s} {'time (s)':>9s}")
    for k in chunk_sizes:
        collisions, elapsed = run_case(k)
        rate = collisions / N_TICKS
        rates.append(rate)
        budgets.append(pairs_per_tick(N_PARTICLES, k))
        print(f"{k:6d} {budgets[-1]:11d} {collisions:11d} {rate:9.3f} {elapsed:9.3f}")

    # Uniform placement: P(pair within r) ~ pi r^2 / L^2
    p_pair = np.pi * THRESHOLD**2 / ENCLOSURE**2
    expected = [b * p_pair for b in budgets]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.loglog(chunk_sizes, rates, 'bo-', linewidth=2, label='Measured')
    ax.loglog(chunk_sizes, expected, 'k--', linewidth=1, label='Uniform estimate')
    ax.set_xlabel('Chunk length', fontsize=12)
    ax.set_ylabel('Collisions per tick', fontsize=12)
    ax.set_title('Collisions vs Chunk Length', fontsize=14, fontweight='bold')
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3, which='both')

    plt.tight_layout()
    plt.savefig('02_chunk_size_study.png', dpi=150)
    print("\nPlot saved to 02_chunk_size_study.png")


if __name__ == "__main__":
    main()
