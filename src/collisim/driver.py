"""
Run driver and command-line entry point.

Ticks a ParticleSystem until the configured wall-clock duration has
elapsed. The deadline is checked only between ticks; a tick in progress
always completes.
"""

import argparse
import json
import logging
import sys
import time
from typing import Callable, Optional

import numpy as np

from .config import RunConfig, load_config
from .diagnostics import RunTracker
from .pool import WorkerPool
from .system import ParticleSystem
from .utils import setup_logging

logger = logging.getLogger(__name__)


class RunResult:
    """
    Outcome of a run.

    Attributes:
        ticks: Completed ticks
        collisions: Final cumulative collision count
        elapsed: Wall-clock run time [s]
        tracker: Per-tick RunTracker, if one was attached
    """

    def __init__(self, ticks: int, collisions: int, elapsed: float,
                 tracker: Optional[RunTracker] = None):
        self.ticks = ticks
        self.collisions = collisions
        self.elapsed = elapsed
        self.tracker = tracker

    def report(self, duration: float) -> str:
        """Human-readable end-of-run lines."""
        return (f"Particles moved {self.ticks} times in {duration:g} seconds\n"
                f"Total number of collisions: {self.collisions}")

    def __repr__(self):
        return (f"RunResult(ticks={self.ticks}, collisions={self.collisions}, "
                f"elapsed={self.elapsed:.3f})")


def run_simulation(config: RunConfig,
                   system: Optional[ParticleSystem] = None,
                   pool: Optional[WorkerPool] = None,
                   tracker: Optional[RunTracker] = None,
                   clock: Callable[[], float] = time.monotonic) -> RunResult:
    """
    Tick until ``config.duration`` seconds have elapsed.

    Args:
        config: Run parameters (validated here)
        system: Existing ParticleSystem (default: built from config)
        pool: Existing WorkerPool (default: one is created and shut down)
        tracker: Optional RunTracker recording each tick
        clock: Monotonic time source [s]

    Returns:
        result: RunResult with tick and collision totals
    """
    config.validate()

    if system is None:
        rng = np.random.default_rng(config.seed)
        system = ParticleSystem(
            config.num_particles, config.enclosure_size, config.enclosure_size,
            chunk_size=config.chunk_size, rng=rng,
            trace=True if config.debug else None,
        )

    owns_pool = pool is None
    if owns_pool:
        pool = WorkerPool(config.num_workers)

    logger.info(
        f"Moving particles: n={len(system)}, workers={pool.num_workers}, "
        f"chunk_size={system.effective_chunk_size(pool)}, duration={config.duration}s"
    )

    ticks = 0
    start = clock()
    try:
        while clock() - start < config.duration:
            if config.max_ticks is not None and ticks >= config.max_ticks:
                logger.info(f"Reached max_ticks ({config.max_ticks}). Stopping run.")
                break

            system.advance(config.enclosure_size, pool)
            system.detect_collisions(config.collision_threshold, pool)
            ticks += 1

            if tracker is not None:
                tracker.record(ticks, clock() - start, system.collision_count)
    finally:
        if owns_pool:
            pool.shutdown()

    elapsed = clock() - start
    result = RunResult(ticks, system.collision_count, elapsed, tracker)
    logger.info(f"Run finished: {result}")

    return result


# ==================== COMMAND LINE ====================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="collisim",
        description="Threaded random-walk particle collision counter",
    )
    p.add_argument("--config", default="", help="JSON run configuration")
    p.add_argument("--particles", dest="num_particles", type=int, help="Particle count")
    p.add_argument("--enclosure-size", type=float, help="Side length of the square enclosure")
    p.add_argument("--threshold", dest="collision_threshold", type=float,
                   help="Collision distance")
    p.add_argument("--workers", dest="num_workers", type=int, help="Worker threads")
    p.add_argument("--chunk-size", type=int,
                   help="Chunk length for collision checks (default: --workers)")
    p.add_argument("--duration", type=float, help="Run length in seconds")
    p.add_argument("--max-ticks", type=int, help="Stop after this many ticks")
    p.add_argument("--seed", type=int, help="Seed for the initial placement")
    p.add_argument("--debug", action="store_true", default=None,
                   help="Trace every move and collision")
    p.add_argument("--log-file", help="Rotating log file path")
    p.add_argument("--log-level", default="WARNING", help="Logging level")
    p.add_argument("--csv", default="", help="Per-tick diagnostics CSV output path")
    p.add_argument("--plot", default="", help="Per-tick diagnostics figure output path")
    p.add_argument("--summary", action="store_true", help="Print run summary statistics")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else RunConfig()
        config = config.updated(
            num_particles=args.num_particles,
            enclosure_size=args.enclosure_size,
            collision_threshold=args.collision_threshold,
            num_workers=args.num_workers,
            chunk_size=args.chunk_size,
            duration=args.duration,
            max_ticks=args.max_ticks,
            seed=args.seed,
            debug=args.debug,
            log_file=args.log_file,
        ).validate()
    except (OSError, json.JSONDecodeError, ValueError, TypeError) as exc:
        setup_logging(args.log_level)
        logger.error(f"Invalid configuration: {exc}")
        return 2

    setup_logging("DEBUG" if config.debug else args.log_level, config.log_file)

    tracker = RunTracker() if (args.csv or args.plot or args.summary) else None

    print("\n\nMoving particles...")
    result = run_simulation(config, tracker=tracker)
    print(result.report(config.duration))

    if tracker is not None:
        if args.csv:
            tracker.save_csv(args.csv)
        if args.plot:
            tracker.plot(show=False, save_filename=args.plot)
        if args.summary:
            tracker.summary()

    return 0


if __name__ == "__main__":
    sys.exit(main())
