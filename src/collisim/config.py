"""
Run configuration.

Defaults come from constants.py; a JSON file and then command-line flags
may override them.
"""

import json
import logging
from typing import Any, Dict, Optional

from . import constants

logger = logging.getLogger(__name__)


class RunConfig:
    """
    Parameters of one simulation run.

    Attributes:
        num_particles: Population size
        enclosure_size: Side length of the square enclosure
        collision_threshold: Pair distance counted as a collision
        num_workers: Worker threads in the pool
        chunk_size: Comparison granularity (None: same as num_workers)
        duration: Wall-clock run length [s]
        max_ticks: Optional cap on ticks (None: no cap)
        seed: Optional seed for the initial placement
        debug: Trace every move and collision
        log_file: Optional rotating log file path
    """

    FIELDS = (
        "num_particles", "enclosure_size", "collision_threshold", "num_workers",
        "chunk_size", "duration", "max_ticks", "seed", "debug", "log_file",
    )

    def __init__(self,
                 num_particles: int = constants.NUM_PARTICLES,
                 enclosure_size: float = constants.ENCLOSURE_SIZE,
                 collision_threshold: float = constants.COLLISION_THRESHOLD,
                 num_workers: int = constants.NUM_WORKERS,
                 chunk_size: Optional[int] = None,
                 duration: float = constants.RUN_DURATION,
                 max_ticks: Optional[int] = None,
                 seed: Optional[int] = None,
                 debug: bool = False,
                 log_file: Optional[str] = None):
        self.num_particles = num_particles
        self.enclosure_size = enclosure_size
        self.collision_threshold = collision_threshold
        self.num_workers = num_workers
        self.chunk_size = chunk_size
        self.duration = duration
        self.max_ticks = max_ticks
        self.seed = seed
        self.debug = debug
        self.log_file = log_file

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "RunConfig":
        """
        Build from a mapping of field names.

        Raises:
            ValueError: On keys that are not RunConfig fields
        """
        unknown = sorted(set(values) - set(cls.FIELDS))
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def updated(self, **overrides) -> "RunConfig":
        """Copy with non-None overrides applied."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig.from_dict(values)

    @property
    def effective_chunk_size(self) -> int:
        return self.chunk_size if self.chunk_size is not None else self.num_workers

    def validate(self) -> "RunConfig":
        """
        Reject parameters the simulation cannot run with.

        Returns:
            self

        Raises:
            ValueError: Naming the first invalid parameter
        """
        if self.num_particles < 1:
            raise ValueError(f"num_particles must be >= 1, got {self.num_particles}")
        if not self.enclosure_size > 0:
            raise ValueError(f"enclosure_size must be positive, got {self.enclosure_size}")
        if self.collision_threshold < 0:
            raise ValueError(
                f"collision_threshold must be non-negative, got {self.collision_threshold}"
            )
        if self.num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {self.num_workers}")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if not self.duration > 0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError(f"max_ticks must be non-negative, got {self.max_ticks}")
        return self

    def __eq__(self, other):
        if not isinstance(other, RunConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"RunConfig({fields})"


def load_config(path: str) -> RunConfig:
    """
    Load a RunConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: On unknown keys
    """
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, "r") as f:
            values = json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {path}.")
        raise

    config = RunConfig.from_dict(values)
    logger.info("Configuration loaded successfully.")
    return config
