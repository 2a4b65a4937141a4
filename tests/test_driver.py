"""
Tests for run configuration, the timing loop and the CLI
"""

import csv
import json
import logging

import pytest
import numpy as np
from collisim.config import RunConfig, load_config
from collisim.diagnostics import RunTracker
from collisim.driver import RunResult, main, run_simulation
from collisim.pool import WorkerPool
from collisim.system import ParticleSystem
from collisim import constants


class FakeClock:
    """Advances by ``step`` seconds on every read."""

    def __init__(self, step=1.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


class TestRunConfig:

    def test_defaults_match_constants(self):
        config = RunConfig()

        assert config.num_particles == constants.NUM_PARTICLES
        assert config.enclosure_size == constants.ENCLOSURE_SIZE
        assert config.collision_threshold == constants.COLLISION_THRESHOLD
        assert config.num_workers == constants.NUM_WORKERS
        assert config.duration == constants.RUN_DURATION
        assert config.chunk_size is None
        assert config.effective_chunk_size == constants.NUM_WORKERS

    @pytest.mark.parametrize("overrides", [
        {"num_particles": 0},
        {"enclosure_size": 0.0},
        {"enclosure_size": -1.0},
        {"collision_threshold": -0.1},
        {"num_workers": 0},
        {"chunk_size": 0},
        {"duration": 0.0},
        {"max_ticks": -1},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ValueError):
            RunConfig(**overrides).validate()

    def test_zero_threshold_is_valid(self):
        RunConfig(collision_threshold=0.0).validate()

    def test_from_dict_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown configuration keys: radius"):
            RunConfig.from_dict({"radius": 1.0})

    def test_updated_ignores_none(self):
        config = RunConfig(num_workers=2).updated(num_workers=None, chunk_size=8)

        assert config.num_workers == 2
        assert config.chunk_size == 8
        assert config.effective_chunk_size == 8

    def test_round_trip_dict(self):
        config = RunConfig(num_particles=7, seed=3, debug=True)

        assert RunConfig.from_dict(config.to_dict()) == config

    def test_load_config(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"num_particles": 20, "duration": 0.5}))

        config = load_config(str(path))

        assert config.num_particles == 20
        assert config.duration == 0.5
        assert config.num_workers == constants.NUM_WORKERS

    def test_load_config_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_load_config_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            load_config(str(path))


class TestRunSimulation:

    def test_ticks_until_deadline(self):
        """Deadline is checked between ticks only."""
        config = RunConfig(num_particles=20, num_workers=2, duration=5.5, seed=0)

        result = run_simulation(config, clock=FakeClock(1.0))

        assert result.ticks == 5
        assert result.elapsed == pytest.approx(7.0)

    def test_max_ticks_cap(self):
        config = RunConfig(num_particles=20, num_workers=2, duration=1e9, max_ticks=3)

        result = run_simulation(config, clock=FakeClock(0.001))

        assert result.ticks == 3

    def test_uses_given_system_and_pool(self):
        system = ParticleSystem.from_positions([(1.0, 1.0)] * 4)
        config = RunConfig(num_particles=4, enclosure_size=2.0,
                           collision_threshold=10.0, max_ticks=4)

        with WorkerPool(2) as pool:
            result = run_simulation(config, system=system, pool=pool)
            assert not pool.closed

        # Threshold spans the whole enclosure: every within-chunk pair collides
        assert result.ticks == 4
        assert result.collisions == 4 * 2

    def test_tracker_records_each_tick(self):
        tracker = RunTracker()
        config = RunConfig(num_particles=16, enclosure_size=2.0, num_workers=4,
                           max_ticks=10, seed=1)

        result = run_simulation(config, tracker=tracker)

        assert len(tracker) == result.ticks == 10
        assert tracker.collisions_total[9] == result.collisions
        assert np.all(np.diff(tracker.collisions_total[:10]) >= 0)

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError):
            run_simulation(RunConfig(num_workers=0))

    def test_report(self):
        result = RunResult(ticks=42, collisions=7, elapsed=10.0)

        assert result.report(10.0) == (
            "Particles moved 42 times in 10 seconds\nTotal number of collisions: 7"
        )


class TestMain:

    def test_main_prints_report(self, capsys):
        code = main(["--particles", "12", "--workers", "2", "--max-ticks", "5",
                     "--seed", "4", "--duration", "30"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Particles moved 5 times in 30 seconds" in out
        assert "Total number of collisions:" in out

    def test_main_invalid_arguments(self, capsys):
        code = main(["--workers", "0"])

        assert code == 2
        assert "Particles moved" not in capsys.readouterr().out

    def test_main_missing_config_file(self, tmp_path):
        assert main(["--config", str(tmp_path / "none.json")]) == 2

    def test_main_config_file_and_override(self, tmp_path, capsys):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"num_particles": 8, "max_ticks": 2, "duration": 30}))

        code = main(["--config", str(path), "--max-ticks", "3", "--workers", "2"])

        assert code == 0
        assert "Particles moved 3 times" in capsys.readouterr().out

    def test_main_writes_csv(self, tmp_path):
        out = tmp_path / "ticks.csv"

        code = main(["--particles", "8", "--workers", "2", "--max-ticks", "6",
                     "--csv", str(out)])

        assert code == 0
        with open(out) as f:
            rows = list(csv.reader(f))
        assert len(rows) == 7


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
