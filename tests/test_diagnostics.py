"""
Tests for diagnostic utilities
"""

import csv

import pytest
import numpy as np
import matplotlib
matplotlib.use("Agg")

from collisim.diagnostics import (
    RunTracker,
    boundary_violations,
    displacement_uniformity,
    pairs_per_tick,
)


class TestPairBudget:

    def test_single_chunk(self):
        assert pairs_per_tick(4, 4) == 6

    def test_reference_run(self):
        """100 particles in chunks of 4: 25 chunks of 6 pairs each."""
        assert pairs_per_tick(100, 4) == 150

    def test_short_final_chunk(self):
        assert pairs_per_tick(10, 4) == 6 + 6 + 1

    def test_chunks_of_one_have_no_pairs(self):
        assert pairs_per_tick(50, 1) == 0


class TestBoundaryViolations:

    def test_inside_and_on_walls(self):
        x = np.array([0.0, 10.0, 5.0])
        y = np.array([10.0, 0.0, 5.0])

        assert boundary_violations(x, y, 10.0) == 0

    def test_counts_outside(self):
        x = np.array([-0.001, 10.0, 5.0, 11.0])
        y = np.array([5.0, 10.001, 5.0, 11.0])

        assert boundary_violations(x, y, 10.0) == 3


class TestDisplacementUniformity:

    def test_uniform_sample_passes(self):
        rng = np.random.default_rng(0)
        sample = rng.uniform(-1.0, 1.0, 5000)

        assert displacement_uniformity(sample) > 0.01

    def test_biased_sample_fails(self):
        rng = np.random.default_rng(0)
        sample = rng.uniform(0.0, 1.0, 5000)

        assert displacement_uniformity(sample) < 1e-6


class TestRunTracker:

    def test_record(self):
        tracker = RunTracker()

        tracker.record(1, 0.01, 3)
        tracker.record(2, 0.02, 3)
        tracker.record(3, 0.03, 7)

        assert len(tracker) == 3
        np.testing.assert_array_equal(tracker.collisions_tick[:3], [3, 0, 4])
        np.testing.assert_array_equal(tracker.collisions_total[:3], [3, 3, 7])
        assert tracker.mean_collisions_per_tick() == pytest.approx(7 / 3)
        assert tracker.tick_rate() == pytest.approx(100.0)

    def test_grows_past_capacity(self):
        tracker = RunTracker(capacity=2)

        for tick in range(1, 11):
            tracker.record(tick, tick * 0.1, tick)

        assert len(tracker) == 10
        assert tracker.tick.shape[0] >= 10
        np.testing.assert_array_equal(tracker.tick[:10], np.arange(1, 11))

    def test_decreasing_total_rejected(self):
        tracker = RunTracker()
        tracker.record(1, 0.1, 5)

        with pytest.raises(ValueError, match="decreased"):
            tracker.record(2, 0.2, 4)

    def test_empty_tracker(self, capsys):
        tracker = RunTracker()

        assert tracker.tick_rate() == 0.0
        assert tracker.mean_collisions_per_tick() == 0.0
        tracker.summary()
        assert "No ticks recorded" in capsys.readouterr().out

    def test_save_csv(self, tmp_path):
        tracker = RunTracker()
        for i in range(5):
            tracker.record(i + 1, (i + 1) * 0.01, i * 2)

        csv_file = tmp_path / "ticks.csv"
        tracker.save_csv(str(csv_file))

        with open(csv_file, 'r') as f:
            rows = list(csv.reader(f))

        assert len(rows) == 6, "Should have header + 5 data rows"
        assert rows[0] == ['tick', 'elapsed_s', 'collisions_total', 'collisions_tick']
        assert rows[-1][2] == '8'

    def test_plot_to_file(self, tmp_path):
        tracker = RunTracker()
        for i in range(20):
            tracker.record(i + 1, (i + 1) * 0.01, i)

        out = tmp_path / "ticks.png"
        tracker.plot(show=False, save_filename=str(out))

        assert out.exists()

    def test_summary(self, capsys):
        tracker = RunTracker()
        tracker.record(1, 0.5, 2)
        tracker.record(2, 1.0, 5)

        tracker.summary()
        out = capsys.readouterr().out

        assert "Total collisions:     5" in out
        assert "Max in one tick:      3" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
