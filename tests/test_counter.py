"""
Unit tests for the shared collision counter
"""

import threading

import pytest
from collisim.counter import AtomicCounter


class TestAtomicCounter:

    def test_starts_at_zero(self):
        assert AtomicCounter().load() == 0

    def test_increment_default_and_amount(self):
        counter = AtomicCounter()

        assert counter.increment() == 1
        assert counter.increment(5) == 6
        assert counter.load() == 6
        assert int(counter) == 6

    def test_increment_zero_is_noop(self):
        counter = AtomicCounter(3)
        counter.increment(0)

        assert counter.load() == 3

    def test_negative_increment_rejected(self):
        counter = AtomicCounter()

        with pytest.raises(ValueError, match="cannot decrease"):
            counter.increment(-1)
        assert counter.load() == 0

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            AtomicCounter(-1)

    def test_concurrent_increments_all_counted(self):
        """No increment is lost or duplicated under contention."""
        counter = AtomicCounter()
        n_threads = 8
        n_increments = 10_000

        def work():
            for _ in range(n_increments):
                counter.increment()

        threads = [threading.Thread(target=work) for _ in range(n_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.load() == n_threads * n_increments


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
