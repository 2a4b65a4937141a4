"""
Shared collision counter.
"""

import threading


class AtomicCounter:
    """
    Monotonic non-negative integer counter safe for concurrent increments.

    Every increment is applied exactly once and increments are totally
    ordered by the internal lock, so a load after a batch of workers has
    joined sees every contribution.
    """

    def __init__(self, value: int = 0):
        if value < 0:
            raise ValueError(f"Counter start value must be non-negative, got {value}")
        self._value = value
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        """
        Add ``amount`` to the counter.

        Args:
            amount: Non-negative step (default 1)

        Returns:
            value: Counter value after the increment

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Counter cannot decrease (amount={amount})")
        with self._lock:
            self._value += amount
            return self._value

    def load(self) -> int:
        """Current counter value."""
        with self._lock:
            return self._value

    def __int__(self):
        return self.load()

    def __repr__(self):
        return f"AtomicCounter({self.load()})"
