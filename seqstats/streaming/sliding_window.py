"""
Sliding window statistics over the last N samples.

This provides "mean over the last 1000 read lengths" by pairing every
insert() into a StreamAccumulator with a remove() of the evicted sample.
Only the window itself is retained, never the full history.
"""

from collections import deque
from typing import Optional

from ..batch.distribution import compute_exponential_moving_average
from .welford import StreamAccumulator


class SlidingWindowStats:
    """
    Count-based sliding window mean/stddev plus a whole-stream EMA.

    Memory: O(window_size)

    Example:
        window = SlidingWindowStats(window_size=100, alpha=0.1)
        for length in lengths:
            window.add(length)
            print(window.mean(), window.stddev(), window.ema())
    """

    def __init__(self, window_size: int = 100, alpha: float = 0.1):
        if window_size <= 0:
            raise ValueError("window_size must be positive")
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {alpha}")

        self.window_size = window_size
        self.alpha = alpha

        self.samples: deque = deque()
        self.accumulator = StreamAccumulator()

        self._ema: Optional[float] = None
        self._total_added: int = 0

    def add(self, value: float) -> None:
        """Add a value, evicting the oldest once the window is full."""
        if len(self.samples) == self.window_size:
            expired = self.samples.popleft()
            self.accumulator.remove(expired)

        self.samples.append(value)
        self.accumulator.insert(value)
        self._total_added += 1

        # First sample seeds the average
        if self._ema is None:
            self._ema = float(value)
        else:
            self._ema = compute_exponential_moving_average(self.alpha, self._ema, value)

    @property
    def total_added(self) -> int:
        """Samples seen over the whole stream."""
        return self._total_added

    def size(self) -> int:
        """Samples currently in window."""
        return self.accumulator.size()

    def mean(self) -> float:
        return self.accumulator.mean()

    def variance(self) -> float:
        return self.accumulator.variance()

    def stddev(self) -> float:
        return self.accumulator.stddev()

    def ema(self) -> float:
        """Exponential moving average of every sample added."""
        if self._ema is None:
            return 0.0
        return self._ema
