"""
Online mean and standard deviation (Welford's method).

B. P. Welford, Technometrics, Vol 4, No 3, Aug 1962 pp 419-420.
Also presented in Knuth Vol 2 (3rd Ed.) pp 232.

StreamAccumulator keeps only (mean, variance_sum, count), so samples can be
inserted and later removed again without retaining them. That makes it
usable as a sliding-window statistic (see sliding_window.py).

Example:
    acc = StreamAccumulator()
    for length in read_lengths:
        acc.insert(length)
    print(acc.mean(), acc.stddev())

    acc.finalize()      # frozen, further insert()/remove() is an error
"""

import logging
import math
from enum import Enum

from ..core.errors import ErrorCode, contract_violation

logger = logging.getLogger(__name__)


# Explicit ceiling on the number of samples; one below the signed 32-bit limit.
MAX_COUNT = 0x7FFFFFFF


class AccumulatorState(Enum):
    """Lifecycle of a StreamAccumulator."""
    ACCUMULATING = 'accumulating'
    FINALIZED = 'finalized'


def _violation(code: ErrorCode, **context):
    return contract_violation(code, logger, **context)


class StreamAccumulator:
    """
    Numerically stable running mean/variance over insertions and removals.

    While ACCUMULATING the state is (mean, variance_sum, count). finalize()
    moves to FINALIZED, where the standard deviation is frozen and variance()
    reports its square.
    """

    def __init__(self, mean: float = 0.0, variance_sum: float = 0.0, count: int = 0):
        if count < 0 or count > MAX_COUNT:
            raise ValueError(f"count must be in [0, {MAX_COUNT}], got {count}")

        self._mean = mean
        self._variance_sum = variance_sum
        self._count = count

        self._state = AccumulatorState.ACCUMULATING
        self._frozen_stddev = 0.0

    @property
    def state(self) -> AccumulatorState:
        return self._state

    @property
    def is_finalized(self) -> bool:
        return self._state is AccumulatorState.FINALIZED

    def insert(self, value: float) -> None:
        """Add a value."""
        if self._count == MAX_COUNT:
            raise _violation(ErrorCode.E1004_COUNT_OVERFLOW, count=self._count)

        if self.is_finalized:
            raise _violation(ErrorCode.E1001_FINALIZED_INSERT, value=value)

        m0 = self._mean
        n1 = self._count + 1

        self._mean = m0 + (value - m0) / n1
        self._variance_sum = self._variance_sum + (value - m0) * (value - self._mean)
        self._count = n1

    def remove(self, value: float) -> None:
        """
        Undo a previous insert() of value.

        The pre-insertion mean and variance_sum are recovered from the
        current state, so removing the oldest value of a window and inserting
        the newest gives sliding statistics without replaying history.
        """
        if self._count == 0:
            raise _violation(ErrorCode.E1003_EMPTY_REMOVE, value=value)

        if self.is_finalized:
            raise _violation(ErrorCode.E1002_FINALIZED_REMOVE, value=value)

        n0 = self._count - 1
        m0 = 0.0 if n0 == 0 else (self._count * self._mean - value) / n0
        s0 = self._variance_sum - (value - m0) * (value - self._mean)

        self._count = n0
        self._mean = m0
        self._variance_sum = s0

    def finalize(self) -> None:
        """Freeze the accumulator. Idempotent."""
        if self.is_finalized:
            return

        self._frozen_stddev = self.stddev()
        self._state = AccumulatorState.FINALIZED

        logger.debug(
            f"Stream finalized: n={self._count} mean={self._mean} stddev={self._frozen_stddev}"
        )

    def size(self) -> int:
        """Number of values currently accumulated."""
        return self._count

    def mean(self) -> float:
        return self._mean

    def variance(self) -> float:
        if self.is_finalized:
            # Squared frozen stddev; may differ from the pre-finalize value in the last ulp.
            return self._frozen_stddev * self._frozen_stddev
        if self._count < 2:
            return 0.0
        return self._variance_sum / (self._count - 1)

    def stddev(self) -> float:
        if self.is_finalized:
            return self._frozen_stddev
        # Cancellation after many removals can leave a tiny negative variance_sum.
        return math.sqrt(max(0.0, self.variance()))

    def to_dict(self) -> dict:
        return {
            'count': self._count,
            'mean': self._mean,
            'variance': self.variance(),
            'stddev': self.stddev(),
            'finalized': self.is_finalized,
        }
