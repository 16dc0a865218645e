"""
Histogram-backed statistics for non-negative integer samples.

Instead of retaining samples, HistogramAccumulator keeps a dense
value -> count array. Storage grows by doubling, newly added slots are zero,
and capacity never shrinks.

Derived statistics are computed lazily: the first accessor call after an
add() runs finalize_data() once and caches mean, stddev, mode, median and
MAD until the next add().

Median and MAD use a cumulative-threshold definition: the smallest value
whose cumulative count reaches numObjs // 2. Nothing is interpolated, so
values [1, 2, 3, 4] have median 2, not 2.5.

Example:
    hist = HistogramAccumulator()
    for depth in coverage:
        hist.add(depth)
    print(hist.median(), hist.mad())

    with open('coverage.histogram', 'w') as f:
        hist.write_histogram(f, 'coverage')
"""

import logging
import math
from typing import List, TextIO

logger = logging.getLogger(__name__)


DEFAULT_INITIAL_CAPACITY = 1024


class HistogramAccumulator:
    """
    Bounded-domain accumulator of (value -> count) pairs.

    States:
        Unfinalized: accepts add(), cached statistics are stale
        Finalized:   cached statistics valid; any add() returns to Unfinalized
    """

    def __init__(self, initial_capacity: int = DEFAULT_INITIAL_CAPACITY):
        if initial_capacity <= 0:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}")

        self._histogram: List[int] = [0] * initial_capacity
        self._histogram_max: int = 0     # Maximum valid value

        self._finalized = False
        self._clear_statistics()

    def _clear_statistics(self) -> None:
        self._num_objs = 0
        self._mean = 0.0
        self._stddev = 0.0
        self._mode = 0
        self._median = 0
        self._mad = 0

    @property
    def capacity(self) -> int:
        """Allocated slots; always > histogram_max()."""
        return len(self._histogram)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _grow(self, value: int) -> None:
        old_capacity = len(self._histogram)
        new_capacity = old_capacity

        while new_capacity <= value:
            new_capacity *= 2

        self._histogram.extend([0] * (new_capacity - old_capacity))

        logger.debug(f"Histogram grown from {old_capacity} to {new_capacity} slots")

    def add(self, value: int, count: int = 1) -> None:
        """Add count occurrences of value."""
        if value < 0:
            raise ValueError(f"histogram values must be non-negative, got {value}")
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        if value >= len(self._histogram):
            self._grow(value)

        if self._histogram_max < value:
            self._histogram_max = value

        self._histogram[value] += count
        self._finalized = False

    def merge(self, other: 'HistogramAccumulator') -> None:
        """Add every count of another histogram into this one."""
        for value in range(other.histogram_max() + 1):
            count = other.histogram(value)
            if count:
                self.add(value, count)

    def finalize_data(self) -> None:
        """Recompute the cached statistics if any add() happened since the last call."""
        if self._finalized:
            return

        # Cheat sheet:
        #   ii is the value of a sample item
        #   hist[ii] is how many of each item we have
        # So 'hist[ii] * f(ii)' adds the contributions of each object, and
        # pretending hist[ii] is 1 gives back the usual algorithms.

        self._clear_statistics()

        hist = self._histogram
        hmax = self._histogram_max

        for ii in range(hmax + 1):
            self._num_objs += hist[ii]

        # Mean and stddev.  For n <= 1 the raw sums are left in place: with
        # n == 1 that is the single value and a zero spread, with n == 0 both are zero.

        for ii in range(hmax + 1):
            self._mean += ii * hist[ii]

        if self._num_objs > 1:
            self._mean /= self._num_objs

        for ii in range(hmax + 1):
            self._stddev += hist[ii] * (ii - self._mean) * (ii - self._mean)

        if self._num_objs > 1:
            self._stddev = math.sqrt(self._stddev / (self._num_objs - 1))

        # Mode; a later value must have a strictly larger count, so ties go low.

        for ii in range(hmax + 1):
            if hist[ii] > hist[self._mode]:
                self._mode = ii

        half = self._num_objs // 2

        self._median = self._threshold_value(hist, hmax, half)

        # MAD is the median of the absolute deviations from the median.  Build a
        # second histogram of deviations; it needs every value up to hmax
        # (consider [0]=big, [hmax]=1, the deviation is hmax - 0).

        maddata = [0] * (hmax + 1)

        for ii in range(hmax + 1):
            if hist[ii] > 0:
                deviation = (self._median - ii) if ii < self._median else (ii - self._median)
                maddata[deviation] += hist[ii]

        self._mad = self._threshold_value(maddata, hmax, half)

        logger.debug(
            f"Histogram finalized: n={self._num_objs} max={hmax} "
            f"median={self._median} mad={self._mad}"
        )

        self._finalized = True

    @staticmethod
    def _threshold_value(counts: List[int], hmax: int, threshold: int) -> int:
        """Smallest index whose cumulative count reaches threshold."""
        cumulative = 0
        for ii in range(hmax + 1):
            cumulative += counts[ii]
            if cumulative >= threshold:
                return ii
        return hmax

    def number_of_objects(self) -> int:
        self.finalize_data()
        return self._num_objs

    def mean(self) -> float:
        self.finalize_data()
        return self._mean

    def stddev(self) -> float:
        self.finalize_data()
        return self._stddev

    def mode(self) -> int:
        self.finalize_data()
        return self._mode

    def median(self) -> int:
        self.finalize_data()
        return self._median

    def mad(self) -> int:
        self.finalize_data()
        return self._mad

    def histogram(self, value: int) -> int:
        """Raw count stored for value; zero beyond the allocated range."""
        if value < 0:
            raise ValueError(f"histogram values must be non-negative, got {value}")
        if value >= len(self._histogram):
            return 0
        return self._histogram[value]

    def histogram_max(self) -> int:
        """Highest value ever added."""
        return self._histogram_max

    def write_histogram(self, output: TextIO, label: str) -> None:
        """
        Write the two-column table.

        Format:
            #<label>\\tquantity
            <value>\\t<count>       one row for every value 0..histogram_max()
        """
        output.write(f"#{label}\tquantity\n")

        for ii in range(self._histogram_max + 1):
            output.write(f"{ii}\t{self._histogram[ii]}\n")
