"""Lazily computed batch statistics over retained samples."""

from typing import List

from .distribution import (
    compute_std_dev,
    compute_mode,
    compute_median_absolute_deviation,
)


class DistributionStatistics:
    """
    Collects samples and derives mean/stddev/mode/median/MAD on demand.

    mean and stddev are outlier filtered (compute_std_dev); mode, median and
    MAD use every sample. Results are cached until the next add().

    Example:
        stats = DistributionStatistics()
        for overlap in overlaps:
            stats.add(overlap.length)
        print(stats.median(), stats.mad())
    """

    def __init__(self):
        self._data: List = []
        self._finalized = False
        self._clear_statistics()

    def _clear_statistics(self) -> None:
        self._mean = 0.0
        self._stddev = 0.0
        self._mode = 0
        self._median = 0
        self._mad = 0

    def add(self, value) -> None:
        self._finalized = False
        self._data.append(value)

    def finalize_data(self) -> None:
        if self._finalized:
            return

        self._clear_statistics()

        # Sort once, the three passes all want ordered data.
        ordered = sorted(self._data)

        self._mean, self._stddev = compute_std_dev(ordered, is_sorted=True)
        self._mode = compute_mode(ordered, is_sorted=True)
        self._median, self._mad = compute_median_absolute_deviation(ordered, is_sorted=True)

        self._finalized = True

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def number_of_objects(self) -> int:
        return len(self._data)

    def mean(self) -> float:
        self.finalize_data()
        return self._mean

    def stddev(self) -> float:
        self.finalize_data()
        return self._stddev

    def mode(self):
        self.finalize_data()
        return self._mode

    def median(self):
        self.finalize_data()
        return self._median

    def mad(self):
        self.finalize_data()
        return self._mad
