"""Batch statistics over finite sample collections."""

from .distribution import (
    OUTLIER_BAND,
    compute_std_dev,
    compute_mode,
    compute_median_absolute_deviation,
    compute_exponential_moving_average,
)
from .statistics import DistributionStatistics

__all__ = [
    'OUTLIER_BAND',
    'compute_std_dev',
    'compute_mode',
    'compute_median_absolute_deviation',
    'compute_exponential_moving_average',
    'DistributionStatistics',
]
