"""
Offline statistics over a fully materialized sample collection.

Every function takes a finite sequence of samples and works on a private
sorted copy (unless the caller asserts is_sorted, in which case the
sequence is read as-is). The caller's sequence is never reordered.

An empty collection is legal input: all results are zero.

Conventions (fixed, downstream thresholds depend on them):
- median is the element at index size // 2 of the sorted samples; for an
  even count that is the upper of the two middle elements, never an average.
- mode ties resolve to the smallest value.
"""

import logging
import math
from itertools import groupby
from typing import Sequence, Tuple

from ..core.errors import ErrorCode, contract_violation

logger = logging.getLogger(__name__)


# Half-width of the inlier band, in units of the approximate stddev.
OUTLIER_BAND = 5


def _ordered(samples: Sequence, is_sorted: bool) -> Sequence:
    if is_sorted:
        return samples
    return sorted(samples)


def compute_std_dev(samples: Sequence, is_sorted: bool = False) -> Tuple[float, float]:
    """
    Outlier-filtered mean and standard deviation.

    Approximates the stddev from order statistics, assuming the data is
    roughly normal: the values at the 1/3 and 2/3 ranks sit about one stddev
    from the median. Samples further than OUTLIER_BAND of those from the
    median are ignored for both mean and stddev.

    Does not work well with unsigned types (e.g. numpy uint arrays): the
    lower bound median - 5 * approx can underflow.

    Returns:
        (mean, stddev); stddev uses the n - 1 denominator.
    """
    if len(samples) == 0:
        return 0.0, 0.0

    dist = _ordered(samples, is_sorted)
    n = len(dist)

    median = dist[n // 2]
    one_third = dist[n // 3]
    two_third = dist[2 * n // 3]

    approx_std = max(median - one_third, two_third - median)

    biggest = median + approx_std * OUTLIER_BAND
    smallest = median - approx_std * OUTLIER_BAND

    logger.debug(
        f"compute_std_dev median={median} one_third={one_third} two_third={two_third} "
        f"approx_std={approx_std} bounds=[{smallest}, {biggest}]"
    )

    inliers = [x for x in dist if smallest <= x <= biggest]

    if not inliers:
        return 0.0, 0.0

    mean = sum(inliers) / len(inliers)

    stddev = sum((x - mean) * (x - mean) for x in inliers)

    if len(inliers) > 1:
        stddev = math.sqrt(stddev / (len(inliers) - 1))

    return mean, stddev


def compute_mode(samples: Sequence, is_sorted: bool = False):
    """
    Most common value.

    Scans the sorted runs; a later run replaces the current best only if it
    is strictly longer, so ties go to the smallest value.
    """
    if len(samples) == 0:
        return 0

    mode_val = 0
    mode_cnt = 0

    for value, run in groupby(_ordered(samples, is_sorted)):
        run_len = sum(1 for _ in run)
        if run_len > mode_cnt:
            mode_cnt = run_len
            mode_val = value

    return mode_val


def compute_median_absolute_deviation(samples: Sequence, is_sorted: bool = False) -> Tuple:
    """
    Median and median absolute deviation (MAD).

    Both are taken at index size // 2 of their sorted sequence; for an even
    count that is the upper-middle element.

    Returns:
        (median, mad)
    """
    if len(samples) == 0:
        return 0, 0

    dist = _ordered(samples, is_sorted)

    median = dist[len(dist) // 2]

    deviations = sorted(
        (median - x) if x < median else (x - median)
        for x in dist
    )

    return median, deviations[len(deviations) // 2]


def compute_exponential_moving_average(alpha: float, ema: float, value: float) -> float:
    """
    One EMA step: alpha * value + (1 - alpha) * ema.

    alpha outside [0, 1] is a contract violation.
    """
    if not 0.0 <= alpha <= 1.0:
        raise contract_violation(ErrorCode.E2001_INVALID_ALPHA, logger, alpha=alpha)

    return alpha * value + (1 - alpha) * ema
