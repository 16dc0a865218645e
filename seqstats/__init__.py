"""
seqstats 1.0 - Descriptive statistics for large genomic length and coverage distributions.

This package provides:
- streaming: Welford running mean/variance with insert/remove, sliding windows
- batch: Outlier-filtered mean/stddev, mode, median/MAD, EMA over finite samples
- histogram: Bounded-memory integer histograms with lazily derived statistics
- formats: Sample files and the two-column histogram table
- config: YAML configuration with environment variable support
- core: Error codes and summary reports
- cli: Command-line interface
"""

__version__ = "1.0.0"

from .core import ErrorCode, StatsError, StatsContractError, StatsInputError
from .streaming import StreamAccumulator, SlidingWindowStats, MAX_COUNT
from .batch import (
    compute_std_dev,
    compute_mode,
    compute_median_absolute_deviation,
    compute_exponential_moving_average,
    DistributionStatistics,
)
from .histogram import HistogramAccumulator
from .formats import read_samples, read_histogram
from .config import StatsConfig, load_config
from .core.report import SummaryReport, SummaryMethod

__all__ = [
    # Version
    '__version__',
    # Errors
    'ErrorCode',
    'StatsError',
    'StatsContractError',
    'StatsInputError',
    # Streaming
    'StreamAccumulator',
    'SlidingWindowStats',
    'MAX_COUNT',
    # Batch
    'compute_std_dev',
    'compute_mode',
    'compute_median_absolute_deviation',
    'compute_exponential_moving_average',
    'DistributionStatistics',
    # Histogram
    'HistogramAccumulator',
    # Formats
    'read_samples',
    'read_histogram',
    # Config
    'StatsConfig',
    'load_config',
    # Report
    'SummaryReport',
    'SummaryMethod',
]
