"""Histogram accumulation over non-negative integer samples."""

from .accumulator import HistogramAccumulator, DEFAULT_INITIAL_CAPACITY

__all__ = [
    'HistogramAccumulator',
    'DEFAULT_INITIAL_CAPACITY',
]
