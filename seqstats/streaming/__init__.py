"""Streaming statistics components."""

from .welford import StreamAccumulator, AccumulatorState, MAX_COUNT
from .sliding_window import SlidingWindowStats

__all__ = [
    'StreamAccumulator',
    'AccumulatorState',
    'MAX_COUNT',
    'SlidingWindowStats',
]
