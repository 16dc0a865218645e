"""
Summary report for seqstats results.

A report is a flat JSON document with:
- Metadata (version, timestamp, source)
- The storage strategy used (batch, stream, histogram)
- The shared statistical vocabulary: count, mean, stddev, mode, median, MAD

Statistics a strategy cannot produce (the stream accumulator has no mode,
median or MAD) are reported as null.
"""

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence, Union

from .. import __version__
from ..batch.distribution import (
    compute_std_dev,
    compute_mode,
    compute_median_absolute_deviation,
)
from ..streaming.welford import StreamAccumulator
from ..histogram.accumulator import HistogramAccumulator

Number = Union[int, float]


class SummaryMethod(str, Enum):
    """Which storage strategy produced the numbers."""
    BATCH = 'batch'
    STREAM = 'stream'
    HISTOGRAM = 'histogram'


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SummaryReport:
    """
    Summary statistics of one distribution.

    Example:
        report = SummaryReport.from_samples(lengths, source='reads.txt')
        print(report.to_json())
    """
    # Metadata
    version: int = 1
    created_at: str = field(default_factory=_now)
    seqstats_version: str = __version__

    source: Optional[str] = None
    method: SummaryMethod = SummaryMethod.BATCH

    # Statistics
    count: int = 0
    mean: float = 0.0
    stddev: float = 0.0
    mode: Optional[Number] = 0
    median: Optional[Number] = 0
    mad: Optional[Number] = 0

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[Number],
        source: Optional[str] = None,
        is_sorted: bool = False,
    ) -> 'SummaryReport':
        """Batch statistics; mean/stddev are outlier filtered."""
        ordered = samples if is_sorted else sorted(samples)

        mean, stddev = compute_std_dev(ordered, is_sorted=True)
        median, mad = compute_median_absolute_deviation(ordered, is_sorted=True)

        return cls(
            source=source,
            method=SummaryMethod.BATCH,
            count=len(ordered),
            mean=mean,
            stddev=stddev,
            mode=compute_mode(ordered, is_sorted=True),
            median=median,
            mad=mad,
        )

    @classmethod
    def from_stream(
        cls,
        accumulator: StreamAccumulator,
        source: Optional[str] = None,
    ) -> 'SummaryReport':
        return cls(
            source=source,
            method=SummaryMethod.STREAM,
            count=accumulator.size(),
            mean=accumulator.mean(),
            stddev=accumulator.stddev(),
            mode=None,
            median=None,
            mad=None,
        )

    @classmethod
    def from_histogram(
        cls,
        histogram: HistogramAccumulator,
        source: Optional[str] = None,
    ) -> 'SummaryReport':
        return cls(
            source=source,
            method=SummaryMethod.HISTOGRAM,
            count=histogram.number_of_objects(),
            mean=histogram.mean(),
            stddev=histogram.stddev(),
            mode=histogram.mode(),
            median=histogram.median(),
            mad=histogram.mad(),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = asdict(self)
        result['method'] = self.method.value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> 'SummaryReport':
        """Create from dictionary."""
        return cls(
            version=data.get('version', 1),
            created_at=data.get('created_at', _now()),
            seqstats_version=data.get('seqstats_version', __version__),
            source=data.get('source'),
            method=SummaryMethod(data.get('method', 'batch')),
            count=data.get('count', 0),
            mean=data.get('mean', 0.0),
            stddev=data.get('stddev', 0.0),
            mode=data.get('mode'),
            median=data.get('median'),
            mad=data.get('mad'),
        )
