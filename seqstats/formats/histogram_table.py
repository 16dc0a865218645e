"""
Reader for the two-column histogram table.

The table is written by HistogramAccumulator.write_histogram():

    #<label>\tquantity
    0\t<count_0>
    1\t<count_1>
    ...

one row per value from 0 to the histogram maximum, zero counts included.
"""

from pathlib import Path
from typing import TextIO, Tuple

from ..core.errors import ErrorCode, StatsError, StatsInputError
from ..histogram.accumulator import HistogramAccumulator, DEFAULT_INITIAL_CAPACITY

HEADER_SUFFIX = '\tquantity'


def _malformed(line_no: int, detail: str) -> StatsInputError:
    return StatsInputError(StatsError(
        code=ErrorCode.E4002_MALFORMED_HISTOGRAM,
        context={'line': line_no, 'detail': detail},
    ))


def read_histogram(
    stream: TextIO,
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
) -> Tuple[str, HistogramAccumulator]:
    """
    Parse a histogram table.

    Returns:
        (label, accumulator)

    Raises:
        StatsInputError: E4002 on a bad header or row
    """
    header = stream.readline().rstrip('\r\n')

    if not header.startswith('#') or not header.endswith(HEADER_SUFFIX):
        raise _malformed(1, f"expected '#<label>\\tquantity' header, got {header!r}")

    label = header[1:-len(HEADER_SUFFIX)]
    hist = HistogramAccumulator(initial_capacity=initial_capacity)

    for line_no, line in enumerate(stream, start=2):
        text = line.rstrip('\r\n')
        if not text:
            continue

        fields = text.split('\t')
        if len(fields) != 2:
            raise _malformed(line_no, f"expected 2 tab-separated columns, got {text!r}")

        try:
            value, count = int(fields[0]), int(fields[1])
        except ValueError:
            raise _malformed(line_no, f"non-integer column in {text!r}") from None

        if value < 0 or count < 0:
            raise _malformed(line_no, f"negative value or count in {text!r}")

        hist.add(value, count)

    return label, hist


def read_histogram_file(
    path: Path,
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
) -> Tuple[str, HistogramAccumulator]:
    """Open and parse a histogram table file."""
    with open(path, 'r', encoding='utf-8') as f:
        return read_histogram(f, initial_capacity=initial_capacity)
