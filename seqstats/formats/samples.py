"""
Reader for plain-text sample files.

Sample files are what upstream pipeline stages dump: one number per line.

Format:
- One sample per line (leading/trailing whitespace ignored)
- Blank lines are skipped
- Lines starting with '#' are comments
- Integers are returned as int, anything else numeric as float
"""

import math
from pathlib import Path
from typing import Iterator, List, Union

from ..core.errors import ErrorCode, StatsError, StatsInputError

Number = Union[int, float]


def _malformed(path: Path, line_no: int, detail: str, text: str) -> StatsInputError:
    return StatsInputError(StatsError(
        code=ErrorCode.E4001_MALFORMED_SAMPLE,
        context={'path': str(path), 'line': line_no, 'detail': detail, 'text': text},
    ))


def _parse(text: str, path: Path, line_no: int) -> Number:
    try:
        return int(text)
    except ValueError:
        pass

    try:
        value = float(text)
    except ValueError:
        raise _malformed(path, line_no, "not a number", text) from None

    if not math.isfinite(value):
        raise _malformed(path, line_no, "not a finite number", text)
    return value


def read_samples(path: Path) -> Iterator[Number]:
    """
    Yield samples from a text file.

    Args:
        path: Path to sample file

    Yields:
        int or float per non-comment line

    Raises:
        StatsInputError: E4001 on a line that is not a number
    """
    path = Path(path)

    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith('#'):
                continue
            yield _parse(text, path, line_no)


def read_integer_samples(path: Path) -> Iterator[int]:
    """Like read_samples(), but every sample must be a non-negative integer."""
    path = Path(path)

    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith('#'):
                continue

            value = _parse(text, path, line_no)
            if not isinstance(value, int) or value < 0:
                raise _malformed(path, line_no, "expected a non-negative integer", text)
            yield value


def load_samples(path: Path) -> List[Number]:
    """Read every sample into a list."""
    return list(read_samples(path))
