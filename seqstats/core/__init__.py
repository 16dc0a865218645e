"""Error codes and report schema shared by all seqstats components.

The report module depends on every accumulator, so it is imported as
seqstats.core.report (or from the top-level package), not from here.
"""

from .errors import ErrorCode, StatsError, StatsContractError, StatsInputError, ERROR_METADATA

__all__ = [
    'ErrorCode',
    'StatsError',
    'StatsContractError',
    'StatsInputError',
    'ERROR_METADATA',
]
