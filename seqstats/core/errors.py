"""
Error codes for seqstats.

Structured error codes for machine-parseable diagnostics.

Format: E{category}{number}
- E1xxx: Stream accumulator contract violations
- E2xxx: Batch statistics contract violations
- E3xxx: Configuration errors
- E4xxx: Input/output errors

Contract violations (E1xxx, E2xxx) are programming errors. They are raised
as StatsContractError and never caught inside the library, so an unhandled
violation stops the process with the diagnostic message. Malformed input
files (E4001, E4002) raise StatsInputError, a ValueError whose StatsError
the CLI reports as JSON.
"""

import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Stream accumulator contract
    E1001_FINALIZED_INSERT = "E1001"
    E1002_FINALIZED_REMOVE = "E1002"
    E1003_EMPTY_REMOVE = "E1003"
    E1004_COUNT_OVERFLOW = "E1004"

    # E2xxx: Batch statistics contract
    E2001_INVALID_ALPHA = "E2001"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"
    E3002_MISSING_ENV_VAR = "E3002"
    E3003_VALIDATION_FAILED = "E3003"

    # E4xxx: Input/output errors
    E4001_MALFORMED_SAMPLE = "E4001"
    E4002_MALFORMED_HISTOGRAM = "E4002"
    E4003_FILE_WRITE_FAILED = "E4003"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_FINALIZED_INSERT: {
        'severity': 'error',
        'message': "Accumulator has been finalized; can't insert() new value",
        'recoverable': False,
    },
    ErrorCode.E1002_FINALIZED_REMOVE: {
        'severity': 'error',
        'message': "Accumulator has been finalized; can't remove() old value",
        'recoverable': False,
    },
    ErrorCode.E1003_EMPTY_REMOVE: {
        'severity': 'error',
        'message': "Accumulator has no data; can't remove() old value",
        'recoverable': False,
    },
    ErrorCode.E1004_COUNT_OVERFLOW: {
        'severity': 'error',
        'message': "Accumulator is full; can't insert() new value",
        'recoverable': False,
    },
    ErrorCode.E2001_INVALID_ALPHA: {
        'severity': 'error',
        'message': 'Smoothing factor alpha must be within [0, 1]',
        'recoverable': False,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
    ErrorCode.E3002_MISSING_ENV_VAR: {
        'severity': 'warning',
        'message': 'Environment variable not set',
        'recoverable': True,
    },
    ErrorCode.E3003_VALIDATION_FAILED: {
        'severity': 'error',
        'message': 'Configuration validation failed',
        'recoverable': False,
    },
    ErrorCode.E4001_MALFORMED_SAMPLE: {
        'severity': 'error',
        'message': 'Sample file contains a malformed value',
        'recoverable': False,
    },
    ErrorCode.E4002_MALFORMED_HISTOGRAM: {
        'severity': 'error',
        'message': 'Histogram table is malformed',
        'recoverable': False,
    },
    ErrorCode.E4003_FILE_WRITE_FAILED: {
        'severity': 'error',
        'message': 'Failed to write output file',
        'recoverable': True,
    },
}

# logging level per metadata severity
SEVERITY_LEVELS = {
    'error': logging.ERROR,
    'warning': logging.WARNING,
}


@dataclass
class StatsError:
    """
    Structured error with context.

    Example:
        error = StatsError(
            code=ErrorCode.E1003_EMPTY_REMOVE,
            context={'value': 42.0},
        )
        error.log(logger)
    """
    code: ErrorCode
    context: Optional[dict] = None

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def log(self, logger: logging.Logger) -> None:
        """Log the coded message at this error's severity."""
        logger.log(SEVERITY_LEVELS.get(self.severity, logging.ERROR), f"{self.code.value}: {self.message}")

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class StatsContractError(RuntimeError):
    """Raised when a caller breaks an accumulator or batch-function contract."""

    def __init__(self, error: StatsError):
        self.error = error
        super().__init__(f"ERROR {error.code.value}: {error.message}")

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class StatsInputError(ValueError):
    """Raised by the file readers on a malformed sample file or histogram table."""

    def __init__(self, error: StatsError):
        self.error = error
        super().__init__(f"{error.code.value}: {error.message}")

    @property
    def code(self) -> ErrorCode:
        return self.error.code


def contract_violation(code: ErrorCode, logger: logging.Logger, **context) -> StatsContractError:
    """Log a contract violation at its severity and return the exception to raise."""
    error = StatsError(code=code, context=context or None)
    error.log(logger)
    return StatsContractError(error)


def tagged(code: ErrorCode, detail: str) -> str:
    """Prefix a free-form message with its error code, for ValueError texts."""
    return f"{code.value}: {detail}"
