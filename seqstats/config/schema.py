"""
Configuration schema for seqstats.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages

Example config (seqstats.yml):
    version: 1

    histogram:
      initial_capacity: 1048576
      label: ${SEQSTATS_LABEL}

    stream:
      window_size: 500

    logging:
      level: INFO
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any

import yaml

from ..core.errors import ErrorCode, StatsError, tagged

logger = logging.getLogger(__name__)

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${SEQSTATS_LABEL} → os.environ.get('SEQSTATS_LABEL')
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}]+)\}'

        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                StatsError(ErrorCode.E3002_MISSING_ENV_VAR, {'variable': var_name}).log(logger)
                return match.group(0)  # Keep original if not found
            return env_value

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class HistogramConfig:
    """Histogram accumulator settings."""
    initial_capacity: int = 1024
    label: str = 'value'


@dataclass
class BatchConfig:
    """Batch statistics settings."""
    assume_sorted: bool = False
    ema_alpha: float = 0.1


@dataclass
class StreamConfig:
    """Streaming / sliding window settings."""
    window_size: int = 100


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = 'WARNING'

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper(), logging.WARNING)


@dataclass
class StatsConfig:
    """Root configuration."""

    version: int = 1
    histogram: HistogramConfig = field(default_factory=HistogramConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path) -> 'StatsConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(
                tagged(ErrorCode.E3001_INVALID_CONFIG, f"{path}: top level must be a mapping")
            )

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'StatsConfig':
        """Create from dictionary."""
        try:
            return cls(
                version=data.get('version', 1),
                histogram=HistogramConfig(**(data.get('histogram') or {})),
                batch=BatchConfig(**(data.get('batch') or {})),
                stream=StreamConfig(**(data.get('stream') or {})),
                logging=LoggingConfig(**(data.get('logging') or {})),
            )
        except TypeError as e:
            raise ValueError(tagged(ErrorCode.E3001_INVALID_CONFIG, str(e))) from e

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if not isinstance(self.histogram.initial_capacity, int) or self.histogram.initial_capacity <= 0:
            errors.append(f"Invalid histogram initial_capacity: {self.histogram.initial_capacity}")

        label = self.histogram.label
        if not isinstance(label, str) or not label or any(c in label for c in '\t\r\n'):
            errors.append(f"Invalid histogram label: {label!r}")

        if not isinstance(self.batch.ema_alpha, (int, float)) or not 0.0 <= self.batch.ema_alpha <= 1.0:
            errors.append(f"ema_alpha must be within [0, 1]: {self.batch.ema_alpha}")

        if not isinstance(self.stream.window_size, int) or self.stream.window_size <= 0:
            errors.append(f"Invalid window_size: {self.stream.window_size}")

        if str(self.logging.level).upper() not in LOG_LEVELS:
            errors.append(f"Unknown logging level: {self.logging.level}")

        return errors


def load_config(path: Optional[Path] = None) -> StatsConfig:
    """Load config from file or return defaults."""
    if path and Path(path).exists():
        return StatsConfig.load(path)

    search_paths = [
        Path('./seqstats.yml'),
        Path('./seqstats.yaml'),
        Path.home() / '.seqstats' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return StatsConfig.load(p)

    return StatsConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# seqstats configuration
version: 1

histogram:
  # Slots allocated up front; storage doubles when a larger value arrives
  initial_capacity: 1024
  # Header label of the written histogram table
  label: value

batch:
  assume_sorted: false
  ema_alpha: 0.1

stream:
  window_size: 100

logging:
  level: WARNING
"""
