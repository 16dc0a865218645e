"""Configuration management for seqstats."""

from .schema import (
    StatsConfig,
    HistogramConfig,
    BatchConfig,
    StreamConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'StatsConfig',
    'HistogramConfig',
    'BatchConfig',
    'StreamConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
