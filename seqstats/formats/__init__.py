"""Text formats consumed and produced by seqstats."""

from .samples import read_samples, read_integer_samples, load_samples
from .histogram_table import read_histogram, read_histogram_file

__all__ = [
    'read_samples',
    'read_integer_samples',
    'load_samples',
    'read_histogram',
    'read_histogram_file',
]
