"""Command-line interface for seqstats."""
