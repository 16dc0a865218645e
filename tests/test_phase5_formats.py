"""
Tests for Phase 5: Text Formats.

CRITICAL TESTS:
1. test_table_round_trip - A written table reads back to the same counts
2. test_bad_header - Tables without the '#<label>\\tquantity' header are rejected
"""

import io

import pytest

from seqstats.formats import (
    read_samples,
    read_integer_samples,
    load_samples,
    read_histogram,
    read_histogram_file,
)
from seqstats.core.errors import ErrorCode, StatsInputError
from seqstats.histogram import HistogramAccumulator


class TestSampleFiles:
    """Test sample file reader."""

    def test_ints_and_floats(self, write_samples):
        path = write_samples([12, 3.5, "  7  ", 0], header="read lengths")
        assert load_samples(path) == [12, 3.5, 7, 0]
        assert isinstance(load_samples(path)[0], int)

    def test_comments_and_blanks(self, tmp_path):
        path = tmp_path / "s.txt"
        path.write_text("# header\n\n5\n# note\n6\n\n")
        assert list(read_samples(path)) == [5, 6]

    def test_malformed_sample(self, write_samples):
        path = write_samples([1, "abc", 3])
        with pytest.raises(ValueError, match="E4001"):
            load_samples(path)

    def test_non_finite_sample(self, write_samples):
        path = write_samples([1, "nan"])
        with pytest.raises(ValueError, match="E4001"):
            load_samples(path)

    def test_integer_samples(self, write_samples):
        assert list(read_integer_samples(write_samples([4, 0, 9]))) == [4, 0, 9]

    @pytest.mark.parametrize("bad", [-3, 2.5])
    def test_integer_samples_rejects(self, write_samples, bad):
        path = write_samples([1, bad])
        with pytest.raises(ValueError, match="E4001"):
            list(read_integer_samples(path))

    def test_malformed_sample_details(self, write_samples):
        path = write_samples([1, "abc"])
        with pytest.raises(StatsInputError) as exc_info:
            load_samples(path)

        details = exc_info.value.error.to_dict()
        assert details['code'] == 'E4001'
        assert details['severity'] == 'error'
        assert details['recoverable'] is False
        assert details['context']['line'] == 2
        assert details['context']['text'] == 'abc'
        assert exc_info.value.code == ErrorCode.E4001_MALFORMED_SAMPLE


class TestHistogramTable:
    """Test histogram table reader."""

    def test_table_round_trip(self):
        """
        CRITICAL TEST: write_histogram() output reads back unchanged.
        """
        hist = HistogramAccumulator()
        for v, c in [(0, 4), (2, 1), (7, 12)]:
            hist.add(v, count=c)

        out = io.StringIO()
        hist.write_histogram(out, "overlap length")

        label, parsed = read_histogram(io.StringIO(out.getvalue()))

        assert label == "overlap length"
        assert parsed.histogram_max() == 7
        for v in range(8):
            assert parsed.histogram(v) == hist.histogram(v)
        assert parsed.median() == hist.median()

    def test_read_file(self, tmp_path):
        path = tmp_path / "cov.histogram"
        path.write_text("#coverage\tquantity\n0\t0\n1\t3\n")
        label, hist = read_histogram_file(path)
        assert label == "coverage"
        assert hist.number_of_objects() == 3

    def test_bad_header(self):
        """
        CRITICAL TEST: Header must be '#<label>\\tquantity'.
        """
        with pytest.raises(ValueError, match="E4002"):
            read_histogram(io.StringIO("label\tcount\n0\t1\n"))

    @pytest.mark.parametrize("row", ["0\t1\t2", "x\t1", "3\t-1"])
    def test_bad_row(self, row):
        with pytest.raises(ValueError, match="E4002"):
            read_histogram(io.StringIO(f"#L\tquantity\n{row}\n"))

    def test_bad_row_details(self):
        with pytest.raises(StatsInputError) as exc_info:
            read_histogram(io.StringIO("#L\tquantity\n0\t1\nx\t1\n"))

        details = exc_info.value.error.to_dict()
        assert details['code'] == 'E4002'
        assert details['context']['line'] == 3
