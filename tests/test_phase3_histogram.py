"""
Tests for Phase 3: Histogram Accumulator.

CRITICAL TESTS:
1. test_growth_zero_fills - Growing storage keeps old counts and zero-fills gaps
2. test_write_histogram_exact_format - Table layout is a compatibility contract
3. test_cumulative_threshold_median - Median is not interpolated
"""

import io
import math

import pytest

from seqstats.histogram import HistogramAccumulator, DEFAULT_INITIAL_CAPACITY


def _build(values, **kwargs) -> HistogramAccumulator:
    hist = HistogramAccumulator(**kwargs)
    for v in values:
        hist.add(v)
    return hist


class TestEmptyHistogram:
    """Test histogram with no data."""

    def test_empty_is_zero(self):
        hist = HistogramAccumulator()
        assert hist.number_of_objects() == 0
        assert hist.mean() == 0.0
        assert hist.stddev() == 0.0
        assert hist.mode() == 0
        assert hist.median() == 0
        assert hist.mad() == 0
        assert hist.histogram_max() == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistogramAccumulator(initial_capacity=0)


class TestStorage:
    """Test growable storage."""

    def test_growth_zero_fills(self):
        """
        CRITICAL TEST: add(0) then add(2_000_000) keeps index 0 and zero-fills.
        """
        hist = HistogramAccumulator()
        hist.add(0)
        hist.add(2_000_000)

        assert hist.histogram(0) == 1
        assert hist.histogram(2_000_000) == 1
        assert hist.histogram_max() == 2_000_000
        assert all(hist.histogram(i) == 0 for i in range(1, 2_000_000))

    def test_growth_is_geometric(self):
        """Capacity doubles until the value fits."""
        hist = HistogramAccumulator(initial_capacity=4)
        hist.add(4)
        assert hist.capacity == 8
        hist.add(100)
        assert hist.capacity == 128

    def test_capacity_never_shrinks(self):
        """Capacity is monotonic."""
        hist = HistogramAccumulator(initial_capacity=8)
        capacities = []
        for v in [3, 50, 10, 400, 0, 7]:
            hist.add(v)
            capacities.append(hist.capacity)
        assert capacities == sorted(capacities)
        assert hist.capacity > hist.histogram_max()

    def test_default_capacity(self):
        assert HistogramAccumulator().capacity == DEFAULT_INITIAL_CAPACITY

    def test_add_with_count(self):
        """add() with an explicit count."""
        hist = HistogramAccumulator()
        hist.add(4, count=10)
        hist.add(4)
        assert hist.histogram(4) == 11
        assert hist.number_of_objects() == 11

    def test_read_beyond_storage(self):
        """Values past the allocated range read as zero."""
        hist = HistogramAccumulator(initial_capacity=16)
        assert hist.histogram(10_000) == 0

    def test_negative_rejected(self):
        hist = HistogramAccumulator()
        with pytest.raises(ValueError):
            hist.add(-1)
        with pytest.raises(ValueError):
            hist.add(1, count=-5)
        with pytest.raises(ValueError):
            hist.histogram(-1)


class TestDerivedStatistics:
    """Test statistics derived from counts."""

    def test_cumulative_threshold_median(self):
        """
        CRITICAL TEST: [1, 2, 3, 4] has median 2, not 2.5.

        The cumulative count first reaches 4 // 2 == 2 at value 2.
        """
        hist = _build([1, 2, 3, 4])

        assert hist.number_of_objects() == 4
        assert hist.median() == 2
        assert hist.mean() == pytest.approx(2.5)
        assert hist.stddev() == pytest.approx(math.sqrt(5 / 3))
        # Deviations from 2: {0: 1, 1: 2, 2: 1}; cumulative reaches 2 at 1
        assert hist.mad() == 1

    def test_constant_distribution(self):
        hist = _build([7] * 5)
        assert hist.mean() == pytest.approx(7.0)
        assert hist.stddev() == pytest.approx(0.0)
        assert hist.mode() == 7
        assert hist.median() == 7
        assert hist.mad() == 0

    def test_mode_tie_prefers_lowest(self):
        """A later value must have a strictly larger count."""
        hist = _build([3, 3, 1, 1, 2])
        assert hist.mode() == 1

    def test_single_sample(self):
        """
        One sample: mean is the value, no spread.

        The median threshold is 1 // 2 == 0, which index 0 already meets.
        """
        hist = _build([5])
        assert hist.mean() == pytest.approx(5.0)
        assert hist.stddev() == pytest.approx(0.0)
        assert hist.mode() == 5
        assert hist.median() == 0
        assert hist.mad() == 0

    def test_mad_skewed(self):
        """Large gap between the bulk and the tail."""
        # 10 zeros, one 100: median 0, deviations {0: 10, 100: 1}
        hist = HistogramAccumulator()
        hist.add(0, count=10)
        hist.add(100)
        assert hist.median() == 0
        assert hist.mad() == 0
        assert hist.mean() == pytest.approx(100 / 11)

    def test_matches_weighted_counts(self):
        """Counts added at once equal counts added one by one."""
        a = HistogramAccumulator()
        a.add(10, count=3)
        a.add(20, count=2)
        b = _build([10, 10, 10, 20, 20])
        assert a.mean() == pytest.approx(b.mean())
        assert a.stddev() == pytest.approx(b.stddev())
        assert (a.mode(), a.median(), a.mad()) == (b.mode(), b.median(), b.mad())


class TestCaching:
    """Test lazy finalization."""

    def test_add_invalidates(self):
        """Accessors finalize; add() returns to unfinalized."""
        hist = _build([1, 2, 3])
        assert not hist.is_finalized

        assert hist.median() == 1
        assert hist.is_finalized

        hist.add(50)
        hist.add(50)
        hist.add(50)
        assert not hist.is_finalized
        assert hist.median() == 3
        assert hist.is_finalized

    def test_can_cycle(self):
        """No terminal state: add/read can alternate indefinitely."""
        hist = HistogramAccumulator()
        for v in range(1, 20):
            hist.add(v)
            assert hist.number_of_objects() == v


class TestMerge:
    """Test merging histograms."""

    def test_merge(self):
        a = _build([1, 2, 2])
        b = _build([2, 900])
        a.merge(b)
        assert a.histogram(2) == 3
        assert a.histogram(900) == 1
        assert a.number_of_objects() == 5

    def test_merge_matches_single_histogram(self):
        """Merged shards report the statistics of one histogram over all samples."""
        a = _build([3, 3, 10])
        b = _build([0, 4, 4, 4])
        a.median()
        a.merge(b)

        whole = _build([3, 3, 10, 0, 4, 4, 4])
        assert a.number_of_objects() == whole.number_of_objects()
        assert a.mean() == pytest.approx(whole.mean())
        assert a.mode() == whole.mode()
        assert a.median() == whole.median()
        assert a.mad() == whole.mad()
        assert b.number_of_objects() == 4


class TestWriteHistogram:
    """Test table serialization."""

    def test_write_histogram_exact_format(self):
        """
        CRITICAL TEST: Exact header and one row per value, zeros included.
        """
        hist = HistogramAccumulator()
        hist.add(1, count=2)
        hist.add(3)

        out = io.StringIO()
        hist.write_histogram(out, "L")

        assert out.getvalue() == "#L\tquantity\n0\t0\n1\t2\n2\t0\n3\t1\n"

    def test_write_empty(self):
        """Empty histogram still writes index 0."""
        out = io.StringIO()
        HistogramAccumulator().write_histogram(out, "coverage")
        assert out.getvalue() == "#coverage\tquantity\n0\t0\n"
