"""Tests for closed 1-based interval operations."""

import pytest

from svoverlap.utils.intervals import (
    GenomicInterval,
    intersect_intervals,
    intersection_length,
    merge_intervals,
    pad_intervals,
)


# =============================================================================
# Test GenomicInterval
# =============================================================================


class TestGenomicInterval:
    """Tests for GenomicInterval NamedTuple."""

    def test_length_is_inclusive(self):
        """Both ends count toward the length."""
        assert GenomicInterval("chr1", 100, 199).length == 100
        assert GenomicInterval("chr1", 5, 5).length == 1

    def test_str_representation(self):
        """String form is contig:start-end."""
        assert str(GenomicInterval("chr1", 10, 20)) == "chr1:10-20"

    def test_overlaps_shared_base(self):
        """Intervals sharing one base overlap."""
        a = GenomicInterval("chr1", 10, 20)
        b = GenomicInterval("chr1", 20, 30)
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_adjacent_do_not_overlap(self):
        """Abutting intervals do not overlap but do abut."""
        a = GenomicInterval("chr1", 10, 20)
        b = GenomicInterval("chr1", 21, 30)
        assert not a.overlaps(b)
        assert a.abuts(b)
        assert b.abuts(a)

    def test_different_contigs(self):
        """Intervals on different contigs never overlap."""
        a = GenomicInterval("chr1", 10, 20)
        b = GenomicInterval("chr2", 10, 20)
        assert not a.overlaps(b)
        assert not a.abuts(b)

    def test_contains(self):
        """Contains is inclusive at both ends."""
        interval = GenomicInterval("chr1", 10, 20)
        assert interval.contains(10)
        assert interval.contains(20)
        assert not interval.contains(9)
        assert not interval.contains(21)


# =============================================================================
# Test intersection_length
# =============================================================================


class TestIntersectionLength:
    """Tests for intersection_length."""

    def test_disjoint(self):
        """Intervals sharing no base give 0."""
        assert intersection_length(1, 10, 11, 20) == 0

    def test_partial(self):
        """Partial overlap counts shared bases."""
        assert intersection_length(1, 10, 5, 15) == 6

    def test_symmetric(self):
        """Argument order does not matter."""
        assert intersection_length(5, 15, 1, 10) == intersection_length(1, 10, 5, 15)
        assert intersection_length(11, 20, 1, 10) == 0

    def test_contained(self):
        """A contained interval contributes its full length."""
        assert intersection_length(1, 100, 40, 59) == 20

    def test_single_base(self):
        """Touching at one base gives 1."""
        assert intersection_length(1, 10, 10, 20) == 1

    def test_far_apart_never_negative(self):
        """Distant intervals give 0, not a negative value."""
        assert intersection_length(1, 10, 1000, 2000) == 0


# =============================================================================
# Test merge_intervals
# =============================================================================


class TestMergeIntervals:
    """Tests for merge_intervals."""

    def test_empty(self):
        """Empty input gives empty output."""
        assert merge_intervals([]) == []

    def test_overlapping_merged(self):
        """Overlapping intervals are merged."""
        merged = merge_intervals(
            [GenomicInterval("chr1", 50, 150), GenomicInterval("chr1", 1, 100)]
        )
        assert merged == [GenomicInterval("chr1", 1, 150)]

    def test_abutting_kept_by_default(self):
        """Abutting intervals stay separate unless requested."""
        intervals = [GenomicInterval("chr1", 10, 20), GenomicInterval("chr1", 21, 30)]
        assert merge_intervals(intervals) == intervals

    def test_abutting_merged_when_requested(self):
        """merge_abutting joins touching intervals."""
        intervals = [GenomicInterval("chr1", 10, 20), GenomicInterval("chr1", 21, 30)]
        assert merge_intervals(intervals, merge_abutting=True) == [
            GenomicInterval("chr1", 10, 30)
        ]

    def test_contained_interval_absorbed(self):
        """A contained interval does not shorten the container."""
        merged = merge_intervals(
            [GenomicInterval("chr1", 1, 100), GenomicInterval("chr1", 10, 20)]
        )
        assert merged == [GenomicInterval("chr1", 1, 100)]

    def test_contigs_kept_apart(self):
        """Intervals on different contigs are not merged."""
        merged = merge_intervals(
            [GenomicInterval("chr2", 1, 10), GenomicInterval("chr1", 1, 10)]
        )
        assert merged == [GenomicInterval("chr1", 1, 10), GenomicInterval("chr2", 1, 10)]


# =============================================================================
# Test pad_intervals
# =============================================================================


class TestPadIntervals:
    """Tests for pad_intervals."""

    def test_pad_both_sides(self):
        """Padding extends both ends."""
        padded = pad_intervals([GenomicInterval("chr1", 100, 200)], 10)
        assert padded == [GenomicInterval("chr1", 90, 210)]

    def test_clamped_at_one(self):
        """Padding never goes below position 1."""
        padded = pad_intervals([GenomicInterval("chr1", 5, 20)], 10)
        assert padded == [GenomicInterval("chr1", 1, 30)]

    def test_clamped_at_contig_end(self):
        """Padding stops at the contig length when known."""
        padded = pad_intervals([GenomicInterval("chr1", 950, 995)], 10, {"chr1": 1000})
        assert padded == [GenomicInterval("chr1", 940, 1000)]

    def test_unknown_length_not_clamped(self):
        """Contigs without a length are only clamped at 1."""
        padded = pad_intervals([GenomicInterval("chr1", 950, 995)], 10, {"chr1": None})
        assert padded == [GenomicInterval("chr1", 940, 1005)]

    def test_negative_padding(self):
        """Negative padding is rejected."""
        with pytest.raises(ValueError, match="cannot be negative"):
            pad_intervals([GenomicInterval("chr1", 1, 10)], -1)


# =============================================================================
# Test intersect_intervals
# =============================================================================


class TestIntersectIntervals:
    """Tests for intersect_intervals."""

    def test_partial_overlap(self):
        """Only shared bases remain."""
        result = intersect_intervals(
            [GenomicInterval("chr1", 1, 100)], [GenomicInterval("chr1", 50, 150)]
        )
        assert result == [GenomicInterval("chr1", 50, 100)]

    def test_no_overlap(self):
        """Disjoint collections give nothing."""
        result = intersect_intervals(
            [GenomicInterval("chr1", 1, 100)], [GenomicInterval("chr2", 1, 100)]
        )
        assert result == []

    def test_one_interval_split(self):
        """One interval can intersect several others."""
        result = intersect_intervals(
            [GenomicInterval("chr1", 1, 100)],
            [GenomicInterval("chr1", 10, 20), GenomicInterval("chr1", 90, 200)],
        )
        assert result == [GenomicInterval("chr1", 10, 20), GenomicInterval("chr1", 90, 100)]
