"""Genomic interval operations.

This module provides utilities for working with closed, 1-based genomic
intervals, the convention used by VCF positions and Picard interval lists:

- Intersection length
- Interval merging (overlapping-only or overlapping-and-abutting)
- Padding with contig-bound clamping
- Set intersection of two interval collections

Example:
    >>> from svoverlap.utils.intervals import GenomicInterval, intersection_length
    >>> intersection_length(1, 10, 5, 15)
    6
    >>> GenomicInterval("chr1", 100, 199).length
    100
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, NamedTuple

# =============================================================================
# Data Structures
# =============================================================================


class GenomicInterval(NamedTuple):
    """A genomic interval on one contig.

    Attributes:
        contig: Chromosome/contig identifier.
        start: Start position (1-based, inclusive).
        end: End position (1-based, inclusive).
    """

    contig: str
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.contig}:{self.start}-{self.end}"

    @property
    def length(self) -> int:
        """Get interval length in base pairs."""
        return self.end - self.start + 1

    def overlaps(self, other: GenomicInterval) -> bool:
        """Check if this interval shares at least one base with another."""
        if self.contig != other.contig:
            return False
        return self.start <= other.end and other.start <= self.end

    def abuts(self, other: GenomicInterval) -> bool:
        """Check if two intervals are adjacent without sharing a base."""
        if self.contig != other.contig:
            return False
        return self.end + 1 == other.start or other.end + 1 == self.start

    def contains(self, position: int) -> bool:
        """Check if this interval covers a position."""
        return self.start <= position <= self.end


# =============================================================================
# Overlap Operations
# =============================================================================


def intersection_length(start1: int, end1: int, start2: int, end2: int) -> int:
    """Number of bases shared by two closed intervals.

    Args:
        start1: Start of the first interval.
        end1: End of the first interval (inclusive).
        start2: Start of the second interval.
        end2: End of the second interval (inclusive).

    Returns:
        Shared length, 0 when the intervals are disjoint.

    Example:
        >>> intersection_length(1, 10, 11, 20)
        0
        >>> intersection_length(1, 10, 5, 15)
        6
    """
    return max(0, min(end1, end2) - max(start1, start2) + 1)


# =============================================================================
# Merge Operations
# =============================================================================


def merge_intervals(
    intervals: Iterable[GenomicInterval],
    merge_abutting: bool = False,
) -> list[GenomicInterval]:
    """Merge overlapping genomic intervals.

    Args:
        intervals: Intervals to merge, in any order and on any contigs.
        merge_abutting: If True, also merge intervals that touch
            (end + 1 == next start).

    Returns:
        Merged intervals sorted by contig name then start.
    """
    by_contig: dict[str, list[GenomicInterval]] = defaultdict(list)
    for interval in intervals:
        by_contig[interval.contig].append(interval)

    gap = 1 if merge_abutting else 0
    merged: list[GenomicInterval] = []
    for contig in sorted(by_contig):
        sorted_intervals = sorted(by_contig[contig], key=lambda x: (x.start, x.end))
        current = sorted_intervals[0]
        for interval in sorted_intervals[1:]:
            if interval.start <= current.end + gap:
                current = GenomicInterval(contig, current.start, max(current.end, interval.end))
            else:
                merged.append(current)
                current = interval
        merged.append(current)

    return merged


def pad_intervals(
    intervals: Iterable[GenomicInterval],
    padding: int,
    contig_lengths: dict[str, int | None] | None = None,
) -> list[GenomicInterval]:
    """Extend each interval by ``padding`` bases on both sides.

    Padded intervals are clamped to position 1 and, when the contig length
    is known, to the contig end.

    Args:
        intervals: Intervals to pad.
        padding: Bases to add on each side (>= 0).
        contig_lengths: Optional contig lengths for clamping.

    Returns:
        Padded intervals, in input order (may now overlap).

    Raises:
        ValueError: If padding is negative.
    """
    if padding < 0:
        raise ValueError(f"Padding cannot be negative, got {padding}")

    contig_lengths = contig_lengths or {}
    padded = []
    for interval in intervals:
        start = max(1, interval.start - padding)
        end = interval.end + padding
        contig_len = contig_lengths.get(interval.contig)
        if contig_len is not None:
            end = min(end, contig_len)
        padded.append(GenomicInterval(interval.contig, start, end))
    return padded


# =============================================================================
# Set Operations
# =============================================================================


def intersect_intervals(
    a: Iterable[GenomicInterval],
    b: Iterable[GenomicInterval],
) -> list[GenomicInterval]:
    """Bases present in both interval collections.

    Both inputs are merged first so the result is non-overlapping.

    Args:
        a: First interval collection.
        b: Second interval collection.

    Returns:
        Sorted, non-overlapping intersection intervals.
    """
    merged_a = merge_intervals(a)
    merged_b = merge_intervals(b)

    b_by_contig: dict[str, list[GenomicInterval]] = defaultdict(list)
    for interval in merged_b:
        b_by_contig[interval.contig].append(interval)

    result = []
    for interval in merged_a:
        for other in b_by_contig.get(interval.contig, []):
            if other.start > interval.end:
                break
            start = max(interval.start, other.start)
            end = min(interval.end, other.end)
            if start <= end:
                result.append(GenomicInterval(interval.contig, start, end))
    return result
