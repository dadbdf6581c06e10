"""Overlap scoring of SV calls against a region index.

Scoring depends on call topology:

- Breakend (BND) and inter-chromosomal calls have no reference span, so
  they score 1 when both breakend positions fall inside indexed intervals
  and 0 otherwise.
- Intra-chromosomal span calls score the fraction of their reference span
  ``[position_a, position_a + length - 1]`` covered by indexed intervals.

Scoring is pure: it reads the call and the index and never raises.

Example:
    >>> from svoverlap.core.calls import SVCallRecord
    >>> from svoverlap.core.index import RegionIndex
    >>> from svoverlap.utils.intervals import GenomicInterval
    >>> index = RegionIndex.build([GenomicInterval("chr1", 100, 124)])
    >>> call = SVCallRecord("chr1", 100, "chr1", 149, "DEL", length=50)
    >>> score(call, index)
    0.5
"""

from __future__ import annotations

from svoverlap.core.calls import SVCall, SVType
from svoverlap.core.index import RegionIndex
from svoverlap.utils.intervals import intersection_length


def total_overlap(index: RegionIndex, contig: str, start: int, end: int) -> int:
    """Bases of [start, end] covered by the intervals of ``index``.

    Indexed intervals never share a base, so summing per-interval
    intersections counts each covered base once.

    Args:
        index: Region index to query.
        contig: Contig of the span.
        start: Span start (1-based, inclusive).
        end: Span end (1-based, inclusive).

    Returns:
        Number of covered bases.
    """
    return sum(
        intersection_length(start, end, interval.start, interval.end)
        for interval in index.overlapping_intervals(contig, start, end)
    )


def score(
    call: SVCall,
    index: RegionIndex,
    require_breakend_overlap: bool = False,
) -> float:
    """Overlap score of one call against one region index.

    Args:
        call: SV call to score.
        index: Region index of a named region set.
        require_breakend_overlap: If True, a call scores 0 unless both
            breakend positions fall inside indexed intervals.

    Returns:
        Score in [0, 1].
    """
    container_a = index.get(call.contig_a)
    if container_a is None or len(container_a) == 0:
        return 0.0
    container_b = index.get(call.contig_b)
    if container_b is None or len(container_b) == 0:
        return 0.0

    overlaps_a = container_a.covers(call.position_a)
    overlaps_b = container_b.covers(call.position_b)
    if require_breakend_overlap and not (overlaps_a and overlaps_b):
        return 0.0

    # Applies whatever require_breakend_overlap says
    if call.svtype == SVType.BND or not call.is_intrachromosomal:
        return 1.0 if overlaps_a and overlaps_b else 0.0

    if call.length < 1:
        return 0.0
    start = call.position_a
    end = call.position_a + call.length - 1
    covered = total_overlap(index, call.contig_a, start, end)
    return min(1.0, covered / call.length)
