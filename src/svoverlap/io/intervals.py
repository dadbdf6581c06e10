"""Interval file loading and normalization.

This module turns the interval files of one region set into the sorted,
non-overlapping interval collection that ``RegionIndex.build`` expects.

Supported formats (chosen by file suffix, optionally gzipped):
    - ``.bed``: 0-based half-open; converted to 1-based inclusive
    - ``.interval_list``: Picard format; ``@`` header lines, 1-based inclusive
    - anything else: one interval string per line
      (``chr1``, ``chr1:100``, ``chr1:100-200``; ``#`` comments allowed)

Normalization order:
    1. Parse each file and validate contigs against the sequence dictionary
    2. Combine files with the set rule (UNION or INTERSECTION)
    3. Pad each interval, clamped to contig bounds
    4. Sort and merge by the merging rule

Example:
    >>> from svoverlap.io.intervals import load_intervals
    >>> intervals = load_intervals(["coding.bed"], padding=100, contig_lengths={"chr1": 248956422})
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import IO, Iterator, Sequence

from svoverlap.config import IntervalMergingRule, IntervalSetRule
from svoverlap.utils.intervals import (
    GenomicInterval,
    intersect_intervals,
    merge_intervals,
    pad_intervals,
)
from svoverlap.utils.regions import parse_region, validate_region

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

BED_SUFFIXES = {".bed"}
INTERVAL_LIST_SUFFIXES = {".interval_list"}

# Lines ignored in BED files
BED_SKIP_PREFIXES = ("#", "track", "browser")


# =============================================================================
# File Parsing
# =============================================================================


def _open_text(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, "rt")
    return open(path)


def _format_suffix(path: Path) -> str:
    suffixes = path.suffixes
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    return suffixes[-1].lower() if suffixes else ""


def _iter_bed(handle: IO[str], path: Path) -> Iterator[GenomicInterval]:
    for line_num, line in enumerate(handle, 1):
        line = line.strip()
        if not line or line.startswith(BED_SKIP_PREFIXES):
            continue
        fields = line.split("\t")
        if len(fields) < 3:
            raise ValueError(f"{path}:{line_num}: BED line needs at least 3 columns")
        try:
            start = int(fields[1])
            end = int(fields[2])
        except ValueError:
            raise ValueError(f"{path}:{line_num}: invalid BED coordinates") from None
        if start < 0 or end <= start:
            raise ValueError(f"{path}:{line_num}: invalid BED interval {start}-{end}")
        # 0-based half-open -> 1-based inclusive
        yield GenomicInterval(fields[0], start + 1, end)


def _iter_interval_list(handle: IO[str], path: Path) -> Iterator[GenomicInterval]:
    for line_num, line in enumerate(handle, 1):
        line = line.strip()
        if not line or line.startswith("@"):
            continue
        fields = line.split("\t")
        if len(fields) < 3:
            raise ValueError(f"{path}:{line_num}: interval list line needs at least 3 columns")
        try:
            start = int(fields[1])
            end = int(fields[2])
        except ValueError:
            raise ValueError(f"{path}:{line_num}: invalid interval coordinates") from None
        if start < 1 or end < start:
            raise ValueError(f"{path}:{line_num}: invalid interval {start}-{end}")
        yield GenomicInterval(fields[0], start, end)


def _iter_region_strings(
    handle: IO[str],
    path: Path,
    contig_lengths: dict[str, int | None],
) -> Iterator[GenomicInterval]:
    for line_num, line in enumerate(handle, 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            yield parse_region(line, contig_lengths)
        except ValueError as e:
            raise ValueError(f"{path}:{line_num}: {e}") from None


def read_interval_file(
    path: Path | str,
    contig_lengths: dict[str, int | None],
) -> list[GenomicInterval]:
    """Read intervals from a BED, interval_list or interval-string file.

    Args:
        path: Interval file.
        contig_lengths: Sequence dictionary the intervals must fit.

    Returns:
        Intervals in file order, 1-based inclusive.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If a line is malformed or references an unknown contig.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Interval file not found: {path}")

    suffix = _format_suffix(path)
    with _open_text(path) as handle:
        if suffix in BED_SUFFIXES:
            raw = list(_iter_bed(handle, path))
        elif suffix in INTERVAL_LIST_SUFFIXES:
            raw = list(_iter_interval_list(handle, path))
        else:
            raw = list(_iter_region_strings(handle, path, contig_lengths))

    for interval in raw:
        try:
            validate_region(interval, contig_lengths)
        except ValueError as e:
            raise ValueError(f"{path}: {e}") from None

    logger.debug(f"Read {len(raw)} intervals from {path}")
    return raw


# =============================================================================
# Normalization
# =============================================================================


def normalize_intervals(
    interval_sets: Sequence[list[GenomicInterval]],
    set_rule: IntervalSetRule = IntervalSetRule.UNION,
    merging_rule: IntervalMergingRule = IntervalMergingRule.OVERLAPPING_ONLY,
    padding: int = 0,
    contig_lengths: dict[str, int | None] | None = None,
) -> list[GenomicInterval]:
    """Combine, pad and merge interval collections.

    Args:
        interval_sets: One interval collection per input file.
        set_rule: UNION keeps bases from any collection; INTERSECTION
            keeps bases present in every collection.
        merging_rule: OVERLAPPING_ONLY or ALL (also merges abutting).
        padding: Bases added to both sides of each interval.
        contig_lengths: Sequence dictionary; its order sorts the output
            and its lengths clamp padding.

    Returns:
        Sorted intervals, non-overlapping within each contig.

    Raises:
        ValueError: If padding is negative.
    """
    contig_lengths = contig_lengths or {}

    combined: list[GenomicInterval] | None = None
    for intervals in interval_sets:
        if combined is None:
            combined = list(intervals)
        elif set_rule is IntervalSetRule.UNION:
            combined.extend(intervals)
        else:
            combined = intersect_intervals(combined, intervals)
    combined = combined or []

    if padding:
        combined = pad_intervals(combined, padding, contig_lengths)

    merged = merge_intervals(
        combined, merge_abutting=merging_rule is IntervalMergingRule.ALL
    )

    order = {contig: i for i, contig in enumerate(contig_lengths)}
    merged.sort(key=lambda x: (order.get(x.contig, len(order)), x.contig, x.start))
    return merged


def load_intervals(
    paths: Sequence[Path | str],
    set_rule: IntervalSetRule = IntervalSetRule.UNION,
    merging_rule: IntervalMergingRule = IntervalMergingRule.OVERLAPPING_ONLY,
    padding: int = 0,
    contig_lengths: dict[str, int | None] | None = None,
) -> list[GenomicInterval]:
    """Read and normalize the interval files of one region set.

    Args:
        paths: Interval files.
        set_rule: How the files are combined.
        merging_rule: Which intervals are merged.
        padding: Bases added to both sides of each interval.
        contig_lengths: Sequence dictionary used for validation,
            clamping and ordering.

    Returns:
        Sorted intervals, non-overlapping within each contig. May be
        empty; callers decide whether that is an error.
    """
    contig_lengths = contig_lengths or {}
    interval_sets = [read_interval_file(path, contig_lengths) for path in paths]
    normalized = normalize_intervals(
        interval_sets,
        set_rule=set_rule,
        merging_rule=merging_rule,
        padding=padding,
        contig_lengths=contig_lengths,
    )

    raw_count = sum(len(s) for s in interval_sets)
    logger.debug(
        f"Normalized {raw_count} intervals to {len(normalized)} "
        f"(set rule {set_rule.value}, merging rule {merging_rule.value}, padding {padding})"
    )
    if not normalized:
        logger.warning(f"No intervals remain after normalizing {', '.join(map(str, paths))}")
    return normalized
