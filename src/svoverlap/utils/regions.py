"""Genomic interval string parsing and validation utilities.

This module parses the interval strings found in ``.list``/``.intervals``
files and validates parsed intervals against the sequence dictionary of
the variant file being annotated.

Coordinate conventions:
    - Interval strings: 1-based inclusive (standard genomic convention)
    - Picard interval lists: 1-based inclusive
    - BED files: 0-based half-open (converted on load)
    - Internal storage: 1-based inclusive, matching VCF POS/END

Example:
    >>> from svoverlap.utils.regions import parse_region
    >>> region = parse_region("chr1:1,000-2,000")
    >>> region.start, region.end
    (1000, 2000)
"""

from __future__ import annotations

import re

from svoverlap.utils.intervals import GenomicInterval

# Handles: chr1:1000-2000, chr1:1,000-2,000, chr1:1000..2000, chr1:1000, chr1:1000+
_REGION_PATTERN = re.compile(r"^(.+):([\d,]+)(?:(?:-|\.\.)([\d,]+)|(\+))?$")


def parse_region(
    region_str: str,
    contig_lengths: dict[str, int | None] | None = None,
) -> GenomicInterval:
    """Parse an interval string into a GenomicInterval.

    Supported formats:
        chr1:1000-2000      (1-based, inclusive)
        chr1:1,000-2,000    (thousands separators)
        chr1:1000..2000     (GFF style)
        chr1:1000           (single base)
        chr1:1000+          (to the end of the contig)
        chr1                (whole contig)

    A bare contig name is recognized only when it is present in
    ``contig_lengths``; this keeps names containing ``:`` unambiguous.

    Args:
        region_str: Interval string.
        contig_lengths: Contig lengths, needed for whole-contig and
            open-ended intervals.

    Returns:
        GenomicInterval with 1-based inclusive coordinates.

    Raises:
        ValueError: If the format or coordinates are invalid.
    """
    region_str = region_str.strip()
    contig_lengths = contig_lengths or {}

    if region_str in contig_lengths:
        return GenomicInterval(region_str, 1, _require_length(region_str, contig_lengths))

    match = _REGION_PATTERN.match(region_str)
    if not match:
        if region_str and ":" not in region_str:
            raise ValueError(f"Contig '{region_str}' not found in sequence dictionary")
        raise ValueError(
            f"Invalid region format: '{region_str}'. "
            "Expected format: contig:start-end (e.g., chr1:1000-2000)"
        )

    contig = match.group(1)
    start = int(match.group(2).replace(",", ""))
    if match.group(4):
        end = _require_length(contig, contig_lengths)
    elif match.group(3):
        end = int(match.group(3).replace(",", ""))
    else:
        end = start

    if start < 1:
        raise ValueError(f"Start position must be >= 1, got {start}")
    if end < start:
        raise ValueError(f"End must be >= start: {start}-{end}")

    return GenomicInterval(contig, start, end)


def _require_length(contig: str, contig_lengths: dict[str, int | None]) -> int:
    length = contig_lengths.get(contig)
    if length is None:
        raise ValueError(f"Length of contig '{contig}' is not known")
    return length


def validate_region(
    region: GenomicInterval,
    contig_lengths: dict[str, int | None],
) -> None:
    """Validate an interval against a sequence dictionary.

    Checks that:
    - The contig exists in the dictionary
    - The interval ends within the contig, when its length is known

    Args:
        region: Interval to validate.
        contig_lengths: Sequence dictionary (contig -> length or None).

    Raises:
        ValueError: If the interval is invalid for the dictionary.
    """
    if region.contig not in contig_lengths:
        available = list(contig_lengths.keys())[:5]
        suffix = "..." if len(contig_lengths) > 5 else ""
        raise ValueError(
            f"Contig '{region.contig}' not found in sequence dictionary. "
            f"Available: {available}{suffix}"
        )

    contig_len = contig_lengths[region.contig]
    if contig_len is not None and region.end > contig_len:
        raise ValueError(
            f"Interval end ({region.end}) exceeds contig length ({contig_len}) for {region}"
        )
