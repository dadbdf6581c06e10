"""Utility functions for SVOverlap.

This module provides common utilities used across SVOverlap:

- Closed 1-based interval operations (intersection, merge, pad)
- Interval string parsing and validation
- Logging configuration

Example:
    >>> from svoverlap.utils import GenomicInterval, intersection_length
    >>> intersection_length(1, 10, 5, 15)
    6
    >>> from svoverlap.utils.regions import parse_region
    >>> region = parse_region("chr1:1000-2000")
"""

from svoverlap.utils.intervals import (
    GenomicInterval,
    intersect_intervals,
    intersection_length,
    merge_intervals,
    pad_intervals,
)
from svoverlap.utils.regions import parse_region, validate_region

__all__ = [
    "GenomicInterval",
    "intersection_length",
    "merge_intervals",
    "pad_intervals",
    "intersect_intervals",
    "parse_region",
    "validate_region",
]
