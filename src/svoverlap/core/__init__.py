"""Core overlap annotation logic for SVOverlap.

This module contains the region index, the overlap scorer and the
annotation driver:

- calls: SV call protocol and record type
- index: Per-contig interval index for a named region set
- overlap: Overlap scoring of one call against one index
- annotate: One-pass annotation of a record stream
"""

from svoverlap.core.annotate import AnnotationDriver, RegionHeaderLine
from svoverlap.core.calls import SVCall, SVCallRecord, SVType
from svoverlap.core.index import (
    ContigIntervals,
    EmptyRegionSet,
    MalformedRegionSet,
    RegionIndex,
    RegionSetError,
)
from svoverlap.core.overlap import score, total_overlap

__all__ = [
    "AnnotationDriver",
    "RegionHeaderLine",
    "SVCall",
    "SVCallRecord",
    "SVType",
    "ContigIntervals",
    "RegionIndex",
    "RegionSetError",
    "EmptyRegionSet",
    "MalformedRegionSet",
    "score",
    "total_overlap",
]
