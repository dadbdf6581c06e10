"""Input/output handlers for SVOverlap.

- intervals: BED, Picard interval_list and interval-string files, plus
  set-rule/padding/merge normalization
- vcf: SV record source and annotated VCF/BCF writer (pysam)
"""

from svoverlap.io.intervals import load_intervals, normalize_intervals, read_interval_file

__all__ = [
    "load_intervals",
    "normalize_intervals",
    "read_interval_file",
]
