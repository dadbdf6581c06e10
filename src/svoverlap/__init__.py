"""SVOverlap: annotate structural variants with region overlap fractions.

SVOverlap scores every record of an SV call set against one or more named
sets of genomic regions and writes each score as an INFO field: the
covered fraction of the reference span for intra-chromosomal calls, or a
0/1 breakend-containment flag for BND and inter-chromosomal calls.

Example:
    >>> import svoverlap
    >>> svoverlap.__version__
    '0.1.0'

Modules:
    core: Region index, overlap scorer and annotation driver
    io: Interval-file normalization and VCF input/output
    config: Run configuration and configuration errors
    utils: Interval helpers, interval-string parsing, logging
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
