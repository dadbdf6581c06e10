"""Pytest configuration and shared fixtures for SVOverlap tests.

This module contains fixtures that are shared across multiple test modules.
Fixtures are organized by category:

- Dictionary fixtures: Contig names and lengths
- Interval fixtures: Region files in BED, interval_list and list formats
- VCF fixtures: Small SV call sets written to tmp_path
"""

import logging
from pathlib import Path

import pytest

from svoverlap.core.index import RegionIndex
from svoverlap.utils.intervals import GenomicInterval


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_svoverlap_logger():
    """Remove handlers installed by setup_logging after each test."""
    yield
    logger = logging.getLogger("svoverlap")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Dictionary Fixtures
# =============================================================================


@pytest.fixture
def contig_lengths() -> dict[str, int | None]:
    """Sequence dictionary matching the synthetic VCF header."""
    return {"chr1": 10000, "chr2": 5000, "chr3": 3000}


# =============================================================================
# Interval Fixtures
# =============================================================================


@pytest.fixture
def coding_bed(tmp_path: Path) -> Path:
    """BED file covering chr1:90-200 and chr2:251-400 (1-based)."""
    path = tmp_path / "coding.bed"
    path.write_text(
        "track name=coding\n"
        "chr1\t89\t200\tgeneA\n"
        "chr2\t250\t400\tgeneB\n"
    )
    return path


@pytest.fixture
def repeats_interval_list(tmp_path: Path) -> Path:
    """Picard interval list with three 1-based intervals."""
    path = tmp_path / "repeats.interval_list"
    path.write_text(
        "@HD\tVN:1.6\n"
        "@SQ\tSN:chr1\tLN:10000\n"
        "@SQ\tSN:chr2\tLN:5000\n"
        "chr1\t1050\t2000\t+\trep1\n"
        "chr1\t400\t600\t+\trep2\n"
        "chr2\t200\t400\t+\trep3\n"
    )
    return path


@pytest.fixture
def empty_bed(tmp_path: Path) -> Path:
    """BED file with no intervals."""
    path = tmp_path / "empty.bed"
    path.write_text("track name=empty\n# nothing here\n")
    return path


@pytest.fixture
def simple_index() -> RegionIndex:
    """Region index with two intervals on chr1 and one on chr2."""
    return RegionIndex.build(
        [
            GenomicInterval("chr1", 90, 200),
            GenomicInterval("chr1", 1000, 1999),
            GenomicInterval("chr2", 500, 600),
        ],
        name="TEST",
    )


# =============================================================================
# VCF Fixtures
# =============================================================================


VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=10000>
##contig=<ID=chr2,length=5000>
##contig=<ID=chr3,length=3000>
##ALT=<ID=DEL,Description="Deletion">
##ALT=<ID=DUP,Description="Duplication">
##ALT=<ID=INS,Description="Insertion">
##INFO=<ID=SVTYPE,Number=1,Type=String,Description="Type of structural variant">
##INFO=<ID=SVLEN,Number=1,Type=Integer,Description="Length of structural variant">
##INFO=<ID=END,Number=1,Type=Integer,Description="End position of the variant">
##INFO=<ID=CHR2,Number=1,Type=String,Description="Contig of the second breakend">
##INFO=<ID=END2,Number=1,Type=Integer,Description="Position of the second breakend">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
"""

VCF_RECORDS = [
    "chr1\t100\tdel1\tN\t<DEL>\t.\tPASS\tSVTYPE=DEL;SVLEN=-50;END=149",
    "chr1\t500\tbnd1\tN\tN[chr2:300[\t.\tPASS\tSVTYPE=BND;CHR2=chr2;END2=300",
    "chr1\t1000\tdup1\tN\t<DUP>\t.\tPASS\tSVTYPE=DUP;SVLEN=100;END=1099",
    "chr1\t3000\tbnd2\tN\t]chr1:3500]N\t.\tPASS\tSVTYPE=BND",
    "chr2\t2000\tins1\tN\t<INS>\t.\tPASS\tSVTYPE=INS;SVLEN=30;END=2000",
]


def write_vcf(path: Path, records: list[str], header: str = VCF_HEADER) -> Path:
    """Write a plain-text VCF."""
    path.write_text(header + "".join(f"{line}\n" for line in records))
    return path


@pytest.fixture
def make_vcf(tmp_path: Path):
    """Factory writing a VCF with the standard header and given records."""

    def _make(records: list[str], name: str = "custom.vcf") -> Path:
        return write_vcf(tmp_path / name, records)

    return _make


@pytest.fixture
def sv_vcf(tmp_path: Path) -> Path:
    """Sites-only SV VCF with deletions, duplications, insertions and BNDs.

    Expected scores:
        CODING  (coding_bed):            del1=1.0, all others 0
        REPEATS (repeats_interval_list): dup1=0.5, bnd1=1.0, all others 0
    """
    return write_vcf(tmp_path / "calls.vcf", VCF_RECORDS)


@pytest.fixture
def vcf_without_contigs(tmp_path: Path) -> Path:
    """SV VCF whose header has no ##contig lines."""
    header = "\n".join(
        line for line in VCF_HEADER.splitlines() if not line.startswith("##contig")
    ) + "\n"
    return write_vcf(tmp_path / "nocontigs.vcf", VCF_RECORDS[:1], header=header)
