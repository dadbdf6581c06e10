"""VCF/BCF handling for SV call sets.

This module reads SV records with pysam, reduces each record to the two
breakends the overlap scorer needs, and writes the annotated records.

Breakend derivation:
    - First breakend: CHROM, POS
    - BND second breakend: INFO/CHR2 and INFO/END2 when present, otherwise
      the mate position in the ALT allele (``N[chr2:500[``), otherwise END
    - Other types: INFO/CHR2 (or CHROM) and END, or INFO/END2 when CHR2
      names another contig
    - Length: |SVLEN| when present, otherwise END - POS + 1 (0 for BND)

Example:
    >>> from svoverlap.io.vcf import AnnotatedVcfWriter, VcfCallSource
    >>> with VcfCallSource("calls.vcf.gz") as source:
    ...     for record, call in source:
    ...         print(call.contig_a, call.position_a, call.svtype)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

import pysam

from svoverlap.core.calls import SVCallRecord, SVType

if TYPE_CHECKING:
    from svoverlap.core.annotate import RegionHeaderLine

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Mate position in a BND ALT allele: N[chr2:500[, ]chr2:500]N, ...
_BND_ALT_PATTERN = re.compile(r"[\[\]](.+):(\d+)[\[\]]")

SOURCE_NAME = "svoverlap"


# =============================================================================
# Exceptions
# =============================================================================


class MissingSequenceDictionary(ValueError):
    """Raised when a VCF header declares no contigs."""

    pass


# =============================================================================
# Header Helpers
# =============================================================================


def read_sequence_dictionary(header: pysam.VariantHeader) -> dict[str, int | None]:
    """Contig names and lengths from the ##contig lines of a header.

    Args:
        header: VCF header.

    Returns:
        Ordered mapping of contig name to length (None if not declared).

    Raises:
        MissingSequenceDictionary: If the header has no ##contig lines.
    """
    dictionary = {name: contig.length for name, contig in header.contigs.items()}
    if not dictionary:
        raise MissingSequenceDictionary("Sequence dictionary not found in variants header")
    return dictionary


# =============================================================================
# Record Conversion
# =============================================================================


def _info_value(record: pysam.VariantRecord, key: str) -> Any:
    if key not in record.header.info:
        return None
    value = record.info.get(key)
    if isinstance(value, tuple):
        value = value[0] if value else None
    return value


def _parse_bnd_mate(record: pysam.VariantRecord) -> tuple[str, int] | None:
    for alt in record.alts or ():
        match = _BND_ALT_PATTERN.search(alt)
        if match:
            return match.group(1), int(match.group(2))
    return None


def record_to_call(record: pysam.VariantRecord) -> SVCallRecord:
    """Reduce a VCF record to an SVCallRecord.

    Args:
        record: SV record with INFO/SVTYPE.

    Returns:
        The record's breakends, type and length.

    Raises:
        ValueError: If SVTYPE is missing or unknown.
    """
    label = record.id or f"{record.chrom}:{record.pos}"
    raw_type = _info_value(record, "SVTYPE")
    if raw_type is None:
        raise ValueError(f"Record {label} has no INFO/SVTYPE")
    svtype = SVType.parse(str(raw_type))

    contig_a = record.chrom
    position_a = record.pos
    chr2 = _info_value(record, "CHR2")

    if svtype is SVType.BND:
        mate = _parse_bnd_mate(record)
        end2 = _info_value(record, "END2")
        if chr2 is not None:
            contig_b = str(chr2)
        elif mate is not None:
            contig_b = mate[0]
        else:
            contig_b = contig_a
        if end2 is not None:
            position_b = int(end2)
        elif mate is not None:
            position_b = mate[1]
        else:
            position_b = record.stop
        return SVCallRecord(contig_a, position_a, contig_b, position_b, svtype, 0, record.id)

    contig_b = str(chr2) if chr2 is not None else contig_a
    position_b = record.stop
    if contig_b != contig_a:
        # END is on CHROM; the position on CHR2 is END2
        end2 = _info_value(record, "END2")
        if end2 is not None:
            position_b = int(end2)
    svlen = _info_value(record, "SVLEN")
    if svlen is not None:
        length = abs(int(svlen))
    else:
        length = record.stop - record.pos + 1

    return SVCallRecord(contig_a, position_a, contig_b, position_b, svtype, length, record.id)


# =============================================================================
# Record Source
# =============================================================================


class VcfCallSource:
    """Iterate the records of a VCF/BCF file together with their calls.

    Attributes:
        path: Input path.
        header: Input header.
        dictionary: Sequence dictionary from the header.

    Example:
        >>> with VcfCallSource("calls.vcf") as source:
        ...     records = list(source)
    """

    def __init__(self, path: Path | str) -> None:
        """Open the file and read its sequence dictionary.

        Args:
            path: VCF, bgzipped VCF or BCF.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            MissingSequenceDictionary: If the header has no contigs.
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"VCF file not found: {self.path}")

        self._vcf = pysam.VariantFile(str(self.path))
        self.header = self._vcf.header
        try:
            self.dictionary = read_sequence_dictionary(self.header)
        except MissingSequenceDictionary:
            self._vcf.close()
            raise

    def __iter__(self) -> Iterator[tuple[pysam.VariantRecord, SVCallRecord]]:
        for record in self._vcf:
            yield record, record_to_call(record)

    def close(self) -> None:
        """Close the underlying file."""
        self._vcf.close()

    def __enter__(self) -> VcfCallSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# =============================================================================
# Writer
# =============================================================================


def _write_mode(path: Path) -> str:
    if path.suffix == ".bcf":
        return "wb"
    if path.suffix in (".gz", ".bgz"):
        return "wz"
    return "w"


def _build_output_header(
    template_header: pysam.VariantHeader,
    header_lines: list[RegionHeaderLine],
) -> pysam.VariantHeader:
    """Copy a header into a new one, replacing INFO lines named like regions.

    pysam cannot free an INFO ID once defined, so existing definitions are
    left out of the copy instead of being removed from it.
    """
    region_ids = {line.id for line in header_lines}
    header = pysam.VariantHeader()
    for rec in template_header.records:
        if rec.key == "fileformat":
            continue
        if rec.key == "FILTER" and rec.get("ID") == "PASS":
            continue
        if rec.key == "INFO" and rec.get("ID") in region_ids:
            logger.warning(f"Replacing existing INFO/{rec.get('ID')} definition in output header")
            continue
        header.add_record(rec)
    for sample in template_header.samples:
        header.add_sample(sample)
    for line in header_lines:
        header.info.add(line.id, line.number, line.type, line.description)
    return header


class AnnotatedVcfWriter:
    """Write records with one overlap INFO field per region set.

    The output header is the input header plus one INFO line per region
    and a ``##source`` line. Compression follows the output suffix.

    Attributes:
        path: Output path.
        header: Output header.
    """

    def __init__(
        self,
        path: Path | str,
        template_header: pysam.VariantHeader,
        header_lines: list[RegionHeaderLine],
        source: str = SOURCE_NAME,
    ) -> None:
        """Build the output header and open the output file.

        Args:
            path: Output VCF/BCF path.
            template_header: Header of the input file.
            header_lines: INFO definitions for the region scores.
            source: Value of the ##source header line.
        """
        self.path = Path(path)
        self.header = _build_output_header(template_header, header_lines)
        self.header.add_meta("source", source)

        self._vcf = pysam.VariantFile(str(self.path), _write_mode(self.path), header=self.header)
        self.n_written = 0

    def emit(self, record: pysam.VariantRecord, scores: dict[str, float]) -> None:
        """Write one record with its region scores.

        Args:
            record: Record from the input file.
            scores: Region name -> overlap score.
        """
        record.translate(self.header)
        for name, value in scores.items():
            record.info[name] = value
        self._vcf.write(record)
        self.n_written += 1

    def close(self) -> None:
        """Close the output file."""
        self._vcf.close()

    def __enter__(self) -> AnnotatedVcfWriter:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
