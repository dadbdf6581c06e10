"""Structural-variant call model.

The scorer reads calls only through the accessors of the ``SVCall``
protocol, so any record source that exposes contig, position, type and
length for both breakends can be annotated. ``SVCallRecord`` is the
concrete implementation built from VCF records by ``svoverlap.io.vcf``.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

import attrs


class SVType(str, Enum):
    """Structural-variant classes recognized in INFO/SVTYPE."""

    BND = "BND"
    DEL = "DEL"
    DUP = "DUP"
    INV = "INV"
    INS = "INS"
    CNV = "CNV"
    CPX = "CPX"
    CTX = "CTX"

    @classmethod
    def parse(cls, value: str) -> SVType:
        """Parse an SVTYPE value, case-insensitively.

        Raises:
            ValueError: If the value is not a known SV type.
        """
        try:
            return cls(value.upper())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown SV type '{value}'. Valid types: {valid}") from None


@runtime_checkable
class SVCall(Protocol):
    """Accessors the overlap scorer needs from an SV call."""

    @property
    def contig_a(self) -> str: ...

    @property
    def position_a(self) -> int: ...

    @property
    def contig_b(self) -> str: ...

    @property
    def position_b(self) -> int: ...

    @property
    def svtype(self) -> SVType: ...

    @property
    def length(self) -> int: ...

    @property
    def is_intrachromosomal(self) -> bool: ...


@attrs.frozen(slots=True)
class SVCallRecord:
    """An SV call reduced to its two breakends.

    Attributes:
        contig_a: Contig of the first breakend.
        position_a: Position of the first breakend (1-based).
        contig_b: Contig of the second breakend.
        position_b: Position of the second breakend (1-based).
        svtype: SV class.
        length: Reference span in bp (0 for breakend calls).
        variant_id: Record ID, for log messages.
    """

    contig_a: str
    position_a: int
    contig_b: str
    position_b: int
    svtype: SVType = attrs.field(converter=SVType)
    length: int = 0
    variant_id: str | None = None

    @property
    def is_intrachromosomal(self) -> bool:
        """Both breakends on one contig and not a breakend-type call."""
        return self.contig_a == self.contig_b and self.svtype is not SVType.BND

    def __str__(self) -> str:
        label = self.variant_id or self.svtype.value
        return f"{label} {self.contig_a}:{self.position_a}-{self.contig_b}:{self.position_b}"
