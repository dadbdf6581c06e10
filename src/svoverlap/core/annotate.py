"""Annotation driver: score every call against every named region set.

The driver is a one-pass transform. It consumes ``(record, call)`` pairs
from a record source in order, scores each call against all region
indexes, and hands the record and its scores to a sink. Every record
receives one score per region set, zeros included.

Startup (``AnnotationDriver.from_config``) validates the configuration,
builds one ``RegionIndex`` per region name and prepares the INFO header
lines before any record is read.

Example:
    >>> from svoverlap.config import AnnotateConfig
    >>> from svoverlap.core.annotate import AnnotationDriver
    >>> from svoverlap.io.vcf import AnnotatedVcfWriter, VcfCallSource
    >>> config = AnnotateConfig(region_files=["coding.bed"], region_names=["coding"])
    >>> with VcfCallSource("calls.vcf") as source:
    ...     driver = AnnotationDriver.from_config(config, source.dictionary)
    ...     with AnnotatedVcfWriter("out.vcf", source.header, driver.header_lines) as sink:
    ...         driver.run(source, sink)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

import attrs

from svoverlap.config import AnnotateConfig
from svoverlap.core.calls import SVCall
from svoverlap.core.index import RegionIndex
from svoverlap.core.overlap import score
from svoverlap.io.intervals import load_intervals
from svoverlap.utils.logging import ProgressLogger

logger = logging.getLogger(__name__)

# Records between progress messages
DEFAULT_PROGRESS_INTERVAL = 10_000


# =============================================================================
# Header State
# =============================================================================


@attrs.frozen
class RegionHeaderLine:
    """INFO header definition for one region score.

    Attributes:
        id: INFO key (upper-cased region name).
        number: Values per record.
        type: VCF value type.
        description: Human-readable description.
    """

    id: str
    number: int = 1
    type: str = "Float"
    description: str = ""

    @classmethod
    def for_region(cls, name: str) -> RegionHeaderLine:
        """Header line for the overlap fraction of a region set."""
        return cls(id=name, description=f"Fraction overlap of region {name}")

    def __str__(self) -> str:
        return (
            f'##INFO=<ID={self.id},Number={self.number},Type={self.type},'
            f'Description="{self.description}">'
        )


class AnnotationSink(Protocol):
    """Receives each record with its region scores."""

    def emit(self, record: Any, scores: dict[str, float]) -> None: ...


# =============================================================================
# Driver
# =============================================================================


class AnnotationDriver:
    """Scores calls against named region sets and forwards them.

    Attributes:
        region_sets: Region name -> index, in configured order.
        header_lines: INFO definitions for the region scores.
        require_breakend_overlap: Passed through to the scorer.
    """

    def __init__(
        self,
        region_sets: dict[str, RegionIndex],
        header_lines: list[RegionHeaderLine],
        require_breakend_overlap: bool = False,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        self.region_sets = region_sets
        self.header_lines = header_lines
        self.require_breakend_overlap = require_breakend_overlap
        self.progress_interval = progress_interval

    @classmethod
    def from_config(
        cls,
        config: AnnotateConfig,
        dictionary: dict[str, int | None],
    ) -> AnnotationDriver:
        """Validate the configuration and build all region indexes.

        Args:
            config: Run configuration.
            dictionary: Sequence dictionary of the input calls.

        Returns:
            A driver ready to consume records.

        Raises:
            ConfigurationError: If the configuration is invalid.
            EmptyRegionSet: If a region file normalizes to no intervals.
            MalformedRegionSet: If normalization left overlapping intervals.
            FileNotFoundError: If a region file doesn't exist.
            ValueError: If a region file is malformed.
        """
        config.validate()

        region_sets: dict[str, RegionIndex] = {}
        for name, path in zip(config.formatted_region_names, config.region_files):
            intervals = load_intervals(
                [path],
                set_rule=config.set_rule,
                merging_rule=config.merging_rule,
                padding=config.padding,
                contig_lengths=dictionary,
            )
            index = RegionIndex.build(intervals, name=name)
            logger.info(
                f"Loaded region set {name} from {path}: "
                f"{len(index)} intervals on {len(index.contigs)} contigs"
            )
            region_sets[name] = index

        header_lines = [RegionHeaderLine.for_region(name) for name in region_sets]
        return cls(
            region_sets,
            header_lines,
            require_breakend_overlap=config.require_breakend_overlap,
        )

    @property
    def region_names(self) -> list[str]:
        """Region names in output order."""
        return list(self.region_sets)

    def score_call(self, call: SVCall) -> dict[str, float]:
        """Score one call against every region set.

        Returns:
            Region name -> score, with an entry for every region set.
        """
        return {
            name: score(call, index, self.require_breakend_overlap)
            for name, index in self.region_sets.items()
        }

    def run(
        self,
        source: Iterable[tuple[Any, SVCall]],
        sink: AnnotationSink,
    ) -> int:
        """Annotate a record stream.

        Args:
            source: ``(record, call)`` pairs in input order.
            sink: Receives each record with its scores.

        Returns:
            Number of records annotated.
        """
        progress = ProgressLogger(
            logger, interval=self.progress_interval, description="Annotated"
        )
        for record, call in source:
            sink.emit(record, self.score_call(call))
            progress.update(location=f"{call.contig_a}:{call.position_a}")
        progress.finish()
        return progress.count
