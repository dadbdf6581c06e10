"""Per-contig interval index for a named region set.

A region set is a normalized collection of closed, 1-based intervals whose
members on any one contig never share a base. That invariant lets each
contig be stored as two sorted numpy arrays (starts and ends, both
strictly increasing) and queried with binary search in O(log n + k).

Example:
    >>> from svoverlap.core.index import RegionIndex
    >>> from svoverlap.utils.intervals import GenomicInterval
    >>> index = RegionIndex.build([GenomicInterval("chr1", 90, 200)], name="CODING")
    >>> index.has_overlap("chr1", 100)
    True
    >>> list(index.overlapping_intervals("chr1", 150, 300))
    [GenomicInterval(contig='chr1', start=90, end=200)]
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Iterator

import numpy as np

from svoverlap.utils.intervals import GenomicInterval

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class RegionSetError(ValueError):
    """Base class for region sets that cannot be indexed."""

    pass


class EmptyRegionSet(RegionSetError):
    """Raised when a named region set contains no intervals."""

    pass


class MalformedRegionSet(RegionSetError):
    """Raised when a region set violates the non-overlap invariant."""

    pass


# =============================================================================
# Per-contig Container
# =============================================================================


class ContigIntervals:
    """Static, sorted, non-overlapping intervals on one contig.

    Attributes:
        contig: Contig name.
        starts: Interval starts, strictly increasing.
        ends: Interval ends, strictly increasing.
    """

    __slots__ = ("contig", "starts", "ends")

    def __init__(self, contig: str, starts: np.ndarray, ends: np.ndarray) -> None:
        self.contig = contig
        self.starts = starts
        self.ends = ends
        self.starts.setflags(write=False)
        self.ends.setflags(write=False)

    def __len__(self) -> int:
        return len(self.starts)

    def __repr__(self) -> str:
        return f"ContigIntervals({self.contig!r}, n={len(self)})"

    def covers(self, position: int) -> bool:
        """Check if any interval covers a single base."""
        # Last interval starting at or before position
        i = int(np.searchsorted(self.starts, position, side="right")) - 1
        return i >= 0 and int(self.ends[i]) >= position

    def overlapping(self, start: int, end: int) -> Iterator[GenomicInterval]:
        """Yield intervals sharing at least one base with [start, end]."""
        # First interval ending at or after start; ends are sorted because
        # the intervals never overlap.
        lo = int(np.searchsorted(self.ends, start, side="left"))
        hi = int(np.searchsorted(self.starts, end, side="right"))
        for i in range(lo, hi):
            yield GenomicInterval(self.contig, int(self.starts[i]), int(self.ends[i]))


# =============================================================================
# Region Index
# =============================================================================


class RegionIndex:
    """Contig-keyed interval index for one named region set.

    Built once from normalized intervals and read-only afterwards, so a
    single index can be queried from any number of threads.

    Attributes:
        name: Region set name.
    """

    def __init__(self, name: str, containers: dict[str, ContigIntervals]) -> None:
        self.name = name
        self._containers = containers

    @classmethod
    def build(cls, intervals: Iterable[GenomicInterval], name: str = "regions") -> RegionIndex:
        """Index a normalized interval collection.

        Args:
            intervals: Closed 1-based intervals; those on the same contig
                must not share a base.
            name: Region set name, used in messages.

        Returns:
            A RegionIndex with one container per contig.

        Raises:
            EmptyRegionSet: If no intervals are given.
            MalformedRegionSet: If an interval is invalid or two intervals
                on one contig overlap.
        """
        by_contig: dict[str, list[tuple[int, int]]] = defaultdict(list)
        n_intervals = 0
        for interval in intervals:
            if interval.start < 1 or interval.end < interval.start:
                raise MalformedRegionSet(
                    f"Region set '{name}' has an invalid interval: {interval}"
                )
            by_contig[interval.contig].append((interval.start, interval.end))
            n_intervals += 1

        if n_intervals == 0:
            raise EmptyRegionSet(f"Region set '{name}' is empty after normalization")

        containers = {}
        for contig, pairs in by_contig.items():
            coords = np.array(sorted(pairs), dtype=np.int64)
            starts = np.ascontiguousarray(coords[:, 0])
            ends = np.ascontiguousarray(coords[:, 1])
            clashes = np.flatnonzero(starts[1:] <= ends[:-1])
            if clashes.size:
                i = int(clashes[0])
                raise MalformedRegionSet(
                    f"Region set '{name}' has overlapping intervals on {contig}: "
                    f"{starts[i]}-{ends[i]} and {starts[i + 1]}-{ends[i + 1]}"
                )
            containers[contig] = ContigIntervals(contig, starts, ends)

        logger.debug(
            f"Indexed region set {name}: {n_intervals} intervals on {len(containers)} contigs"
        )
        return cls(name, containers)

    def __len__(self) -> int:
        return sum(len(c) for c in self._containers.values())

    def __contains__(self, contig: object) -> bool:
        return contig in self._containers

    def __repr__(self) -> str:
        return f"RegionIndex({self.name!r}, contigs={len(self._containers)}, intervals={len(self)})"

    @property
    def contigs(self) -> list[str]:
        """Contigs with at least one interval."""
        return list(self._containers)

    def get(self, contig: str) -> ContigIntervals | None:
        """Container for a contig, or None if the contig has no intervals."""
        return self._containers.get(contig)

    def has_overlap(self, contig: str, position: int) -> bool:
        """Check if an indexed interval on ``contig`` covers ``position``."""
        container = self._containers.get(contig)
        return container is not None and container.covers(position)

    def overlapping_intervals(
        self,
        contig: str,
        start: int,
        end: int,
    ) -> Iterator[GenomicInterval]:
        """Intervals on ``contig`` intersecting [start, end].

        Each call returns a fresh iterator; no cursor is shared between
        queries.
        """
        container = self._containers.get(contig)
        if container is None:
            return iter(())
        return container.overlapping(start, end)
