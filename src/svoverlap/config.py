"""Configuration management for SVOverlap.

This module handles loading, validating, and providing access to the
settings of an annotation run. Configuration can come from:
- Default values
- A TOML configuration file
- Command-line arguments (which override file values)

Example:
    >>> from svoverlap.config import AnnotateConfig
    >>> config = AnnotateConfig(region_files=["coding.bed"], region_names=["coding"])
    >>> config.validate()
    >>> config.formatted_region_names
    ['CODING']

TOML layout (all keys optional)::

    region_files = ["coding.bed", "repeats.interval_list"]
    region_names = ["coding", "repeats"]
    set_rule = "UNION"
    merging_rule = "OVERLAPPING_ONLY"
    padding = 0
    require_breakend_overlap = false
"""

from __future__ import annotations

import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

import attrs

# =============================================================================
# Default Configuration Values
# =============================================================================

DEFAULT_PADDING = 0
DEFAULT_REQUIRE_BREAKEND_OVERLAP = False

# VCF INFO keys
_INFO_ID_PATTERN = re.compile(r"^[A-Za-z_][0-9A-Za-z_.]*$")


# =============================================================================
# Exceptions
# =============================================================================


class ConfigurationError(ValueError):
    """Base class for invalid run configurations."""

    pass


class ConfigurationMismatch(ConfigurationError):
    """Raised when region file and region name counts differ."""

    pass


class DuplicateRegionName(ConfigurationError):
    """Raised when two region names collide case-insensitively."""

    pass


class ConflictingIntervalSource(ConfigurationError):
    """Raised when -L/-XL intervals are given together with region files."""

    pass


class InvalidRegionName(ConfigurationError):
    """Raised when a region name cannot be used as a VCF INFO key."""

    pass


# =============================================================================
# Rules
# =============================================================================


class IntervalSetRule(str, Enum):
    """How intervals from several files of one region set are combined."""

    UNION = "UNION"
    INTERSECTION = "INTERSECTION"


class IntervalMergingRule(str, Enum):
    """Which intervals are merged during normalization.

    OVERLAPPING_ONLY merges intervals sharing a base; ALL also merges
    abutting intervals.
    """

    OVERLAPPING_ONLY = "OVERLAPPING_ONLY"
    ALL = "ALL"


# =============================================================================
# Configuration Classes
# =============================================================================


def _to_paths(values: Any) -> list[Path]:
    return [Path(v) for v in values]


@attrs.define
class AnnotateConfig:
    """Settings for one annotation run.

    Attributes:
        region_files: Interval files, one per region set.
        region_names: Region set names, paired positionally with files.
        set_rule: Interval set rule used when loading each region file.
        merging_rule: Interval merging rule.
        padding: Bases added to both sides of each interval.
        require_breakend_overlap: Require both breakends inside a region
            for a nonzero score.
        intervals: Engine-level -L intervals (not allowed with region files).
        exclude_intervals: Engine-level -XL intervals (not allowed with region files).
    """

    region_files: list[Path] = attrs.field(factory=list, converter=_to_paths)
    region_names: list[str] = attrs.field(factory=list, converter=list)
    set_rule: IntervalSetRule = attrs.field(
        default=IntervalSetRule.UNION, converter=IntervalSetRule
    )
    merging_rule: IntervalMergingRule = attrs.field(
        default=IntervalMergingRule.OVERLAPPING_ONLY, converter=IntervalMergingRule
    )
    padding: int = DEFAULT_PADDING
    require_breakend_overlap: bool = DEFAULT_REQUIRE_BREAKEND_OVERLAP
    intervals: list[str] = attrs.field(factory=list, converter=list)
    exclude_intervals: list[str] = attrs.field(factory=list, converter=list)

    @property
    def formatted_region_names(self) -> list[str]:
        """Region names upper-cased, as used for INFO keys."""
        return [name.upper() for name in self.region_names]

    def validate(self) -> None:
        """Check the configuration before any data is read.

        Raises:
            ConflictingIntervalSource: If -L/-XL intervals are present.
            ConfigurationMismatch: If file and name counts differ.
            InvalidRegionName: If a name is not a valid INFO key.
            DuplicateRegionName: If names collide after upper-casing.
            ValueError: If no regions are given or padding is negative.
        """
        if self.intervals or self.exclude_intervals:
            raise ConflictingIntervalSource(
                "Arguments -L and -XL are not supported, use --region-file instead"
            )
        if len(self.region_files) != len(self.region_names):
            raise ConfigurationMismatch(
                f"Number of --region-name ({len(self.region_names)}) and "
                f"--region-file ({len(self.region_files)}) arguments must be equal"
            )
        if not self.region_files:
            raise ValueError("At least one --region-file is required")
        if self.padding < 0:
            raise ValueError(f"Region padding cannot be negative, got {self.padding}")

        for name in self.region_names:
            if not _INFO_ID_PATTERN.match(name):
                raise InvalidRegionName(
                    f"Region name '{name}' is not a valid VCF INFO key "
                    "(letters, digits, '_' and '.', not starting with a digit)"
                )

        formatted = self.formatted_region_names
        if len(set(formatted)) != len(formatted):
            duplicates = sorted({n for n in formatted if formatted.count(n) > 1})
            raise DuplicateRegionName(
                f"Found duplicate region names (not case-sensitive): {', '.join(duplicates)}"
            )

    @classmethod
    def load(cls, path: Path | str | None = None, **overrides: Any) -> AnnotateConfig:
        """Load configuration from a TOML file.

        Args:
            path: Path to a TOML file. If None, defaults are used.
            **overrides: Values that replace file values; None values
                and empty sequences are ignored.

        Returns:
            Loaded configuration object.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist.
            ValueError: If the file has unknown keys or invalid values.
        """
        values: dict[str, Any] = {}
        if path is not None:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Configuration file not found: {path}")
            with open(path, "rb") as f:
                try:
                    values = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ValueError(f"Invalid configuration file {path}: {e}") from e

            known = {a.name for a in attrs.fields(cls)}
            unknown = sorted(set(values) - known)
            if unknown:
                raise ValueError(f"Unknown configuration keys in {path}: {', '.join(unknown)}")

        for key, value in overrides.items():
            if value is None or (isinstance(value, (list, tuple)) and not value):
                continue
            values[key] = value

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return attrs.asdict(self, value_serializer=_serialize_value)


def _serialize_value(instance: Any, field: Any, value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    return value
