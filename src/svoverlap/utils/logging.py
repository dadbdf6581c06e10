"""Logging configuration for SVOverlap.

This module provides logging setup for SVOverlap, with support for
console and file output.

Features:
    - Rich console formatting
    - File logging for debugging
    - Configurable verbosity levels
    - Progress logging for record streams

Example:
    >>> from svoverlap.utils.logging import setup_logging, get_logger
    >>> setup_logging(verbosity=2)
    >>> logger = get_logger(__name__)
    >>> logger.info("Processing started")
"""

import logging
import time
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

# =============================================================================
# Constants
# =============================================================================

# Default log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Rich console format (when using rich handler)
RICH_FORMAT = "%(message)s"

# Log levels by verbosity
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logging(
    verbosity: int = 1,
    log_file: Path | str | None = None,
    use_rich: bool = True,
) -> None:
    """Configure logging for SVOverlap.

    Args:
        verbosity: Verbosity level (0=warning, 1=info, 2=debug).
        log_file: Optional file to log to.
        use_rich: Use rich for console output.
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    logger = logging.getLogger("svoverlap")
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.handlers.clear()

    if use_rich:
        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        console_handler.setFormatter(logging.Formatter(RICH_FORMAT))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


# =============================================================================
# Progress Logging
# =============================================================================


class ProgressLogger:
    """Logger for record streams of unknown or known length.

    Attributes:
        logger: The underlying logger.
        total: Total number of items, if known.
        interval: Logging interval.

    Example:
        >>> progress = ProgressLogger(logger, interval=10000, description="Annotated")
        >>> for record in records:
        ...     annotate(record)
        ...     progress.update(location=f"{record.chrom}:{record.pos}")
        >>> progress.finish()
    """

    def __init__(
        self,
        logger: logging.Logger,
        total: int | None = None,
        interval: int = 100,
        description: str = "Processing",
    ) -> None:
        """Initialize progress logger.

        Args:
            logger: Logger to use.
            total: Total number of items, or None for streams.
            interval: Items between log messages.
            description: Description of the operation.
        """
        self.logger = logger
        self.total = total
        self.interval = interval
        self.description = description
        self.count = 0

    def update(self, n: int = 1, location: str | None = None) -> None:
        """Update progress counter.

        Args:
            n: Number of items completed.
            location: Optional position of the last item, for the message.
        """
        previous = self.count
        self.count += n
        if self.count // self.interval == previous // self.interval and self.count != self.total:
            return

        suffix = f" (last: {location})" if location else ""
        if self.total:
            pct = 100 * self.count / self.total
            self.logger.info(
                f"{self.description}: {self.count}/{self.total} ({pct:.1f}%){suffix}"
            )
        else:
            self.logger.info(f"{self.description}: {self.count:,} records{suffix}")

    def finish(self) -> None:
        """Mark progress as complete."""
        self.logger.info(f"{self.description}: Complete ({self.count:,} items)")


# =============================================================================
# Timing Utilities
# =============================================================================


class Timer:
    """Context manager for timing operations.

    Example:
        >>> with Timer("Annotation", logger):
        ...     driver.run(source, sink)
        # Logs: "Annotation completed in 1.23s"
    """

    def __init__(self, description: str, logger: logging.Logger | None = None) -> None:
        """Initialize timer.

        Args:
            description: Description of the operation.
            logger: Logger for output (uses print if None).
        """
        self.description = description
        self.logger = logger
        self.start_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> "Timer":
        """Start timing."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop timing and log result."""
        self.elapsed = time.perf_counter() - self.start_time

        message = f"{self.description} completed in {self.elapsed:.2f}s"
        if self.logger:
            self.logger.info(message)
        else:
            print(message)
