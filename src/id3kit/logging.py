"""Opt-in loguru logging for id3kit.

The package logger is disabled on import (see ``id3kit/__init__.py``).
``enable_logging`` turns it on and routes id3kit records to stderr, including
the ``SPLIT`` level that reports each split decision of the tree builder.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    id3kit output is not printed twice once ``enable_logging`` adds its own.
    Applications that add their own handlers should do so after importing
    id3kit.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Split decisions sit between DEBUG (leaves) and INFO (dataset and tree summaries).
SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15

type LogLevel = Literal["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR", "CRITICAL"]

type LogFormat = Literal["short", "full"]

_PREFIX: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
)
_SUFFIX: Final[str] = " - <level>{message}</level> {extra}"
_FORMATS: Final[dict[str, str]] = {
    "short": f"{_PREFIX}<cyan>{{function}}</cyan>{_SUFFIX}",
    "full": f"{_PREFIX}<cyan>{{name}}</cyan>:<cyan>{{function}}</cyan>:<cyan>{{line}}</cyan>{_SUFFIX}",
}


def _register_split_level() -> None:
    """Add the SPLIT level to loguru, or warn if it exists with another number.

    loguru cannot renumber an existing level, so a conflicting registration
    (e.g. by another library) is reported instead of raised.
    """
    try:
        existing = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, icon="🌳")
        return
    if existing.no != SPLIT_LEVEL_NUMBER:
        warnings.warn(
            f"SPLIT level already registered with numeric value {existing.no}, expected {SPLIT_LEVEL_NUMBER}",
            stacklevel=2,
        )


_register_split_level()


class LoggingHandle:
    """A stderr handler added by `enable_logging`.

    Call `disable()` or use the handle as a context manager to remove the
    handler. Once no handle is left, the id3kit logger is disabled again.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     grow_tree(dataset)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Track a loguru handler.

        Args:
            handler_id (int): ID returned by `logger.add`.
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove the handler; safe to call more than once."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Return this handle."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Remove the handler on exit, whether or not an exception was raised."""
        self.disable()


def enable_logging(*, level: LogLevel = "INFO", log_format: LogFormat = "short") -> LoggingHandle:
    """Write id3kit log records to stderr.

    Structured fields passed to the log calls (row counts, the selected
    attribute, its gain) are appended to each line.

    Args:
        level (LogLevel): Minimum level written. "INFO" reports dataset loads
            and tree summaries, "SPLIT" adds every split decision with its
            information gain, and "DEBUG" adds each attached leaf.
        log_format (LogFormat): "short" names the function; "full" adds the
            module and line number.

    Returns:
        LoggingHandle: Handle that removes the handler again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(sys.stderr, level=level, filter=_is_id3kit_record, format=_FORMATS[log_format])
    return LoggingHandle(handler_id)


def _is_id3kit_record(record: Record) -> bool:
    """Return whether a record was emitted from inside the id3kit package.

    Args:
        record (Record): The loguru record.

    Returns:
        bool: True for id3kit records.
    """
    name = record["name"]
    return name is not None and (name == PACKAGE_NAME or name.startswith(f"{PACKAGE_NAME}."))
