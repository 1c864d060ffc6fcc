"""Wall-clock timing for command-line runs."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Final

_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ("hr", 60 * 60 * 1000),
    ("min", 60 * 1000),
    ("s", 1000),
)


class Stopwatch:
    """Context manager measuring elapsed wall-clock time.

    `elapsed_ms` can be read inside the `with` block (time so far) or after it
    (total time).

    Examples:
        >>> with Stopwatch() as stopwatch:
        ...     pass
        >>> stopwatch.elapsed_ms >= 0
        True
    """

    def __init__(self) -> None:
        """Initialize a stopwatch that has not started."""
        self._start: float | None = None
        self._stop: float | None = None

    def __enter__(self) -> Stopwatch:
        """Start timing.

        Returns:
            Stopwatch: This stopwatch.
        """
        self._start = time.perf_counter()
        self._stop = None
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop timing.

        Args:
            exc_type (type[BaseException] | None): The exception type, if raised.
            exc_val (BaseException | None): The exception instance, if raised.
            exc_tb (TracebackType | None): The traceback, if raised.
        """
        self._stop = time.perf_counter()

    @property
    def elapsed_ms(self) -> int:
        """Whole milliseconds elapsed; 0 before the stopwatch starts."""
        if self._start is None:
            return 0
        stop = self._stop if self._stop is not None else time.perf_counter()
        return int((stop - self._start) * 1000)


def format_duration(duration_ms: int) -> list[str]:
    """Render a duration as the lines printed after a timed run.

    Durations above one second get a second line expressing them in the
    largest unit they exceed, with 5 decimals.

    Args:
        duration_ms (int): Duration in milliseconds.

    Returns:
        list[str]: `["Execution time: N ms"]`, plus the converted line when
            applicable.

    Examples:
        >>> format_duration(250)
        ['Execution time: 250 ms']
        >>> format_duration(90_000)
        ['Execution time: 90000 ms', '\\t1.50000 min']
    """
    lines = [f"Execution time: {duration_ms} ms"]
    for unit, unit_ms in _UNITS:
        if duration_ms > unit_ms:
            lines.append(f"\t{duration_ms / unit_ms:.5f} {unit}")
            break
    return lines
