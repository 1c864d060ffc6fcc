"""Delimited-text record source and prediction sink."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from loguru import logger

from id3kit.config import DatasetConfig
from id3kit.dataset import Dataset
from id3kit.models import ClassificationReport


def read_records(lines: Iterable[str], config: DatasetConfig) -> Iterator[tuple[int, list[str]]]:
    """Split lines of delimited text into records.

    Line endings are stripped, blank lines are skipped, and the first line is
    dropped when `config.header` is set. The delimiter is matched literally.

    Args:
        lines (Iterable[str]): Raw text lines, e.g. an open file.
        config (DatasetConfig): Delimiter and header settings.

    Yields:
        tuple[int, list[str]]: The 1-indexed source line number and the record
            fields.

    Examples:
        >>> list(read_records(["a b c\\n", "\\n", "d e f"], DatasetConfig()))
        [(1, ['a', 'b', 'c']), (3, ['d', 'e', 'f'])]
    """
    for line_number, line in enumerate(lines, start=1):
        if config.header and line_number == 1:
            continue
        stripped = line.rstrip("\r\n")
        if not stripped:
            continue
        yield line_number, stripped.split(config.delimiter)


def load_dataset(source: str | Path | Iterable[str], config: DatasetConfig) -> Dataset:
    """Load a dataset from a file path or from lines of text.

    Args:
        source (str | Path | Iterable[str]): A path to a text file, or an
            iterable of lines.
        config (DatasetConfig): Layout of the records.

    Returns:
        Dataset: The normalized dataset.

    Raises:
        MalformedRecordError: If the records do not all have the same width.
        LabelColumnError: If the label column is out of range.
    """
    if isinstance(source, str | Path):
        path = Path(source)
        with path.open(encoding="utf-8") as handle:
            dataset = Dataset.from_numbered_records(read_records(handle, config), config)
        logger.info("Dataset loaded", path=str(path), rows=len(dataset), columns=dataset.width)
        return dataset
    dataset = Dataset.from_numbered_records(read_records(source, config), config)
    logger.info("Dataset loaded", rows=len(dataset), columns=dataset.width)
    return dataset


def write_report(report: ClassificationReport, sink: TextIO) -> None:
    """Write one prediction per line followed by the accuracy line.

    Args:
        report (ClassificationReport): The evaluation to write.
        sink (TextIO): Any writable text stream.
    """
    for line in report.to_lines():
        sink.write(f"{line}\n")
