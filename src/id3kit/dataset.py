"""Categorical dataset backed by a Polars DataFrame of string columns.

Records are normalized once on load so the class label is the first column.
Column names are stable identifiers (``column_<i>`` where ``i`` is the field's
position in the source record), so a slice that has lost some columns still
knows which source fields it holds.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import polars as pl
from loguru import logger

from id3kit.config import DatasetConfig
from id3kit.exceptions import MalformedRecordError


def column_name(index: int) -> str:
    """Return the stable identifier for the field at `index` of a source record.

    Args:
        index (int): Zero-based position of the field in the source record.

    Returns:
        str: The column identifier, e.g. `"column_2"`.
    """
    return f"column_{index}"


def normalize_record(fields: Sequence[str], label_index: int) -> list[str]:
    """Move the label field to the front, keeping the other fields in order.

    Args:
        fields (Sequence[str]): The raw record fields.
        label_index (int): Non-negative index of the label field.

    Returns:
        list[str]: `[label, *attributes]`.

    Examples:
        >>> normalize_record(["sunny", "hot", "no"], 2)
        ['no', 'sunny', 'hot']
    """
    return [fields[label_index], *fields[:label_index], *fields[label_index + 1 :]]


@dataclass(frozen=True)
class Dataset:
    """An in-memory slice of labeled categorical records.

    The label always occupies the first column of `frame`; the remaining
    columns are the attributes still available for splitting.

    Attributes:
        frame (pl.DataFrame): String columns, label first.

    Examples:
        >>> dataset = Dataset.from_records([["sunny", "no"], ["rainy", "yes"]], DatasetConfig(label_column=-1))
        >>> dataset.columns
        ['column_1', 'column_0']
        >>> dataset.labels
        ['no', 'yes']
    """

    frame: pl.DataFrame

    @classmethod
    def from_records(cls, records: Iterable[Sequence[str]], config: DatasetConfig) -> Dataset:
        """Build a dataset from raw records, numbering them from 1.

        Args:
            records (Iterable[Sequence[str]]): Raw records, label at
                `config.label_column`.
            config (DatasetConfig): Layout of the records.

        Returns:
            Dataset: The normalized dataset.
        """
        return cls.from_numbered_records(enumerate(records, start=1), config)

    @classmethod
    def from_numbered_records(
        cls,
        records: Iterable[tuple[int, Sequence[str]]],
        config: DatasetConfig,
    ) -> Dataset:
        """Build a dataset from `(line_number, fields)` pairs.

        The first record fixes the expected width; every record must match it.

        Args:
            records (Iterable[tuple[int, Sequence[str]]]): Raw records paired
                with their source line numbers.
            config (DatasetConfig): Layout of the records.

        Returns:
            Dataset: The normalized dataset. Empty input yields a dataset with
                no rows and no columns.

        Raises:
            MalformedRecordError: If a record's width differs from the first.
            LabelColumnError: If the label column is out of range.
        """
        rows: list[list[str]] = []
        width: int | None = None
        label_index = 0

        for line_number, fields in records:
            if width is None:
                width = len(fields)
                label_index = config.resolve_label_column(width)
            elif len(fields) != width:
                logger.warning("Malformed record", line_number=line_number, fields=len(fields), expected=width)
                raise MalformedRecordError(line_number=line_number, expected_fields=width, actual_fields=len(fields))
            rows.append(normalize_record(fields, label_index))

        if width is None:
            return cls(frame=pl.DataFrame())

        names = [column_name(label_index), *(column_name(i) for i in range(width) if i != label_index)]
        frame = pl.DataFrame(rows, schema=dict.fromkeys(names, pl.String), orient="row")
        return cls(frame=frame)

    def __len__(self) -> int:
        """Return the number of records."""
        return self.frame.height

    @property
    def width(self) -> int:
        """Number of fields per record, label included."""
        return self.frame.width

    @property
    def columns(self) -> list[str]:
        """Stable column identifiers, label first."""
        return self.frame.columns

    @property
    def label_name(self) -> str:
        """Identifier of the label column.

        Raises:
            IndexError: If the dataset has no columns.
        """
        return self.frame.columns[0]

    @property
    def labels(self) -> list[str]:
        """Class label of every record, in row order."""
        if self.width == 0:
            return []
        return self.frame.get_column(self.label_name).to_list()

    def rows(self) -> list[list[str]]:
        """Return every normalized record as a list of fields, label first.

        Returns:
            list[list[str]]: One list per record.
        """
        return [list(row) for row in self.frame.iter_rows()]
