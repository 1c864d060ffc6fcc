"""Immutable configuration shared by the dataset loader and the classifiers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from id3kit.exceptions import LabelColumnError


class DatasetConfig(BaseModel):
    """How records are laid out in delimited text input.

    Built once at startup and passed explicitly to everything that parses
    records, so the training and test sets are always read the same way.

    Attributes:
        delimiter (str): Field separator, matched literally. Defaults to a
            single space.
        header (bool): Whether the first line of each file is a header row to
            skip. Defaults to False.
        label_column (int): Zero-based index of the class label field. Negative
            values count from the end of the record, e.g. `-1` for the last
            field. Defaults to 0.

    Examples:
        >>> config = DatasetConfig(delimiter="\\t", label_column=-1)
        >>> config.resolve_label_column(4)
        3
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=" ", min_length=1, description="Field separator, matched literally.")
    header: bool = Field(default=False, description="Skip the first line of each input as a header row.")
    label_column: int = Field(
        default=0,
        description="Zero-based class label index; negative values count from the end of the record.",
    )

    def resolve_label_column(self, width: int) -> int:
        """Normalize `label_column` against a record width.

        Args:
            width (int): Number of fields in the record.

        Returns:
            int: Non-negative index of the label field.

        Raises:
            LabelColumnError: If the index falls outside `[0, width)` after
                negative values are shifted by `width`.
        """
        index = self.label_column + width if self.label_column < 0 else self.label_column
        if not 0 <= index < width:
            raise LabelColumnError(label_column=self.label_column, width=width)
        return index
