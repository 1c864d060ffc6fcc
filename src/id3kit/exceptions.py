"""Custom exceptions for loading and validating categorical datasets.

All exceptions subclass ``DatasetError``, which itself subclasses ``ValueError``
so callers that only care about bad input can catch either:

- DatasetError: Base class for every dataset problem raised by id3kit.
- MalformedRecordError: Raised when a record's field count disagrees with the
  rest of the dataset.
- LabelColumnError: Raised when the configured label column does not exist in a
  record after negative-index normalization.
- EmptyDatasetError: Raised when an operation needs at least one record.
"""

from __future__ import annotations


class DatasetError(ValueError):
    """Base exception for all dataset loading and validation errors.

    Catching this exception will catch every input error raised by id3kit.
    """


class MalformedRecordError(DatasetError):
    """Raised when a record does not have the expected number of fields.

    The column layout must be identical across all rows, so the first record
    fixes the expected width and every later record is checked against it.

    Attributes:
        line_number (int | None): 1-indexed position of the offending record in
            its source, or None when the record did not come from a source.
        expected_fields (int): Number of fields every record must have.
        actual_fields (int): Number of fields the offending record has.

    Examples:
        >>> err = MalformedRecordError(line_number=4, expected_fields=3, actual_fields=2)
        >>> str(err)
        'Record on line 4 has 2 fields, expected 3'
    """

    line_number: int | None
    expected_fields: int
    actual_fields: int

    def __init__(self, *, line_number: int | None, expected_fields: int, actual_fields: int) -> None:
        """Initialize MalformedRecordError.

        Args:
            line_number (int | None): Position of the offending record, 1-indexed.
            expected_fields (int): Number of fields every record must have.
            actual_fields (int): Number of fields the offending record has.
        """
        location = f"on line {line_number}" if line_number is not None else "in input"
        super().__init__(f"Record {location} has {actual_fields} fields, expected {expected_fields}")
        self.line_number = line_number
        self.expected_fields = expected_fields
        self.actual_fields = actual_fields

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the field counts.
        """
        return (
            f"{self.__class__.__name__}("
            f"line_number={self.line_number!r}, "
            f"expected_fields={self.expected_fields!r}, "
            f"actual_fields={self.actual_fields!r})"
        )


class LabelColumnError(DatasetError):
    """Raised when the label column index is out of bounds for a record.

    Attributes:
        label_column (int): The configured label column, possibly negative.
        width (int): Number of fields in the record it was resolved against.

    Examples:
        >>> err = LabelColumnError(label_column=-5, width=3)
        >>> err.width
        3
    """

    label_column: int
    width: int

    def __init__(self, *, label_column: int, width: int) -> None:
        """Initialize LabelColumnError.

        Args:
            label_column (int): The configured label column, possibly negative.
            width (int): Number of fields in the record.
        """
        super().__init__(f"Label column {label_column} is out of range for records with {width} fields")
        self.label_column = label_column
        self.width = width

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the index and width.
        """
        return f"{self.__class__.__name__}(label_column={self.label_column!r}, width={self.width!r})"


class EmptyDatasetError(DatasetError):
    """Raised when an operation requires at least one record but got none.

    Attributes:
        operation (str): Name of the operation that needed records.
    """

    operation: str

    def __init__(self, operation: str) -> None:
        """Initialize EmptyDatasetError.

        Args:
            operation (str): Name of the operation that needed records.
        """
        super().__init__(f"Cannot {operation} an empty dataset")
        self.operation = operation
