"""Class entropy, expected information and information gain over dataset slices.

Every function takes a Polars DataFrame slice whose first column is the class
label. Columns are addressed by their position in the slice, as the tree
builder records them.
"""

from __future__ import annotations

from typing import Final

import numpy as np
import polars as pl

# Added to every log2 result so a pure slice scores -LOG_EPSILON instead of -0.0.
LOG_EPSILON: Final[float] = 1e-11


def class_entropy(frame: pl.DataFrame) -> float:
    """Compute the entropy of the class label distribution of a slice.

    Uses `-sum(p_i * (log2(p_i) + LOG_EPSILON))` over the observed classes.
    Probabilities come from observed counts only, so no class has p = 0.

    Args:
        frame (pl.DataFrame): Slice with the label in column 0.

    Returns:
        float: Entropy in bits; 0.0 for an empty slice.

    Examples:
        >>> frame = pl.DataFrame({"label": ["yes", "no", "yes", "no"]})
        >>> round(class_entropy(frame), 6)
        1.0
    """
    if frame.height == 0:
        return 0.0
    counts = frame.get_column(frame.columns[0]).unique_counts().to_numpy()
    probabilities = counts / frame.height
    return float(-np.sum(probabilities * (np.log2(probabilities) + LOG_EPSILON)))


def expected_information(frame: pl.DataFrame, column: int) -> float:
    """Compute the weighted class entropy after partitioning on `column`.

    Args:
        frame (pl.DataFrame): Slice with the label in column 0.
        column (int): Position of the attribute column in the slice.

    Returns:
        float: `sum(|D_v| / |D| * class_entropy(D_v))` over the distinct
            values `v` of the column; 0.0 for an empty slice.

    Raises:
        IndexError: If `column` is not an attribute position of the slice.
    """
    name = _attribute_name(frame, column)
    if frame.height == 0:
        return 0.0
    total = frame.height
    return sum(
        group.height / total * class_entropy(group) for group in frame.partition_by(name, maintain_order=True)
    )


def information_gain(frame: pl.DataFrame, column: int, *, entropy: float | None = None) -> float:
    """Compute the entropy reduction from partitioning on `column`.

    Args:
        frame (pl.DataFrame): Slice with the label in column 0.
        column (int): Position of the attribute column in the slice.
        entropy (float | None): Precomputed `class_entropy(frame)`, to avoid
            recomputing it for every candidate column.

    Returns:
        float: `class_entropy(frame) - expected_information(frame, column)`.
    """
    if entropy is None:
        entropy = class_entropy(frame)
    return entropy - expected_information(frame, column)


def majority_class(frame: pl.DataFrame) -> str:
    """Return the most frequent class label of a slice.

    Ties go to the class that appears first in row order.

    Args:
        frame (pl.DataFrame): Non-empty slice with the label in column 0.

    Returns:
        str: The majority class.

    Raises:
        ValueError: If the slice is empty.

    Examples:
        >>> majority_class(pl.DataFrame({"label": ["no", "yes", "yes", "no"]}))
        'no'
    """
    if frame.height == 0:
        raise ValueError("Cannot take the majority class of an empty slice")
    labels = frame.get_column(frame.columns[0])
    values = labels.unique(maintain_order=True).to_list()
    best_label, best_count = "", 0
    for value, count in zip(values, labels.unique_counts().to_list(), strict=True):
        if count > best_count:
            best_label, best_count = value, count
    return best_label


def _attribute_name(frame: pl.DataFrame, column: int) -> str:
    """Resolve an attribute position to its column name.

    Args:
        frame (pl.DataFrame): Slice with the label in column 0.
        column (int): Position of the attribute column in the slice.

    Returns:
        str: The column name.

    Raises:
        IndexError: If `column` is the label column or outside the slice.
    """
    if not 1 <= column < frame.width:
        raise IndexError(f"Attribute column {column} is out of range for a slice with {frame.width} columns")
    return frame.columns[column]
