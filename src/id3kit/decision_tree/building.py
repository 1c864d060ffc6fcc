"""Recursive ID3 tree induction over categorical dataset slices."""

from __future__ import annotations

import polars as pl
from loguru import logger

from id3kit.dataset import Dataset
from id3kit.decision_tree.entropy import class_entropy, information_gain, majority_class
from id3kit.decision_tree.models import Node
from id3kit.logging import SPLIT_LEVEL

# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def grow_tree(dataset: Dataset | pl.DataFrame) -> Node:
    """Build a decision tree from a labeled dataset.

    Args:
        dataset (Dataset | pl.DataFrame): Training records with the label in
            the first column.

    Returns:
        Node: The synthetic root. It has no children when `dataset` is empty.

    Examples:
        >>> frame = pl.DataFrame({"label": ["yes", "no"], "outlook": ["sunny", "rainy"]})
        >>> root = grow_tree(frame)
        >>> [child.label for child in root.children]
        ['sunny', 'rainy']
    """
    frame = dataset.frame if isinstance(dataset, Dataset) else dataset
    root = Node.root()
    root.samples = frame.height
    build_tree(frame, root)
    logger.info(
        "Decision tree built",
        rows=frame.height,
        columns=frame.width,
        leaves=len(root.leaves()),
        depth=root.depth(),
    )
    return root


def build_tree(frame: pl.DataFrame, parent: Node) -> None:
    """Grow the subtree for `frame` below `parent`.

    Stops without attaching anything on an empty slice, attaches a single leaf
    when the slice is pure or only the label column remains, and otherwise
    splits on the column with the strictly greatest information gain (ties go
    to the lower column). Each child slice loses the split column, so column
    positions recorded deeper in the tree are relative to that smaller layout.

    Args:
        frame (pl.DataFrame): The slice to partition, label in column 0.
        parent (Node): The node the subtree hangs from. Finalized in place
            with the selected split column when a split happens.
    """
    if frame.height == 0:
        logger.debug("Empty slice; no child attached", parent=parent.label)
        return

    labels = frame.get_column(frame.columns[0])
    if labels.n_unique() == 1:
        _attach_leaf(parent, labels.item(0), frame.height)
        return

    if frame.width == 1:
        _attach_leaf(parent, majority_class(frame), frame.height)
        return

    split_column, gain = select_split_column(frame)
    attribute = frame.columns[split_column]
    parent.finalize(split_column, attribute=attribute)
    logger.log(
        SPLIT_LEVEL,
        "Split selected",
        parent=parent.label,
        attribute=attribute,
        column=split_column,
        gain=round(gain, 6),
        rows=frame.height,
    )

    for group in frame.partition_by(attribute, maintain_order=True):
        child = Node.edge(group.get_column(attribute).item(0), samples=group.height)
        parent.add_child(child)
        build_tree(group.drop(attribute), child)


def select_split_column(frame: pl.DataFrame) -> tuple[int, float]:
    """Pick the attribute column with the greatest information gain.

    A later column only replaces the current best when its gain is strictly
    greater, so ties keep the lowest column. No minimum gain is required.

    Args:
        frame (pl.DataFrame): Slice with the label in column 0 and at least one
            attribute column.

    Returns:
        tuple[int, float]: The selected column position and its gain.

    Raises:
        ValueError: If the slice has no attribute columns.
    """
    if frame.width < 2:
        raise ValueError("Cannot select a split column from a slice without attribute columns")
    entropy = class_entropy(frame)
    best_column, best_gain = 0, float("-inf")
    for column in range(1, frame.width):
        gain = information_gain(frame, column, entropy=entropy)
        if gain > best_gain:
            best_column, best_gain = column, gain
    return best_column, best_gain


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _attach_leaf(parent: Node, class_label: str, samples: int) -> None:
    """Attach a leaf predicting `class_label` below `parent`.

    Args:
        parent (Node): The node receiving the leaf.
        class_label (str): The predicted class.
        samples (int): Number of training records reaching the leaf.
    """
    parent.add_child(Node.leaf(class_label, samples=samples))
    logger.debug("Leaf attached", parent=parent.label, prediction=class_label, samples=samples)
