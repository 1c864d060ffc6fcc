"""Tree traversal for classifying records and aggregating accuracy."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from id3kit.decision_tree.models import Node
from id3kit.models import ClassificationReport, Prediction


def classify(root: Node, record: Sequence[str]) -> Prediction:
    """Classify one record by walking the tree from `root`.

    The record must be normalized (label in field 0) and as wide as the
    training records. A working copy loses the field each decision node
    tests, mirroring how training slices lost their split columns, so every
    node's relative `split_column` addresses the right field.

    When a decision node has no branch for the record's value, or the tree has
    no branches at all, a warning is logged and the label of the node where
    traversal stopped is returned as a fallback prediction.

    Args:
        root (Node): Root of a tree built by `grow_tree`.
        record (Sequence[str]): Normalized record, label first.

    Returns:
        Prediction: The predicted and actual labels, flagged as failed when
            traversal stopped before reaching a leaf.

    Examples:
        >>> from id3kit.decision_tree.building import grow_tree
        >>> import polars as pl
        >>> root = grow_tree(pl.DataFrame({"label": ["yes", "no"], "outlook": ["sunny", "rainy"]}))
        >>> classify(root, ["yes", "sunny"]).predicted
        'yes'
        >>> classify(root, ["yes", "foggy"]).failed
        True
    """
    actual = record[0]
    working = list(record)
    node = root

    while not node.is_leaf:
        if node.is_pass_through:
            if not node.children:
                logger.warning("Decision tree has no branches", node=node.label)
                return Prediction(predicted=node.label, actual=actual, failed=True)
            node = node.children[0]
            continue

        value = working.pop(node.split_column)
        child = node.find_child(value)
        if child is None:
            logger.warning(
                "No branch in the decision tree for attribute value",
                value=value,
                attribute=node.attribute,
                column=node.split_column,
            )
            return Prediction(predicted=node.label, actual=actual, failed=True, unmatched_value=value)
        node = child

    return Prediction(predicted=node.label, actual=actual)


def evaluate(root: Node, records: Iterable[Sequence[str]]) -> ClassificationReport:
    """Classify every record and summarize accuracy.

    Args:
        root (Node): Root of a tree built by `grow_tree`.
        records (Iterable[Sequence[str]]): Normalized records, label first.

    Returns:
        ClassificationReport: Predictions in input order with accuracy
            `(1 - incorrect / total) * 100`.
    """
    predictions = [classify(root, record) for record in records]
    report = ClassificationReport.from_predictions(predictions)
    logger.info(
        "Decision tree evaluated",
        records=len(predictions),
        failures=report.failures,
        accuracy=report.accuracy,
    )
    return report
