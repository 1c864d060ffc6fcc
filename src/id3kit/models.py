"""Prediction and evaluation models shared by the id3kit classifiers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from loguru import logger
from pydantic import BaseModel, Field
from sklearn.metrics import accuracy_score, confusion_matrix

if TYPE_CHECKING:
    from id3kit.dataset import Dataset


class Prediction(BaseModel):
    """The outcome of classifying one record.

    Attributes:
        predicted (str): The predicted class. For a failed traversal this is
            the label of the node where traversal stopped.
        actual (str): The record's true class label.
        failed (bool): Whether classification stopped early because the tree
            had no branch for one of the record's attribute values.
        unmatched_value (str | None): The attribute value that had no branch,
            or None when classification did not fail on a value.

    Examples:
        >>> Prediction(predicted="yes", actual="no").correct
        False
    """

    predicted: str = Field(description="The predicted class, or the fallback label on failure.")
    actual: str = Field(description="The record's true class label.")
    failed: bool = Field(default=False, description="Whether traversal stopped before reaching a leaf.")
    unmatched_value: str | None = Field(
        default=None,
        description="Attribute value with no matching branch, when traversal failed on one.",
    )

    @property
    def correct(self) -> bool:
        """Whether the prediction matches the actual label."""
        return self.predicted == self.actual


class ClassificationReport(BaseModel):
    """Per-record predictions of a test run together with summary metrics.

    Attributes:
        predictions (list[Prediction]): One prediction per test record, in
            input order.
        accuracy (float): Percentage of correct predictions,
            `(1 - incorrect / total) * 100`. NaN when there are no predictions.
        confusion (dict[str, dict[str, int]]): Mapping of actual label to
            predicted label to count. Only non-zero cells are kept.
        failures (int): Number of records whose traversal failed.

    Examples:
        >>> report = ClassificationReport.from_predictions([
        ...     Prediction(predicted="yes", actual="yes"),
        ...     Prediction(predicted="yes", actual="no"),
        ... ])
        >>> report.accuracy
        50.0
        >>> report.to_lines()
        ['yes', 'yes', 'Accuracy: 50.000%']
    """

    predictions: list[Prediction] = Field(description="One prediction per test record, in input order.")
    accuracy: float = Field(description="Percentage of correct predictions; NaN for an empty run.")
    confusion: dict[str, dict[str, int]] = Field(
        default_factory=dict,
        description="Actual label -> predicted label -> count, non-zero cells only.",
    )
    failures: int = Field(default=0, ge=0, description="Number of records whose traversal failed.")

    @classmethod
    def from_predictions(cls, predictions: Sequence[Prediction]) -> ClassificationReport:
        """Summarize a sequence of predictions.

        Args:
            predictions (Sequence[Prediction]): Predictions in input order.

        Returns:
            ClassificationReport: The report. An empty sequence yields NaN
                accuracy and an empty confusion mapping.
        """
        failures = sum(1 for prediction in predictions if prediction.failed)
        if not predictions:
            logger.warning("No records to evaluate; accuracy is undefined")
            return cls(predictions=[], accuracy=math.nan, confusion={}, failures=0)

        actual = [prediction.actual for prediction in predictions]
        predicted = [prediction.predicted for prediction in predictions]
        accuracy = float(accuracy_score(actual, predicted)) * 100
        return cls(
            predictions=list(predictions),
            accuracy=accuracy,
            confusion=_confusion_counts(actual, predicted),
            failures=failures,
        )

    def to_lines(self) -> list[str]:
        """Render the report as output lines.

        Returns:
            list[str]: One predicted label per record, followed by
                `Accuracy: XX.XXX%`.
        """
        return [*(prediction.predicted for prediction in self.predictions), f"Accuracy: {self.accuracy:.3f}%"]


class Classifier(Protocol):
    """Interface shared by the decision tree and naive Bayes classifiers."""

    def fit(self, dataset: Dataset) -> Classifier:
        """Train on a labeled dataset and return the classifier."""
        ...

    def predict(self, record: Sequence[str]) -> Prediction:
        """Classify one normalized record, label first."""
        ...

    def evaluate(self, dataset: Dataset) -> ClassificationReport:
        """Classify every record of a dataset and summarize the results."""
        ...


def _confusion_counts(actual: list[str], predicted: list[str]) -> dict[str, dict[str, int]]:
    """Count actual/predicted label pairs.

    Args:
        actual (list[str]): True labels.
        predicted (list[str]): Predicted labels, parallel to `actual`.

    Returns:
        dict[str, dict[str, int]]: Actual label -> predicted label -> count,
            in first-seen label order, non-zero cells only.
    """
    labels = list(dict.fromkeys([*actual, *predicted]))
    matrix = confusion_matrix(actual, predicted, labels=labels)
    confusion: dict[str, dict[str, int]] = {}
    for row_label, row in zip(labels, matrix, strict=True):
        cells = {column_label: int(count) for column_label, count in zip(labels, row, strict=True) if count}
        if cells:
            confusion[row_label] = cells
    return confusion
