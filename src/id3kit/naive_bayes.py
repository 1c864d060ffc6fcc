"""Categorical naive Bayes classifier with Laplace smoothing.

Shares the dataset convention of the decision tree: records are normalized so
the class label is field 0 and every other field is a categorical attribute.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from id3kit.dataset import Dataset
from id3kit.exceptions import EmptyDatasetError, MalformedRecordError
from id3kit.models import ClassificationReport, Prediction


class NaiveBayesClassifier:
    """Counting naive Bayes classifier over categorical attributes.

    The score of class `y` for a record `x` is
    `log P(y) + sum_k log((count(x_k, y) + laplace) / count(y))`, and the
    class with the strictly greatest score wins, ties going to the class seen
    first in the training data.

    Attributes:
        laplace (int): Smoothing count added to every attribute value count.
        priors (dict[str, float]): Class prior probabilities, first-seen order.
        class_counts (dict[str, int]): Training records per class.
        width (int | None): Field count of the training records, label
            included, or None before `fit`.

    Examples:
        >>> from id3kit.config import DatasetConfig
        >>> train = Dataset.from_records(
        ...     [["yes", "sunny"], ["yes", "sunny"], ["no", "rainy"]],
        ...     DatasetConfig(),
        ... )
        >>> NaiveBayesClassifier().fit(train).predict(["?", "rainy"]).predicted
        'no'
    """

    def __init__(self, *, laplace: int = 1) -> None:
        """Initialize an unfitted classifier.

        Args:
            laplace (int): Smoothing count added to every attribute value
                count. Defaults to 1.

        Raises:
            ValueError: If `laplace` is negative.
        """
        if laplace < 0:
            raise ValueError(f"laplace must be non-negative, got {laplace}")
        self.laplace = laplace
        self.priors: dict[str, float] = {}
        self.class_counts: dict[str, int] = {}
        self.width: int | None = None
        self._value_counts: list[dict[tuple[str, str], int]] = []

    def fit(self, dataset: Dataset) -> NaiveBayesClassifier:
        """Count class priors and per-class attribute values.

        Args:
            dataset (Dataset): Training records, label first.

        Returns:
            NaiveBayesClassifier: This classifier, fitted.

        Raises:
            EmptyDatasetError: If `dataset` has no records.
        """
        if len(dataset) == 0:
            raise EmptyDatasetError("train naive Bayes on")

        frame = dataset.frame
        label = dataset.label_name
        class_counts = frame.group_by(label, maintain_order=True).len()
        self.class_counts = dict(class_counts.iter_rows())
        self.priors = {value: count / frame.height for value, count in self.class_counts.items()}
        self._value_counts = [
            {
                (value, class_label): count
                for class_label, value, count in frame.group_by([label, attribute]).len().iter_rows()
            }
            for attribute in frame.columns[1:]
        ]
        self.width = dataset.width

        logger.info(
            "Naive Bayes fitted",
            rows=frame.height,
            classes=len(self.priors),
            attributes=len(self._value_counts),
        )
        return self

    def predict(self, record: Sequence[str]) -> Prediction:
        """Classify one normalized record.

        Args:
            record (Sequence[str]): Record with the label in field 0.

        Returns:
            Prediction: The class with the greatest score.

        Raises:
            RuntimeError: If the classifier has not been fitted.
            MalformedRecordError: If the record is not as wide as the training
                records.
        """
        if self.width is None:
            raise RuntimeError("NaiveBayesClassifier must be fitted before use")
        if len(record) != self.width:
            raise MalformedRecordError(line_number=None, expected_fields=self.width, actual_fields=len(record))

        attributes = record[1:]
        best_class, best_score = "", -np.inf
        for class_label, prior in self.priors.items():
            score = self._score(class_label, prior, attributes)
            logger.trace("Class score", class_label=class_label, score=score)
            if score > best_score:
                best_class, best_score = class_label, score
        return Prediction(predicted=best_class, actual=record[0])

    def evaluate(self, dataset: Dataset) -> ClassificationReport:
        """Classify every record of a test dataset.

        Args:
            dataset (Dataset): Test records, label first.

        Returns:
            ClassificationReport: Predictions and accuracy.
        """
        predictions = [self.predict(record) for record in dataset.rows()]
        report = ClassificationReport.from_predictions(predictions)
        logger.info("Naive Bayes evaluated", records=len(predictions), accuracy=report.accuracy)
        return report

    def _score(self, class_label: str, prior: float, attributes: Sequence[str]) -> float:
        """Compute the log score of one class for a record's attributes.

        Args:
            class_label (str): The class to score.
            prior (float): Prior probability of the class.
            attributes (Sequence[str]): The record's attribute values.

        Returns:
            float: The log score; `-inf` when a smoothed count is zero.
        """
        counts = np.array(
            [
                value_counts.get((value, class_label), 0) + self.laplace
                for value_counts, value in zip(self._value_counts, attributes, strict=True)
            ],
            dtype=np.float64,
        )
        with np.errstate(divide="ignore"):
            return float(np.log(prior) + np.sum(np.log(counts / self.class_counts[class_label])))
