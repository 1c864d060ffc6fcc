"""Fit/predict facade over the tree builder and predictor."""

from __future__ import annotations

from collections.abc import Sequence

from id3kit.dataset import Dataset
from id3kit.decision_tree.building import grow_tree
from id3kit.decision_tree.models import Node, format_tree
from id3kit.decision_tree.prediction import classify, evaluate
from id3kit.exceptions import MalformedRecordError
from id3kit.models import ClassificationReport, Prediction


class DecisionTreeClassifier:
    """ID3 decision tree over categorical string attributes.

    Attributes:
        root (Node | None): Root of the fitted tree, or None before `fit`.
        width (int | None): Field count of the training records, label
            included, or None before `fit`. Zero for an empty training set.

    Examples:
        >>> from id3kit.config import DatasetConfig
        >>> config = DatasetConfig()
        >>> train = Dataset.from_records([["yes", "sunny"], ["no", "rainy"]], config)
        >>> classifier = DecisionTreeClassifier().fit(train)
        >>> classifier.predict(["no", "rainy"]).predicted
        'no'
    """

    def __init__(self) -> None:
        """Initialize an unfitted classifier."""
        self.root: Node | None = None
        self.width: int | None = None

    def fit(self, dataset: Dataset) -> DecisionTreeClassifier:
        """Build the tree from a labeled dataset.

        Args:
            dataset (Dataset): Training records, label first.

        Returns:
            DecisionTreeClassifier: This classifier, fitted.
        """
        self.root = grow_tree(dataset)
        self.width = dataset.width
        return self

    def predict(self, record: Sequence[str]) -> Prediction:
        """Classify one normalized record.

        Args:
            record (Sequence[str]): Record with the label in field 0.

        Returns:
            Prediction: The classification outcome.

        Raises:
            MalformedRecordError: If the record is not as wide as the training
                records.
        """
        root = self._fitted_root()
        self._check_width(len(record))
        return classify(root, record)

    def evaluate(self, dataset: Dataset) -> ClassificationReport:
        """Classify every record of a test dataset.

        Args:
            dataset (Dataset): Test records, label first.

        Returns:
            ClassificationReport: Predictions and accuracy.

        Raises:
            MalformedRecordError: If the test records are not as wide as the
                training records.
        """
        root = self._fitted_root()
        if len(dataset):
            self._check_width(dataset.width)
        return evaluate(root, dataset.rows())

    def format(self) -> str:
        """Render the fitted tree as indented text.

        Returns:
            str: The rendered tree.
        """
        return format_tree(self._fitted_root())

    def _fitted_root(self) -> Node:
        """Return the root, raising if the classifier has not been fitted.

        Returns:
            Node: The fitted root.

        Raises:
            RuntimeError: If `fit` has not been called.
        """
        if self.root is None:
            raise RuntimeError("DecisionTreeClassifier must be fitted before use")
        return self.root

    def _check_width(self, width: int) -> None:
        """Validate a record width against the training width.

        An empty training set has no width to check against.

        Args:
            width (int): Field count of the record to classify.

        Raises:
            MalformedRecordError: If the widths differ.
        """
        if self.width and width != self.width:
            raise MalformedRecordError(line_number=None, expected_fields=self.width, actual_fields=width)
