"""Tests for the DecisionTreeClassifier fit/predict facade."""

from __future__ import annotations

import pytest
from pytest_check import check

from id3kit.config import DatasetConfig
from id3kit.dataset import Dataset
from id3kit.decision_tree.classifier import DecisionTreeClassifier
from id3kit.exceptions import MalformedRecordError


def _loan_dataset() -> Dataset:
    """Loan decisions with the label last: income, history, decision."""
    return Dataset.from_records(
        [
            ["high", "good", "approve"],
            ["high", "poor", "approve"],
            ["low", "good", "approve"],
            ["low", "poor", "deny"],
            ["medium", "poor", "deny"],
        ],
        DatasetConfig(label_column=-1),
    )


class TestDecisionTreeClassifier:
    """Tests for `DecisionTreeClassifier`."""

    def test_fit_returns_self_and_records_width(self) -> None:
        """`fit` should be chainable and remember the training width."""
        # Arrange
        classifier = DecisionTreeClassifier()

        # Act
        fitted = classifier.fit(_loan_dataset())

        # Assert
        with check:
            assert fitted is classifier
        with check:
            assert classifier.width == 3
        with check:
            assert classifier.root is not None

    def test_evaluate_training_set_is_perfect(self) -> None:
        """A consistent training set should be reproduced with 100% accuracy."""
        # Arrange
        dataset = _loan_dataset()
        classifier = DecisionTreeClassifier().fit(dataset)

        # Act
        report = classifier.evaluate(dataset)

        # Assert
        with check:
            assert report.accuracy == pytest.approx(100.0)
        with check:
            assert [prediction.predicted for prediction in report.predictions] == dataset.labels

    def test_predict_uses_normalized_record(self) -> None:
        """Records passed to `predict` carry the label first, as in the dataset."""
        # Arrange
        classifier = DecisionTreeClassifier().fit(_loan_dataset())

        # Act
        prediction = classifier.predict(["?", "low", "poor"])

        # Assert
        assert prediction.predicted == "deny"

    def test_predict_rejects_wrong_width(self) -> None:
        """A record narrower than the training records cannot be routed."""
        # Arrange
        classifier = DecisionTreeClassifier().fit(_loan_dataset())

        # Act & Assert
        with pytest.raises(MalformedRecordError, match="has 2 fields, expected 3"):
            classifier.predict(["?", "low"])

    def test_evaluate_rejects_wrong_width(self) -> None:
        """A test set with a different column count should be rejected up front."""
        # Arrange
        classifier = DecisionTreeClassifier().fit(_loan_dataset())
        test_set = Dataset.from_records([["approve", "high", "good", "extra"]], DatasetConfig(label_column=0))

        # Act & Assert
        with pytest.raises(MalformedRecordError):
            classifier.evaluate(test_set)

    def test_unfitted_classifier_raises(self) -> None:
        """Using the classifier before `fit` is a programming error."""
        # Arrange
        classifier = DecisionTreeClassifier()

        # Act & Assert
        with pytest.raises(RuntimeError, match="must be fitted"):
            classifier.predict(["yes", "sunny"])
        with pytest.raises(RuntimeError, match="must be fitted"):
            classifier.format()

    def test_empty_training_set_predicts_nothing(self) -> None:
        """An empty training set yields a tree that fails every prediction without raising."""
        # Arrange
        classifier = DecisionTreeClassifier().fit(Dataset.from_records([], DatasetConfig()))

        # Act
        prediction = classifier.predict(["yes", "sunny", "hot"])

        # Assert
        with check:
            assert prediction.failed
        with check:
            assert classifier.width == 0

    def test_format_renders_root_first(self) -> None:
        """`format` should render the fitted tree starting at the root."""
        # Arrange
        classifier = DecisionTreeClassifier().fit(_loan_dataset())

        # Act
        rendered = classifier.format()

        # Assert
        assert rendered.splitlines()[0].startswith("(root) ?")
