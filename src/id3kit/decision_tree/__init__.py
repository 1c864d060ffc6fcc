"""Decision tree sub-package: node model, entropy, tree building, and prediction."""

from __future__ import annotations

from id3kit.decision_tree.building import build_tree, grow_tree, select_split_column
from id3kit.decision_tree.classifier import DecisionTreeClassifier
from id3kit.decision_tree.entropy import (
    LOG_EPSILON,
    class_entropy,
    expected_information,
    information_gain,
    majority_class,
)
from id3kit.decision_tree.models import LEAF, PENDING, ROOT, Node, format_tree
from id3kit.decision_tree.prediction import classify, evaluate

__all__ = [
    "LEAF",
    "LOG_EPSILON",
    "PENDING",
    "ROOT",
    "DecisionTreeClassifier",
    "Node",
    "build_tree",
    "class_entropy",
    "classify",
    "evaluate",
    "expected_information",
    "format_tree",
    "grow_tree",
    "information_gain",
    "majority_class",
    "select_split_column",
]
