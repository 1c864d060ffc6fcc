"""id3kit: ID3 decision trees and naive Bayes for categorical tabular data."""

from loguru import logger

from id3kit.config import DatasetConfig
from id3kit.dataset import Dataset
from id3kit.decision_tree import DecisionTreeClassifier, Node, format_tree, grow_tree
from id3kit.io import load_dataset, write_report
from id3kit.logging import PACKAGE_NAME, enable_logging
from id3kit.models import ClassificationReport, Prediction
from id3kit.naive_bayes import NaiveBayesClassifier

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3kit package by default

__all__ = [
    "ClassificationReport",
    "Dataset",
    "DatasetConfig",
    "DecisionTreeClassifier",
    "NaiveBayesClassifier",
    "Node",
    "Prediction",
    "enable_logging",
    "format_tree",
    "grow_tree",
    "load_dataset",
    "write_report",
]
