"""Command-line entry point: train on one file, classify another, write predictions."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from id3kit.config import DatasetConfig
from id3kit.decision_tree.classifier import DecisionTreeClassifier
from id3kit.exceptions import DatasetError
from id3kit.io import load_dataset, write_report
from id3kit.logging import enable_logging
from id3kit.models import Classifier
from id3kit.naive_bayes import NaiveBayesClassifier
from id3kit.timing import Stopwatch, format_duration

_DELIMITER_ESCAPES: Final[dict[str, str]] = {"t": "\t", "\\": "\\"}
_DELIMITER_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\\([t\\])")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `id3kit` command.

    Returns:
        argparse.ArgumentParser: Parser with `tree` and `bayes` subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="id3kit",
        description="Train a categorical classifier on TRAIN, classify TEST and write predictions to OUTPUT.",
    )
    subparsers = parser.add_subparsers(dest="classifier", required=True)

    tree_parser = subparsers.add_parser("tree", help="ID3 decision tree")
    _add_common_arguments(tree_parser)
    tree_parser.add_argument("--print-tree", action="store_true", help="Print the fitted tree to stdout")

    bayes_parser = subparsers.add_parser("bayes", help="Naive Bayes with Laplace smoothing")
    _add_common_arguments(bayes_parser)
    bayes_parser.add_argument("--laplace", type=int, default=1, help="Smoothing count. Default is 1.")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line.

    Args:
        argv (Sequence[str] | None): Arguments without the program name;
            `sys.argv[1:]` when None.

    Returns:
        int: Process exit status, 0 on success and 1 on input errors.
    """
    args = build_parser().parse_args(argv)
    config = DatasetConfig(delimiter=args.delimiter, header=args.header, label_column=args.label_column)
    classifier: Classifier = (
        DecisionTreeClassifier() if args.classifier == "tree" else NaiveBayesClassifier(laplace=args.laplace)
    )

    with enable_logging(level="DEBUG" if args.verbose else "WARNING"), Stopwatch() as stopwatch:
        try:
            classifier.fit(load_dataset(args.train, config))
            report = classifier.evaluate(load_dataset(args.test, config))
            with args.output.open("w", encoding="utf-8") as sink:
                write_report(report, sink)
        except (DatasetError, OSError) as error:
            print(f"id3kit: error: {error}", file=sys.stderr)
            return 1

    if getattr(args, "print_tree", False) and isinstance(classifier, DecisionTreeClassifier):
        print(classifier.format())
    if args.time:
        print("\n".join(format_duration(stopwatch.elapsed_ms)))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options shared by every classifier subcommand.

    Args:
        parser (argparse.ArgumentParser): The subcommand parser.
    """
    parser.add_argument("train", type=Path, help="Training set file")
    parser.add_argument("test", type=Path, help="Testing set file")
    parser.add_argument("output", type=Path, help="File the predictions are written to")
    parser.add_argument("--header", "-H", action="store_true", help="Skip a header row in both data files")
    parser.add_argument(
        "--delimiter",
        "-s",
        type=_delimiter_arg,
        default=" ",
        help="Field delimiter, matched literally; \\t is a tab and \\\\ a backslash. Default is a single space.",
    )
    parser.add_argument(
        "--label-column",
        "-w",
        type=int,
        default=0,
        help="Index of the class label; negative values count from the end (-1 is the last column). Default is 0.",
    )
    parser.add_argument("--time", "-t", action="store_true", help="Display execution time")
    parser.add_argument("--verbose", "-v", action="store_true", help="Emit debug log messages")


def _delimiter_arg(value: str) -> str:
    """Decode the `\\t` and `\\\\` escapes in a delimiter argument.

    Every other character, including a lone backslash and non-ASCII text, is
    kept as typed.

    Args:
        value (str): The raw command-line value, e.g. `"\\t"`.

    Returns:
        str: The decoded delimiter.

    Raises:
        argparse.ArgumentTypeError: If the value is empty.

    Examples:
        >>> _delimiter_arg("\\\\t")
        '\\t'
        >>> _delimiter_arg("§")
        '§'
        >>> _delimiter_arg("\\\\")
        '\\\\'
    """
    if not value:
        raise argparse.ArgumentTypeError("delimiter must not be empty")
    return _DELIMITER_ESCAPE.sub(lambda match: _DELIMITER_ESCAPES[match.group(1)], value)


if __name__ == "__main__":
    sys.exit(main())
