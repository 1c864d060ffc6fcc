"""Tests for the `id3kit` command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_check import check

from id3kit.cli import build_parser, main

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

WEATHER_TRAIN = "yes sunny hot\nno sunny cool\nyes rainy hot\n"


def _write(path: Path, text: str) -> str:
    """Write `text` to `path` and return the path as a command-line argument."""
    path.write_text(text, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestTreeCommand:
    """Tests for `id3kit tree`."""

    def test_writes_predictions_and_accuracy(self, tmp_path: Path) -> None:
        """Predictions are written one per line, followed by the accuracy.

        Args:
            tmp_path (Path): Pytest temporary directory.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "no rainy cool\nyes sunny hot\n")
        output = tmp_path / "predictions.txt"

        # Act
        status = main(["tree", train, test, str(output)])

        # Assert
        with check:
            assert status == 0
        with check:
            assert output.read_text(encoding="utf-8") == "no\nyes\nAccuracy: 100.000%\n"

    def test_unseen_value_logs_warning(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A value with no branch is reported on stderr and scored as incorrect.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "yes sunny mild\n")
        output = tmp_path / "predictions.txt"

        # Act
        status = main(["tree", train, test, str(output)])

        # Assert
        captured = capsys.readouterr()
        with check:
            assert status == 0
        with check:
            assert "No branch in the decision tree" in captured.err
        with check:
            assert output.read_text(encoding="utf-8") == "\nAccuracy: 0.000%\n"

    def test_print_tree(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """`--print-tree` renders the fitted tree on stdout.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "yes sunny hot\n")

        # Act
        status = main(["tree", train, test, str(tmp_path / "out.txt"), "--print-tree"])

        # Assert
        captured = capsys.readouterr()
        with check:
            assert status == 0
        with check:
            assert captured.out.splitlines() == [
                "(root) ? column_2 @ 2",
                "  hot",
                "    => yes [2]",
                "  cool",
                "    => no [1]",
            ]

    def test_header_delimiter_and_label_column(self, tmp_path: Path) -> None:
        """Header rows are skipped and a trailing label column is honored in both files.

        Args:
            tmp_path (Path): Pytest temporary directory.
        """
        # Arrange
        train = _write(tmp_path / "train.csv", "outlook,temp,play\nsunny,hot,yes\nsunny,cool,no\nrainy,hot,yes\n")
        test = _write(tmp_path / "test.csv", "outlook,temp,play\nrainy,cool,no\n")
        output = tmp_path / "out.txt"

        # Act
        status = main(["tree", train, test, str(output), "-H", "-s", ",", "-w", "-1"])

        # Assert
        with check:
            assert status == 0
        with check:
            assert output.read_text(encoding="utf-8") == "no\nAccuracy: 100.000%\n"

    def test_escaped_tab_delimiter(self, tmp_path: Path) -> None:
        """A delimiter given as `\\t` is decoded to a tab character.

        Args:
            tmp_path (Path): Pytest temporary directory.
        """
        # Arrange
        train = _write(tmp_path / "train.tsv", "yes\tsunny\nno\trainy\n")
        test = _write(tmp_path / "test.tsv", "no\trainy\n")
        output = tmp_path / "out.txt"

        # Act
        status = main(["tree", train, test, str(output), "--delimiter", "\\t"])

        # Assert
        with check:
            assert status == 0
        with check:
            assert output.read_text(encoding="utf-8") == "no\nAccuracy: 100.000%\n"

    @pytest.mark.parametrize(
        ("delimiter", "argument"),
        [("§", "§"), ("é", "é"), ("\\", "\\"), ("\\", "\\\\")],
        ids=["section-sign", "accented-letter", "lone-backslash", "escaped-backslash"],
    )
    def test_delimiter_kept_as_typed(self, tmp_path: Path, delimiter: str, argument: str) -> None:
        """Non-ASCII and backslash delimiters split records instead of collapsing them to one field.

        Args:
            tmp_path (Path): Pytest temporary directory.
            delimiter (str): Delimiter written between the fields.
            argument (str): Value passed to `--delimiter`.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN.replace(" ", delimiter))
        test = _write(tmp_path / "test.txt", f"no{delimiter}rainy{delimiter}cool\n")
        output = tmp_path / "out.txt"

        # Act
        status = main(["tree", train, test, str(output), "-s", argument])

        # Assert
        with check:
            assert status == 0
        with check:
            assert output.read_text(encoding="utf-8") == "no\nAccuracy: 100.000%\n"

    def test_time_flag_prints_execution_time(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """`-t` prints the elapsed time after the run.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "yes sunny hot\n")

        # Act
        status = main(["tree", train, test, str(tmp_path / "out.txt"), "-t"])

        # Assert
        captured = capsys.readouterr()
        with check:
            assert status == 0
        with check:
            assert captured.out.startswith("Execution time: ")


class TestBayesCommand:
    """Tests for `id3kit bayes`."""

    def test_writes_predictions(self, tmp_path: Path) -> None:
        """The naive Bayes subcommand shares the input and output conventions.

        Args:
            tmp_path (Path): Pytest temporary directory.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", "yes sunny hot\nyes sunny mild\nno rainy hot\nyes rainy mild\n")
        test = _write(tmp_path / "test.txt", "no rainy hot\nyes sunny mild\n")
        output = tmp_path / "out.txt"

        # Act
        status = main(["bayes", train, test, str(output)])

        # Assert
        with check:
            assert status == 0
        with check:
            assert output.read_text(encoding="utf-8") == "no\nyes\nAccuracy: 100.000%\n"

    def test_empty_training_set_is_an_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Naive Bayes cannot be trained on an empty file.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", "")
        test = _write(tmp_path / "test.txt", "yes sunny\n")

        # Act
        status = main(["bayes", train, test, str(tmp_path / "out.txt")])

        # Assert
        captured = capsys.readouterr()
        with check:
            assert status == 1
        with check:
            assert "Cannot train naive Bayes on an empty dataset" in captured.err


class TestErrors:
    """Tests for input errors reported by the command line."""

    def test_malformed_record_exits_with_status_one(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A ragged training file is reported with its line number.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", "yes sunny hot\nno sunny\n")
        test = _write(tmp_path / "test.txt", "yes sunny hot\n")
        output = tmp_path / "out.txt"

        # Act
        status = main(["tree", train, test, str(output)])

        # Assert
        captured = capsys.readouterr()
        with check:
            assert status == 1
        with check:
            assert "id3kit: error: Record on line 2 has 2 fields, expected 3" in captured.err
        with check:
            assert not output.exists(), "No output should be written on error"

    def test_test_set_width_mismatch(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A test set narrower than the training set is rejected.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "yes sunny\n")

        # Act
        status = main(["tree", train, test, str(tmp_path / "out.txt")])

        # Assert
        with check:
            assert status == 1
        with check:
            assert "has 2 fields, expected 3" in capsys.readouterr().err

    def test_missing_training_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing input file is reported instead of raising.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        test = _write(tmp_path / "test.txt", "yes sunny\n")

        # Act
        status = main(["tree", str(tmp_path / "missing.txt"), test, str(tmp_path / "out.txt")])

        # Assert
        with check:
            assert status == 1
        with check:
            assert "id3kit: error:" in capsys.readouterr().err

    def test_label_column_out_of_range(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A label column beyond the record width is an input error.

        Args:
            tmp_path (Path): Pytest temporary directory.
            capsys (pytest.CaptureFixture[str]): Captures stdout and stderr.
        """
        # Arrange
        train = _write(tmp_path / "train.txt", WEATHER_TRAIN)
        test = _write(tmp_path / "test.txt", "yes sunny hot\n")

        # Act
        status = main(["tree", train, test, str(tmp_path / "out.txt"), "-w", "3"])

        # Assert
        with check:
            assert status == 1
        with check:
            assert "Label column 3 is out of range" in capsys.readouterr().err


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Options default to a space delimiter, no header and label column 0."""
        # Act
        args = build_parser().parse_args(["tree", "train.txt", "test.txt", "out.txt"])

        # Assert
        with check:
            assert args.classifier == "tree"
        with check:
            assert args.delimiter == " "
        with check:
            assert args.header is False
        with check:
            assert args.label_column == 0
        with check:
            assert args.train == Path("train.txt")

    @pytest.mark.parametrize(
        ("argument", "expected"),
        [("\\t", "\t"), ("\\\\", "\\"), ("\\", "\\"), ("\\n", "\\n"), ("::", "::"), ("§", "§")],
        ids=["tab-escape", "backslash-escape", "lone-backslash", "unsupported-escape", "multi-char", "non-ascii"],
    )
    def test_delimiter_decoding(self, argument: str, expected: str) -> None:
        """Only `\\t` and `\\\\` are decoded; everything else is used verbatim.

        Args:
            argument (str): Value passed to `--delimiter`.
            expected (str): The delimiter the parser should produce.
        """
        # Act
        args = build_parser().parse_args(["tree", "a", "b", "c", "--delimiter", argument])

        # Assert
        assert args.delimiter == expected

    def test_empty_delimiter_rejected(self) -> None:
        """An empty delimiter is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["tree", "a", "b", "c", "--delimiter", ""])

        assert exc_info.value.code == 2

    def test_subcommand_required(self) -> None:
        """Running without a classifier subcommand is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])

        assert exc_info.value.code == 2
