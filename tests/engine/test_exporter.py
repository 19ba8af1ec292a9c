from __future__ import annotations

import csv
from pathlib import Path

import pytest

from title_grabber.engine.exporter import CsvExporter, write_results
from title_grabber.errors import OutputFileError
from title_grabber.models import ErrorKind, Failure, FetchError, ResultRow, Success


def read_csv(path: Path) -> list[list[str]]:
    with path.open(encoding="utf-8", newline="") as stream:
        return list(csv.reader(stream))


def test_writes_header_and_rows_in_given_order(tmp_path: Path) -> None:
    rows = [
        ResultRow("https://a.example", Success("A, with comma")),
        ResultRow("https://b.example", Failure(FetchError(ErrorKind.TIMEOUT))),
        ResultRow("https://c.example", Failure(FetchError(ErrorKind.HTTP_STATUS, status_code=404))),
    ]
    path = tmp_path / "out.csv"
    assert write_results(rows, path) == 3
    assert read_csv(path) == [
        ["url", "title"],
        ["https://a.example", "A, with comma"],
        ["https://b.example", "ERROR: timeout"],
        ["https://c.example", "ERROR: HTTP 404"],
    ]


def test_overwrites_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "out.csv"
    path.write_text("stale,content\n" * 10, encoding="utf-8")
    write_results([ResultRow("https://a.example", Success("A"))], path)
    assert read_csv(path) == [["url", "title"], ["https://a.example", "A"]]


def test_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "reports" / "nested" / "out.csv"
    write_results([], path)
    assert read_csv(path) == [["url", "title"]]


def test_unwritable_target_raises_output_error(tmp_path: Path) -> None:
    # a directory cannot be opened for writing
    with pytest.raises(OutputFileError) as excinfo:
        CsvExporter(tmp_path)
    assert excinfo.value.path == tmp_path
