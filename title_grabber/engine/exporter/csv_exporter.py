"""CSV report writer."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ...errors import OutputFileError
from ...models import ResultRow
from .base import BaseExporter

FIELDNAMES = ("url", "title")


class CsvExporter(BaseExporter):
    """Write ``url,title`` rows to ``path``, replacing any existing file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("w", encoding="utf-8", newline="")
            self._writer = csv.DictWriter(self._file, fieldnames=FIELDNAMES)
            self._writer.writeheader()
        except OSError as exc:
            raise OutputFileError(self.path, exc.strerror or str(exc)) from exc

    def export(self, row: ResultRow) -> None:
        try:
            self._writer.writerow(row.as_dict())
        except OSError as exc:
            raise OutputFileError(self.path, exc.strerror or str(exc)) from exc

    def flush(self) -> None:
        try:
            self._file.flush()
        except OSError as exc:
            raise OutputFileError(self.path, exc.strerror or str(exc)) from exc

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
        except OSError as exc:
            raise OutputFileError(self.path, exc.strerror or str(exc)) from exc


def write_results(rows: Iterable[ResultRow], output_path: Path | str) -> int:
    """Write every row in the given order; return the number of rows written."""

    with CsvExporter(output_path) as exporter:
        count = exporter.export_many(rows)
        exporter.flush()
    return count


__all__ = ["CsvExporter", "FIELDNAMES", "write_results"]
