"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...models import ResultRow


class BaseExporter(ABC):
    """Uniform exporter contract for report rows."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    @abstractmethod
    def export(self, row: ResultRow) -> None:
        """Persist a single row."""

    def export_many(self, rows: Iterable[ResultRow]) -> int:
        count = 0
        for row in rows:
            self.export(row)
            count += 1
        return count

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""


__all__ = ["BaseExporter"]
