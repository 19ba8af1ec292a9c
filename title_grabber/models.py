"""Value objects flowing through the fetch → extract → export pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ErrorKind(str, Enum):
    """Categories of per-URL failures recorded in the report."""

    TIMEOUT = "timeout"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    HTTP_STATUS = "http_status"
    CONNECTION_FAILED = "connection_failed"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class UrlRecord:
    """A unique input URL and the ordinal of its first occurrence."""

    raw_url: str
    source_line: int


@dataclass(frozen=True, slots=True)
class FetchedPage:
    """Final response of a successful fetch."""

    url: str
    final_url: str
    status_code: int
    body: bytes = field(repr=False)
    content_type: str | None = None
    attempts: int = 1


@dataclass(frozen=True, slots=True)
class FetchError:
    """Terminal failure of a fetch after the retry budget was spent."""

    kind: ErrorKind
    status_code: int | None = None
    detail: str = ""
    attempts: int = 1

    @property
    def message(self) -> str:
        if self.kind is ErrorKind.TIMEOUT:
            return "ERROR: timeout"
        if self.kind is ErrorKind.TOO_MANY_REDIRECTS:
            return "ERROR: too many redirects"
        if self.kind is ErrorKind.HTTP_STATUS:
            return f"ERROR: HTTP {self.status_code}"
        if self.kind is ErrorKind.CONNECTION_FAILED:
            return "ERROR: connection failed"
        return f"ERROR: {self.detail or 'request failed'}"


@dataclass(frozen=True, slots=True)
class Success:
    title: str

    @property
    def text(self) -> str:
        return self.title


@dataclass(frozen=True, slots=True)
class Failure:
    reason: FetchError

    @property
    def text(self) -> str:
        return self.reason.message


FetchOutcome = Union[Success, Failure]


@dataclass(frozen=True, slots=True)
class ResultRow:
    """One line of the report."""

    url: str
    outcome: FetchOutcome

    @property
    def title(self) -> str:
        return self.outcome.text

    def as_dict(self) -> dict[str, str]:
        return {"url": self.url, "title": self.title}


__all__ = [
    "ErrorKind",
    "Failure",
    "FetchError",
    "FetchOutcome",
    "FetchedPage",
    "ResultRow",
    "Success",
    "UrlRecord",
]
