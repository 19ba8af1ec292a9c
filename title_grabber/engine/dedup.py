"""In-memory first-seen URL deduplication."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DeduplicationResult:
    url: str
    duplicate: bool
    first_ordinal: int


class DeduplicationStore:
    """Remember the ordinal at which each exact URL string was first seen.

    One store lives for a single pass over the input files and is only
    touched by the reading thread.
    """

    def __init__(self) -> None:
        self._seen: dict[str, int] = {}

    def check_and_store(self, url: str, ordinal: int) -> DeduplicationResult:
        first = self._seen.setdefault(url, ordinal)
        return DeduplicationResult(url=url, duplicate=first != ordinal, first_ordinal=first)


__all__ = ["DeduplicationResult", "DeduplicationStore"]
