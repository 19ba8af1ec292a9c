"""Read URL lists from files in argument order."""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Iterable, Iterator, Sequence

import structlog

from ..errors import InputFileError
from ..models import UrlRecord
from .dedup import DeduplicationStore

URL_PREFIX = re.compile(r"https?://", re.IGNORECASE)


def extract_url(line: str) -> str | None:
    """Return the URL carried by an input line, or ``None`` for blank lines.

    A line that is a single ``http(s)://`` token is the URL as-is, commas and
    all. Otherwise the line is read as a CSV row and the first field starting
    with ``http(s)://`` wins; failing that the trimmed line is used verbatim.
    """

    text = line.strip()
    if not text:
        return None
    if URL_PREFIX.match(text) and len(text.split()) == 1:
        return text
    try:
        fields = next(csv.reader([text]))
    except csv.Error:
        return text
    for field in fields:
        candidate = field.strip()
        if URL_PREFIX.match(candidate):
            return candidate
    return text


class UrlSource:
    """Deduplicated, order-preserving stream of ``UrlRecord`` objects."""

    def __init__(
        self,
        paths: Sequence[Path | str],
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.paths = [Path(path) for path in paths]
        self.logger = logger or structlog.get_logger("title_grabber.source")

    def __iter__(self) -> Iterator[UrlRecord]:
        dedup = DeduplicationStore()
        ordinal = 0
        for path in self.paths:
            kept = skipped = 0
            for url in self._read_urls(path):
                result = dedup.check_and_store(url, ordinal)
                if result.duplicate:
                    skipped += 1
                    self.logger.debug(
                        "duplicate_url", url=url, file=str(path), first_ordinal=result.first_ordinal
                    )
                else:
                    kept += 1
                    yield UrlRecord(raw_url=url, source_line=ordinal)
                ordinal += 1
            self.logger.info("file_read", file=str(path), urls=kept, duplicates=skipped)

    def records(self) -> list[UrlRecord]:
        """Read every file eagerly; raises ``InputFileError`` on the first bad file."""

        return list(self)

    @staticmethod
    def _read_urls(path: Path) -> Iterable[str]:
        try:
            with path.open("r", encoding="utf-8", errors="replace") as stream:
                lines = stream.readlines()
        except OSError as exc:
            raise InputFileError(path, exc.strerror or str(exc)) from exc
        for line in lines:
            url = extract_url(line)
            if url is not None:
                yield url


__all__ = ["URL_PREFIX", "UrlSource", "extract_url"]
