"""Title extraction from fetched documents."""

from __future__ import annotations

import codecs
import re

import structlog
from selectolax.lexbor import LexborHTMLParser

NO_TITLE = "(no title)"

_SNIFF_BYTES = 1024
_HTML_MARKERS = re.compile(rb"<!doctype\s+html|<html|<head|<title", re.IGNORECASE)
_CHARSET = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


class TitleExtractor:
    """Produce a human-readable title for a page body.

    ``<title>`` wins, then the first ``<h1>``; non-HTML content and markup
    the parser cannot handle both degrade to ``NO_TITLE``.
    """

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self.logger = logger or structlog.get_logger("title_grabber.parser")

    def extract(self, body: bytes, content_type: str | None) -> str:
        if not self.is_html(body, content_type):
            return NO_TITLE
        try:
            parser = LexborHTMLParser(self.decode(body, content_type))
            for selector in ("title", "h1"):
                node = parser.css_first(selector)
                if node is None:
                    continue
                text = collapse_whitespace(node.text(deep=True, separator=" "))
                if text:
                    return text
        except Exception as exc:  # noqa: BLE001
            self.logger.debug("title_parse_failed", error=str(exc))
        return NO_TITLE

    @staticmethod
    def is_html(body: bytes, content_type: str | None) -> bool:
        if content_type and content_type.strip():
            return "html" in content_type.lower()
        return bool(_HTML_MARKERS.search(body[:_SNIFF_BYTES]))

    @staticmethod
    def decode(body: bytes, content_type: str | None) -> str:
        encoding = "utf-8"
        match = _CHARSET.search(content_type or "")
        if match is None:
            # <meta charset=...> near the top of the document
            match = _CHARSET.search(body[:_SNIFF_BYTES].decode("ascii", errors="ignore"))
        if match:
            try:
                encoding = codecs.lookup(match.group(1)).name
            except LookupError:
                encoding = "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            # bytes-to-bytes codecs (base64, hex, zlib) are not text encodings
            return body.decode("utf-8", errors="replace")


__all__ = ["NO_TITLE", "TitleExtractor", "collapse_whitespace"]
