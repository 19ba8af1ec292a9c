from __future__ import annotations

import csv
import threading
import time
from pathlib import Path

import httpx
import pytest

from title_grabber.errors import InputFileError
from title_grabber.models import ErrorKind, Failure, Success
from title_grabber.orchestrator import TitleGrabber
from title_grabber.ui import ProgressReporter


def html_page(title: str | None = None, h1: str | None = None) -> str:
    head = f"<title>{title}</title>" if title is not None else ""
    body = f"<h1>{h1}</h1>" if h1 is not None else "<p>content</p>"
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


PAGES = {
    "a.example": html_page(title="Alpha"),
    "b.example": html_page(h1="Bravo"),
    "c.example": html_page(),
}


def site_handler(delays: dict[str, float] | None = None):
    delays = delays or {}
    hits: dict[str, int] = {}
    lock = threading.Lock()

    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        with lock:
            hits[host] = hits.get(host, 0) + 1
        time.sleep(delays.get(host, 0))
        if host == "slow.example":
            raise httpx.ReadTimeout("timed out", request=request)
        if host == "error.example":
            return httpx.Response(500)
        if host == "loop.example":
            return httpx.Response(301, headers={"Location": request.url.path + "x"})
        if host == "binary-charset.example":
            return httpx.Response(
                200,
                content=b"<html><head><title>Odd charset</title></head></html>",
                headers={"Content-Type": "text/html; charset=base64"},
            )
        return httpx.Response(200, html=PAGES[host])

    return handler, hits


def read_rows(path: Path) -> list[list[str]]:
    with path.open(encoding="utf-8", newline="") as stream:
        return list(csv.reader(stream))


@pytest.fixture
def grabber_factory(make_config, mock_client):
    def _factory(handler, **overrides) -> TitleGrabber:
        config = make_config(**overrides)
        return TitleGrabber(config, fetch_client=mock_client(handler, **overrides))

    return _factory


def test_dedup_and_order(grabber_factory, url_file, tmp_path: Path) -> None:
    handler, hits = site_handler()
    path = url_file(["https://a.example/", "https://b.example/", "https://a.example/", "https://c.example/"])
    grabber = grabber_factory(handler)
    output = grabber.write_csv([path])
    assert read_rows(output) == [
        ["url", "title"],
        ["https://a.example/", "Alpha"],
        ["https://b.example/", "Bravo"],
        ["https://c.example/", "(no title)"],
    ]
    assert hits == {"a.example": 1, "b.example": 1, "c.example": 1}


def test_output_order_ignores_completion_order(grabber_factory, url_file) -> None:
    handler, _ = site_handler(delays={"a.example": 0.3, "b.example": 0.1, "c.example": 0.0})
    path = url_file(["https://a.example/", "https://b.example/", "https://c.example/"])
    rows = grabber_factory(handler, max_threads=3).collect([path])
    assert [row.url for row in rows] == ["https://a.example/", "https://b.example/", "https://c.example/"]


def test_failures_become_error_rows(grabber_factory, url_file) -> None:
    handler, hits = site_handler()
    path = url_file(
        [
            "https://slow.example/",
            "https://error.example/",
            "https://loop.example/",
            "https://a.example/",
        ]
    )
    rows = grabber_factory(handler, max_retries=2, max_redirects=3).collect([path])
    assert [row.title for row in rows] == [
        "ERROR: timeout",
        "ERROR: HTTP 500",
        "ERROR: too many redirects",
        "Alpha",
    ]
    assert isinstance(rows[0].outcome, Failure)
    assert rows[0].outcome.reason.kind is ErrorKind.TIMEOUT
    assert hits["slow.example"] == 3
    assert hits["error.example"] == 1
    assert hits["loop.example"] == 4
    assert isinstance(rows[3].outcome, Success)


def test_runs_are_idempotent(grabber_factory, url_file, tmp_path: Path) -> None:
    handler, _ = site_handler(delays={"a.example": 0.05})
    path = url_file(["https://c.example/", "https://a.example/", "https://b.example/"])
    grabber = grabber_factory(handler)
    first = grabber.write_csv([path], tmp_path / "first.csv").read_bytes()
    second = grabber.write_csv([path], tmp_path / "second.csv").read_bytes()
    assert first == second


def test_missing_input_aborts_before_fetching(grabber_factory, url_file, tmp_path: Path) -> None:
    handler, hits = site_handler()
    path = url_file(["https://a.example/"])
    grabber = grabber_factory(handler)
    with pytest.raises(InputFileError):
        grabber.write_csv([path, tmp_path / "nope.txt"])
    assert hits == {}
    assert not (tmp_path / "out.csv").exists()


def test_progress_counts(make_config, mock_client, url_file) -> None:
    handler, _ = site_handler()
    reporter = ProgressReporter(enabled=False)
    grabber = TitleGrabber(make_config(), fetch_client=mock_client(handler), progress=reporter)
    grabber.collect([url_file(["https://a.example/", "https://error.example/"])])
    assert reporter.summary() == {"success": 1, "failed": 1}


def test_bytes_only_charset_still_yields_a_row(grabber_factory, url_file) -> None:
    handler, hits = site_handler()
    path = url_file(["https://binary-charset.example/", "https://a.example/"])
    rows = grabber_factory(handler).collect([path])
    assert [(row.url, row.title) for row in rows] == [
        ("https://binary-charset.example/", "Odd charset"),
        ("https://a.example/", "Alpha"),
    ]
    assert hits == {"binary-charset.example": 1, "a.example": 1}


def test_extractor_bug_aborts_the_run(make_config, mock_client, url_file) -> None:
    class BrokenExtractor:
        def extract(self, body: bytes, content_type: str | None) -> str:
            raise ZeroDivisionError("bug")

    handler, _ = site_handler()
    grabber = TitleGrabber(make_config(), fetch_client=mock_client(handler), extractor=BrokenExtractor())
    with pytest.raises(ZeroDivisionError):
        grabber.collect([url_file(["https://a.example/", "https://b.example/"])])
