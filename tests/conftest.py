"""Shared fixtures: configs, URL list files and simulated HTTP servers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable

import httpx
import pytest

from title_grabber.config import GrabberConfig
from title_grabber.engine import FetchClient


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., GrabberConfig]:
    def _builder(**overrides: Any) -> GrabberConfig:
        base: dict[str, Any] = {
            "connect_timeout": 1,
            "read_timeout": 1,
            "max_redirects": 5,
            "max_retries": 3,
            "max_threads": 4,
            "output_path": tmp_path / "out.csv",
        }
        base.update(overrides)
        return GrabberConfig(**base)

    return _builder


@pytest.fixture
def url_file(tmp_path: Path) -> Callable[..., Path]:
    counter = {"n": 0}

    def _writer(lines: Iterable[str], name: str | None = None) -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"urls-{counter['n']}.txt")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _writer


@pytest.fixture
def mock_client(make_config) -> Iterable[Callable[..., FetchClient]]:
    """Build FetchClients backed by ``httpx.MockTransport`` handlers."""

    clients: list[FetchClient] = []

    def _factory(handler: Callable[[httpx.Request], httpx.Response], **config_overrides: Any) -> FetchClient:
        client = FetchClient(make_config(**config_overrides), transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _factory
    for client in clients:
        client.close()
