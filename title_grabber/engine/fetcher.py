"""HTTP fetching with timeout, redirect and retry policy."""

from __future__ import annotations

import httpx
import structlog

from ..config import GrabberConfig
from ..models import ErrorKind, FetchError, FetchedPage

USER_AGENT = "title-grabber/0.1"
ACCEPT = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5"
# Titles live in the document head; stop reading huge bodies early.
MAX_BODY_BYTES = 1 << 20


class _RetryableError(Exception):
    def __init__(self, error: FetchError) -> None:
        super().__init__(error.message)
        self.error = error


class FetchClient:
    """Perform one URL fetch to completion or categorised failure.

    Transport failures (timeouts, refused connections, DNS errors, broken
    responses) are retried immediately up to ``max_retries`` extra attempts.
    HTTP error statuses and redirect loops are final on the first attempt.
    A single instance is shared by every worker thread.
    """

    def __init__(
        self,
        config: GrabberConfig,
        transport: httpx.BaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("title_grabber.fetcher")
        self._client = httpx.Client(
            follow_redirects=True,
            max_redirects=config.max_redirects,
            timeout=httpx.Timeout(config.read_timeout, connect=config.connect_timeout),
            limits=httpx.Limits(max_connections=max(config.max_threads, 10)),
            headers={"User-Agent": USER_AGENT, "Accept": ACCEPT},
            transport=transport,
        )

    def __enter__(self) -> "FetchClient":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str) -> FetchedPage | FetchError:
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._attempt(url, attempt)
            except _RetryableError as exc:
                if attempt >= self.config.max_attempts:
                    self.logger.warning(
                        "fetch_gave_up", url=url, attempts=attempt, error=exc.error.message
                    )
                    return exc.error
                self.logger.warning(
                    "fetch_retry",
                    url=url,
                    attempt=attempt,
                    max_attempts=self.config.max_attempts,
                    error=exc.error.detail,
                )

    # ------------------------------------------------------------------
    def _attempt(self, url: str, attempt: int) -> FetchedPage | FetchError:
        try:
            with self._client.stream("GET", url) as response:
                if self._is_failure(response):
                    return FetchError(
                        kind=ErrorKind.HTTP_STATUS,
                        status_code=response.status_code,
                        detail=response.reason_phrase,
                        attempts=attempt,
                    )
                body = self._read_body(response)
                return FetchedPage(
                    url=url,
                    final_url=str(response.url),
                    status_code=response.status_code,
                    body=body,
                    content_type=response.headers.get("Content-Type"),
                    attempts=attempt,
                )
        except httpx.TooManyRedirects as exc:
            return FetchError(kind=ErrorKind.TOO_MANY_REDIRECTS, detail=str(exc), attempts=attempt)
        except httpx.TimeoutException as exc:
            raise _RetryableError(self._error(ErrorKind.TIMEOUT, exc, attempt)) from exc
        except httpx.UnsupportedProtocol as exc:
            return self._error(ErrorKind.OTHER, exc, attempt)
        except httpx.ConnectError as exc:
            raise _RetryableError(self._error(ErrorKind.CONNECTION_FAILED, exc, attempt)) from exc
        except httpx.TransportError as exc:
            raise _RetryableError(self._error(ErrorKind.OTHER, exc, attempt)) from exc
        except (httpx.InvalidURL, httpx.DecodingError) as exc:
            return self._error(ErrorKind.OTHER, exc, attempt)

    @staticmethod
    def _read_body(response: httpx.Response) -> bytes:
        chunks: list[bytes] = []
        size = 0
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size >= MAX_BODY_BYTES:
                break
        return b"".join(chunks)[:MAX_BODY_BYTES]

    @staticmethod
    def _error(kind: ErrorKind, exc: Exception, attempt: int) -> FetchError:
        detail = str(exc) or exc.__class__.__name__
        return FetchError(kind=kind, detail=detail, attempts=attempt)

    @staticmethod
    def _is_failure(response: httpx.Response) -> bool:
        return response.status_code >= 400


__all__ = ["ACCEPT", "FetchClient", "MAX_BODY_BYTES", "USER_AGENT"]
