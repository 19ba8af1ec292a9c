"""Run orchestrator wiring source, worker pool, extraction and export."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import structlog

from .config import GrabberConfig
from .engine import FetchClient, TitleExtractor, UrlSource, WorkerPool, write_results
from .models import Failure, FetchError, FetchOutcome, ResultRow, Success, UrlRecord
from .ui import ProgressReporter


class TitleGrabber:
    """Grab titles for every unique URL listed in the input files."""

    def __init__(
        self,
        config: GrabberConfig,
        fetch_client: FetchClient | None = None,
        extractor: TitleExtractor | None = None,
        progress: ProgressReporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("title_grabber").bind(component="orchestrator")
        self._owns_client = fetch_client is None
        self.fetch_client = fetch_client or FetchClient(config)
        self.extractor = extractor or TitleExtractor()
        self.progress = progress or ProgressReporter(enabled=False)
        self.pool = WorkerPool(config.max_threads)

    def __enter__(self) -> "TitleGrabber":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.fetch_client.close()

    # ------------------------------------------------------------------
    def grab(self, record: UrlRecord) -> FetchOutcome:
        """Fetch one URL and turn the response into an outcome."""

        result = self.fetch_client.fetch(record.raw_url)
        if isinstance(result, FetchError):
            self.logger.warning(
                "fetch_failed",
                url=record.raw_url,
                kind=result.kind.value,
                status=result.status_code,
                attempts=result.attempts,
            )
            return Failure(result)
        title = self.extractor.extract(result.body, result.content_type)
        self.logger.info(
            "fetch_ok",
            url=record.raw_url,
            final_url=result.final_url,
            status=result.status_code,
            attempts=result.attempts,
            title=title,
        )
        return Success(title)

    def collect(self, paths: Sequence[Path | str]) -> list[ResultRow]:
        """Read inputs, fetch concurrently and return rows in first-seen order."""

        records = UrlSource(paths).records()
        self.logger.info(
            "run_start",
            files=[str(path) for path in paths],
            urls=len(records),
            threads=self.config.max_threads,
            connect_timeout=self.config.connect_timeout,
            read_timeout=self.config.read_timeout,
            max_redirects=self.config.max_redirects,
            max_retries=self.config.max_retries,
        )
        self.progress.start(total=len(records))
        try:
            outcomes = self.pool.run(
                records,
                self.grab,
                on_result=lambda record, outcome: self.progress.advance(
                    success=isinstance(outcome, Success), current_url=record.raw_url
                ),
            )
        finally:
            self.progress.close()
        return [
            ResultRow(url=record.raw_url, outcome=outcomes[record.source_line])
            for record in sorted(records, key=lambda item: item.source_line)
        ]

    def write_csv(self, paths: Sequence[Path | str], output_path: Path | str | None = None) -> Path:
        """Run the whole pipeline and write the CSV report; return its path."""

        target = Path(output_path) if output_path is not None else self.config.output_path
        rows = self.collect(paths)
        count = write_results(rows, target)
        summary = self.progress.summary()
        self.logger.info("results_written", output=str(target), rows=count, **summary)
        return target


__all__ = ["TitleGrabber"]
