"""Engine components wiring source → fetch → extract → export."""

from .dedup import DeduplicationStore
from .exporter import CsvExporter, write_results
from .fetcher import FetchClient
from .parser import NO_TITLE, TitleExtractor
from .source import UrlSource
from .thread_pool import WorkerPool

__all__ = [
    "CsvExporter",
    "DeduplicationStore",
    "FetchClient",
    "NO_TITLE",
    "TitleExtractor",
    "UrlSource",
    "WorkerPool",
    "write_results",
]
