"""Fatal error hierarchy; per-URL failures are values, not exceptions."""

from __future__ import annotations

from pathlib import Path


class TitleGrabberError(Exception):
    """Base class for errors that abort a run."""


class ConfigError(TitleGrabberError):
    """Raised when the effective configuration is invalid."""


class FileAccessError(TitleGrabberError):
    """Input or output file could not be opened, read or written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class InputFileError(FileAccessError):
    """An input URL list could not be read."""


class OutputFileError(FileAccessError):
    """The CSV report could not be created or written."""


__all__ = [
    "ConfigError",
    "FileAccessError",
    "InputFileError",
    "OutputFileError",
    "TitleGrabberError",
]
