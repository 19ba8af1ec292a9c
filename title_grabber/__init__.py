"""Grab page titles for lists of URLs and write them to CSV."""

from .config import GrabberConfig, resolve_config
from .errors import ConfigError, FileAccessError, InputFileError, OutputFileError, TitleGrabberError
from .orchestrator import TitleGrabber

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FileAccessError",
    "GrabberConfig",
    "InputFileError",
    "OutputFileError",
    "TitleGrabber",
    "TitleGrabberError",
    "__version__",
    "resolve_config",
]
