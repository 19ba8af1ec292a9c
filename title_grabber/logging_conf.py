"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import structlog

DEFAULT_LOG_PATH = Path("title_grabber.log")

_LOGGING_INITIALISED = False


def _handler_config(debug: bool, log_path: Path) -> dict:
    if debug:
        return {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }
    return {
        "class": "logging.FileHandler",
        "level": "INFO",
        "filename": str(log_path),
        "encoding": "utf-8",
        "formatter": "json",
    }


def configure_logging(
    debug: bool = False,
    log_path: Path | str = DEFAULT_LOG_PATH,
    force: bool = False,
) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return the application logger.

    In debug mode diagnostics go to standard output, otherwise to ``log_path``
    in the working directory.
    """

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED or force:
        level = "DEBUG" if debug else "INFO"
        path = Path(log_path)
        if not debug:
            path.parent.mkdir(parents=True, exist_ok=True)
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "json": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s",
                    }
                },
                "handlers": {"main": _handler_config(debug, path)},
                "loggers": {
                    "title_grabber": {
                        "handlers": ["main"],
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        # Forward structlog events to stdlib; JSON rendering happens in the handler
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("title_grabber")


__all__ = ["DEFAULT_LOG_PATH", "configure_logging"]
