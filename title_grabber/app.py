"""Typer CLI entrypoint for title-grabber."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from .config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_READ_TIMEOUT,
    ENV_VARS,
    env_overrides,
    resolve_config,
)
from .errors import ConfigError, FileAccessError
from .logging_conf import configure_logging
from .orchestrator import TitleGrabber
from .ui import ProgressReporter

app = typer.Typer(
    help="Grabs page & article titles from lists of URLs contained in files passed in as arguments.",
    add_completion=False,
    rich_markup_mode=None,
)

console = Console()
err_console = Console(stderr=True)


def _env_help(option: str, default: object) -> str:
    return f"Defaults to the value of the {ENV_VARS[option]} env var or {default}."


# Progress bar only on interactive terminals
def _progress_default_enabled() -> bool:
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


@app.command()
def main(
    files: List[Path] = typer.Argument(..., help="1 or more files containing URLs (1 per line)."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=f"Output file (defaults to {DEFAULT_OUTPUT_PATH})."
    ),
    connect_timeout: Optional[int] = typer.Option(
        None,
        "--connect-timeout",
        help="HTTP connect timeout in seconds. " + _env_help("connect_timeout", DEFAULT_CONNECT_TIMEOUT),
    ),
    read_timeout: Optional[int] = typer.Option(
        None,
        "--read-timeout",
        help="HTTP read timeout in seconds. " + _env_help("read_timeout", DEFAULT_READ_TIMEOUT),
    ),
    max_redirects: Optional[int] = typer.Option(
        None,
        "--max-redirects",
        help="Max. # of HTTP redirects to follow. " + _env_help("max_redirects", DEFAULT_MAX_REDIRECTS),
    ),
    max_retries: Optional[int] = typer.Option(
        None,
        "--max-retries",
        "-r",
        help="Max. # of times to retry failed HTTP reqs. " + _env_help("max_retries", DEFAULT_MAX_RETRIES),
    ),
    max_threads: Optional[int] = typer.Option(
        None,
        "--max-threads",
        "-t",
        help="Max. # of threads to use. " + _env_help("max_threads", "the # of logical processors"),
    ),
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        "-d",
        help="Log to STDOUT instead of to a file in the CWD. " + _env_help("debug", False),
    ),
    progress: Optional[bool] = typer.Option(
        None,
        "--progress/--no-progress",
        help="Show a progress bar (default: on for interactive terminals unless debugging).",
    ),
) -> None:
    flags = {
        "connect_timeout": connect_timeout,
        "read_timeout": read_timeout,
        "max_redirects": max_redirects,
        "max_retries": max_retries,
        "max_threads": max_threads,
        "output_path": output,
        "debug": debug,
    }
    try:
        config = resolve_config(flags)
    except ConfigError as exc:
        err_console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=2) from exc

    logger = configure_logging(debug=config.debug)
    for variable, raw in env_overrides().ignored.items():
        logger.warning("env_var_ignored", variable=variable, value=raw)

    show_progress = progress if progress is not None else (not config.debug and _progress_default_enabled())
    reporter = ProgressReporter(enabled=show_progress, console=console)
    try:
        with TitleGrabber(config, progress=reporter) as grabber:
            output_path = grabber.write_csv(files)
    except FileAccessError as exc:
        logger.error("run_failed", error=str(exc))
        err_console.print(f"Error: {exc}", style="red", markup=False)
        raise typer.Exit(code=1) from exc

    summary = reporter.summary()
    console.print(
        f"Wrote {summary['success'] + summary['failed']} rows to {output_path} "
        f"({summary['success']} titled, {summary['failed']} failed).",
        style="green",
        markup=False,
    )


__all__ = ["app", "main"]
