"""Pydantic model holding the effective run configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUTPUT_PATH = Path("out.csv")
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 15
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_MAX_RETRIES = 3


def default_max_threads() -> int:
    """Number of logical processors, never less than one."""

    return os.cpu_count() or 1


class GrabberConfig(BaseModel):
    """Immutable settings shared by every worker of a run."""

    model_config = ConfigDict(frozen=True)

    connect_timeout: int = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0)
    read_timeout: int = Field(default=DEFAULT_READ_TIMEOUT, gt=0)
    max_redirects: int = Field(default=DEFAULT_MAX_REDIRECTS, ge=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    max_threads: int = Field(default_factory=default_max_threads, ge=1)
    output_path: Path = Field(default=DEFAULT_OUTPUT_PATH)
    debug: bool = False

    @field_validator("output_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path:
        if value in (None, ""):
            return DEFAULT_OUTPUT_PATH
        return Path(value)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_READ_TIMEOUT",
    "GrabberConfig",
    "default_max_threads",
]
