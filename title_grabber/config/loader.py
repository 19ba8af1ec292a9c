"""Resolve configuration with flag > environment variable > default precedence."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from ..errors import ConfigError
from .models import GrabberConfig

# option name -> environment variable
ENV_VARS: dict[str, str] = {
    "connect_timeout": "CONNECT_TIMEOUT",
    "read_timeout": "READ_TIMEOUT",
    "max_redirects": "MAX_REDIRECTS",
    "max_retries": "MAX_RETRIES",
    "max_threads": "MAX_THREADS",
    "debug": "DEBUG",
}

TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes"})


def parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


@dataclass(slots=True)
class EnvOverrides:
    """Values picked from the environment plus the variables that failed to parse."""

    values: dict[str, Any] = field(default_factory=dict)
    ignored: dict[str, str] = field(default_factory=dict)


def env_overrides(environ: Mapping[str, str] | None = None) -> EnvOverrides:
    """Read supported environment variables.

    Unparsable integers are skipped so the default applies, matching how the
    flag-less invocation has always behaved.
    """

    env = os.environ if environ is None else environ
    result = EnvOverrides()
    for option, var in ENV_VARS.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        if option == "debug":
            result.values[option] = parse_bool(raw)
            continue
        try:
            result.values[option] = int(raw.strip())
        except ValueError:
            result.ignored[var] = raw
    return result


def resolve_config(
    flags: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> GrabberConfig:
    """Merge explicit flags over environment values over model defaults.

    ``None`` entries in ``flags`` mean "not given on the command line".
    """

    merged: dict[str, Any] = dict(env_overrides(environ).values)
    for key, value in (flags or {}).items():
        if value is not None:
            merged[key] = value
    try:
        return GrabberConfig(**merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc


__all__ = ["ENV_VARS", "EnvOverrides", "TRUE_VALUES", "env_overrides", "parse_bool", "resolve_config"]
