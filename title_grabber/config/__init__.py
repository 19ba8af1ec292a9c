"""Configuration package exports."""

from .loader import ENV_VARS, EnvOverrides, env_overrides, parse_bool, resolve_config
from .models import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_READ_TIMEOUT,
    GrabberConfig,
    default_max_threads,
)

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_READ_TIMEOUT",
    "ENV_VARS",
    "EnvOverrides",
    "GrabberConfig",
    "default_max_threads",
    "env_overrides",
    "parse_bool",
    "resolve_config",
]
