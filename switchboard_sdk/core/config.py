# switchboard_sdk/core/config.py
# SPDX-License-Identifier: Apache-2.0
"""
SDK-level settings read from the process environment.

These are knobs for the shared infrastructure (retry budget, concurrency
limit, request timeout, log level), not per-provider configuration. Provider
credentials are resolved separately through `core.credentials`.

Environment variables
---------------------
SWITCHBOARD_MAX_RETRIES       int, default 6
SWITCHBOARD_MAX_CONCURRENCY   int, default 0 (unbounded)
SWITCHBOARD_TIMEOUT_S         float, default 60.0
SWITCHBOARD_LOG_LEVEL         str, default "WARNING"
SWITCHBOARD_RETRY_JITTER      flag, default on
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

LOG = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str, environ: Optional[Mapping[str, str]] = None) -> str:
    source = os.environ if environ is None else environ
    val = source.get(name)
    if val is None or not str(val).strip():
        return default
    return str(val).strip()


def _env_flag(name: str, default: str = "0", environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Parse a boolean-ish environment variable, case-insensitively.

    Truthy values: "1", "true", "yes", "on". Everything else is False.
    """
    return _env(name, default, environ).lower() in _TRUTHY


def _env_int(name: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    raw = _env(name, str(default), environ)
    try:
        return int(raw)
    except ValueError:
        LOG.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default


def _env_float(name: str, default: float, environ: Optional[Mapping[str, str]] = None) -> float:
    raw = _env(name, str(default), environ)
    try:
        return float(raw)
    except ValueError:
        LOG.warning("Ignoring non-numeric %s=%r; using %s", name, raw, default)
        return default


def _positive_timeout(environ: Optional[Mapping[str, str]] = None) -> float:
    value = _env_float("SWITCHBOARD_TIMEOUT_S", 60.0, environ)
    if not value > 0:
        LOG.warning("Ignoring non-positive SWITCHBOARD_TIMEOUT_S=%r; using 60.0", value)
        return 60.0
    return value


@dataclass(frozen=True)
class SDKSettings:
    """
    Shared infrastructure settings.

    Attributes:
        max_retries:
            Retries after the first attempt for retryable failures.
        max_concurrency:
            Upper bound on in-flight calls per caller; 0 disables the bound.
        timeout_s:
            Default per-request HTTP timeout in seconds.
        log_level:
            Level used by `configure_logging()` when none is given.
        retry_jitter:
            Randomize backoff sleeps.
    """

    max_retries: int = 6
    max_concurrency: int = 0
    timeout_s: float = 60.0
    log_level: str = "WARNING"
    retry_jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.max_concurrency < 0:
            raise ValueError("max_concurrency must be >= 0")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SDKSettings":
        return cls(
            max_retries=max(0, _env_int("SWITCHBOARD_MAX_RETRIES", 6, environ)),
            max_concurrency=max(0, _env_int("SWITCHBOARD_MAX_CONCURRENCY", 0, environ)),
            timeout_s=_positive_timeout(environ),
            log_level=_env("SWITCHBOARD_LOG_LEVEL", "WARNING", environ).upper(),
            retry_jitter=_env_flag("SWITCHBOARD_RETRY_JITTER", "1", environ),
        )


@lru_cache(maxsize=1)
def get_settings() -> SDKSettings:
    """Process-wide settings, read once from the environment."""
    return SDKSettings.from_env()


__all__ = ["SDKSettings", "get_settings"]
