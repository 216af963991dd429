# switchboard_sdk/core/logging_utils.py
# SPDX-License-Identifier: Apache-2.0
"""
Opt-in logging setup for applications using the SDK.

The library itself only ever calls `logging.getLogger(__name__)`; it never
touches the root logger. Applications that want to see adapter logs without
configuring logging themselves can call `configure_logging()` once.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from switchboard_sdk.core.config import get_settings

SDK_LOGGER_NAME = "switchboard_sdk"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: Optional[Union[int, str]] = None,
    *,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a single handler to the `switchboard_sdk` logger.

    Calling this more than once replaces the previously installed handler
    instead of stacking duplicates.

    Args:
        level:
            Logging level name or number; defaults to SWITCHBOARD_LOG_LEVEL.
        handler:
            Handler to install; defaults to a stderr StreamHandler.
    """
    logger = logging.getLogger(SDK_LOGGER_NAME)
    resolved = level if level is not None else get_settings().log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    for existing in list(logger.handlers):
        if getattr(existing, "_switchboard_installed", False):
            logger.removeHandler(existing)

    h = handler or logging.StreamHandler()
    h.setFormatter(logging.Formatter(_FORMAT))
    h._switchboard_installed = True  # type: ignore[attr-defined]
    logger.addHandler(h)
    logger.setLevel(resolved)
    return logger


__all__ = ["configure_logging", "SDK_LOGGER_NAME"]
