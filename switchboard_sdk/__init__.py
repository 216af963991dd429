# switchboard_sdk/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Switchboard SDK: thin async adapters for LLM, moderation, embedding and
vector-store providers behind a few common interfaces.
"""

from switchboard_sdk.core.caller import AsyncCaller, CancellationSignal, RetryPolicy
from switchboard_sdk.core.errors import AdapterError
from switchboard_sdk.core.logging_utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    "AdapterError",
    "AsyncCaller",
    "CancellationSignal",
    "RetryPolicy",
    "configure_logging",
    "__version__",
]
