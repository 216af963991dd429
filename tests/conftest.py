# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for the Switchboard SDK tests.
"""

from __future__ import annotations

import pytest

from switchboard_sdk.core.caller import AsyncCaller, RetryPolicy
from switchboard_sdk.core.credentials import MappingCredentialResolver


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Three attempts with millisecond, jitter-free backoff."""
    return RetryPolicy(max_attempts=3, base_ms=1, max_ms=2, use_jitter=False)


@pytest.fixture
def fast_caller(fast_policy: RetryPolicy) -> AsyncCaller:
    return AsyncCaller(retry_policy=fast_policy)


@pytest.fixture
def no_retry_caller() -> AsyncCaller:
    return AsyncCaller(retry_policy=RetryPolicy(max_attempts=1, base_ms=1, max_ms=1))


@pytest.fixture
def empty_resolver() -> MappingCredentialResolver:
    return MappingCredentialResolver({})
