# switchboard_sdk/core/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Shared adapter infrastructure: error taxonomy, credential resolution,
the retrying/cancellable caller, SDK settings and logging setup.
"""

from switchboard_sdk.core.caller import (
    AsyncCaller,
    CallerOptions,
    CancellationSignal,
    RetryPolicy,
    is_retryable,
)
from switchboard_sdk.core.config import SDKSettings, get_settings
from switchboard_sdk.core.credentials import (
    CredentialResolver,
    EnvironmentCredentialResolver,
    MappingCredentialResolver,
    resolve_credential,
)
from switchboard_sdk.core.errors import (
    AdapterError,
    ChainInputError,
    ConflictingParameter,
    ContentPolicyViolation,
    DeadlineExceeded,
    EmptyResult,
    HttpStatusError,
    MissingCredential,
    RequestCancelled,
    ToolInputError,
    TransportError,
)
from switchboard_sdk.core.logging_utils import configure_logging

__all__ = [
    # Caller
    "AsyncCaller",
    "CallerOptions",
    "CancellationSignal",
    "RetryPolicy",
    "is_retryable",
    # Settings / logging
    "SDKSettings",
    "get_settings",
    "configure_logging",
    # Credentials
    "CredentialResolver",
    "EnvironmentCredentialResolver",
    "MappingCredentialResolver",
    "resolve_credential",
    # Errors
    "AdapterError",
    "ChainInputError",
    "ConflictingParameter",
    "ContentPolicyViolation",
    "DeadlineExceeded",
    "EmptyResult",
    "HttpStatusError",
    "MissingCredential",
    "RequestCancelled",
    "ToolInputError",
    "TransportError",
]
