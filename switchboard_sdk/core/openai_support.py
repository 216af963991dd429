# switchboard_sdk/core/openai_support.py
# SPDX-License-Identifier: Apache-2.0
"""
Helpers shared by adapters built on the official `openai` client.

- `build_openai_client()` resolves credentials and constructs `AsyncOpenAI`
  with the SDK's own retries disabled; retries belong to `AsyncCaller`.
- `translate_openai_error()` maps client exceptions onto the Switchboard
  error taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import openai
from openai import AsyncOpenAI

from switchboard_sdk.core.credentials import CredentialResolver, resolve_credential
from switchboard_sdk.core.errors import AdapterError, HttpStatusError, TransportError

LOG = logging.getLogger(__name__)

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
OPENAI_ORGANIZATION_ENV = "OPENAI_ORGANIZATION"


def build_openai_client(
    *,
    api_key: Optional[str] = None,
    organization: Optional[str] = None,
    base_url: Optional[str] = None,
    credential_resolver: Optional[CredentialResolver] = None,
    client_options: Optional[Mapping[str, Any]] = None,
) -> AsyncOpenAI:
    """
    Construct an `AsyncOpenAI` client from explicit values or the resolver.

    `client_options` are passed through to `AsyncOpenAI` and win over the
    resolved values, so callers can point at proxies or tweak timeouts.

    Raises:
        MissingCredential: no API key explicitly or via OPENAI_API_KEY.
    """
    kwargs: dict = {
        "api_key": resolve_credential(api_key, OPENAI_API_KEY_ENV, credential_resolver),
        "organization": resolve_credential(
            organization,
            OPENAI_ORGANIZATION_ENV,
            credential_resolver,
            required=False,
        ),
        "max_retries": 0,
    }
    if base_url:
        kwargs["base_url"] = base_url
    kwargs.update(client_options or {})
    return AsyncOpenAI(**kwargs)


def translate_openai_error(err: Exception) -> Exception:
    """
    Map an `openai` client exception onto the adapter taxonomy.

    - APIStatusError (any HTTP status)  -> HttpStatusError with the httpx response
    - APIConnectionError / APITimeoutError -> TransportError
    - other OpenAIError                 -> AdapterError
    - anything else                     -> returned unchanged
    """
    if isinstance(err, openai.APIStatusError):
        request = getattr(err.response, "request", None)
        url = str(request.url) if request is not None else None
        return HttpStatusError(err.status_code, err.response, url=url, provider="OpenAI")
    if isinstance(err, openai.APIConnectionError):
        request = getattr(err, "request", None)
        url = str(request.url) if request is not None else None
        return TransportError(str(err) or type(err).__name__, url=url)
    if isinstance(err, openai.OpenAIError):
        return AdapterError(str(err) or type(err).__name__)
    return err


__all__ = [
    "OPENAI_API_KEY_ENV",
    "OPENAI_ORGANIZATION_ENV",
    "build_openai_client",
    "translate_openai_error",
]
