# switchboard_sdk/core/credentials.py
# SPDX-License-Identifier: Apache-2.0
"""
Credential resolution for provider adapters.

Adapters never read `os.environ` directly. They receive a `CredentialResolver`
at construction (defaulting to `EnvironmentCredentialResolver`) and resolve
each credential with `resolve_credential()`:

    explicit value  ->  resolver lookup  ->  MissingCredential

Tests inject a `MappingCredentialResolver` instead of patching the process
environment.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Protocol, runtime_checkable

from switchboard_sdk.core.errors import MissingCredential


@runtime_checkable
class CredentialResolver(Protocol):
    """Looks up a credential by its environment-variable style key."""

    def get(self, key: str) -> Optional[str]: ...


class EnvironmentCredentialResolver:
    """
    Resolves credentials from the process environment.

    When `environ` is given it is used as a fixed snapshot; otherwise
    `os.environ` is read at lookup time.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def get(self, key: str) -> Optional[str]:
        source = os.environ if self._environ is None else self._environ
        return source.get(key)


class MappingCredentialResolver:
    """Resolves credentials from an in-memory mapping."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_credential(
    explicit: Optional[str],
    env_key: str,
    resolver: Optional[CredentialResolver] = None,
    *,
    required: bool = True,
) -> Optional[str]:
    """
    Resolve one credential.

    The explicit value wins when non-blank. Otherwise `resolver` (default:
    process environment) is consulted under `env_key`. Blank strings count
    as missing.

    Raises:
        MissingCredential: when `required` and neither source has a value.
    """
    value = _clean(explicit)
    if value is not None:
        return value
    value = _clean((resolver or EnvironmentCredentialResolver()).get(env_key))
    if value is None and required:
        raise MissingCredential(env_key)
    return value


__all__ = [
    "CredentialResolver",
    "EnvironmentCredentialResolver",
    "MappingCredentialResolver",
    "resolve_credential",
]
