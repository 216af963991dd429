# SPDX-License-Identifier: Apache-2.0
"""
Credential resolution: explicit value, resolver lookup, MissingCredential.
"""

import pytest

from switchboard_sdk.core.credentials import (
    CredentialResolver,
    EnvironmentCredentialResolver,
    MappingCredentialResolver,
    resolve_credential,
)
from switchboard_sdk.core.errors import MissingCredential


def test_explicit_value_beats_resolver():
    resolver = MappingCredentialResolver({"AI21_API_KEY": "from-env"})

    assert resolve_credential("explicit", "AI21_API_KEY", resolver) == "explicit"


def test_resolver_used_when_explicit_missing():
    resolver = MappingCredentialResolver({"AI21_API_KEY": "from-env"})

    assert resolve_credential(None, "AI21_API_KEY", resolver) == "from-env"


def test_blank_values_count_as_missing():
    resolver = MappingCredentialResolver({"AI21_API_KEY": "   "})

    with pytest.raises(MissingCredential) as excinfo:
        resolve_credential("", "AI21_API_KEY", resolver)

    err = excinfo.value
    assert err.key == "AI21_API_KEY"
    assert err.code == "MISSING_CREDENTIAL"
    assert "AI21_API_KEY" in str(err)


def test_optional_credential_returns_none():
    assert resolve_credential(None, "OPENAI_ORGANIZATION", MappingCredentialResolver(), required=False) is None


def test_environment_resolver_reads_process_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")

    assert resolve_credential(None, "OPENAI_API_KEY") == "sk-live"


def test_environment_resolver_snapshot_ignores_process_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    resolver = EnvironmentCredentialResolver({})

    with pytest.raises(MissingCredential):
        resolve_credential(None, "OPENAI_API_KEY", resolver)


def test_resolvers_satisfy_protocol():
    assert isinstance(EnvironmentCredentialResolver(), CredentialResolver)
    assert isinstance(MappingCredentialResolver(), CredentialResolver)
