# SPDX-License-Identifier: Apache-2.0
"""
OpenAI moderation chain with a fake `openai` client.
"""

import pytest
from openai import AsyncOpenAI

from switchboard_sdk.chains.openai_moderation import (
    POLICY_VIOLATION_MESSAGE,
    ModerationVerdict,
    OpenAIModerationChain,
)
from switchboard_sdk.core.credentials import MappingCredentialResolver
from switchboard_sdk.core.errors import (
    ChainInputError,
    ContentPolicyViolation,
    EmptyResult,
    HttpStatusError,
    MissingCredential,
    TransportError,
)
from tests.mock.fake_openai import (
    FakeEndpoint,
    FakeOpenAIClient,
    connection_error,
    moderation_response,
    status_error,
)

pytestmark = pytest.mark.asyncio

CLEAN = moderation_response(False, {"hate": False, "violence": False}, {"hate": 0.01, "violence": 0.02})
FLAGGED = moderation_response(True, {"hate": True, "violence": False}, {"hate": 0.97, "violence": 0.02})


def make_chain(*responses, caller, **kwargs):
    endpoint = FakeEndpoint(*responses)
    chain = OpenAIModerationChain(client=FakeOpenAIClient(moderations=endpoint), caller=caller, **kwargs)
    return chain, endpoint


async def test_clean_text_passes_through(fast_caller):
    chain, endpoint = make_chain(CLEAN, caller=fast_caller)

    assert await chain.run("have a nice day") == "have a nice day"
    assert endpoint.calls == [{"input": "have a nice day"}]


async def test_flagged_text_is_replaced_with_policy_message(fast_caller):
    chain, _ = make_chain(FLAGGED, caller=fast_caller)

    result = await chain.call({"input": "something hateful"})

    assert result == {"input": "something hateful", "output": POLICY_VIOLATION_MESSAGE}


async def test_flagged_text_raises_when_configured(fast_caller):
    chain, _ = make_chain(FLAGGED, caller=fast_caller, throw_error=True)

    with pytest.raises(ContentPolicyViolation) as excinfo:
        await chain.run("something hateful")

    err = excinfo.value
    assert str(err).startswith(POLICY_VIOLATION_MESSAGE)
    assert err.verdict.flagged_categories == ["hate"]


async def test_custom_keys_and_outputs_only(fast_caller):
    chain, _ = make_chain(CLEAN, caller=fast_caller, input_key="text", output_key="safe_text")

    assert chain.input_keys == ["text"]
    assert chain.output_keys == ["safe_text"]
    assert await chain.call({"text": "hi"}, return_only_outputs=True) == {"safe_text": "hi"}


async def test_missing_input_key_fails_without_request(fast_caller):
    chain, endpoint = make_chain(CLEAN, caller=fast_caller)

    with pytest.raises(ChainInputError) as excinfo:
        await chain.call({"text": "wrong key"})

    assert excinfo.value.missing == ["input"]
    assert endpoint.calls == []


async def test_empty_results_raise_empty_result(fast_caller):
    chain, endpoint = make_chain({"results": []}, caller=fast_caller)

    with pytest.raises(EmptyResult) as excinfo:
        await chain.run("hi")

    assert excinfo.value.field == "results"
    assert len(endpoint.calls) == 1


async def test_moderate_returns_verdict(fast_caller):
    chain, _ = make_chain(FLAGGED, caller=fast_caller)

    verdict = await chain.moderate("something hateful")

    assert verdict == ModerationVerdict(
        flagged=True,
        categories={"hate": True, "violence": False},
        category_scores={"hate": 0.97, "violence": 0.02},
    )


async def test_model_is_forwarded_when_set(fast_caller):
    chain, endpoint = make_chain(CLEAN, caller=fast_caller, model="text-moderation-stable")

    await chain.run("hi")

    assert endpoint.calls[0]["model"] == "text-moderation-stable"


async def test_server_error_is_translated_and_retried(fast_caller):
    chain, endpoint = make_chain(status_error(500), CLEAN, caller=fast_caller)

    assert await chain.run("hi") == "hi"
    assert len(endpoint.calls) == 2


async def test_client_error_is_translated_and_not_retried(fast_caller):
    chain, endpoint = make_chain(status_error(400), caller=fast_caller)

    with pytest.raises(HttpStatusError) as excinfo:
        await chain.run("hi")

    err = excinfo.value
    assert err.status_code == 400
    assert "400" in str(err)
    assert err.response.status_code == 400
    assert len(endpoint.calls) == 1


async def test_connection_error_becomes_transport_error(fast_caller):
    chain, endpoint = make_chain(connection_error(), caller=fast_caller)

    with pytest.raises(TransportError) as excinfo:
        await chain.run("hi")

    assert excinfo.value.__cause__ is not None
    assert len(endpoint.calls) == fast_caller.retry_policy.max_attempts


async def test_missing_api_key_is_reported(fast_caller):
    with pytest.raises(MissingCredential) as excinfo:
        OpenAIModerationChain(credential_resolver=MappingCredentialResolver({}), caller=fast_caller)

    assert excinfo.value.key == "OPENAI_API_KEY"


async def test_client_built_from_resolver_without_sdk_retries(fast_caller):
    resolver = MappingCredentialResolver({"OPENAI_API_KEY": "sk-test", "OPENAI_ORGANIZATION": "org-42"})

    chain = OpenAIModerationChain(credential_resolver=resolver, caller=fast_caller)

    client = chain._client
    assert isinstance(client, AsyncOpenAI)
    assert client.api_key == "sk-test"
    assert client.organization == "org-42"
    assert client.max_retries == 0
    await client.close()


async def test_organization_is_optional(fast_caller):
    chain = OpenAIModerationChain(
        api_key="sk-test",
        credential_resolver=MappingCredentialResolver({}),
        caller=fast_caller,
    )

    assert chain._client.organization is None
    assert chain.chain_type == "moderation_chain"
    await chain._client.close()


async def test_verdict_from_mapping():
    verdict = ModerationVerdict.from_result(
        {"flagged": True, "categories": {"self-harm": True, "hate": None}, "category_scores": {"self-harm": 0.9}}
    )

    assert verdict.flagged is True
    assert verdict.categories == {"self-harm": True}
    assert verdict.flagged_categories == ["self-harm"]
