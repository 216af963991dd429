# switchboard_sdk/chains/openai_moderation.py
# SPDX-License-Identifier: Apache-2.0
"""
OpenAI moderation chain.

Sends the input text to OpenAI's moderation endpoint and either passes it
through unchanged or replaces it with a fixed policy message. With
`throw_error=True` a flagged input raises `ContentPolicyViolation` instead.

The `openai` client is created with its own retries disabled; the chain's
`AsyncCaller` decides what to retry after errors are translated.

Usage
-----
    chain = OpenAIModerationChain(throw_error=True)
    safe = await chain.run("some user text")
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from switchboard_sdk.chains.chain_base import BaseChain, ChainValues
from switchboard_sdk.core.caller import AsyncCaller, CallerOptions, CancellationSignal
from switchboard_sdk.core.credentials import CredentialResolver
from switchboard_sdk.core.errors import ContentPolicyViolation, EmptyResult
from switchboard_sdk.core.openai_support import build_openai_client, translate_openai_error

LOG = logging.getLogger(__name__)

POLICY_VIOLATION_MESSAGE = "Text was found that violates OpenAI's content policy."


@dataclass(frozen=True)
class ModerationVerdict:
    """One moderation result: whether it was flagged, and why."""

    flagged: bool
    categories: Mapping[str, bool] = field(default_factory=dict)
    category_scores: Mapping[str, float] = field(default_factory=dict)

    @property
    def flagged_categories(self) -> List[str]:
        return sorted(name for name, hit in self.categories.items() if hit)

    @classmethod
    def from_result(cls, result: Any) -> "ModerationVerdict":
        """Build a verdict from an SDK result object or a plain mapping."""
        raw = _as_dict(result)
        categories = _as_dict(raw.get("categories"))
        scores = _as_dict(raw.get("category_scores"))
        return cls(
            flagged=bool(raw.get("flagged")),
            categories={k: bool(v) for k, v in categories.items() if v is not None},
            category_scores={k: float(v) for k, v in scores.items() if v is not None},
        )


def _as_dict(obj: Any) -> Dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True)
    return {k: v for k, v in vars(obj).items() if not k.startswith("_")}


@dataclass(frozen=True)
class OpenAIModerationConfig:
    """
    Attributes:
        input_key:   key the text is read from.
        output_key:  key the (possibly replaced) text is written to.
        throw_error: raise on flagged input instead of replacing it.
        model:       moderation model; None lets the API choose.
        base_url:    alternative API endpoint.
    """

    input_key: str = "input"
    output_key: str = "output"
    throw_error: bool = False
    model: Optional[str] = None
    base_url: Optional[str] = None


class OpenAIModerationChain(BaseChain):
    """
    Parameters
    ----------
    config:
        Base configuration; defaults to `OpenAIModerationConfig()`.
    api_key / organization:
        Explicit credentials. Fall back to OPENAI_API_KEY and (optionally)
        OPENAI_ORGANIZATION through the resolver.
    client:
        Pre-built `AsyncOpenAI`-compatible client. When given, no credential
        lookup happens.
    client_options:
        Extra keyword arguments for `AsyncOpenAI`; they override resolved values.
    **overrides:
        Field overrides applied on top of `config`.
    """

    def __init__(
        self,
        config: Optional[OpenAIModerationConfig] = None,
        *,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        credential_resolver: Optional[CredentialResolver] = None,
        client: Any = None,
        client_options: Optional[Mapping[str, Any]] = None,
        caller: Optional[AsyncCaller] = None,
        **overrides: Any,
    ) -> None:
        base = config or OpenAIModerationConfig()
        self._config = dataclasses.replace(base, **overrides) if overrides else base
        if client is None:
            client = build_openai_client(
                api_key=api_key,
                organization=organization,
                base_url=self._config.base_url,
                credential_resolver=credential_resolver,
                client_options=client_options,
            )
        self._client = client
        super().__init__(caller=caller)

    @property
    def config(self) -> OpenAIModerationConfig:
        return self._config

    @property
    def input_keys(self) -> List[str]:
        return [self._config.input_key]

    @property
    def output_keys(self) -> List[str]:
        return [self._config.output_key]

    @property
    def chain_type(self) -> str:
        return "moderation_chain"

    async def moderate(
        self,
        text: str,
        *,
        signal: Optional[CancellationSignal] = None,
        timeout_s: Optional[float] = None,
    ) -> ModerationVerdict:
        """
        Classify `text` and return the first moderation result.

        Raises:
            EmptyResult: the response carried no results.
            HttpStatusError / TransportError: request failed.
        """
        options = CallerOptions(signal=signal, timeout_s=timeout_s)
        response = await self.caller.call_with_options(options, self._create, text)
        results = _results_of(response)
        if not results:
            raise EmptyResult("results")
        return ModerationVerdict.from_result(results[0])

    async def _create(self, text: str) -> Any:
        kwargs: Dict[str, Any] = {"input": text}
        if self._config.model:
            kwargs["model"] = self._config.model
        try:
            return await self._client.moderations.create(**kwargs)
        except Exception as exc:
            translated = translate_openai_error(exc)
            if translated is exc:
                raise
            raise translated from exc

    def _apply_verdict(self, text: str, verdict: ModerationVerdict) -> str:
        if not verdict.flagged:
            return text
        LOG.info("Moderation flagged input: %s", ", ".join(verdict.flagged_categories))
        if self._config.throw_error:
            raise ContentPolicyViolation(POLICY_VIOLATION_MESSAGE, verdict=verdict)
        return POLICY_VIOLATION_MESSAGE

    async def _call(
        self,
        values: ChainValues,
        *,
        signal: Optional[CancellationSignal] = None,
    ) -> ChainValues:
        text = values[self._config.input_key]
        verdict = await self.moderate(text, signal=signal)
        return {self._config.output_key: self._apply_verdict(text, verdict)}


def _results_of(response: Any) -> List[Any]:
    if isinstance(response, Mapping):
        results = response.get("results")
    else:
        results = getattr(response, "results", None)
    return list(results or [])


__all__ = [
    "OpenAIModerationChain",
    "OpenAIModerationConfig",
    "ModerationVerdict",
    "POLICY_VIOLATION_MESSAGE",
]
