# switchboard_sdk/llm/ai21_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
AI21 Studio completion adapter.

Maps the `BaseLLM` contract onto AI21's `/{model}/complete` endpoint over
plain HTTPS (httpx), without a vendor SDK.

Pipeline
--------
- Config:   `AI21Config` (frozen) + API key resolved at construction from the
            explicit argument or `AI21_API_KEY`.
- Request:  camelCase JSON body; stop sequences merged with the call-time
            ones (both non-empty -> ConflictingParameter).
- Execute:  one POST per attempt through the shared `AsyncCaller`;
            non-2xx -> HttpStatusError, no response -> TransportError.
- Response: `completions[0].data.text`.

Empty-result policy (AI21-specific)
-----------------------------------
- `completions` missing/empty, or first entry without `data` -> EmptyResult.
- `data.text` missing or null -> "" (AI21 omits text for empty completions).

Usage
-----
    llm = AI21(model="j2-ultra", temperature=0.2)
    text = await llm.call("Tell me a joke.")
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import httpx

from switchboard_sdk.core.caller import AsyncCaller
from switchboard_sdk.core.config import get_settings
from switchboard_sdk.core.credentials import CredentialResolver, resolve_credential
from switchboard_sdk.core.errors import EmptyResult, HttpStatusError, TransportError
from switchboard_sdk.llm.llm_base import BaseLLM, CallOptions, merge_stop_sequences

LOG = logging.getLogger(__name__)

AI21_API_KEY_ENV = "AI21_API_KEY"
DEFAULT_BASE_URL = "https://api.ai21.com/studio/v1"
EXPERIMENTAL_BASE_URL = "https://api.ai21.com/studio/v1/experimental"

# Models only served from the experimental path.
EXPERIMENTAL_MODELS = frozenset({"j1-grande-instruct"})


@dataclass(frozen=True)
class AI21PenaltyData:
    """
    How strongly to discourage token categories during generation.

    The default applies no penalty (scale 0) to every category.
    """

    scale: float = 0
    apply_to_whitespaces: bool = True
    apply_to_punctuations: bool = True
    apply_to_numbers: bool = True
    apply_to_stopwords: bool = True
    apply_to_emojis: bool = True

    def to_wire(self) -> Dict[str, Any]:
        return {
            "scale": self.scale,
            "applyToWhitespaces": self.apply_to_whitespaces,
            "applyToPunctuations": self.apply_to_punctuations,
            "applyToNumbers": self.apply_to_numbers,
            "applyToStopwords": self.apply_to_stopwords,
            "applyToEmojis": self.apply_to_emojis,
        }


@dataclass(frozen=True)
class AI21Config:
    """
    Static configuration for one AI21 adapter instance.

    Attributes:
        model:             AI21 model id, templated into the endpoint URL.
        temperature:       sampling temperature.
        max_tokens:        upper bound on generated tokens.
        min_tokens:        lower bound on generated tokens.
        top_p:             nucleus sampling mass.
        presence_penalty:  see `AI21PenaltyData`.
        count_penalty:     see `AI21PenaltyData`.
        frequency_penalty: see `AI21PenaltyData`.
        num_results:       completions requested per call.
        logit_bias:        optional token -> bias map; omitted when None.
        stop:              default stop sequences.
        base_url:          overrides the model-dependent default base URL.
    """

    model: str = "j2-jumbo-instruct"
    temperature: float = 0.7
    max_tokens: int = 1024
    min_tokens: int = 0
    top_p: float = 1
    presence_penalty: AI21PenaltyData = field(default_factory=AI21PenaltyData)
    count_penalty: AI21PenaltyData = field(default_factory=AI21PenaltyData)
    frequency_penalty: AI21PenaltyData = field(default_factory=AI21PenaltyData)
    num_results: int = 1
    logit_bias: Optional[Mapping[str, float]] = None
    stop: Optional[Tuple[str, ...]] = None
    base_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stop is not None:
            object.__setattr__(self, "stop", tuple(self.stop))
        if self.logit_bias is not None:
            object.__setattr__(self, "logit_bias", dict(self.logit_bias))

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.model in EXPERIMENTAL_MODELS:
            return EXPERIMENTAL_BASE_URL
        return DEFAULT_BASE_URL

    @property
    def complete_url(self) -> str:
        return f"{self.resolved_base_url}/{self.model}/complete"

    def default_params(self) -> Dict[str, Any]:
        """Sampling parameters in AI21's wire shape."""
        params: Dict[str, Any] = {
            "temperature": self.temperature,
            "maxTokens": self.max_tokens,
            "minTokens": self.min_tokens,
            "topP": self.top_p,
            "presencePenalty": self.presence_penalty.to_wire(),
            "countPenalty": self.count_penalty.to_wire(),
            "frequencyPenalty": self.frequency_penalty.to_wire(),
            "numResults": self.num_results,
        }
        if self.logit_bias is not None:
            params["logitBias"] = dict(self.logit_bias)
        return params


class AI21(BaseLLM):
    """
    AI21 Studio completion adapter.

    Parameters
    ----------
    config:
        Base configuration; defaults to `AI21Config()`.
    api_key:
        Explicit API key. Falls back to `AI21_API_KEY` via the resolver.
    credential_resolver:
        Where to look up the API key when not passed explicitly.
    client:
        Pre-configured `httpx.AsyncClient`. When omitted the adapter creates
        and owns one (closed by `aclose()`).
    caller:
        Shared retrying caller; defaults to `AsyncCaller.from_settings()`.
    timeout_s:
        Per-request HTTP timeout; defaults to SWITCHBOARD_TIMEOUT_S.
    **overrides:
        Field overrides applied on top of `config` (e.g. `model="j2-mid"`).

    Raises
    ------
    MissingCredential
        No API key explicitly or through the resolver.
    """

    def __init__(
        self,
        config: Optional[AI21Config] = None,
        *,
        api_key: Optional[str] = None,
        credential_resolver: Optional[CredentialResolver] = None,
        client: Optional[httpx.AsyncClient] = None,
        caller: Optional[AsyncCaller] = None,
        timeout_s: Optional[float] = None,
        **overrides: Any,
    ) -> None:
        base = config or AI21Config()
        self._config = dataclasses.replace(base, **overrides) if overrides else base
        self._api_key = resolve_credential(api_key, AI21_API_KEY_ENV, credential_resolver)
        super().__init__(caller=caller)

        self._timeout_s = timeout_s if timeout_s is not None else get_settings().timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

        LOG.debug(
            "Initialized AI21 adapter: model=%s base_url=%s",
            self._config.model,
            self._config.resolved_base_url,
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def config(self) -> AI21Config:
        return self._config

    @property
    def llm_type(self) -> str:
        return "ai21"

    @property
    def identifying_params(self) -> Mapping[str, Any]:
        return {**self._config.default_params(), "model": self._config.model}

    @staticmethod
    def default_penalty_data() -> AI21PenaltyData:
        return AI21PenaltyData()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _build_request(self, prompt: str, options: CallOptions) -> Dict[str, Any]:
        stop = merge_stop_sequences(self._config.stop, options.stop)
        return {"prompt": prompt, "stopSequences": stop, **self._config.default_params()}

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, url: str, body: Dict[str, Any]) -> Any:
        """Issue exactly one POST and return the decoded JSON body."""
        try:
            resp = await self._client.post(
                url,
                json=body,
                headers=self._headers,
                timeout=self._timeout_s,
            )
        except httpx.TransportError as exc:
            raise TransportError(str(exc) or type(exc).__name__, url=url) from exc

        if not resp.is_success:
            raise HttpStatusError(resp.status_code, resp, url=url, provider="AI21")
        try:
            return resp.json()
        except ValueError as exc:
            raise EmptyResult("completions", "AI21 returned a non-JSON body") from exc

    async def _call(self, prompt: str, options: CallOptions) -> str:
        body = self._build_request(prompt, options)
        url = self._config.complete_url
        data = await self.caller.call_with_options(options, self._post, url, body)
        return _extract_completion_text(data)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _extract_completion_text(payload: Any) -> str:
    """Pull `completions[0].data.text` out of an AI21 response envelope."""
    completions = payload.get("completions") if isinstance(payload, Mapping) else None
    if not isinstance(completions, Sequence) or isinstance(completions, (str, bytes)) or not completions:
        raise EmptyResult("completions")
    first = completions[0]
    data = first.get("data") if isinstance(first, Mapping) else None
    if not isinstance(data, Mapping):
        raise EmptyResult("completions")
    text = data.get("text")
    return text if isinstance(text, str) else ""


__all__ = [
    "AI21",
    "AI21Config",
    "AI21PenaltyData",
    "AI21_API_KEY_ENV",
    "DEFAULT_BASE_URL",
    "EXPERIMENTAL_BASE_URL",
]
