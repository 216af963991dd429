# switchboard_sdk/embedding/openai_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
OpenAI embeddings adapter.

Texts are optionally stripped of newlines, split into batches of
`batch_size`, and each batch is sent as one `embeddings.create` request
through the shared `AsyncCaller`. Batches run concurrently; the caller's
concurrency bound applies, and the first failing batch cancels the rest.

Empty-result policy (OpenAI embeddings)
---------------------------------------
- `data` missing or empty for a non-empty batch -> EmptyResult("data")
- fewer/more vectors than inputs in a batch       -> EmptyResult("data")

Vectors are ordered by the provider's `index` field, not response order.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from switchboard_sdk.core.caller import AsyncCaller, CallerOptions, CancellationSignal
from switchboard_sdk.core.credentials import CredentialResolver
from switchboard_sdk.core.errors import EmptyResult
from switchboard_sdk.core.openai_support import build_openai_client, translate_openai_error
from switchboard_sdk.embedding.embedding_base import Embeddings, Vector, chunked

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenAIEmbeddingsConfig:
    """
    Attributes:
        model:           embedding model id.
        batch_size:      max texts per request.
        strip_new_lines: replace "\\n" with " " before embedding.
        dimensions:      output size for models that support shortening.
        base_url:        alternative API endpoint.
    """

    model: str = "text-embedding-ada-002"
    batch_size: int = 512
    strip_new_lines: bool = True
    dimensions: Optional[int] = None
    base_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")


class OpenAIEmbeddings(Embeddings):
    """
    Parameters
    ----------
    config:
        Base configuration; defaults to `OpenAIEmbeddingsConfig()`.
    api_key / organization / credential_resolver / client_options:
        Same meaning as for the moderation chain.
    client:
        Pre-built `AsyncOpenAI`-compatible client; skips credential lookup.
    **overrides:
        Field overrides applied on top of `config`.
    """

    def __init__(
        self,
        config: Optional[OpenAIEmbeddingsConfig] = None,
        *,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        credential_resolver: Optional[CredentialResolver] = None,
        client: Any = None,
        client_options: Optional[Mapping[str, Any]] = None,
        caller: Optional[AsyncCaller] = None,
        **overrides: Any,
    ) -> None:
        base = config or OpenAIEmbeddingsConfig()
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
        LOG.debug(
            "Initialized OpenAI embeddings: model=%s batch_size=%d",
            self._config.model,
            self._config.batch_size,
        )

    @property
    def config(self) -> OpenAIEmbeddingsConfig:
        return self._config

    async def embed_documents(
        self,
        texts: Sequence[str],
        *,
        signal: Optional[CancellationSignal] = None,
        timeout_s: Optional[float] = None,
    ) -> List[Vector]:
        if not texts:
            return []
        prepared = [self._prepare(t) for t in texts]
        options = CallerOptions(signal=signal, timeout_s=timeout_s)
        batches = list(chunked(prepared, self._config.batch_size))
        tasks = [
            asyncio.ensure_future(self.caller.call_with_options(options, self._embed_batch, b))
            for b in batches
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # Cancel the remaining batches before surfacing the first failure.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [vec for batch in results for vec in batch]

    async def embed_query(
        self,
        text: str,
        *,
        signal: Optional[CancellationSignal] = None,
        timeout_s: Optional[float] = None,
    ) -> Vector:
        vectors = await self.embed_documents([text], signal=signal, timeout_s=timeout_s)
        return vectors[0]

    def _prepare(self, text: str) -> str:
        return text.replace("\n", " ") if self._config.strip_new_lines else text

    async def _embed_batch(self, batch: List[str]) -> List[Vector]:
        kwargs: Dict[str, Any] = {"model": self._config.model, "input": batch}
        if self._config.dimensions is not None:
            kwargs["dimensions"] = self._config.dimensions
        try:
            response = await self._client.embeddings.create(**kwargs)
        except Exception as exc:
            translated = translate_openai_error(exc)
            if translated is exc:
                raise
            raise translated from exc
        return _extract_vectors(response, expected=len(batch))


def _extract_vectors(response: Any, *, expected: int) -> List[Vector]:
    data = response.get("data") if isinstance(response, Mapping) else getattr(response, "data", None)
    if not data:
        raise EmptyResult("data")
    if len(data) != expected:
        raise EmptyResult("data", f"Expected {expected} embeddings, got {len(data)}")

    def _field(item: Any, name: str) -> Any:
        return item.get(name) if isinstance(item, Mapping) else getattr(item, name, None)

    def _position(pair: Any) -> int:
        idx = _field(pair[1], "index")
        return idx if idx is not None else pair[0]

    ordered = sorted(enumerate(data), key=_position)
    return [list(_field(item, "embedding") or []) for _, item in ordered]


__all__ = ["OpenAIEmbeddings", "OpenAIEmbeddingsConfig"]
