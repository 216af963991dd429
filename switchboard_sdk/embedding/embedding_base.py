# switchboard_sdk/embedding/embedding_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Embeddings contract: text in, dense vectors out.

- `embed_documents()`  many texts -> one vector per text, in input order
- `embed_query()`      one search query -> one vector

Providers may embed queries and documents differently; the default
`embed_query()` simply embeds the query as a one-document batch.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, TypeVar

from switchboard_sdk.core.caller import AsyncCaller

LOG = logging.getLogger(__name__)

T = TypeVar("T")

Vector = List[float]


class Embeddings(ABC):
    """Base class for embedding adapters."""

    def __init__(self, *, caller: Optional[AsyncCaller] = None) -> None:
        self.caller: AsyncCaller = caller or AsyncCaller.from_settings()

    async def __aenter__(self) -> "Embeddings":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        return None

    @abstractmethod
    async def embed_documents(self, texts: Sequence[str]) -> List[Vector]:
        """Embed each text; the result has one vector per input, same order."""

    async def embed_query(self, text: str) -> Vector:
        vectors = await self.embed_documents([text])
        return vectors[0]


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most `size` items."""
    if size < 1:
        raise ValueError("size must be >= 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


__all__ = ["Embeddings", "Vector", "chunked"]
