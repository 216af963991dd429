# switchboard_sdk/vector/vector_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Vector store contract.

A `VectorStore` keeps `Document`s alongside their embeddings and answers
nearest-neighbour queries. Text-level operations (`add_texts`,
`similarity_search`, ...) go through the store's `Embeddings`; backends only
implement the vector-level hooks:

- `add_vectors(vectors, documents)`
- `similarity_search_vector_with_score(vector, k, filter)`

Scores are similarities: higher means closer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from switchboard_sdk.embedding.embedding_base import Embeddings, Vector

LOG = logging.getLogger(__name__)

MetadataFilter = Dict[str, Any]

VS = TypeVar("VS", bound="VectorStore")


@dataclass
class Document:
    """A piece of text plus arbitrary JSON-safe metadata."""

    page_content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class VectorStore(ABC):
    """Base class for vector stores."""

    def __init__(self, embeddings: Embeddings) -> None:
        self.embeddings = embeddings

    # --- backend hooks ----------------------------------------------------------

    @abstractmethod
    async def add_vectors(
        self,
        vectors: Sequence[Vector],
        documents: Sequence[Document],
    ) -> List[str]:
        """Store pre-computed vectors; returns the assigned ids."""

    @abstractmethod
    async def similarity_search_vector_with_score(
        self,
        query: Vector,
        k: int,
        filter: Optional[MetadataFilter] = None,
    ) -> List[Tuple[Document, float]]:
        """Up to `k` (document, score) pairs, best first."""

    # --- text-level API -----------------------------------------------------------

    async def add_documents(self, documents: Sequence[Document]) -> List[str]:
        if not documents:
            return []
        vectors = await self.embeddings.embed_documents([d.page_content for d in documents])
        return await self.add_vectors(vectors, documents)

    async def add_texts(
        self,
        texts: Sequence[str],
        metadatas: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> List[str]:
        if metadatas is not None and len(metadatas) != len(texts):
            raise ValueError("metadatas must have the same length as texts")
        docs = [
            Document(page_content=text, metadata=dict(metadatas[i]) if metadatas else {})
            for i, text in enumerate(texts)
        ]
        return await self.add_documents(docs)

    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: Optional[MetadataFilter] = None,
    ) -> List[Document]:
        results = await self.similarity_search_with_score(query, k, filter)
        return [doc for doc, _ in results]

    async def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: Optional[MetadataFilter] = None,
    ) -> List[Tuple[Document, float]]:
        vector = await self.embeddings.embed_query(query)
        return await self.similarity_search_vector_with_score(vector, k, filter)

    async def similarity_search_by_vector(
        self,
        vector: Vector,
        k: int = 4,
        filter: Optional[MetadataFilter] = None,
    ) -> List[Document]:
        results = await self.similarity_search_vector_with_score(vector, k, filter)
        return [doc for doc, _ in results]

    # --- constructors ---------------------------------------------------------------

    @classmethod
    async def from_documents(
        cls: Type[VS],
        documents: Sequence[Document],
        embeddings: Embeddings,
        **kwargs: Any,
    ) -> VS:
        store = cls(embeddings, **kwargs)
        await store.add_documents(documents)
        return store

    @classmethod
    async def from_texts(
        cls: Type[VS],
        texts: Sequence[str],
        metadatas: Optional[Sequence[Dict[str, Any]]],
        embeddings: Embeddings,
        **kwargs: Any,
    ) -> VS:
        store = cls(embeddings, **kwargs)
        await store.add_texts(texts, metadatas)
        return store


def filter_match(metadata: Optional[Dict[str, Any]], flt: Optional[MetadataFilter]) -> bool:
    """Equality-only metadata filter: every key in `flt` must match exactly."""
    if not flt:
        return True
    if not metadata:
        return False
    return all(k in metadata and metadata[k] == v for k, v in flt.items())


__all__ = ["Document", "MetadataFilter", "VectorStore", "filter_match"]
