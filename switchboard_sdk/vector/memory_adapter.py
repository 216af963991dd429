# switchboard_sdk/vector/memory_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
In-process vector store with brute-force cosine search.

Good for tests, prototypes and small corpora. Every query scans all
records; there is no persistence.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from switchboard_sdk.embedding.embedding_base import Embeddings, Vector
from switchboard_sdk.vector.vector_base import (
    Document,
    MetadataFilter,
    VectorStore,
    filter_match,
)

LOG = logging.getLogger(__name__)


def _cosine_sim(a: Sequence[float], b: Sequence[float]) -> float:
    num = sum(x * y for x, y in zip(a, b))
    den_a = math.sqrt(sum(x * x for x in a)) or 1.0
    den_b = math.sqrt(sum(y * y for y in b)) or 1.0
    return num / (den_a * den_b)


@dataclass(frozen=True)
class _Record:
    id: str
    vector: Tuple[float, ...]
    document: Document


class InMemoryVectorStore(VectorStore):
    """Brute-force cosine-similarity store held in a Python list."""

    def __init__(self, embeddings: Embeddings) -> None:
        super().__init__(embeddings)
        self._records: List[_Record] = []
        self._dimensions: Optional[int] = None

    def __len__(self) -> int:
        return len(self._records)

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    def _check_dimensions(self, vector: Sequence[float]) -> None:
        if self._dimensions is None:
            self._dimensions = len(vector)
        elif len(vector) != self._dimensions:
            raise ValueError(
                f"Vector dimension {len(vector)} does not match store dimension {self._dimensions}"
            )

    async def add_vectors(
        self,
        vectors: Sequence[Vector],
        documents: Sequence[Document],
    ) -> List[str]:
        if len(vectors) != len(documents):
            raise ValueError(
                f"Got {len(vectors)} vectors for {len(documents)} documents"
            )
        ids: List[str] = []
        for vector, doc in zip(vectors, documents):
            self._check_dimensions(vector)
            record = _Record(
                id=str(uuid.uuid4()),
                vector=tuple(float(x) for x in vector),
                document=replace(doc, metadata=dict(doc.metadata)),
            )
            self._records.append(record)
            ids.append(record.id)
        LOG.debug("Added %d vectors (total=%d)", len(ids), len(self._records))
        return ids

    async def similarity_search_vector_with_score(
        self,
        query: Vector,
        k: int,
        filter: Optional[MetadataFilter] = None,
    ) -> List[Tuple[Document, float]]:
        if k < 1:
            raise ValueError("k must be >= 1")
        if self._dimensions is not None and len(query) != self._dimensions:
            raise ValueError(
                f"Query dimension {len(query)} does not match store dimension {self._dimensions}"
            )
        scored = [
            (r.document, _cosine_sim(query, r.vector))
            for r in self._records
            if filter_match(r.document.metadata, filter)
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:k]

    async def delete(self, ids: Sequence[str]) -> int:
        wanted = set(ids)
        before = len(self._records)
        self._records = [r for r in self._records if r.id not in wanted]
        return before - len(self._records)

    def merge_from(self, other: "InMemoryVectorStore") -> None:
        """Copy every record of `other` into this store. `other` is unchanged."""
        if not isinstance(other, InMemoryVectorStore):
            raise TypeError("Can only merge from another InMemoryVectorStore")
        if (
            self._dimensions is not None
            and other.dimensions is not None
            and self._dimensions != other.dimensions
        ):
            raise ValueError(
                f"Cannot merge stores of dimension {other.dimensions} into {self._dimensions}"
            )
        for record in other._records:
            self._check_dimensions(record.vector)
            self._records.append(record)


__all__ = ["InMemoryVectorStore"]
