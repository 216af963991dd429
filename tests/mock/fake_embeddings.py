# SPDX-License-Identifier: Apache-2.0
"""
Deterministic bag-of-words embeddings for vector store tests.

Each text becomes a vector of keyword counts over a fixed vocabulary, so
"cat" queries land nearest to documents about cats.
"""

from __future__ import annotations

from typing import List, Sequence

from switchboard_sdk.embedding.embedding_base import Embeddings, Vector

VOCABULARY = ("cat", "dog", "fish", "bird")


class KeywordEmbeddings(Embeddings):
    def __init__(self, vocabulary: Sequence[str] = VOCABULARY) -> None:
        super().__init__()
        self.vocabulary = tuple(vocabulary)
        self.calls = 0

    async def embed_documents(self, texts: Sequence[str]) -> List[Vector]:
        self.calls += 1
        return [self._vector(t) for t in texts]

    def _vector(self, text: str) -> Vector:
        words = text.lower().split()
        return [float(words.count(term)) for term in self.vocabulary]
