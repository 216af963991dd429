# switchboard_sdk/embedding/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Embeddings contract and provider adapters.
"""

from switchboard_sdk.embedding.embedding_base import Embeddings, Vector
from switchboard_sdk.embedding.openai_adapter import OpenAIEmbeddings, OpenAIEmbeddingsConfig

__all__ = [
    "Embeddings",
    "Vector",
    "OpenAIEmbeddings",
    "OpenAIEmbeddingsConfig",
]
