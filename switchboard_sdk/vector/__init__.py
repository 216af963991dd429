# switchboard_sdk/vector/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Vector store contract and the in-memory implementation.
"""

from switchboard_sdk.vector.memory_adapter import InMemoryVectorStore
from switchboard_sdk.vector.vector_base import (
    Document,
    MetadataFilter,
    VectorStore,
    filter_match,
)

__all__ = [
    "Document",
    "InMemoryVectorStore",
    "MetadataFilter",
    "VectorStore",
    "filter_match",
]
