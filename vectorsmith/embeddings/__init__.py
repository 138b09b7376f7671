"""
Embeddings module.

Provides HTTP embedding providers (Jina, OpenAI) and the provider registry.
"""

from vectorsmith.embeddings.client import EmbeddingClient
from vectorsmith.embeddings.jina import JinaEmbeddingProvider
from vectorsmith.embeddings.openai import OpenAIEmbeddingProvider
from vectorsmith.embeddings.registry import VectorSmithEmbedding
from vectorsmith.models.common import (
    EmbeddingProviderType,
    JinaEmbeddingModel,
    OpenAIEmbeddingModel
)

__all__ = [
    "EmbeddingClient",
    "JinaEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "VectorSmithEmbedding",
    "EmbeddingProviderType",
    "JinaEmbeddingModel",
    "OpenAIEmbeddingModel",
]
