"""Shared enums and tags."""

from vectorsmith.models.common import (
    BackendType,
    EmbeddingProviderType,
    PgVectorDistance,
    SqliteDistanceMetric,
    JinaEmbeddingModel,
    OpenAIEmbeddingModel
)

__all__ = [
    "BackendType",
    "EmbeddingProviderType",
    "PgVectorDistance",
    "SqliteDistanceMetric",
    "JinaEmbeddingModel",
    "OpenAIEmbeddingModel",
]
