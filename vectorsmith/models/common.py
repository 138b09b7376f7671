"""
Shared enums used across storage adapters and embedding providers.

These tags select backends and providers explicitly instead of relying on
runtime type inspection.
"""

from enum import Enum


class BackendType(str, Enum):
    """Backend kinds the aggregate adapter can hold."""
    REDIS = "redis"
    PGVECTOR = "pgvector"
    QDRANT = "qdrant"
    SQLITE = "sqlite"

    @property
    def display_name(self) -> str:
        return _BACKEND_DISPLAY_NAMES[self]


_BACKEND_DISPLAY_NAMES = {
    BackendType.REDIS: "Redis",
    BackendType.PGVECTOR: "PgVector",
    BackendType.QDRANT: "Qdrant",
    BackendType.SQLITE: "SQLite",
}


class EmbeddingProviderType(str, Enum):
    """Embedding provider tags."""
    JINA = "JINA"
    OPENAI = "OPENAI"


class PgVectorDistance(str, Enum):
    """pgvector distance operators: cosine (<=>), L2 (<->), inner product (<#>)."""
    COSINE = "cosine"
    L2 = "l2"
    INNER_PRODUCT = "inner_product"


class SqliteDistanceMetric(str, Enum):
    """Distance functions provided by sqlite-vec."""
    COSINE = "cosine"
    L2 = "l2"


class JinaEmbeddingModel(str, Enum):
    CODE_EMBEDDINGS_0_5B = "jina-code-embeddings-0.5b"
    CODE_EMBEDDINGS_1_5B = "jina-code-embeddings-1.5b"
    EMBEDDINGS_V2_BASE_CODE = "jina-embeddings-v2-base-code"


class OpenAIEmbeddingModel(str, Enum):
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"


__all__ = [
    "BackendType",
    "EmbeddingProviderType",
    "PgVectorDistance",
    "SqliteDistanceMetric",
    "JinaEmbeddingModel",
    "OpenAIEmbeddingModel",
]
