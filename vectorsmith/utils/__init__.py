"""
Common utilities module.

Provides shared utilities:
- Configuration (Pydantic Settings-based)
- Logging (structured logging with secret masking)
"""

from vectorsmith.utils.config import (
    RedisConfig,
    PgVectorConfig,
    QdrantConfig,
    SqliteConfig,
    SqliteExtensionConfig,
    VectorSmithAdapterConfig,
    EmbeddingOptions,
    EmbeddingProviderConfig,
    VectorSmithEmbeddingConfig,
    load_adapter_config,
    load_embedding_config
)
from vectorsmith.utils.logger import get_logger

__all__ = [
    # Config
    "RedisConfig",
    "PgVectorConfig",
    "QdrantConfig",
    "SqliteConfig",
    "SqliteExtensionConfig",
    "VectorSmithAdapterConfig",
    "EmbeddingOptions",
    "EmbeddingProviderConfig",
    "VectorSmithEmbeddingConfig",
    "load_adapter_config",
    "load_embedding_config",
    # Logging
    "get_logger",
]
