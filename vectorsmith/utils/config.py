"""
Configuration management using Pydantic Settings.

Provides one connection config per backend and one config per embedding
provider. Backend configs read environment variables (and a .env file) when
instantiated directly, e.g. ``RedisConfig()`` picks up ``REDIS_HOST``.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vectorsmith.models.common import EmbeddingProviderType


class RedisConfig(BaseSettings):
    """Connection settings for Redis."""

    url: Optional[str] = Field(None, description="Full redis:// URL (overrides host/port)")
    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    password: Optional[str] = Field(None, description="Redis password")
    database: Optional[int] = Field(None, ge=0, description="Redis database index")

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class PgVectorConfig(BaseSettings):
    """Connection settings for PostgreSQL with the pgvector extension."""

    url: Optional[str] = Field(None, description="PostgreSQL connection URI (overrides fields below)")
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    database: str = Field(default="postgres", description="Database name")
    ssl: bool = Field(default=False, description="Require SSL")

    # Pool sizing
    pool_min_size: int = Field(default=1, ge=0, description="Minimum pooled connections")
    pool_max_size: int = Field(default=10, ge=1, description="Maximum pooled connections")

    model_config = SettingsConfigDict(
        env_prefix="PG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class QdrantConfig(BaseSettings):
    """Connection settings for Qdrant (self-hosted or cloud)."""

    url: Optional[str] = Field(None, description="Full Qdrant URL (overrides endpoint/cluster_id)")
    endpoint: str = Field(default="http://localhost:6333", description="Qdrant endpoint")
    cluster_id: Optional[str] = Field(None, description="Cloud cluster id appended to the endpoint")
    api_key: Optional[str] = Field(None, description="Qdrant API key")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout (seconds)")
    default_collection: Optional[str] = Field(None, description="Collection used when none is given")

    model_config = SettingsConfigDict(
        env_prefix="QDRANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class SqliteExtensionConfig(BaseModel):
    """Additional native extension loaded after sqlite-vec."""
    path: str = Field(..., description="Path to the shared library")
    entry_point: Optional[str] = Field(None, description="Optional entry point symbol")


class SqliteConfig(BaseSettings):
    """Settings for an embedded SQLite database with sqlite-vec."""

    database_path: str = Field(default=":memory:", description="SQLite database file")
    vector_dimension: int = Field(..., description="Dimension of every stored vector")
    default_table: Optional[str] = Field(None, description="Table created on connect")
    distance_metric: str = Field(default="cosine", description="Distance metric: cosine or l2")
    vector_type: str = Field(default="FLOAT32", description="Vector storage type")
    pragmas: Dict[str, Union[str, int, bool]] = Field(default_factory=dict, description="PRAGMAs applied on connect")
    extensions: List[SqliteExtensionConfig] = Field(default_factory=list, description="Extra native extensions")

    model_config = SettingsConfigDict(
        env_prefix="SQLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class VectorSmithAdapterConfig(BaseModel):
    """
    Aggregate backend configuration.

    A backend whose field is None is not constructed at all.
    """
    redis: Optional[RedisConfig] = None
    pgvector: Optional[PgVectorConfig] = None
    qdrant: Optional[QdrantConfig] = None
    sqlite: Optional[SqliteConfig] = None


class EmbeddingOptions(BaseModel):
    """Per-provider HTTP options."""
    base_url: Optional[str] = Field(None, description="API base URL (provider default if None)")
    timeout: float = Field(default=60.0, gt=0, description="Whole-request deadline (seconds)")
    expected_dimensions: Optional[int] = Field(None, ge=1, description="Required vector length")


class EmbeddingProviderConfig(BaseModel):
    """API key, model and options for one embedding provider."""
    api_key: str = Field(..., description="Bearer token for the embeddings API")
    model: str = Field(..., description="Embedding model name")
    options: EmbeddingOptions = Field(default_factory=EmbeddingOptions)


class VectorSmithEmbeddingConfig(BaseModel):
    """Aggregate embedding configuration."""
    default_provider: Optional[EmbeddingProviderType] = None
    jina: Optional[EmbeddingProviderConfig] = None
    openai: Optional[EmbeddingProviderConfig] = None


def load_adapter_config(config_dict: Dict[str, Any]) -> VectorSmithAdapterConfig:
    """
    Build an adapter config from a plain dictionary.

    Example:
        >>> config = load_adapter_config({"redis": {"host": "cache", "port": 6380}})
        >>> config.redis.port
        6380
    """
    return VectorSmithAdapterConfig.model_validate(config_dict)


def load_embedding_config(config_dict: Dict[str, Any]) -> VectorSmithEmbeddingConfig:
    """Build an embedding config from a plain dictionary."""
    return VectorSmithEmbeddingConfig.model_validate(config_dict)
