"""Tests for configuration loading."""
import pytest
from pydantic import ValidationError

from vectorsmith.models.common import EmbeddingProviderType
from vectorsmith.utils.config import (
    PgVectorConfig,
    QdrantConfig,
    RedisConfig,
    SqliteConfig,
    load_adapter_config,
    load_embedding_config,
)


def test_backend_defaults():
    assert RedisConfig().port == 6379
    assert PgVectorConfig().port == 5432
    assert PgVectorConfig().user == "postgres"
    assert QdrantConfig().endpoint == "http://localhost:6333"
    assert SqliteConfig(vector_dimension=3).database_path == ":memory:"


def test_backend_config_reads_prefixed_env(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "cache")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("QDRANT_API_KEY", "qk")

    assert RedisConfig().host == "cache"
    assert RedisConfig().port == 6380
    assert QdrantConfig().api_key == "qk"


def test_sqlite_requires_dimension():
    with pytest.raises(ValidationError):
        SqliteConfig()


def test_load_adapter_config_only_builds_given_backends():
    config = load_adapter_config({"redis": {"host": "cache", "port": 6380}})

    assert config.redis.port == 6380
    assert config.pgvector is None
    assert config.qdrant is None
    assert config.sqlite is None


def test_load_embedding_config():
    config = load_embedding_config({
        "default_provider": "OPENAI",
        "openai": {"api_key": "sk", "model": "text-embedding-3-small", "options": {"timeout": 5}},
    })

    assert config.default_provider == EmbeddingProviderType.OPENAI
    assert config.openai.options.timeout == 5
    assert config.openai.options.expected_dimensions is None
    assert config.jina is None


def test_embedding_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        load_embedding_config({"jina": {"api_key": "k", "model": "m", "options": {"timeout": 0}}})
