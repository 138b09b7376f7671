"""Shared fixtures for vectorsmith tests."""
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from vectorsmith.storage.schemas import AdapterEvent


def _async_cm(value):
    """MagicMock usable as ``async with ... as value``."""
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=value)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


@pytest.fixture
def async_cm():
    return _async_cm


@pytest.fixture
def events() -> List[AdapterEvent]:
    return []


@pytest.fixture
def event_sink(events):
    return events.append


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep developer environment variables and .env files out of config tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "REDIS_URL", "REDIS_HOST", "REDIS_PORT", "REDIS_PASSWORD", "REDIS_DATABASE",
        "PG_URL", "PG_HOST", "PG_PORT", "PG_USER", "PG_PASSWORD", "PG_DATABASE",
        "QDRANT_URL", "QDRANT_ENDPOINT", "QDRANT_CLUSTER_ID", "QDRANT_API_KEY",
        "QDRANT_DEFAULT_COLLECTION",
        "SQLITE_DATABASE_PATH", "SQLITE_VECTOR_DIMENSION", "SQLITE_DISTANCE_METRIC",
        "JINA_API_KEY", "JINA_EMBEDDING_MODEL", "OPENAI_API_KEY", "OPENAI_EMBEDDING_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
