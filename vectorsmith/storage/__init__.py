"""
Storage layer: backend adapters and the aggregate adapter.

Provides adapters for Redis, PostgreSQL + pgvector, Qdrant and SQLite +
sqlite-vec behind one lifecycle contract.
"""

from vectorsmith.storage.schemas import (
    VectorSearchResult,
    QdrantPoint,
    QdrantSearchOptions,
    AdapterEvent
)
from vectorsmith.storage.base import BaseAdapter, EventSink, log_event
from vectorsmith.storage.redis import RedisAdapter
from vectorsmith.storage.pgvector import PgVectorAdapter
from vectorsmith.storage.qdrant import QdrantAdapter
from vectorsmith.storage.sqlite import SqliteAdapter
from vectorsmith.storage.adapter import VectorSmithAdapter

__all__ = [
    # Schemas
    "VectorSearchResult",
    "QdrantPoint",
    "QdrantSearchOptions",
    "AdapterEvent",
    # Adapters
    "BaseAdapter",
    "EventSink",
    "log_event",
    "RedisAdapter",
    "PgVectorAdapter",
    "QdrantAdapter",
    "SqliteAdapter",
    # Aggregate
    "VectorSmithAdapter",
]
