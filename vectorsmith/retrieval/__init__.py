"""
Retrieval module.

Thin typed wrappers that run one query against one backend adapter.
"""

from vectorsmith.retrieval.base import DatabaseRetriever, RetrieveRequest
from vectorsmith.retrieval.redis import RedisRetrieveQuery, RedisRetriever
from vectorsmith.retrieval.pgvector import PgVectorRetrieveQuery, PgVectorRetriever
from vectorsmith.retrieval.qdrant import QdrantRetrieveQuery, QdrantRetriever
from vectorsmith.retrieval.sqlite import SqliteRetrieveQuery, SqliteRetriever

__all__ = [
    "DatabaseRetriever",
    "RetrieveRequest",
    "RedisRetrieveQuery",
    "RedisRetriever",
    "PgVectorRetrieveQuery",
    "PgVectorRetriever",
    "QdrantRetrieveQuery",
    "QdrantRetriever",
    "SqliteRetrieveQuery",
    "SqliteRetriever",
]
