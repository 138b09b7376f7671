"""Similarity search retriever for SQLite + sqlite-vec."""
from dataclasses import dataclass
from typing import List, Optional, Union

from vectorsmith.models.common import SqliteDistanceMetric
from vectorsmith.retrieval.base import DatabaseRetriever, RetrieveRequest
from vectorsmith.storage.schemas import VectorSearchResult
from vectorsmith.storage.sqlite import SqliteAdapter


@dataclass(frozen=True)
class SqliteRetrieveQuery:
    table_name: str
    query_vector: List[float]
    limit: int = 10
    # None means the adapter's configured metric
    metric: Optional[Union[str, SqliteDistanceMetric]] = None


class SqliteRetriever(DatabaseRetriever[SqliteRetrieveQuery, List[VectorSearchResult]]):

    def __init__(self, adapter: SqliteAdapter):
        self.adapter = adapter

    async def retrieve(
        self,
        request: RetrieveRequest[SqliteRetrieveQuery]
    ) -> List[VectorSearchResult]:
        query = request.query
        return await self.adapter.search_similar(
            query.table_name,
            query.query_vector,
            limit=query.limit,
            metric=query.metric
        )


__all__ = ["SqliteRetrieveQuery", "SqliteRetriever"]
