"""Similarity search retriever for PostgreSQL + pgvector."""
from dataclasses import dataclass
from typing import List, Union

from vectorsmith.models.common import PgVectorDistance
from vectorsmith.retrieval.base import DatabaseRetriever, RetrieveRequest
from vectorsmith.storage.pgvector import PgVectorAdapter
from vectorsmith.storage.schemas import VectorSearchResult


@dataclass(frozen=True)
class PgVectorRetrieveQuery:
    table_name: str
    query_vector: List[float]
    limit: int = 10
    distance: Union[str, PgVectorDistance] = PgVectorDistance.COSINE


class PgVectorRetriever(DatabaseRetriever[PgVectorRetrieveQuery, List[VectorSearchResult]]):

    def __init__(self, adapter: PgVectorAdapter):
        self.adapter = adapter

    async def retrieve(
        self,
        request: RetrieveRequest[PgVectorRetrieveQuery]
    ) -> List[VectorSearchResult]:
        query = request.query
        return await self.adapter.search_similar(
            query.table_name,
            query.query_vector,
            limit=query.limit,
            distance=query.distance
        )


__all__ = ["PgVectorRetrieveQuery", "PgVectorRetriever"]
