"""Similarity search retriever for Qdrant."""
from dataclasses import dataclass, field
from typing import List, Optional

from qdrant_client import models

from vectorsmith.retrieval.base import DatabaseRetriever, RetrieveRequest
from vectorsmith.storage.qdrant import QdrantAdapter
from vectorsmith.storage.schemas import QdrantSearchOptions


@dataclass(frozen=True)
class QdrantRetrieveQuery:
    """
    Attributes:
        collection_name: Target collection (None uses the adapter's default collection)
        vector: Query vector
        options: limit, filter, score_threshold and with_payload
    """
    collection_name: Optional[str]
    vector: List[float]
    options: QdrantSearchOptions = field(default_factory=QdrantSearchOptions)


class QdrantRetriever(DatabaseRetriever[QdrantRetrieveQuery, List[models.ScoredPoint]]):

    def __init__(self, adapter: QdrantAdapter):
        self.adapter = adapter

    async def retrieve(
        self,
        request: RetrieveRequest[QdrantRetrieveQuery]
    ) -> List[models.ScoredPoint]:
        query = request.query
        options = query.options
        return await self.adapter.search(
            query.collection_name,
            query.vector,
            limit=options.limit,
            filter=options.filter,
            score_threshold=options.score_threshold,
            with_payload=options.with_payload
        )


__all__ = ["QdrantRetrieveQuery", "QdrantRetriever"]
