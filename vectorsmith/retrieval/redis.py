"""Key lookup retriever for Redis."""
from dataclasses import dataclass
from typing import Optional

from vectorsmith.retrieval.base import DatabaseRetriever, RetrieveRequest
from vectorsmith.storage.redis import RedisAdapter


@dataclass(frozen=True)
class RedisRetrieveQuery:
    key: str


class RedisRetriever(DatabaseRetriever[RedisRetrieveQuery, Optional[str]]):
    """Returns the value stored at ``query.key``, or None."""

    def __init__(self, adapter: RedisAdapter):
        self.adapter = adapter

    async def retrieve(self, request: RetrieveRequest[RedisRetrieveQuery]) -> Optional[str]:
        return await self.adapter.get(request.query.key)


__all__ = ["RedisRetrieveQuery", "RedisRetriever"]
