"""
Pydantic schemas for vector records, search results and adapter events.

Distance values are backend-native and are not normalized across backends.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class VectorSearchResult(BaseModel):
    """
    Single similarity search hit from a relational or embedded backend.

    ``distance`` is the backend's own value: lower means closer for every
    metric PgVector and SQLite expose.
    """

    id: int = Field(..., description="Row id")
    embedding: List[float] = Field(default_factory=list, description="Stored vector")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Stored metadata")
    distance: float = Field(..., description="Backend-native distance")


class QdrantPoint(BaseModel):
    """Point to upsert into a Qdrant collection."""

    id: Union[int, str] = Field(..., description="Caller-assigned point id (unsigned int or UUID)")
    vector: List[float] = Field(..., description="Dense vector")
    payload: Optional[Dict[str, Any]] = Field(None, description="Optional payload")


class QdrantSearchOptions(BaseModel):
    """Options accepted by QdrantAdapter.search."""

    limit: int = Field(default=10, ge=1, description="Maximum number of hits")
    filter: Optional[Dict[str, Any]] = Field(None, description="Qdrant filter (must/should/must_not)")
    score_threshold: Optional[float] = Field(None, description="Minimum score")
    with_payload: bool = Field(default=True, description="Return payloads")


@dataclass
class AdapterEvent:
    """
    Lifecycle or driver event emitted by a backend adapter.

    Attributes:
        backend: Backend display name ('Redis', 'PgVector', ...)
        name: Event name ('connected', 'disconnected', 'connect_failed', 'error')
        detail: Free-form context (target host, table name, ...)
        error: Exception for failure events
    """
    backend: str
    name: str
    detail: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None
