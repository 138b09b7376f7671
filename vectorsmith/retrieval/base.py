"""
Retriever contract.

A retriever wraps one backend adapter and turns a typed query into that
backend's native result shape. Retrievers hold no state beyond the adapter.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

Q = TypeVar("Q")
R = TypeVar("R")


@dataclass(frozen=True)
class RetrieveRequest(Generic[Q]):
    """Envelope around a backend-specific query."""
    query: Q


class DatabaseRetriever(ABC, Generic[Q, R]):
    """Base class for backend retrievers."""

    @abstractmethod
    async def retrieve(self, request: RetrieveRequest[Q]) -> R:
        """Run the request against the wrapped adapter."""


__all__ = ["RetrieveRequest", "DatabaseRetriever"]
