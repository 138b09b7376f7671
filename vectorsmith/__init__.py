"""
vectorsmith: One async facade over vector stores and embedding providers.

Wraps Redis, PostgreSQL + pgvector, Qdrant and SQLite + sqlite-vec behind a
single lifecycle contract, and Jina and OpenAI embeddings behind a single
provider registry.

Modules:
    storage: Backend adapters and the aggregate VectorSmithAdapter
    embeddings: HTTP embedding providers and the VectorSmithEmbedding registry
    retrieval: Typed per-backend retrievers
    security: Identifier quoting and vector validation
    utils: Configuration, logging
    models: Shared enums
"""

__version__ = "0.1.0"

from vectorsmith import storage, embeddings, retrieval, security, utils, models, exceptions

from vectorsmith.storage import VectorSmithAdapter
from vectorsmith.embeddings import VectorSmithEmbedding

__all__ = [
    "storage",
    "embeddings",
    "retrieval",
    "security",
    "utils",
    "models",
    "exceptions",
    "VectorSmithAdapter",
    "VectorSmithEmbedding",
    "__version__",
]
