"""
Jina AI embeddings provider.
"""

from vectorsmith.embeddings.client import EmbeddingClient
from vectorsmith.models.common import JinaEmbeddingModel


class JinaEmbeddingProvider(EmbeddingClient):
    """
    Embeddings from ``https://api.jina.ai/v1/embeddings``.

    ``from_env()`` reads JINA_API_KEY and JINA_EMBEDDING_MODEL; the model
    variable is required.

    Example:
        >>> provider = JinaEmbeddingProvider(
        ...     api_key, JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B,
        ...     EmbeddingOptions(expected_dimensions=896, timeout=30)
        ... )
        >>> vectors = await provider.embed(["def add(a, b): return a + b"])
    """

    provider_name = "Jina"
    default_base_url = "https://api.jina.ai/v1"
    model_enum = JinaEmbeddingModel
    api_key_env = "JINA_API_KEY"
    model_env = "JINA_EMBEDDING_MODEL"


__all__ = ["JinaEmbeddingProvider", "JinaEmbeddingModel"]
