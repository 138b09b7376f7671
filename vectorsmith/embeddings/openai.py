"""
OpenAI embeddings provider.
"""

from vectorsmith.embeddings.client import EmbeddingClient
from vectorsmith.models.common import OpenAIEmbeddingModel


class OpenAIEmbeddingProvider(EmbeddingClient):
    """
    Embeddings from ``https://api.openai.com/v1/embeddings``.

    ``from_env()`` reads OPENAI_API_KEY and OPENAI_EMBEDDING_MODEL, falling
    back to text-embedding-3-small.
    """

    provider_name = "OpenAI"
    default_base_url = "https://api.openai.com/v1"
    model_enum = OpenAIEmbeddingModel
    api_key_env = "OPENAI_API_KEY"
    model_env = "OPENAI_EMBEDDING_MODEL"
    default_model = OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL.value


__all__ = ["OpenAIEmbeddingProvider", "OpenAIEmbeddingModel"]
