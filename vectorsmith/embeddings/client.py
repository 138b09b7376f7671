"""
HTTP client base for embeddings APIs.

Provides async single-shot embedding requests with:
- Bearer authentication
- Whole-request deadline enforced by cancellation
- Status/body reporting for upstream failures
- Dimension validation of every returned vector

There is no retry, batching or rate limiting: one call, one request.
"""

import asyncio
import os
from typing import Any, ClassVar, List, Optional, Type

import httpx

from vectorsmith.exceptions import (
    ConfigurationError,
    EmbeddingTimeoutError,
    MalformedResponseError,
    UpstreamHttpError
)
from vectorsmith.security.validation import is_finite_vector, validate_dimension
from vectorsmith.utils.config import EmbeddingOptions
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingClient:
    """
    Base class for OpenAI-compatible ``POST {base_url}/embeddings`` APIs.

    Subclasses set the provider name, default base URL, model enum and the
    environment variable names used by from_env().

    Example:
        >>> provider = OpenAIEmbeddingProvider(api_key, OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL)
        >>> vectors = await provider.embed(["hello world", "ciao mondo"])
        >>> vector = await provider.embed_one("hello world")
    """

    provider_name: ClassVar[str] = "Embeddings"
    default_base_url: ClassVar[str] = ""
    model_enum: ClassVar[Optional[Type]] = None
    api_key_env: ClassVar[str] = ""
    model_env: ClassVar[str] = ""
    default_model: ClassVar[Optional[str]] = None

    def __init__(
        self,
        api_key: str,
        model: Any,
        options: Optional[EmbeddingOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the provider.

        Args:
            api_key: Bearer token for the API
            model: Model name (enum member or its string value)
            options: base_url, timeout (seconds) and expected_dimensions
            http_client: Optional shared httpx client (default: one client per call)
        """
        if not api_key:
            raise ConfigurationError(f"{type(self).__name__}: api_key is required")
        if not model:
            raise ConfigurationError(f"{type(self).__name__}: model is required")

        options = options or EmbeddingOptions()
        self.api_key = api_key
        self.model = self.parse_model(model)
        self.base_url = (options.base_url or self.default_base_url).rstrip("/")
        self.timeout = options.timeout
        self.expected_dimensions = options.expected_dimensions
        self.http_client = http_client

    @classmethod
    def parse_model(cls, value: Any) -> str:
        """Validate a model name against the provider's model enum."""
        if cls.model_enum is None:
            return str(value)
        try:
            return cls.model_enum(value).value
        except ValueError:
            allowed = ", ".join(m.value for m in cls.model_enum)
            raise ConfigurationError(
                f'Invalid {cls.model_env or "model"} "{value}". Valid values: {allowed}'
            ) from None

    @classmethod
    def from_env(
        cls,
        options: Optional[EmbeddingOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "EmbeddingClient":
        """Build a provider from ``<PROVIDER>_API_KEY`` and ``<PROVIDER>_EMBEDDING_MODEL``."""
        api_key = os.getenv(cls.api_key_env, "")
        model = os.getenv(cls.model_env) or cls.default_model or ""
        return cls(api_key, model, options, http_client=http_client)

    async def embed(self, texts: List[str]) -> List[List[float]]:
        """
        Embed a batch of texts in a single request.

        Raises:
            ValueError: If ``texts`` is empty
            UpstreamHttpError: On a non-success status
            EmbeddingTimeoutError: If the call exceeds ``timeout``
            MalformedResponseError: If the body has no ``data`` array or a
                vector count different from ``len(texts)``
            DimensionMismatchError: If any vector has the wrong length
        """
        if not isinstance(texts, (list, tuple)) or len(texts) == 0:
            raise ValueError("embed: provide a non-empty list of texts")

        try:
            payload = await asyncio.wait_for(self._request(list(texts)), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise EmbeddingTimeoutError(self.provider_name, self.timeout) from None

        vectors = self._parse_vectors(payload)
        if len(vectors) != len(texts):
            raise MalformedResponseError(
                f"{self.provider_name} embeddings: expected {len(texts)} vectors, received {len(vectors)}"
            )
        for vector in vectors:
            validate_dimension(vector, self.expected_dimensions, context=f"{self.provider_name} embeddings")

        logger.debug(f"{self.provider_name}: embedded {len(texts)} texts with {self.model}")
        return vectors

    async def embed_one(self, text: str) -> List[float]:
        vectors = await self.embed([text])
        return vectors[0]

    async def _request(self, texts: List[str]) -> Any:
        if self.http_client is not None:
            return await self._post(self.http_client, texts)
        async with httpx.AsyncClient() as client:
            return await self._post(client, texts)

    async def _post(self, client: httpx.AsyncClient, texts: List[str]) -> Any:
        url = f"{self.base_url}/embeddings"
        logger.debug(f"Sending {len(texts)} texts to {url}")

        response = await client.post(
            url,
            json={"model": self.model, "input": texts},
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json"
            },
            timeout=self.timeout
        )

        if not response.is_success:
            raise UpstreamHttpError(self.provider_name, response.status_code, response.text or "<no body>")

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.provider_name} embeddings: response is not JSON"
            ) from e

    def _parse_vectors(self, payload: Any) -> List[List[float]]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise MalformedResponseError(f"{self.provider_name} embeddings: unexpected response shape")

        # Providers may return items out of order; "index" restores input order
        if all(isinstance(item, dict) and isinstance(item.get("index"), int) for item in data):
            data = sorted(data, key=lambda item: item["index"])

        vectors = []
        for item in data:
            vector = item.get("embedding") if isinstance(item, dict) else None
            if not isinstance(vector, list) or not is_finite_vector(vector):
                raise MalformedResponseError(
                    f"{self.provider_name} embeddings: item without a finite embedding vector"
                )
            vectors.append([float(v) for v in vector])
        return vectors


__all__ = ["EmbeddingClient"]
