"""
Embedding provider registry.

Maps EmbeddingProviderType tags to configured providers and resolves a
default provider.
"""
from typing import Any, Dict, List, Optional, Union

import httpx

from vectorsmith.embeddings.client import EmbeddingClient
from vectorsmith.embeddings.jina import JinaEmbeddingProvider
from vectorsmith.embeddings.openai import OpenAIEmbeddingProvider
from vectorsmith.exceptions import ConfigurationError
from vectorsmith.models.common import EmbeddingProviderType
from vectorsmith.utils.config import VectorSmithEmbeddingConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)

PROVIDER_CLASSES = {
    EmbeddingProviderType.JINA: JinaEmbeddingProvider,
    EmbeddingProviderType.OPENAI: OpenAIEmbeddingProvider,
}


def resolve_provider_type(value) -> EmbeddingProviderType:
    try:
        return EmbeddingProviderType(value)
    except ValueError:
        allowed = ", ".join(p.value for p in EmbeddingProviderType)
        raise ConfigurationError(
            f"VectorSmithEmbedding: unknown provider type '{value}'. Valid values: {allowed}"
        ) from None


class VectorSmithEmbedding:
    """
    Holds one provider per configured type.

    The default provider is the explicitly configured one, else the only
    configured provider, else unset (callers must then name a type).

    Example:
        >>> embedding = VectorSmithEmbedding(VectorSmithEmbeddingConfig(
        ...     openai=EmbeddingProviderConfig(api_key=key, model="text-embedding-3-small")
        ... ))
        >>> vector = await embedding.embed_one("hello")
    """

    def __init__(
        self,
        config: Union[VectorSmithEmbeddingConfig, Dict[str, Any]],
        http_client: Optional[httpx.AsyncClient] = None
    ):
        if isinstance(config, dict):
            config = VectorSmithEmbeddingConfig.model_validate(config)

        self.providers: Dict[EmbeddingProviderType, EmbeddingClient] = {}
        for provider_type, provider_cls in PROVIDER_CLASSES.items():
            provider_config = getattr(config, provider_type.value.lower())
            if provider_config is not None:
                self.providers[provider_type] = provider_cls(
                    provider_config.api_key,
                    provider_config.model,
                    provider_config.options,
                    http_client=http_client
                )

        if not self.providers:
            raise ConfigurationError(
                "VectorSmithEmbedding: configure at least one embedding provider."
            )

        self._default_provider: Optional[EmbeddingProviderType] = None
        if config.default_provider is not None:
            self.set_default_provider(config.default_provider)
        elif len(self.providers) == 1:
            self._default_provider = next(iter(self.providers))

        logger.debug(
            f"Embedding providers: {[p.value for p in self.providers]} "
            f"(default: {self._default_provider.value if self._default_provider else None})"
        )

    @property
    def default_provider_type(self) -> Optional[EmbeddingProviderType]:
        return self._default_provider

    @property
    def provider_types(self) -> List[EmbeddingProviderType]:
        return list(self.providers)

    def has_provider(self, provider_type: EmbeddingProviderType) -> bool:
        return provider_type in self.providers

    def set_default_provider(self, provider_type: EmbeddingProviderType) -> None:
        provider_type = resolve_provider_type(provider_type)
        if provider_type not in self.providers:
            raise ConfigurationError(
                f"VectorSmithEmbedding: provider {provider_type.value} is not configured; "
                "cannot set as default."
            )
        self._default_provider = provider_type

    def get_provider(self, provider_type: Optional[EmbeddingProviderType] = None) -> EmbeddingClient:
        """
        Resolve a provider by type, falling back to the default.

        Raises:
            ConfigurationError: If no type is given and there is no default, or
                the resolved type is not configured
        """
        resolved = provider_type or self._default_provider
        if resolved is None:
            raise ConfigurationError(
                "VectorSmithEmbedding: no default provider configured; specify a provider type."
            )
        resolved = resolve_provider_type(resolved)
        provider = self.providers.get(resolved)
        if provider is None:
            raise ConfigurationError(
                f"VectorSmithEmbedding: provider {resolved.value} is not configured."
            )
        return provider

    async def embed(
        self,
        texts: List[str],
        provider_type: Optional[EmbeddingProviderType] = None
    ) -> List[List[float]]:
        return await self.get_provider(provider_type).embed(texts)

    async def embed_one(
        self,
        text: str,
        provider_type: Optional[EmbeddingProviderType] = None
    ) -> List[float]:
        return await self.get_provider(provider_type).embed_one(text)


__all__ = ["VectorSmithEmbedding"]
