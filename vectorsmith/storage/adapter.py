"""
Aggregate adapter over every configured backend.

Holds at most one adapter per BackendType and fans connect/disconnect out to
all of them concurrently.
"""
import asyncio
from typing import Any, Dict, List, Optional, Union

from vectorsmith.exceptions import ConfigurationError, NotConfiguredError
from vectorsmith.models.common import BackendType
from vectorsmith.storage.base import BaseAdapter, EventSink
from vectorsmith.storage.pgvector import PgVectorAdapter
from vectorsmith.storage.qdrant import QdrantAdapter
from vectorsmith.storage.redis import RedisAdapter
from vectorsmith.storage.sqlite import SqliteAdapter
from vectorsmith.utils.config import VectorSmithAdapterConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)

ADAPTER_CLASSES = {
    BackendType.REDIS: RedisAdapter,
    BackendType.PGVECTOR: PgVectorAdapter,
    BackendType.QDRANT: QdrantAdapter,
    BackendType.SQLITE: SqliteAdapter,
}


class VectorSmithAdapter:
    """
    Single entry point for Redis, PgVector, Qdrant and SQLite.

    Only backends present in the configuration get an adapter. Accessors
    fail for the others no matter whether connect() was called.

    connect() is all-or-nothing in what it reports but not in effect: when one
    backend fails, the ones that already connected stay connected. Call
    disconnect() to clean up after a failed connect().

    Example:
        >>> config = VectorSmithAdapterConfig(
        ...     redis=RedisConfig(host="localhost"),
        ...     qdrant=QdrantConfig(url="http://localhost:6333"),
        ... )
        >>> async with VectorSmithAdapter(config) as vs:
        ...     await vs.get_redis().set("key", "value")
        ...     await vs.get_qdrant().list_collections()
    """

    def __init__(
        self,
        config: Optional[Union[VectorSmithAdapterConfig, Dict[str, Any]]] = None,
        event_sink: Optional[EventSink] = None
    ):
        if config is None:
            config = VectorSmithAdapterConfig()
        elif isinstance(config, dict):
            config = VectorSmithAdapterConfig.model_validate(config)
        self.config = config

        self._adapters: Dict[BackendType, BaseAdapter] = {}
        for backend, adapter_cls in ADAPTER_CLASSES.items():
            backend_config = getattr(config, backend.value)
            if backend_config is not None:
                self._adapters[backend] = adapter_cls(backend_config, event_sink=event_sink)

        logger.debug(f"Configured backends: {[b.value for b in self._adapters]}")

    @property
    def configured_backends(self) -> List[BackendType]:
        return list(self._adapters)

    async def connect(self) -> None:
        """
        Connect every configured backend concurrently.

        Raises:
            ConfigurationError: If no backend is configured
            Exception: The first backend failure, as raised by its driver
        """
        if not self._adapters:
            raise ConfigurationError(
                "No database adapters configured. Provide at least one database configuration."
            )

        backends = list(self._adapters)
        results = await asyncio.gather(
            *(self._adapters[backend].connect() for backend in backends),
            return_exceptions=True
        )

        failures = [
            (backend, result)
            for backend, result in zip(backends, results)
            if isinstance(result, BaseException)
        ]
        for backend, error in failures:
            logger.error(f"{backend.display_name} connect failed: {error}")

        if failures:
            connected = [b.display_name for b in backends if self._adapters[b].is_connected()]
            if connected:
                logger.warning(f"Backends left connected after failed connect: {connected}")
            raise failures[0][1]

        logger.info(f"Connected backends: {[b.display_name for b in backends]}")

    async def disconnect(self) -> None:
        """Disconnect every backend that is currently connected."""
        connected = [adapter for adapter in self._adapters.values() if adapter.is_connected()]
        await asyncio.gather(*(adapter.disconnect() for adapter in connected))

    def is_connected(self) -> bool:
        """True if at least one configured backend is connected."""
        return any(adapter.is_connected() for adapter in self._adapters.values())

    def get(self, backend: Union[BackendType, str]) -> BaseAdapter:
        backend = BackendType(backend)
        adapter = self._adapters.get(backend)
        if adapter is None:
            raise NotConfiguredError(backend.display_name)
        return adapter

    def get_redis(self) -> RedisAdapter:
        return self.get(BackendType.REDIS)

    def get_pgvector(self) -> PgVectorAdapter:
        return self.get(BackendType.PGVECTOR)

    def get_qdrant(self) -> QdrantAdapter:
        return self.get(BackendType.QDRANT)

    def get_sqlite(self) -> SqliteAdapter:
        return self.get(BackendType.SQLITE)

    async def __aenter__(self):
        try:
            await self.connect()
        except BaseException:
            await self.disconnect()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()


__all__ = ["VectorSmithAdapter"]
