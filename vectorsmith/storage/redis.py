"""
Redis adapter for plain key/value access.

Wraps the redis-py asyncio client with string decoding enabled.
"""
from typing import List, Optional
from urllib.parse import quote

from redis.asyncio import Redis

from vectorsmith.models.common import BackendType
from vectorsmith.storage.base import BaseAdapter, EventSink, reports_errors
from vectorsmith.utils.config import RedisConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)


class RedisAdapter(BaseAdapter):
    """
    Key/value adapter over Redis.

    Example:
        >>> redis = RedisAdapter(RedisConfig(host="localhost", port=6379))
        >>> await redis.connect()
        >>> await redis.set("session:1", "active", ttl_seconds=60)
        >>> await redis.get("session:1")
        'active'
    """

    backend_type = BackendType.REDIS

    def __init__(self, config: Optional[RedisConfig] = None, event_sink: Optional[EventSink] = None):
        super().__init__(event_sink)
        self.config = config or RedisConfig()
        self.client: Optional[Redis] = None

    def build_connection_url(self) -> str:
        """Return the configured URL, or build one from host/port/password/database."""
        if self.config.url:
            return self.config.url
        auth = f":{quote(self.config.password, safe='')}@" if self.config.password else ""
        db = f"/{self.config.database}" if self.config.database is not None else ""
        return f"redis://{auth}{self.config.host}:{self.config.port}{db}"

    async def connect(self) -> None:
        if self.client is not None:
            return

        url = self.build_connection_url()
        logger.info(f"Connecting to Redis at {url}")
        client = Redis.from_url(url, decode_responses=True)
        try:
            await client.ping()
        except Exception as e:
            self._emit("connect_failed", error=e, url=url)
            await client.aclose()
            raise

        self.client = client
        self._emit("connected", url=url)

    async def disconnect(self) -> None:
        if self.client is None:
            return
        client, self.client = self.client, None
        await client.aclose()
        self._emit("disconnected")

    def is_connected(self) -> bool:
        return self.client is not None

    @reports_errors
    async def get(self, key: str) -> Optional[str]:
        self.ensure_connected()
        return await self.client.get(key)

    @reports_errors
    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        """Store a value, with an expiry when ``ttl_seconds`` is given."""
        self.ensure_connected()
        if ttl_seconds:
            await self.client.setex(key, ttl_seconds, value)
        else:
            await self.client.set(key, value)

    @reports_errors
    async def delete(self, key: str) -> bool:
        self.ensure_connected()
        return (await self.client.delete(key)) > 0

    @reports_errors
    async def exists(self, key: str) -> bool:
        self.ensure_connected()
        return (await self.client.exists(key)) > 0

    @reports_errors
    async def keys(self, pattern: str) -> List[str]:
        self.ensure_connected()
        return list(await self.client.keys(pattern))


__all__ = ["RedisAdapter"]
