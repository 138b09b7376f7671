"""Tests for RedisAdapter with a mocked redis-py client."""
from unittest.mock import AsyncMock, patch

import pytest

from vectorsmith.exceptions import NotConnectedError
from vectorsmith.storage.redis import RedisAdapter
from vectorsmith.utils.config import RedisConfig


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.fixture
def mock_redis(redis_client):
    with patch("vectorsmith.storage.redis.Redis") as redis_cls:
        redis_cls.from_url.return_value = redis_client
        yield redis_cls


class TestConnectionUrl:

    def test_builds_from_fields(self):
        adapter = RedisAdapter(RedisConfig(host="cache", port=6380, password="pw", database=2))
        assert adapter.build_connection_url() == "redis://:pw@cache:6380/2"

    def test_explicit_url_wins(self):
        adapter = RedisAdapter(RedisConfig(url="redis://other:1234/0", host="ignored"))
        assert adapter.build_connection_url() == "redis://other:1234/0"


@pytest.mark.asyncio
async def test_operations_require_connect():
    adapter = RedisAdapter(RedisConfig())

    with pytest.raises(NotConnectedError, match="Redis"):
        await adapter.get("key")


@pytest.mark.asyncio
async def test_connect_is_idempotent(mock_redis, redis_client, events, event_sink):
    adapter = RedisAdapter(RedisConfig(), event_sink=event_sink)

    await adapter.connect()
    await adapter.connect()

    assert adapter.is_connected()
    mock_redis.from_url.assert_called_once_with("redis://localhost:6379", decode_responses=True)
    redis_client.ping.assert_awaited_once()
    assert [e.name for e in events] == ["connected"]


@pytest.mark.asyncio
async def test_disconnect_clears_handle(mock_redis, redis_client, events, event_sink):
    adapter = RedisAdapter(RedisConfig(), event_sink=event_sink)
    await adapter.connect()

    await adapter.disconnect()
    await adapter.disconnect()

    assert not adapter.is_connected()
    redis_client.aclose.assert_awaited_once()
    assert [e.name for e in events] == ["connected", "disconnected"]


@pytest.mark.asyncio
async def test_failed_connect_leaves_adapter_disconnected(mock_redis, redis_client, events, event_sink):
    redis_client.ping.side_effect = ConnectionError("refused")
    adapter = RedisAdapter(RedisConfig(), event_sink=event_sink)

    with pytest.raises(ConnectionError):
        await adapter.connect()

    assert not adapter.is_connected()
    redis_client.aclose.assert_awaited_once()
    assert events[0].name == "connect_failed"
    assert isinstance(events[0].error, ConnectionError)


@pytest.mark.asyncio
async def test_broken_event_sink_does_not_break_connect(mock_redis):
    def sink(event):
        raise RuntimeError("sink down")

    adapter = RedisAdapter(RedisConfig(), event_sink=sink)
    await adapter.connect()

    assert adapter.is_connected()


@pytest.mark.asyncio
async def test_key_value_operations(mock_redis, redis_client):
    redis_client.get.return_value = "value"
    redis_client.delete.return_value = 1
    redis_client.exists.return_value = 0
    redis_client.keys.return_value = ["a:1", "a:2"]

    async with RedisAdapter(RedisConfig()) as adapter:
        await adapter.set("key", "value")
        await adapter.set("temp", "value", ttl_seconds=30)

        assert await adapter.get("key") == "value"
        assert await adapter.delete("key") is True
        assert await adapter.exists("key") is False
        assert await adapter.keys("a:*") == ["a:1", "a:2"]

    redis_client.set.assert_awaited_once_with("key", "value")
    redis_client.setex.assert_awaited_once_with("temp", 30, "value")


def test_password_is_url_escaped():
    adapter = RedisAdapter(RedisConfig(host="cache", password="p@ss/word"))
    assert adapter.build_connection_url() == "redis://:p%40ss%2Fword@cache:6379"


@pytest.mark.asyncio
async def test_driver_error_emits_event_and_raises(mock_redis, redis_client, events, event_sink):
    redis_client.get.side_effect = ConnectionError("connection reset")
    adapter = RedisAdapter(RedisConfig(), event_sink=event_sink)
    await adapter.connect()

    with pytest.raises(ConnectionError, match="connection reset"):
        await adapter.get("key")

    error_event = events[-1]
    assert error_event.name == "error"
    assert error_event.backend == "Redis"
    assert error_event.detail == {"operation": "get"}
    assert isinstance(error_event.error, ConnectionError)


@pytest.mark.asyncio
async def test_guard_failure_emits_no_event(events, event_sink):
    adapter = RedisAdapter(RedisConfig(), event_sink=event_sink)

    with pytest.raises(NotConnectedError):
        await adapter.get("key")

    assert events == []
