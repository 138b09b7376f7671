"""Tests for PgVectorAdapter with a mocked psycopg pool."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from vectorsmith.exceptions import DimensionMismatchError, NotConnectedError, UnsupportedMetricError
from vectorsmith.models.common import PgVectorDistance
from vectorsmith.storage.pgvector import (
    PgVectorAdapter,
    parse_vector_literal,
    to_vector_literal,
)
from vectorsmith.utils.config import PgVectorConfig


@pytest.fixture
def conn():
    conn = MagicMock()
    conn.execute = AsyncMock()
    return conn


@pytest.fixture
def pool(conn, async_cm):
    pool = MagicMock()
    pool.open = AsyncMock()
    pool.close = AsyncMock()
    pool.connection.return_value = async_cm(conn)
    return pool


@pytest.fixture
def adapter(pool):
    """Adapter with a pool already attached and a known 3-d table."""
    adapter = PgVectorAdapter(PgVectorConfig())
    adapter.pool = pool
    adapter._dimensions["docs"] = 3
    return adapter


def cursor_returning(row):
    cursor = MagicMock()
    cursor.fetchone = AsyncMock(return_value=row)
    return cursor


def test_vector_literal_round_trip():
    assert to_vector_literal([1, 2.5, -3]) == "[1.0,2.5,-3.0]"
    assert parse_vector_literal("[1,2.5,-3]") == [1.0, 2.5, -3.0]
    assert parse_vector_literal(None) == []


def test_conninfo_from_fields():
    adapter = PgVectorAdapter(PgVectorConfig(host="db", port=5433, password="pw", database="vectors", ssl=True))
    conninfo = adapter.build_conninfo()

    assert "host=db" in conninfo
    assert "port=5433" in conninfo
    assert "dbname=vectors" in conninfo
    assert "sslmode=require" in conninfo


@pytest.mark.asyncio
async def test_operations_require_connect():
    with pytest.raises(NotConnectedError, match="PgVector"):
        await PgVectorAdapter(PgVectorConfig()).insert_vector("docs", [1.0, 2.0, 3.0])


@pytest.mark.asyncio
async def test_connect_enables_extension(pool, conn, events, event_sink):
    with patch("vectorsmith.storage.pgvector.AsyncConnectionPool", return_value=pool):
        adapter = PgVectorAdapter(PgVectorConfig(), event_sink=event_sink)
        await adapter.connect()
        await adapter.connect()

    assert adapter.is_connected()
    pool.open.assert_awaited_once_with(wait=True)
    statements = [c.args[0] for c in conn.execute.await_args_list]
    assert statements == ["SELECT 1", "CREATE EXTENSION IF NOT EXISTS vector"]
    assert [e.name for e in events] == ["connected"]


@pytest.mark.asyncio
async def test_failed_connect_closes_pool(pool, events, event_sink):
    pool.open.side_effect = OSError("connection refused")

    with patch("vectorsmith.storage.pgvector.AsyncConnectionPool", return_value=pool):
        adapter = PgVectorAdapter(PgVectorConfig(), event_sink=event_sink)
        with pytest.raises(OSError):
            await adapter.connect()

    assert not adapter.is_connected()
    pool.close.assert_awaited_once()
    assert events[0].name == "connect_failed"


@pytest.mark.asyncio
async def test_create_table_remembers_dimension(pool, conn):
    adapter = PgVectorAdapter(PgVectorConfig())
    adapter.pool = pool

    await adapter.create_table("items", 5)

    sql = conn.execute.await_args.args[0]
    assert 'CREATE TABLE IF NOT EXISTS "items"' in sql
    assert "vector(5)" in sql
    assert adapter._dimensions["items"] == 5


@pytest.mark.asyncio
async def test_insert_wrong_dimension_sends_nothing(adapter, conn):
    with pytest.raises(DimensionMismatchError):
        await adapter.insert_vector("docs", [1.0, 2.0])

    conn.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_insert_reads_dimension_from_catalog(pool, conn):
    adapter = PgVectorAdapter(PgVectorConfig())
    adapter.pool = pool
    conn.execute.side_effect = [cursor_returning(("vector(3)",)), cursor_returning((7,))]

    row_id = await adapter.insert_vector("docs", [1.0, 2.0, 3.0], {"label": "a"})

    assert row_id == 7
    assert adapter._dimensions["docs"] == 3
    insert_sql, params = conn.execute.await_args_list[1].args
    assert "RETURNING id" in insert_sql
    assert params == ("[1.0,2.0,3.0]", '{"label": "a"}')


@pytest.mark.asyncio
@pytest.mark.parametrize("distance, operator", [
    (PgVectorDistance.COSINE, "<=>"),
    ("l2", "<->"),
    ("inner_product", "<#>"),
])
async def test_search_orders_by_selected_operator(adapter, conn, async_cm, distance, operator):
    cursor = MagicMock()
    cursor.execute = AsyncMock()
    cursor.fetchall = AsyncMock(return_value=[
        {"id": 1, "embedding": "[1,2,3]", "metadata": {"label": "a"}, "distance": 0.0},
    ])
    conn.cursor.return_value = async_cm(cursor)

    results = await adapter.search_similar("docs", [1.0, 2.0, 3.0], limit=1, distance=distance)

    sql, params = cursor.execute.await_args.args
    assert f"ORDER BY embedding {operator}" in sql
    assert f"embedding {operator} %(query)s::vector AS distance" in sql
    assert params == {"query": "[1.0,2.0,3.0]", "limit": 1}
    assert results[0].id == 1
    assert results[0].embedding == [1.0, 2.0, 3.0]
    assert results[0].metadata == {"label": "a"}
    assert results[0].distance == 0.0


@pytest.mark.asyncio
async def test_search_rejects_unknown_distance(adapter, pool):
    with pytest.raises(UnsupportedMetricError):
        await adapter.search_similar("docs", [1.0, 2.0, 3.0], distance="dot")

    pool.connection.assert_not_called()


@pytest.mark.asyncio
async def test_delete_vector_reports_rowcount(adapter, conn):
    conn.execute.return_value = MagicMock(rowcount=1)
    assert await adapter.delete_vector("docs", 1) is True

    conn.execute.return_value = MagicMock(rowcount=0)
    assert await adapter.delete_vector("docs", 1) is False


@pytest.mark.asyncio
async def test_drop_table_forgets_dimension(adapter, conn):
    await adapter.drop_table("docs")

    assert conn.execute.await_args.args[0] == 'DROP TABLE IF EXISTS "docs"'
    assert "docs" not in adapter._dimensions
