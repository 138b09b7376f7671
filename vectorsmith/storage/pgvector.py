"""
PostgreSQL + pgvector adapter.

Uses psycopg 3 with an async connection pool. SQL text is built per call
with quoted identifiers; values are always bound as parameters and vectors
travel as ``[v1,v2,...]`` text cast to ``::vector``.
"""
import json
from typing import Any, Dict, List, Optional, Union

from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from vectorsmith.exceptions import UnsupportedMetricError
from vectorsmith.models.common import BackendType, PgVectorDistance
from vectorsmith.security.validation import quote_identifier, validate_dimension
from vectorsmith.storage.base import BaseAdapter, EventSink, reports_errors
from vectorsmith.storage.schemas import VectorSearchResult
from vectorsmith.utils.config import PgVectorConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)

# Operator per metric; every operator sorts ascending (closest first)
DISTANCE_OPERATORS = {
    PgVectorDistance.COSINE: "<=>",
    PgVectorDistance.L2: "<->",
    PgVectorDistance.INNER_PRODUCT: "<#>",
}


def to_vector_literal(vector: List[float]) -> str:
    """Serialize a vector as pgvector text input, e.g. ``[1.0,2.0,3.0]``."""
    return "[" + ",".join(repr(float(v)) for v in vector) + "]"


def parse_vector_literal(text: Optional[str]) -> List[float]:
    """Parse pgvector text output back into floats."""
    if not text:
        return []
    cleaned = text.strip().lstrip("[").rstrip("]")
    if not cleaned:
        return []
    return [float(v) for v in cleaned.split(",")]


def resolve_distance(distance: Union[str, PgVectorDistance]) -> PgVectorDistance:
    try:
        return PgVectorDistance(distance)
    except ValueError:
        raise UnsupportedMetricError(str(distance)) from None


class PgVectorAdapter(BaseAdapter):
    """
    Vector table adapter over PostgreSQL with the pgvector extension.

    Tables have the layout ``id SERIAL, embedding vector(n), metadata JSONB,
    created_at TIMESTAMP``. Table dimensions are remembered after
    create_table() or read once from the catalog, so a vector of the wrong
    length is rejected before the INSERT is sent.

    Example:
        >>> pg = PgVectorAdapter(PgVectorConfig(host="localhost", password="secret"))
        >>> await pg.connect()
        >>> await pg.create_table("documents", 3)
        >>> row_id = await pg.insert_vector("documents", [1.0, 2.0, 3.0], {"label": "a"})
        >>> hits = await pg.search_similar("documents", [1.0, 2.0, 3.0], limit=1)
    """

    backend_type = BackendType.PGVECTOR

    def __init__(self, config: Optional[PgVectorConfig] = None, event_sink: Optional[EventSink] = None):
        super().__init__(event_sink)
        self.config = config or PgVectorConfig()
        self.pool: Optional[AsyncConnectionPool] = None
        self._dimensions: Dict[str, int] = {}

    def build_conninfo(self) -> str:
        if self.config.url:
            return self.config.url
        params: Dict[str, Any] = {
            "host": self.config.host,
            "port": self.config.port,
            "user": self.config.user,
            "dbname": self.config.database,
        }
        if self.config.password:
            params["password"] = self.config.password
        if self.config.ssl:
            params["sslmode"] = "require"
        return make_conninfo(**params)

    async def connect(self) -> None:
        if self.pool is not None:
            return

        logger.info(f"Connecting to PostgreSQL at {self.config.host}:{self.config.port}")
        pool = AsyncConnectionPool(
            conninfo=self.build_conninfo(),
            min_size=self.config.pool_min_size,
            max_size=self.config.pool_max_size,
            open=False,
        )
        try:
            await pool.open(wait=True)
            async with pool.connection() as conn:
                await conn.execute("SELECT 1")
                await conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
        except Exception as e:
            self._emit("connect_failed", error=e, host=self.config.host, port=self.config.port)
            await pool.close()
            raise

        self.pool = pool
        self._emit("connected", host=self.config.host, port=self.config.port)

    async def disconnect(self) -> None:
        if self.pool is None:
            return
        pool, self.pool = self.pool, None
        self._dimensions.clear()
        await pool.close()
        self._emit("disconnected")

    def is_connected(self) -> bool:
        return self.pool is not None

    @reports_errors
    async def create_table(self, table_name: str, vector_dimension: int) -> None:
        self.ensure_connected()
        table = quote_identifier(table_name)
        async with self.pool.connection() as conn:
            await conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id SERIAL PRIMARY KEY,
                    embedding vector({int(vector_dimension)}),
                    metadata JSONB,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
        self._dimensions[table_name] = int(vector_dimension)
        logger.debug(f"Table {table} ready (dim={vector_dimension})")

    async def _table_dimension(self, conn, table_name: str) -> Optional[int]:
        """Dimension of the table's embedding column, cached per table."""
        if table_name in self._dimensions:
            return self._dimensions[table_name]

        cursor = await conn.execute(
            """
            SELECT format_type(atttypid, atttypmod)
            FROM pg_attribute
            WHERE attrelid = %s::regclass AND attname = 'embedding'
            """,
            (quote_identifier(table_name),),
        )
        row = await cursor.fetchone()
        if not row or "(" not in row[0]:
            return None
        dimension = int(row[0].split("(", 1)[1].rstrip(")"))
        self._dimensions[table_name] = dimension
        return dimension

    @reports_errors
    async def insert_vector(
        self,
        table_name: str,
        embedding: List[float],
        metadata: Optional[Dict[str, Any]] = None
    ) -> int:
        """
        Insert one vector and return its generated id.

        Raises:
            DimensionMismatchError: If the vector length differs from the table's
        """
        self.ensure_connected()
        table = quote_identifier(table_name)
        async with self.pool.connection() as conn:
            validate_dimension(embedding, await self._table_dimension(conn, table_name))
            cursor = await conn.execute(
                f"INSERT INTO {table} (embedding, metadata) VALUES (%s::vector, %s::jsonb) RETURNING id",
                (to_vector_literal(embedding), json.dumps(metadata) if metadata is not None else None),
            )
            row = await cursor.fetchone()
        return row[0]

    @reports_errors
    async def search_similar(
        self,
        table_name: str,
        query_vector: List[float],
        limit: int = 10,
        distance: Union[str, PgVectorDistance] = PgVectorDistance.COSINE
    ) -> List[VectorSearchResult]:
        """
        Return the ``limit`` rows closest to ``query_vector``.

        ``distance`` selects the operator used both for ordering and for the
        returned value: cosine distance, L2 distance or negative inner product.
        """
        self.ensure_connected()
        operator = DISTANCE_OPERATORS[resolve_distance(distance)]
        table = quote_identifier(table_name)

        async with self.pool.connection() as conn:
            validate_dimension(query_vector, await self._table_dimension(conn, table_name))
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(
                    f"""
                    SELECT id, embedding::text AS embedding, metadata,
                           embedding {operator} %(query)s::vector AS distance
                    FROM {table}
                    ORDER BY embedding {operator} %(query)s::vector
                    LIMIT %(limit)s
                    """,
                    {"query": to_vector_literal(query_vector), "limit": limit},
                )
                rows = await cursor.fetchall()

        return [
            VectorSearchResult(
                id=row["id"],
                embedding=parse_vector_literal(row["embedding"]),
                metadata=row["metadata"],
                distance=float(row["distance"]),
            )
            for row in rows
        ]

    @reports_errors
    async def delete_vector(self, table_name: str, vector_id: int) -> bool:
        self.ensure_connected()
        table = quote_identifier(table_name)
        async with self.pool.connection() as conn:
            cursor = await conn.execute(f"DELETE FROM {table} WHERE id = %s", (vector_id,))
            return (cursor.rowcount or 0) > 0

    @reports_errors
    async def drop_table(self, table_name: str) -> None:
        self.ensure_connected()
        async with self.pool.connection() as conn:
            await conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table_name)}")
        self._dimensions.pop(table_name, None)
        logger.warning(f"Dropped table: {table_name}")


__all__ = ["PgVectorAdapter", "to_vector_literal", "parse_vector_literal"]
