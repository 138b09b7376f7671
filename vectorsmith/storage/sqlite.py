"""
Embedded vector storage on SQLite with the sqlite-vec extension.

Vectors are stored as little-endian float32 BLOBs next to a JSON metadata
column. Similarity search runs the extension's distance functions over the
table. The metric is fixed per adapter: a search asking for a different
metric fails instead of silently ranking with the configured one.
"""
import json
import re
import struct
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiosqlite
import sqlite_vec

from vectorsmith.exceptions import ConfigurationError, UnsupportedMetricError
from vectorsmith.models.common import BackendType, SqliteDistanceMetric
from vectorsmith.security.validation import quote_identifier, validate_dimension
from vectorsmith.storage.base import BaseAdapter, EventSink, reports_errors
from vectorsmith.storage.schemas import VectorSearchResult
from vectorsmith.utils.config import SqliteConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)

VECTOR_COLUMN = "embedding"

DISTANCE_FUNCTIONS = {
    SqliteDistanceMetric.COSINE: "vec_distance_cosine",
    SqliteDistanceMetric.L2: "vec_distance_l2",
}

_PRAGMA_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PRAGMA_VALUE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def resolve_metric(metric: Union[str, SqliteDistanceMetric]) -> SqliteDistanceMetric:
    try:
        return SqliteDistanceMetric(metric)
    except ValueError:
        raise UnsupportedMetricError(
            str(metric),
            f"Unsupported distance metric: {metric}. "
            f"Valid values: {', '.join(m.value for m in SqliteDistanceMetric)}"
        ) from None


def serialize_float32(vector: List[float]) -> bytes:
    """Pack a vector as a little-endian float32 BLOB."""
    return struct.pack(f"<{len(vector)}f", *vector)


def deserialize_float32(blob: bytes) -> List[float]:
    return list(struct.unpack(f"<{len(blob) // 4}f", blob))


def parse_metadata(serialized: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode the metadata column; unreadable JSON reads back as None."""
    if serialized is None:
        return None
    try:
        decoded = json.loads(serialized)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Ignoring unparseable metadata column")
        return None
    return decoded if isinstance(decoded, dict) else None


class SqliteAdapter(BaseAdapter):
    """
    Async SQLite vector store.

    Features:
    - sqlite-vec loaded at connect time, plus optional extra extensions
    - PRAGMAs applied on connect
    - Optional default table created on connect
    - Dimension and metric checks before any statement runs

    Example:
        >>> config = SqliteConfig(database_path="./vectors.db", vector_dimension=3)
        >>> async with SqliteAdapter(config) as store:
        ...     await store.create_table("docs")
        ...     row_id = await store.insert_vector("docs", [1.0, 2.0, 3.0], {"label": "a"})
        ...     hits = await store.search_similar("docs", [1.0, 2.0, 3.0], limit=1)
    """

    backend_type = BackendType.SQLITE

    def __init__(self, config: SqliteConfig, event_sink: Optional[EventSink] = None):
        super().__init__(event_sink)
        if config.vector_dimension <= 0:
            raise ConfigurationError("Vector dimension must be greater than zero.")
        if config.vector_type.upper() != "FLOAT32":
            raise ConfigurationError(f"Unsupported vector type: {config.vector_type}")

        self.config = config
        self.distance_metric = resolve_metric(config.distance_metric)
        self.conn: Optional[aiosqlite.Connection] = None

        if config.database_path != ":memory:":
            Path(config.database_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        if self.conn is not None:
            return

        conn = await aiosqlite.connect(self.config.database_path)
        try:
            await self._apply_pragmas(conn)
            await self._load_extensions(conn)
        except Exception as e:
            self._emit("connect_failed", error=e, database_path=self.config.database_path)
            await conn.close()
            raise

        self.conn = conn
        if self.config.default_table:
            try:
                await self.create_table(self.config.default_table)
            except Exception as e:
                self._emit("connect_failed", error=e, table=self.config.default_table)
                self.conn = None
                await conn.close()
                raise

        logger.info(f"SQLite vector store connected: {self.config.database_path}")
        self._emit("connected", database_path=self.config.database_path)

    async def disconnect(self) -> None:
        if self.conn is None:
            return
        conn, self.conn = self.conn, None
        await conn.close()
        self._emit("disconnected")

    def is_connected(self) -> bool:
        return self.conn is not None

    async def _apply_pragmas(self, conn: aiosqlite.Connection) -> None:
        for name, value in self.config.pragmas.items():
            if isinstance(value, bool):
                value = int(value)
            if not _PRAGMA_NAME.match(name) or not _PRAGMA_VALUE.match(str(value)):
                raise ConfigurationError(f"Invalid pragma: {name} = {value}")
            await conn.execute(f"PRAGMA {name} = {value}")

    async def _load_extensions(self, conn: aiosqlite.Connection) -> None:
        await conn.enable_load_extension(True)
        try:
            await conn.load_extension(sqlite_vec.loadable_path())
            for extension in self.config.extensions:
                if extension.entry_point:
                    await conn.execute(
                        "SELECT load_extension(?, ?)",
                        (extension.path, extension.entry_point)
                    )
                else:
                    await conn.load_extension(extension.path)
        finally:
            await conn.enable_load_extension(False)

        async with conn.execute("SELECT vec_version()") as cursor:
            row = await cursor.fetchone()
            logger.debug(f"sqlite-vec {row[0]} loaded")

    # === Table Operations ===

    @reports_errors
    async def create_table(self, table_name: str) -> None:
        self.ensure_connected()
        await self.conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {quote_identifier(table_name)} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                {VECTOR_COLUMN} BLOB NOT NULL,
                metadata TEXT,
                created_at TEXT DEFAULT (datetime('now'))
            )
        """)
        await self.conn.commit()

    @reports_errors
    async def drop_table(self, table_name: str) -> None:
        self.ensure_connected()
        await self.conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table_name)}")
        await self.conn.commit()

    # === Vector Operations ===

    def _encode(self, vector: List[float]) -> bytes:
        validate_dimension(vector, self.config.vector_dimension)
        return serialize_float32(vector)

    @reports_errors
    async def insert_vector(
        self,
        table_name: str,
        vector: List[float],
        metadata: Optional[Dict[str, Any]] = None
    ) -> int:
        """
        Insert a vector and return its row id.

        Raises:
            DimensionMismatchError: If ``vector`` does not have vector_dimension items
        """
        self.ensure_connected()
        blob = self._encode(vector)
        cursor = await self.conn.execute(
            f"INSERT INTO {quote_identifier(table_name)} ({VECTOR_COLUMN}, metadata) "
            "VALUES (vec_f32(?), ?)",
            (blob, json.dumps(metadata) if metadata is not None else None)
        )
        await self.conn.commit()
        return cursor.lastrowid

    @reports_errors
    async def upsert_vector(
        self,
        table_name: str,
        vector_id: int,
        vector: List[float],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Insert a row with a caller-chosen id, replacing vector and metadata on conflict."""
        self.ensure_connected()
        blob = self._encode(vector)
        await self.conn.execute(
            f"""
            INSERT INTO {quote_identifier(table_name)} (id, {VECTOR_COLUMN}, metadata)
            VALUES (?, vec_f32(?), ?)
            ON CONFLICT(id) DO UPDATE SET
                {VECTOR_COLUMN} = excluded.{VECTOR_COLUMN},
                metadata = excluded.metadata
            """,
            (vector_id, blob, json.dumps(metadata) if metadata is not None else None)
        )
        await self.conn.commit()

    @reports_errors
    async def delete_vector(self, table_name: str, vector_id: int) -> bool:
        self.ensure_connected()
        cursor = await self.conn.execute(
            f"DELETE FROM {quote_identifier(table_name)} WHERE id = ?",
            (vector_id,)
        )
        await self.conn.commit()
        return cursor.rowcount > 0

    @reports_errors
    async def search_similar(
        self,
        table_name: str,
        query_vector: List[float],
        limit: int = 10,
        metric: Optional[Union[str, SqliteDistanceMetric]] = None
    ) -> List[VectorSearchResult]:
        """
        Return the ``limit`` rows closest to ``query_vector``.

        Args:
            table_name: Table to search
            query_vector: Query vector (vector_dimension items)
            limit: Maximum number of results
            metric: Must equal the configured metric (default: configured metric)

        Raises:
            UnsupportedMetricError: If ``metric`` is unknown or differs from the configured one
        """
        self.ensure_connected()
        blob = self._encode(query_vector)
        requested = resolve_metric(metric) if metric is not None else self.distance_metric
        if requested != self.distance_metric:
            raise UnsupportedMetricError(
                requested.value,
                f"Configured distance metric '{self.distance_metric.value}' does not match "
                f"requested metric '{requested.value}'."
            )

        distance_fn = DISTANCE_FUNCTIONS[self.distance_metric]
        query = f"""
            SELECT id, {VECTOR_COLUMN}, metadata,
                   {distance_fn}({VECTOR_COLUMN}, vec_f32(?)) AS distance
            FROM {quote_identifier(table_name)}
            ORDER BY distance
            LIMIT ?
        """

        results = []
        async with self.conn.execute(query, (blob, limit)) as cursor:
            async for row in cursor:
                results.append(VectorSearchResult(
                    id=row[0],
                    embedding=deserialize_float32(row[1]),
                    metadata=parse_metadata(row[2]),
                    distance=float(row[3])
                ))

        return results


__all__ = ["SqliteAdapter", "serialize_float32", "deserialize_float32"]
