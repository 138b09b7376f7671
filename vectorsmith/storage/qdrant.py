"""
Vector store adapter using Qdrant.

Wraps the async Qdrant client with collection management, point upsert and
similarity search. The distance metric is fixed when a collection is created
and cannot be overridden per query.
"""
import math
from typing import Any, Dict, List, Optional, Union

from qdrant_client import AsyncQdrantClient, models
from qdrant_client.models import Distance, PointStruct, VectorParams

from vectorsmith.exceptions import ConfigurationError, UnsupportedMetricError
from vectorsmith.models.common import BackendType
from vectorsmith.security.validation import validate_dimension
from vectorsmith.storage.base import BaseAdapter, EventSink, reports_errors
from vectorsmith.storage.schemas import QdrantPoint
from vectorsmith.utils.config import QdrantConfig
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_distance(distance: Union[str, Distance]) -> Distance:
    """Map 'Cosine', 'cosine', 'Euclid', 'Dot', 'Manhattan' to a Qdrant Distance."""
    if isinstance(distance, Distance):
        return distance
    for member in Distance:
        if member.value.lower() == str(distance).lower():
            return member
    raise UnsupportedMetricError(str(distance))


class QdrantAdapter(BaseAdapter):
    """
    Collection/point adapter over Qdrant.

    Features:
    - Self-hosted URL or cloud endpoint + cluster id
    - Collection create/delete/list
    - Point upsert with optional payload
    - Similarity search with limit, filter, score threshold and payload toggle

    Example:
        >>> qdrant = QdrantAdapter(QdrantConfig(url="http://localhost:6333"))
        >>> await qdrant.connect()
        >>> await qdrant.create_collection("docs", 3)
        >>> await qdrant.upsert("docs", [QdrantPoint(id=1, vector=[0.1, 0.2, 0.3])])
        >>> hits = await qdrant.search("docs", [0.1, 0.2, 0.3], limit=1)
    """

    backend_type = BackendType.QDRANT

    def __init__(self, config: Optional[QdrantConfig] = None, event_sink: Optional[EventSink] = None):
        super().__init__(event_sink)
        self.config = config or QdrantConfig()
        self.client: Optional[AsyncQdrantClient] = None
        self._collection_sizes: Dict[str, int] = {}

    def resolve_url(self) -> str:
        """Explicit URL, else the endpoint with the cluster id appended when missing."""
        if self.config.url:
            return self.config.url

        endpoint = self.config.endpoint
        cluster_id = self.config.cluster_id
        if cluster_id and cluster_id not in endpoint:
            return f"{endpoint.rstrip('/')}/{cluster_id}"
        return endpoint

    async def connect(self) -> None:
        if self.client is not None:
            return

        url = self.resolve_url()
        logger.info(f"Connecting to Qdrant at {url}")
        client = AsyncQdrantClient(
            url=url,
            api_key=self.config.api_key or None,
            timeout=math.ceil(self.config.timeout),
        )
        try:
            await client.get_collections()
        except Exception as e:
            self._emit("connect_failed", error=e, url=url)
            await client.close()
            raise

        self.client = client
        self._emit("connected", url=url)

    async def disconnect(self) -> None:
        if self.client is None:
            return
        client, self.client = self.client, None
        self._collection_sizes.clear()
        await client.close()
        self._emit("disconnected")

    def is_connected(self) -> bool:
        return self.client is not None

    def _resolve_collection(self, collection_name: Optional[str]) -> str:
        name = collection_name or self.config.default_collection
        if not name:
            raise ConfigurationError(
                "No collection name given and no default_collection configured."
            )
        return name

    @reports_errors
    async def create_collection(
        self,
        collection_name: Optional[str],
        vector_size: int,
        distance: Union[str, Distance] = Distance.COSINE
    ) -> None:
        """Create a collection with a fixed vector size and distance."""
        self.ensure_connected()
        name = self._resolve_collection(collection_name)
        distance = resolve_distance(distance)

        logger.info(f"Creating collection: {name} (size={vector_size}, distance={distance.value})")
        await self.client.create_collection(
            collection_name=name,
            vectors_config=VectorParams(size=vector_size, distance=distance),
        )
        self._collection_sizes[name] = vector_size

    @reports_errors
    async def delete_collection(self, collection_name: Optional[str] = None) -> None:
        """Delete the collection (use with caution)."""
        self.ensure_connected()
        name = self._resolve_collection(collection_name)
        await self.client.delete_collection(collection_name=name)
        self._collection_sizes.pop(name, None)
        logger.warning(f"Deleted collection: {name}")

    @reports_errors
    async def list_collections(self) -> List[str]:
        self.ensure_connected()
        response = await self.client.get_collections()
        return [collection.name for collection in response.collections or []]

    @reports_errors
    async def upsert(
        self,
        collection_name: Optional[str],
        points: List[Union[QdrantPoint, Dict[str, Any]]],
        wait: bool = True
    ) -> None:
        """
        Insert or replace points.

        Args:
            collection_name: Target collection (default_collection if None)
            points: QdrantPoint objects or dicts with id/vector/payload
            wait: Wait until the operation is applied
        """
        self.ensure_connected()
        name = self._resolve_collection(collection_name)
        expected = self._collection_sizes.get(name)

        structs = []
        for point in points:
            point = QdrantPoint.model_validate(point)
            validate_dimension(point.vector, expected)
            structs.append(PointStruct(id=point.id, vector=point.vector, payload=point.payload))

        await self.client.upsert(collection_name=name, points=structs, wait=wait)
        logger.debug(f"Upserted {len(structs)} points into {name}")

    @reports_errors
    async def search(
        self,
        collection_name: Optional[str],
        vector: List[float],
        limit: int = 10,
        filter: Optional[Union[Dict[str, Any], models.Filter]] = None,
        score_threshold: Optional[float] = None,
        with_payload: bool = True
    ) -> List[models.ScoredPoint]:
        """
        Similarity search using the collection's own distance.

        Returns:
            List[ScoredPoint]: Hits ordered best first, as returned by Qdrant
        """
        self.ensure_connected()
        name = self._resolve_collection(collection_name)
        validate_dimension(vector, self._collection_sizes.get(name))

        query_filter = filter
        if isinstance(filter, dict):
            query_filter = models.Filter.model_validate(filter)

        response = await self.client.query_points(
            collection_name=name,
            query=vector,
            limit=limit,
            query_filter=query_filter,
            score_threshold=score_threshold,
            with_payload=with_payload,
        )
        return list(response.points)


__all__ = ["QdrantAdapter"]
