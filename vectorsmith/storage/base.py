"""
Shared lifecycle contract for backend adapters.

Every adapter owns at most one network handle. The handle exists only after
a successful connect() and is cleared by disconnect(); data operations call
ensure_connected() first and never reconnect on their own.
"""
import functools
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from vectorsmith.exceptions import NotConnectedError, VectorSmithError
from vectorsmith.models.common import BackendType
from vectorsmith.storage.schemas import AdapterEvent
from vectorsmith.utils.logger import get_logger

logger = get_logger(__name__)

EventSink = Callable[[AdapterEvent], None]

_FAILURE_EVENTS = {"connect_failed", "error"}


def log_event(event: AdapterEvent) -> None:
    """Default event sink: write adapter events to the package logger."""
    if event.name in _FAILURE_EVENTS:
        logger.error(f"{event.backend} {event.name}: {event.error} {event.detail}")
    else:
        logger.info(f"{event.backend} {event.name} {event.detail}")


def reports_errors(method):
    """
    Emit an ``error`` event when a data operation fails in the driver.

    The driver exception is re-raised unchanged. vectorsmith's own errors
    (not connected, dimension mismatch, ...) pass through without an event.
    """
    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except VectorSmithError:
            raise
        except Exception as e:
            self._emit("error", error=e, operation=method.__name__)
            raise
    return wrapper


class BaseAdapter(ABC):
    """
    Base class for Redis, PgVector, Qdrant and SQLite adapters.

    Subclasses implement connect(), disconnect() and is_connected(); the base
    provides the connection guard, event emission and async context manager
    support.

    Example:
        >>> async with RedisAdapter(RedisConfig()) as redis:
        ...     await redis.set("key", "value")
    """

    backend_type: BackendType

    def __init__(self, event_sink: Optional[EventSink] = None):
        self._event_sink = event_sink or log_event

    @property
    def backend_name(self) -> str:
        return self.backend_type.display_name

    @abstractmethod
    async def connect(self) -> None:
        """Open the vendor connection. No-op when already connected."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the vendor connection. No-op when not connected."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Whether a live handle is held."""

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NotConnectedError(self.backend_name)

    def _emit(self, name: str, error: Optional[BaseException] = None, **detail: Any) -> None:
        event = AdapterEvent(backend=self.backend_name, name=name, detail=detail, error=error)
        try:
            self._event_sink(event)
        except Exception as e:
            logger.warning(f"Event sink raised while handling {self.backend_name} {name}: {e}")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()


__all__ = ["BaseAdapter", "EventSink", "log_event", "reports_errors"]
