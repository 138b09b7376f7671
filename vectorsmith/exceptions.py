"""
Exception hierarchy for vectorsmith.

Vendor driver errors (connection refused, auth failures, SQL errors) are not
wrapped; they reach the caller as raised by the driver.
"""
from typing import Optional


class VectorSmithError(Exception):
    """Base class for all vectorsmith errors."""


class ConfigurationError(VectorSmithError, ValueError):
    """Invalid or missing configuration (no backends, no providers, bad default)."""


class NotConfiguredError(VectorSmithError, LookupError):
    """An accessor was called for a backend that was never configured."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(f"{backend} adapter is not configured.")


class NotConnectedError(VectorSmithError, RuntimeError):
    """A data operation was attempted before a successful connect()."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(f"{backend} is not connected. Call connect() first.")


class DimensionMismatchError(VectorSmithError, ValueError):
    """Vector length does not match the declared or expected dimension."""

    def __init__(self, expected: int, actual: Optional[int], context: str = "Vector"):
        self.expected = expected
        self.actual = actual
        received = actual if actual is not None else "invalid"
        super().__init__(
            f"{context} dimension mismatch. Expected {expected}, received {received}."
        )


class UnsupportedMetricError(VectorSmithError, ValueError):
    """Distance metric is unknown or does not match the table configuration."""

    def __init__(self, metric: str, message: Optional[str] = None):
        self.metric = metric
        super().__init__(message or f"Unsupported distance metric: {metric}")


class UpstreamHttpError(VectorSmithError):
    """Embeddings API answered with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, body: str):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} embeddings failed: {status_code} {body}")


class EmbeddingTimeoutError(VectorSmithError, TimeoutError):
    """Embeddings call exceeded its configured deadline."""

    def __init__(self, provider: str, timeout: float):
        self.provider = provider
        self.timeout = timeout
        super().__init__(f"{provider} embeddings timed out after {timeout}s")


class MalformedResponseError(VectorSmithError, ValueError):
    """Embeddings API returned JSON without the expected data array."""


__all__ = [
    "VectorSmithError",
    "ConfigurationError",
    "NotConfiguredError",
    "NotConnectedError",
    "DimensionMismatchError",
    "UnsupportedMetricError",
    "UpstreamHttpError",
    "EmbeddingTimeoutError",
    "MalformedResponseError",
]
