"""Tests for the Jina and OpenAI embedding providers."""
import asyncio
import json

import httpx
import pytest

from vectorsmith.embeddings import (
    JinaEmbeddingModel,
    JinaEmbeddingProvider,
    OpenAIEmbeddingModel,
    OpenAIEmbeddingProvider,
)
from vectorsmith.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingTimeoutError,
    MalformedResponseError,
    UpstreamHttpError,
)
from vectorsmith.utils.config import EmbeddingOptions


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def embeddings_response(*vectors, shuffle=False):
    data = [{"object": "embedding", "index": i, "embedding": v} for i, v in enumerate(vectors)]
    if shuffle:
        data.reverse()
    return httpx.Response(200, json={"object": "list", "data": data})


class TestConstruction:

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="api_key"):
            OpenAIEmbeddingProvider("", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL)

    def test_requires_model(self):
        with pytest.raises(ConfigurationError, match="model"):
            JinaEmbeddingProvider("key", "")

    def test_rejects_unknown_model(self):
        with pytest.raises(ConfigurationError, match="Valid values"):
            OpenAIEmbeddingProvider("key", "text-embedding-ada-001")

    def test_accepts_model_string(self):
        provider = JinaEmbeddingProvider("key", "jina-code-embeddings-1.5b")
        assert provider.model == JinaEmbeddingModel.CODE_EMBEDDINGS_1_5B.value

    def test_default_base_urls(self):
        assert JinaEmbeddingProvider("k", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B).base_url == "https://api.jina.ai/v1"
        assert OpenAIEmbeddingProvider("k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_LARGE).base_url == "https://api.openai.com/v1"

    def test_base_url_trailing_slash(self):
        provider = OpenAIEmbeddingProvider(
            "k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL,
            EmbeddingOptions(base_url="http://proxy.local/v1/")
        )
        assert provider.base_url == "http://proxy.local/v1"


class TestFromEnv:

    def test_openai_defaults_model(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        provider = OpenAIEmbeddingProvider.from_env()

        assert provider.api_key == "sk-test"
        assert provider.model == "text-embedding-3-small"

    def test_jina_reads_model(self, monkeypatch):
        monkeypatch.setenv("JINA_API_KEY", "jina-test")
        monkeypatch.setenv("JINA_EMBEDDING_MODEL", "jina-embeddings-v2-base-code")

        provider = JinaEmbeddingProvider.from_env()

        assert provider.model == "jina-embeddings-v2-base-code"

    def test_jina_requires_model(self, monkeypatch):
        monkeypatch.setenv("JINA_API_KEY", "jina-test")

        with pytest.raises(ConfigurationError):
            JinaEmbeddingProvider.from_env()

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="api_key"):
            OpenAIEmbeddingProvider.from_env()


@pytest.mark.asyncio
async def test_embed_sends_bearer_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return embeddings_response([0.1, 0.2], [0.3, 0.4])

    async with mock_client(handler) as client:
        provider = OpenAIEmbeddingProvider(
            "sk-test", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL, http_client=client
        )
        vectors = await provider.embed(["hello", "world"])

    assert vectors == [[0.1, 0.2], [0.3, 0.4]]
    assert seen["url"] == "https://api.openai.com/v1/embeddings"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"] == {"model": "text-embedding-3-small", "input": ["hello", "world"]}


@pytest.mark.asyncio
async def test_embed_restores_input_order():
    async with mock_client(lambda request: embeddings_response([1.0], [2.0], [3.0], shuffle=True)) as client:
        provider = JinaEmbeddingProvider("k", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B, http_client=client)
        vectors = await provider.embed(["a", "b", "c"])

    assert vectors == [[1.0], [2.0], [3.0]]


@pytest.mark.asyncio
async def test_embed_one():
    async with mock_client(lambda request: embeddings_response([0.5, 0.5])) as client:
        provider = JinaEmbeddingProvider("k", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B, http_client=client)
        assert await provider.embed_one("def f(): pass") == [0.5, 0.5]


@pytest.mark.asyncio
async def test_upstream_error_carries_status_and_body():
    async with mock_client(lambda request: httpx.Response(401, text="invalid api key")) as client:
        provider = JinaEmbeddingProvider("bad", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B, http_client=client)

        with pytest.raises(UpstreamHttpError) as exc_info:
            await provider.embed(["text"])

    assert exc_info.value.status_code == 401
    assert exc_info.value.body == "invalid api key"
    assert "Jina" in str(exc_info.value)


@pytest.mark.asyncio
async def test_dimension_mismatch():
    async with mock_client(lambda request: embeddings_response([0.0] * 10)) as client:
        provider = JinaEmbeddingProvider(
            "k", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B,
            EmbeddingOptions(expected_dimensions=896), http_client=client
        )

        with pytest.raises(DimensionMismatchError) as exc_info:
            await provider.embed(["text"])

    assert exc_info.value.expected == 896
    assert exc_info.value.actual == 10


@pytest.mark.asyncio
async def test_timeout():
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return embeddings_response([0.1])

    async with mock_client(slow) as client:
        provider = OpenAIEmbeddingProvider(
            "k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL,
            EmbeddingOptions(timeout=0.05), http_client=client
        )

        with pytest.raises(EmbeddingTimeoutError) as exc_info:
            await provider.embed(["text"])

    assert exc_info.value.timeout == 0.05
    assert isinstance(exc_info.value, TimeoutError)


@pytest.mark.asyncio
@pytest.mark.parametrize("texts", [[], None])
async def test_empty_input(texts):
    provider = OpenAIEmbeddingProvider("k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL)

    with pytest.raises(ValueError):
        await provider.embed(texts)


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, json={"error": "nope"}),
    httpx.Response(200, json={"data": [{"index": 0}]}),
    httpx.Response(200, json={"data": [{"index": 0, "embedding": ["x"]}]}),
    httpx.Response(200, text="<html>gateway</html>"),
])
async def test_malformed_response(response):
    async with mock_client(lambda request: response) as client:
        provider = OpenAIEmbeddingProvider("k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL, http_client=client)

        with pytest.raises(MalformedResponseError):
            await provider.embed(["text"])


@pytest.mark.asyncio
async def test_embed_one_with_empty_data():
    async with mock_client(lambda request: httpx.Response(200, json={"data": []})) as client:
        provider = OpenAIEmbeddingProvider("k", OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL, http_client=client)

        with pytest.raises(MalformedResponseError, match="expected 1 vectors, received 0"):
            await provider.embed_one("text")


@pytest.mark.asyncio
async def test_short_response_is_rejected():
    async with mock_client(lambda request: embeddings_response([0.1])) as client:
        provider = JinaEmbeddingProvider("k", JinaEmbeddingModel.CODE_EMBEDDINGS_0_5B, http_client=client)

        with pytest.raises(MalformedResponseError, match="expected 3 vectors, received 1"):
            await provider.embed(["a", "b", "c"])
