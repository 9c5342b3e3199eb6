import asyncio
import json
import time
import pytest
import httpx
from pydantic import SecretStr

from app.core.config import settings
from app.core.exceptions import GatewayError
from app.core.gateway_client import GatewayClient, create_gateway_client
from tests.testing_config import testing_settings


def make_client(handler, url=testing_settings.AI_GATEWAY_URL, timeout=None) -> GatewayClient:
    return GatewayClient(
        api_key=testing_settings.AI_GATEWAY_API_KEY,
        url=url,
        model=testing_settings.AI_MODEL,
        timeout=timeout or testing_settings.AI_GATEWAY_TIMEOUT_SECONDS,
        transport=httpx.MockTransport(handler),
    )


def completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
class TestGatewayClient:
    async def test_sends_chat_completion_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=completion('{"recipes": []}'))

        client = make_client(handler)
        content = await client.complete("Make soup")
        await client.aclose()

        assert content == '{"recipes": []}'
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == testing_settings.AI_GATEWAY_URL
        assert request.headers["authorization"] == "Bearer test-gateway-key"
        assert json.loads(request.content) == {
            "model": "test/model",
            "messages": [{"role": "user", "content": "Make soup"}],
        }

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, text="upstream exploded"),
            httpx.Response(401, json={"error": "unauthorized"}),
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(200, json={"choices": []}),
            httpx.Response(200, json={"error": "quota"}),
            httpx.Response(200, json=completion(None)),
        ],
    )
    async def test_bad_replies_raise_gateway_error(self, response):
        client = make_client(lambda request: response)
        with pytest.raises(GatewayError):
            await client.complete("Make soup")
        await client.aclose()

    async def test_timeout_raises_gateway_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        with pytest.raises(GatewayError) as exc_info:
            await client.complete("Make soup")
        await client.aclose()
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    async def test_connection_error_raises_gateway_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        with pytest.raises(GatewayError):
            await client.complete("Make soup")
        await client.aclose()

    async def test_slow_reply_is_cut_off_at_overall_deadline(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json=completion('{"recipes": []}'))

        client = make_client(handler, timeout=0.2)
        started = time.monotonic()
        with pytest.raises(GatewayError, match="timed out"):
            await client.complete("Make soup")
        await client.aclose()
        assert time.monotonic() - started < 2

    async def test_invalid_url_raises_gateway_error(self):
        client = make_client(lambda request: httpx.Response(200), url="https://gateway.test/\x00")
        with pytest.raises(GatewayError):
            await client.complete("Make soup")
        await client.aclose()

    async def test_deeply_nested_reply_raises_gateway_error(self):
        body = b"[" * 100000 + b"]" * 100000
        client = make_client(
            lambda request: httpx.Response(200, content=body, headers={"content-type": "application/json"})
        )
        with pytest.raises(GatewayError):
            await client.complete("Make soup")
        await client.aclose()

    async def test_api_key_is_not_logged(self, caplog):
        client = make_client(lambda request: httpx.Response(503))
        with pytest.raises(GatewayError):
            await client.complete("Make soup")
        await client.aclose()
        assert "test-gateway-key" not in caplog.text


@pytest.mark.asyncio
async def test_create_gateway_client_uses_settings():
    client = create_gateway_client()
    assert client.model == settings.AI_MODEL
    assert client.url == settings.AI_GATEWAY_URL
    assert isinstance(client._api_key, SecretStr)
    await client.aclose()
