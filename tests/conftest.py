import pytest
import httpx
from httpx import ASGITransport

from tests.fakes import FakeGatewayClient


@pytest.fixture
def fake_gateway() -> FakeGatewayClient:
    return FakeGatewayClient()


@pytest.fixture(scope="function")
async def async_client(fake_gateway):
    from app.main import app
    from app.api.v1.endpoints.recipes import get_gateway_client

    app.dependency_overrides[get_gateway_client] = lambda: fake_gateway

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
