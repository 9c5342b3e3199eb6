import asyncio
import logging

import httpx
from pydantic import SecretStr

from app.core.config import settings
from app.core.exceptions import GatewayError

logger = logging.getLogger(__name__)


class GatewayClient:
    """Chat-completion client for the language-model gateway.

    One outbound request per call, no retries. ``timeout`` bounds the whole
    call, not just each socket operation. Any failure surfaces as
    ``GatewayError``.
    """

    def __init__(
        self,
        api_key: SecretStr,
        url: str,
        model: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict) -> object:
        response = await self.client.post(self.url, json=payload, headers=self._headers())
        response.raise_for_status()
        return response.json()

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            data = await asyncio.wait_for(self._post(payload), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as ex:
            logger.error(f"Gateway request timed out: {ex!r}")
            raise GatewayError("Gateway request timed out") from ex
        except httpx.HTTPStatusError as ex:
            logger.error(f"Gateway returned status {ex.response.status_code}")
            raise GatewayError(
                f"Gateway returned status {ex.response.status_code}"
            ) from ex
        except (httpx.HTTPError, httpx.InvalidURL) as ex:
            logger.error(f"Gateway request failed: {ex!r}")
            raise GatewayError("Gateway request failed") from ex
        except (ValueError, RecursionError) as ex:
            logger.error("Gateway reply is not valid JSON")
            raise GatewayError("Gateway reply is not valid JSON") from ex

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as ex:
            raise GatewayError("Gateway reply has no message content") from ex

        if not isinstance(content, str):
            raise GatewayError("Gateway message content is not text")

        return content

    async def aclose(self) -> None:
        await self.client.aclose()


def create_gateway_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> GatewayClient:
    return GatewayClient(
        api_key=settings.AI_GATEWAY_API_KEY,
        url=settings.AI_GATEWAY_URL,
        model=settings.AI_MODEL,
        timeout=settings.AI_GATEWAY_TIMEOUT_SECONDS,
        transport=transport,
    )
