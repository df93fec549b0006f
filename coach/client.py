"""
HTTP client for the model relay.

One outbound call per user action, bounded by a timeout. No retries.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .config import CoachSettings, get_coach_settings
from .models import AssistantReply, ComplexityEstimate, InteractionRequest

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Relay call failed. status_code is None when the relay was never reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


class RelayClient:
    """
    Async client for the relay's /api endpoints.

    Args:
        settings: Coach settings (relay URL and timeouts)
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self,
        settings: Optional[CoachSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_coach_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.settings.RELAY_URL,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {}

    async def _request(self, method: str, path: str, timeout: float, **kwargs) -> httpx.Response:
        client = await self._get_client()
        try:
            response = await client.request(method, path, timeout=timeout, **kwargs)
        except httpx.TimeoutException as e:
            raise RelayError(f"Relay timed out after {timeout}s") from e
        except httpx.HTTPError as e:
            raise RelayError(f"Relay unreachable: {e}") from e

        if not response.is_success:
            data = self._json(response)
            raise RelayError(
                f"Backend error: {response.status_code}",
                status_code=response.status_code,
                payload=data if isinstance(data, dict) else {},
            )
        return response

    async def check_health(self) -> dict[str, Any]:
        """Liveness probe against /api/health."""
        response = await self._request("GET", "/api/health", timeout=self.settings.HEALTH_TIMEOUT_SECONDS)
        return self._json(response)

    async def analyze(self, request: InteractionRequest) -> AssistantReply:
        """Send one interaction to /api/analyze."""
        response = await self._request(
            "POST",
            "/api/analyze",
            timeout=self.settings.REQUEST_TIMEOUT_SECONDS,
            json=request.model_dump(mode="json", by_alias=True),
        )
        data = self._json(response)
        try:
            return AssistantReply(
                response=data["response"],
                complexity=ComplexityEstimate.model_validate(data.get("complexity") or {}),
                source="model",
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise RelayError(
                f"Malformed relay response: {e}",
                status_code=response.status_code,
            ) from e
