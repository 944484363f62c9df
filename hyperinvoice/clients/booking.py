from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from hyperinvoice.services.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class BookingServiceClient:
    """Async HTTP client for the external booking service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = str(base_url).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client: Optional[httpx.AsyncClient] = None
        logger.info("Booking service client initialised with base URL %s", self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        client = await self._ensure_client()
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Booking service returned %s for GET %s", exc.response.status_code, path
            )
            raise UpstreamFailure(
                f"Booking service returned {exc.response.status_code}",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            logger.exception("Unable to reach booking service: %s", exc)
            raise UpstreamFailure(
                f"Unable to reach booking service: {exc}", cause=exc
            ) from exc
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFailure(
                f"Booking service returned invalid JSON: {exc}", cause=exc
            ) from exc

    async def post(self, path: str, payload: Dict[str, Any]) -> None:
        client = await self._ensure_client()
        try:
            logger.debug("POST %s payload=%s", path, payload)
            response = await client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Booking service returned %s for POST %s", exc.response.status_code, path
            )
            raise UpstreamFailure(
                f"Booking service returned {exc.response.status_code}",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            logger.exception("Unable to reach booking service: %s", exc)
            raise UpstreamFailure(
                f"Unable to reach booking service: {exc}", cause=exc
            ) from exc
