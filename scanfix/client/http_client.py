"""httpx-based client for the external scan backend.

Endpoints:
  - POST {base}/api/scan            -> {"scan_id": ...}
  - GET  {base}/api/scan/{scan_id}  -> {"status", "progress", "message", "results"?}

Every failure is mapped onto the lifecycle error taxonomy:
  - connection errors, timeouts, 5xx  -> TransportError (retryable)
  - 4xx                               -> TransportError (not retryable)
  - body missing / wrong shape        -> ProtocolError
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from scanfix.core.config import settings
from scanfix.core.errors import ProtocolError, TransportError
from scanfix.domain.schemas import PollResponse, SubmitAck, SubmitPayload

from .base import ScanBackend

logger = logging.getLogger(__name__)


class HttpScanBackend(ScanBackend):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.SCANNER_BASE_URL,
            timeout=httpx.Timeout(timeout or settings.SCAN_REQUEST_TIMEOUT),
        )

    async def __aenter__(self) -> HttpScanBackend:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def submit(self, payload: SubmitPayload) -> str:
        data = await self._request("POST", "/api/scan", json=payload.model_dump())
        try:
            ack = SubmitAck.model_validate(data)
        except ValidationError:
            raise ProtocolError("Invalid response from server: missing scan_id")
        logger.info("Scan submitted", extra={"scan_id": ack.scan_id})
        return ack.scan_id

    async def poll(self, scan_id: str) -> PollResponse:
        data = await self._request("GET", f"/api/scan/{scan_id}")
        try:
            return PollResponse.model_validate(data)
        except ValidationError as e:
            raise ProtocolError(f"Invalid status response for scan {scan_id}: {e.error_count()} problem(s)")

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {method} {url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach scan backend: {e}") from e

        if response.is_error:
            raise TransportError(
                _error_message(response),
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )

        try:
            return response.json()
        except ValueError:
            raise ProtocolError(f"Scan backend returned a non-JSON body for {method} {url}")


def _error_message(response: httpx.Response) -> str:
    """Prefer the backend's own ``error`` / ``detail`` text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"Scan backend returned HTTP {response.status_code}"
