"""
Async client for the gateway's admin JSON API.

Every endpoint answers with the envelope ``{success, message, data}``.
``success=false`` is returned to the caller as a normal envelope; only
transport failures and 404/5xx statuses raise.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from quota_admin.core.config import get_settings
from quota_admin.core.errors import ApplicationError, NotFoundError, ServerError, TransportError
from quota_admin.schemas.envelope import ApiEnvelope, OptionItem, OptionUpdateRequest

logger = logging.getLogger(__name__)


class AdminApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        access_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        headers = {"Accept": "application/json"}
        token = settings.admin_access_token if access_token is None else access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.api_base_url).rstrip("/"),
            headers=headers,
            timeout=settings.request_timeout_seconds if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AdminApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> ApiEnvelope[Any]:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"Request failed: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(f"{path} not found", status_code=404)
        if response.status_code >= 500:
            raise ServerError(f"Server error: HTTP {response.status_code}", status_code=response.status_code)

        try:
            envelope = ApiEnvelope[Any].model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            if response.is_success:
                raise ServerError("Malformed response from server", status_code=response.status_code) from exc
            raise ApplicationError(f"HTTP {response.status_code}", status_code=response.status_code) from exc

        if not envelope.success:
            logger.info("%s %s rejected: %s", method, path, envelope.message)
        return envelope

    # ── Redemption codes ────────────────────────────────────────────────────

    async def get_redemption(self, redemption_id: int) -> ApiEnvelope[Any]:
        return await self._request("GET", f"/api/redemption/{redemption_id}")

    async def create_redemption(self, payload: dict[str, Any]) -> ApiEnvelope[Any]:
        return await self._request("POST", "/api/redemption/", payload)

    async def update_redemption(self, payload: dict[str, Any]) -> ApiEnvelope[Any]:
        return await self._request("PUT", "/api/redemption/", payload)

    # ── Options ─────────────────────────────────────────────────────────────

    async def list_options(self) -> dict[str, Any]:
        envelope = await self._request("GET", "/api/option/")
        if not envelope.success:
            raise ApplicationError(envelope.message)
        items = [OptionItem.model_validate(item) for item in envelope.data or []]
        return {item.key: item.value for item in items}

    async def update_option(self, key: str, value: Any) -> ApiEnvelope[Any]:
        body = OptionUpdateRequest(key=key, value=value)
        return await self._request("PUT", "/api/option/", body.model_dump())
