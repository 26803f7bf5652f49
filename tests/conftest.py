from typing import Any

import httpx
import pytest
from fastapi import APIRouter, Body, FastAPI

from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.notifier import Notifier

BASE_URL = "http://testserver"


class FakeGateway:
    """In-memory stand-in for the gateway's admin endpoints."""

    def __init__(self) -> None:
        self.redemptions: dict[int, dict[str, Any]] = {}
        self.options: dict[str, Any] = {
            "CheckSensitiveEnabled": "true",
            "CheckSensitiveOnPromptEnabled": "false",
            "SensitiveWords": "test_sensitive\nregex:foo.*bar\n",
            "QuotaPerUnit": "500000",
        }
        self.failing_options: set[str] = set()
        self.reject_message: str | None = None
        self.requests: list[tuple[str, str, Any]] = []
        self._next_id = 1

    def add_redemption(self, **fields: Any) -> int:
        redemption_id = self._next_id
        self._next_id += 1
        row = {
            "id": redemption_id,
            "name": "seeded",
            "key": f"seeded-{redemption_id}",
            "quota": 500000,
            "count": 1,
            "status": 1,
            "is_gift": False,
            "max_uses": -1,
            "used_count": 0,
            "valid_from": 0,
            "valid_until": 0,
        }
        row.update(fields)
        self.redemptions[redemption_id] = row
        return redemption_id

    def requests_for(self, method: str, path: str) -> list[Any]:
        return [body for m, p, body in self.requests if m == method and p == path]


def build_app(gateway: FakeGateway) -> FastAPI:
    router = APIRouter(prefix="/api")

    @router.get("/redemption/{redemption_id}")
    def get_redemption(redemption_id: int) -> dict[str, Any]:
        gateway.requests.append(("GET", f"/api/redemption/{redemption_id}", None))
        row = gateway.redemptions.get(redemption_id)
        if row is None:
            return {"success": False, "message": "Redemption code not found"}
        return {"success": True, "message": "", "data": row}

    @router.post("/redemption/")
    def create_redemption(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        gateway.requests.append(("POST", "/api/redemption/", payload))
        if gateway.reject_message:
            return {"success": False, "message": gateway.reject_message}
        count = payload.get("count", 1)
        keys = [payload["key"]] if payload.get("key") else [f"code-{gateway._next_id}-{i}" for i in range(count)]
        for key in keys:
            gateway.add_redemption(**{k: v for k, v in payload.items() if k not in ("count", "key")}, key=key)
        return {"success": True, "message": "", "data": keys}

    @router.put("/redemption/")
    def update_redemption(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        gateway.requests.append(("PUT", "/api/redemption/", payload))
        if gateway.reject_message:
            return {"success": False, "message": gateway.reject_message}
        row = gateway.redemptions.get(payload.get("id"))
        if row is None:
            return {"success": False, "message": "Redemption code not found"}
        row.update(payload)
        return {"success": True, "message": ""}

    @router.get("/option/")
    def list_options() -> dict[str, Any]:
        gateway.requests.append(("GET", "/api/option/", None))
        data = [{"key": key, "value": value} for key, value in gateway.options.items()]
        return {"success": True, "message": "", "data": data}

    @router.put("/option/")
    def update_option(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        gateway.requests.append(("PUT", "/api/option/", payload))
        key = payload["key"]
        if key in gateway.failing_options:
            return {"success": False, "message": f"Cannot update {key}"}
        gateway.options[key] = payload["value"]
        return {"success": True, "message": ""}

    app = FastAPI()
    app.include_router(router)
    return app


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def make_api(gateway: FakeGateway):
    app = build_app(gateway)

    def factory(transport: httpx.AsyncBaseTransport | None = None) -> AdminApiClient:
        return AdminApiClient(BASE_URL, access_token="", transport=transport or httpx.ASGITransport(app=app))

    return factory


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
