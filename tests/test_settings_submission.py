import asyncio
import json

import httpx

from quota_admin.core.errors import TransportError
from quota_admin.services.settings_submission import (
    SettingsSubmissionController,
    SubmitOutcome,
    serialize_option_value,
)


class RefreshCounter:
    def __init__(self) -> None:
        self.count = 0

    async def __call__(self) -> None:
        self.count += 1


def _submit(make_api, notifier, refresh, keys, current, transport=None):
    async def scenario():
        async with make_api(transport) as api:
            controller = SettingsSubmissionController(api, notifier=notifier, refresh=refresh)
            outcome = await controller.submit(keys, current)
            return controller, outcome

    return asyncio.run(scenario())


def test_serialize_option_value():
    assert serialize_option_value(True) == "true"
    assert serialize_option_value(False) == "false"
    assert serialize_option_value("regex:foo.*bar") == "regex:foo.*bar"
    assert serialize_option_value(5) == 5


def test_all_succeed_refreshes_once(make_api, gateway, notifier):
    refresh = RefreshCounter()
    current = {"CheckSensitiveEnabled": False, "CheckSensitiveOnPromptEnabled": True, "SensitiveWords": "a\nb"}
    controller, outcome = _submit(make_api, notifier, refresh, list(current), current)

    assert outcome is SubmitOutcome.SAVED
    assert refresh.count == 1
    assert not controller.loading
    assert notifier.of("success") == ["Saved"]
    bodies = gateway.requests_for("PUT", "/api/option/")
    assert sorted(bodies, key=lambda body: body["key"]) == [
        {"key": "CheckSensitiveEnabled", "value": "false"},
        {"key": "CheckSensitiveOnPromptEnabled", "value": "true"},
        {"key": "SensitiveWords", "value": "a\nb"},
    ]


def test_partial_failure_reports_aggregate_error(make_api, gateway, notifier):
    gateway.failing_options = {"SensitiveWords"}
    refresh = RefreshCounter()
    current = {"CheckSensitiveEnabled": True, "CheckSensitiveOnPromptEnabled": True, "SensitiveWords": "x"}
    controller, outcome = _submit(make_api, notifier, refresh, list(current), current)

    assert outcome is SubmitOutcome.PARTIAL
    assert refresh.count == 0
    assert not controller.loading
    assert notifier.of("error") == ["Some changes failed to save, please retry"]
    assert notifier.of("success") == []
    assert len(gateway.requests_for("PUT", "/api/option/")) == 3


def test_single_failure_shows_no_aggregate_error(make_api, gateway, notifier):
    gateway.failing_options = {"SensitiveWords"}
    refresh = RefreshCounter()
    controller, outcome = _submit(make_api, notifier, refresh, ["SensitiveWords"], {"SensitiveWords": "x"})

    assert outcome is SubmitOutcome.FAILED
    assert refresh.count == 0
    assert notifier.of("error") == ["Cannot update SensitiveWords"]
    assert notifier.of("success") == []


def test_transport_exception_is_generic_failure(make_api, notifier):
    def handler(request: httpx.Request) -> httpx.Response:
        if json.loads(request.content)["key"] == "SensitiveWords":
            raise httpx.ConnectError("connection reset", request=request)
        return httpx.Response(200, json={"success": True, "message": ""})

    refresh = RefreshCounter()
    current = {"CheckSensitiveEnabled": True, "SensitiveWords": "x"}
    controller, outcome = _submit(
        make_api, notifier, refresh, list(current), current, transport=httpx.MockTransport(handler)
    )

    assert outcome is SubmitOutcome.ERROR
    assert refresh.count == 0
    assert not controller.loading
    assert notifier.of("error") == ["Save failed, please retry"]


def test_requests_are_issued_concurrently(make_api, notifier):
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(200, json={"success": True, "message": ""})

    current = {"a": True, "b": False, "c": "words"}
    _, outcome = _submit(make_api, notifier, None, list(current), current, transport=httpx.MockTransport(handler))

    assert outcome is SubmitOutcome.SAVED
    assert peak == 3


def test_empty_key_list_sends_nothing(make_api, gateway, notifier):
    refresh = RefreshCounter()
    _, outcome = _submit(make_api, notifier, refresh, [], {"a": 1})
    assert outcome is SubmitOutcome.UNCHANGED
    assert gateway.requests == []
    assert refresh.count == 0


def test_failed_reload_after_save_is_reported(make_api, gateway, notifier):
    async def failing_refresh() -> None:
        raise TransportError("Request failed: reload refused")

    current = {"CheckSensitiveEnabled": True}
    controller, outcome = _submit(make_api, notifier, failing_refresh, list(current), current)

    assert outcome is SubmitOutcome.SAVED
    assert not controller.loading
    assert gateway.options["CheckSensitiveEnabled"] == "true"
    assert notifier.messages == [("success", "Saved"), ("error", "Request failed: reload refused")]


def test_concurrent_settings_submit_is_busy(make_api, notifier):
    async def scenario():
        release = asyncio.Event()
        bodies = []

        async def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            await release.wait()
            return httpx.Response(200, json={"success": True, "message": ""})

        current = {"CheckSensitiveEnabled": True, "SensitiveWords": "x"}
        async with make_api(httpx.MockTransport(handler)) as api:
            controller = SettingsSubmissionController(api, notifier=notifier)
            first = asyncio.create_task(controller.submit(list(current), current))
            await asyncio.sleep(0)
            assert controller.loading
            second = await controller.submit(list(current), current)
            release.set()
            return await first, second, bodies

    first, second, bodies = asyncio.run(scenario())
    assert first is SubmitOutcome.SAVED
    assert second is SubmitOutcome.BUSY
    assert sorted(body["key"] for body in bodies) == ["CheckSensitiveEnabled", "SensitiveWords"]
    assert notifier.of("warning") == ["A submission is already in progress"]
