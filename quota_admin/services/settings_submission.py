"""Persist changed option keys, one ``PUT /api/option/`` per key, concurrently."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from quota_admin.core.errors import AdminError, PartialFailureError, SubmissionError, SubmissionInProgressError
from quota_admin.schemas.envelope import ApiEnvelope
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.callbacks import Callback, invoke
from quota_admin.services.config_diff import ChangedKey
from quota_admin.services.notifier import Notifier

logger = logging.getLogger(__name__)


class SubmitOutcome(str, enum.Enum):
    SAVED = "saved"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    PARTIAL = "partial"
    ERROR = "error"
    BUSY = "busy"


def serialize_option_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class SettingsSubmissionController:
    def __init__(self, api: AdminApiClient, *, notifier: Notifier | None = None, refresh: Callback | None = None):
        self._api = api
        self._notifier = notifier or Notifier()
        self._refresh = refresh
        self.loading = False

    async def submit(self, changed: Sequence[ChangedKey | str], current: Mapping[str, Any]) -> SubmitOutcome:
        if self.loading:
            self._notifier.warning(SubmissionInProgressError().message)
            return SubmitOutcome.BUSY
        keys = [item.key if isinstance(item, ChangedKey) else item for item in changed]
        if not keys:
            return SubmitOutcome.UNCHANGED

        self.loading = True
        try:
            results = await asyncio.gather(
                *(self._api.update_option(key, serialize_option_value(current[key])) for key in keys),
                return_exceptions=True,
            )
            return await self._classify(keys, results)
        finally:
            self.loading = False

    async def _classify(self, keys: list[str], results: list[ApiEnvelope[Any] | BaseException]) -> SubmitOutcome:
        for key, result in zip(keys, results):
            if isinstance(result, BaseException):
                if not isinstance(result, AdminError):
                    raise result
                logger.warning("Saving option %s raised: %s", key, result)
                self._notifier.error(SubmissionError().message)
                return SubmitOutcome.ERROR

        failed = [(key, result) for key, result in zip(keys, results) if not result.success]
        if failed:
            for key, envelope in failed:
                logger.warning("Option %s rejected: %s", key, envelope.message)
            if len(keys) == 1:
                # Single key: the server's own message is enough, no aggregate notice.
                self._notifier.error(failed[0][1].message)
                return SubmitOutcome.FAILED
            self._notifier.error(PartialFailureError(len(failed), len(keys)).message)
            return SubmitOutcome.PARTIAL

        logger.info("Saved options: %s", ", ".join(keys))
        self._notifier.success("Saved")
        try:
            await invoke(self._refresh)
        except AdminError as exc:
            logger.warning("Reload after save failed: %s", exc)
            self._notifier.error(exc.message)
        return SubmitOutcome.SAVED
