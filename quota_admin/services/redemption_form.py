"""Create/edit form state for a single redemption code.

The mode is fixed when the controller is built: no ``editing_id`` means the
form creates new codes (possibly in batch), an ``editing_id`` means it loads
and updates that code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quota_admin.core.errors import (
    AdminError,
    ApplicationError,
    ServerError,
    SubmissionInProgressError,
    ValidationError,
)
from quota_admin.schemas.redemption import UNLIMITED_USES, RedemptionCode
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.callbacks import Callback, invoke
from quota_admin.services.code_export import export_filename, write_codes
from quota_admin.services.notifier import Notifier
from quota_admin.services.quota import render_quota
from quota_admin.services.redemption_validator import parse_form, validate

logger = logging.getLogger(__name__)


def default_inputs() -> dict[str, Any]:
    return {
        "name": "",
        "quota": 100000,
        "count": 1,
        "is_gift": False,
        "max_uses": UNLIMITED_USES,
        "valid_from": 0,
        "valid_until": 0,
    }


class RedemptionFormController:
    def __init__(
        self,
        api: AdminApiClient,
        *,
        editing_id: int | None = None,
        notifier: Notifier | None = None,
        refresh: Callback | None = None,
        close: Callback | None = None,
        confirm_download: Callback | None = None,
        export_dir: str | Path | None = None,
    ) -> None:
        self._api = api
        self._editing_id = editing_id
        self._notifier = notifier or Notifier()
        self._refresh = refresh
        self._close = close
        self._confirm_download = confirm_download
        self._export_dir = export_dir
        self._submitting = False

        self.inputs: dict[str, Any] = default_inputs()
        self.redemption_key = ""
        self.loading = self.is_edit
        self.last_export_path: Path | None = None

    @property
    def is_edit(self) -> bool:
        return self._editing_id is not None

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    def reset(self) -> None:
        self.inputs = default_inputs()
        self.redemption_key = ""

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.inputs:
            raise KeyError(name)
        self.inputs = {**self.inputs, name: value}

    def set_key(self, value: str) -> None:
        self.redemption_key = value

    async def open(self) -> None:
        if self.is_edit:
            await self.load(self._editing_id)
        else:
            self.reset()

    async def load(self, redemption_id: int) -> RedemptionCode:
        self.loading = True
        try:
            envelope = await self._api.get_redemption(redemption_id)
            if not envelope.success:
                raise ApplicationError(envelope.message)
            if not isinstance(envelope.data, dict):
                raise ServerError("Malformed redemption record")
            try:
                record = RedemptionCode.from_wire(envelope.data)
            except PydanticValidationError as exc:
                logger.warning("Malformed redemption record %s: %s", redemption_id, exc)
                raise ServerError("Malformed redemption record") from exc
        except AdminError as exc:
            self._notifier.error(exc.message)
            raise
        finally:
            self.loading = False

        self.inputs = {
            "name": record.name,
            "quota": record.quota,
            "count": record.count,
            "is_gift": record.is_gift,
            "max_uses": record.max_uses,
            "valid_from": record.valid_from,
            "valid_until": record.valid_until,
        }
        return record

    def build_record(self) -> RedemptionCode:
        """Coerce and validate the current inputs; raises ``ValidationError``."""
        record = parse_form(self.inputs, key=self.redemption_key, editing_id=self._editing_id)
        validate(record)
        if not self.is_edit and not record.name:
            record = record.model_copy(update={"name": render_quota(record.quota)})
        return record

    async def submit(self) -> bool:
        """Send the form; returns True once the server accepted it."""
        if self._submitting:
            self._notifier.warning(SubmissionInProgressError().message)
            return False

        try:
            record = self.build_record()
        except ValidationError as exc:
            self._notifier.error(exc.message)
            return False

        # Stays set until the post-save hooks have run.
        self._submitting = True
        try:
            return await self._submit_record(record)
        finally:
            self._submitting = False

    async def _submit_record(self, record: RedemptionCode) -> bool:
        self.loading = True
        try:
            if self.is_edit:
                envelope = await self._api.update_redemption(record.to_update_payload())
            else:
                envelope = await self._api.create_redemption(record.to_create_payload())
        except AdminError as exc:
            self._notifier.error(exc.message)
            return False
        finally:
            self.loading = False

        if not envelope.success:
            self._notifier.error(envelope.message)
            return False

        if self.is_edit:
            logger.info("Updated redemption code %s", record.id)
            self._notifier.success("Redemption code updated")
        else:
            logger.info("Created %d redemption code(s) named %r", record.count, record.name)
            self._notifier.success("Redemption code created")
            self.reset()
        await self._run_hook("refresh", self._refresh)
        await self._run_hook("close", self._close)

        if not self.is_edit and envelope.data:
            await self._offer_download([str(code) for code in envelope.data], record.name)
        return True

    async def _run_hook(self, name: str, callback: Callback | None) -> None:
        # Runs after a successful save: failures are reported, not raised.
        try:
            await invoke(callback)
        except AdminError as exc:
            logger.warning("%s after save failed: %s", name, exc)
            self._notifier.error(exc.message)

    async def _offer_download(self, codes: list[str], name: str) -> None:
        if self._confirm_download is None:
            return
        accepted = await invoke(self._confirm_download, codes, export_filename(name))
        if not accepted:
            return
        self.last_export_path = write_codes(codes, name, self._export_dir)
        self._notifier.success(f"Saved {len(codes)} code(s) to {self.last_export_path}")
