from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quota_admin.schemas.options import SensitiveWordSettings
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.config_diff import diff
from quota_admin.services.notifier import Notifier
from quota_admin.services.option_store import OptionStore
from quota_admin.services.sensitive_words import SensitiveWordList
from quota_admin.services.settings_submission import SettingsSubmissionController, SubmitOutcome

logger = logging.getLogger(__name__)


class SensitiveWordsPanel:
    """Edits the sensitive-word filter options.

    ``inputs`` holds live edits and ``inputs_row`` the values as last loaded.
    Both are rebuilt from the option store on every change it publishes.
    """

    def __init__(self, api: AdminApiClient, store: OptionStore, *, notifier: Notifier | None = None) -> None:
        self._store = store
        self._notifier = notifier or Notifier()
        self._submitter = SettingsSubmissionController(api, notifier=self._notifier, refresh=store.load)
        self.inputs: dict[str, Any] = SensitiveWordSettings().to_options()
        self.inputs_row: dict[str, Any] = dict(self.inputs)
        self._unsubscribe = store.subscribe(self.sync)

    @property
    def loading(self) -> bool:
        return self._submitter.loading

    @property
    def settings(self) -> SensitiveWordSettings:
        return SensitiveWordSettings.model_validate(self.inputs)

    @property
    def word_list(self) -> SensitiveWordList:
        return SensitiveWordList.from_text(self.inputs.get("SensitiveWords", ""))

    def sync(self, options: Mapping[str, Any]) -> None:
        owned = {key: options[key] for key in SensitiveWordSettings.option_keys() if key in options}
        try:
            snapshot = SensitiveWordSettings.model_validate(owned).to_options()
        except PydanticValidationError as exc:
            logger.error("Ignoring malformed sensitive-word options: %s", exc)
            return
        self.inputs = snapshot
        self.inputs_row = dict(snapshot)

    def set_field(self, key: str, value: Any) -> None:
        if key not in SensitiveWordSettings.option_keys():
            raise KeyError(key)
        self.inputs = {**self.inputs, key: value}

    async def submit(self) -> SubmitOutcome:
        changed = diff(self.inputs, self.inputs_row)
        if not changed:
            self._notifier.warning("Nothing was changed")
            return SubmitOutcome.UNCHANGED
        return await self._submitter.submit(changed, self.inputs)

    def close(self) -> None:
        self._unsubscribe()
