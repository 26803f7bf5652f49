import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from quota_admin.services.api_client import AdminApiClient

logger = logging.getLogger(__name__)

OptionListener = Callable[[Mapping[str, Any]], None]


class OptionStore:
    """Process-wide options map, pushed one way to subscribed panels."""

    def __init__(self, api: AdminApiClient) -> None:
        self._api = api
        self._options: Mapping[str, Any] = MappingProxyType({})
        self._listeners: list[OptionListener] = []

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options

    def subscribe(self, listener: OptionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self._options)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, options: Mapping[str, Any]) -> None:
        self._options = MappingProxyType(dict(options))
        for listener in list(self._listeners):
            listener(self._options)

    async def load(self) -> Mapping[str, Any]:
        options = await self._api.list_options()
        logger.debug("Loaded %d options", len(options))
        self.replace(options)
        return self._options
