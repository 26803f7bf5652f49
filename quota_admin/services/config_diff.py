from collections.abc import Mapping
from typing import Any, NamedTuple

_MISSING = object()


class ChangedKey(NamedTuple):
    key: str
    old_value: Any
    new_value: Any


def diff(current: Mapping[str, Any], baseline: Mapping[str, Any]) -> list[ChangedKey]:
    """Keys of ``current`` whose value differs (by ``==``) from ``baseline``.

    Order follows ``current``. A key missing from ``baseline`` counts as changed
    and is reported with ``old_value=None``.
    """
    changed: list[ChangedKey] = []
    for key, value in current.items():
        old = baseline.get(key, _MISSING)
        if old is _MISSING:
            changed.append(ChangedKey(key, None, value))
        elif old != value:
            changed.append(ChangedKey(key, old, value))
    return changed
