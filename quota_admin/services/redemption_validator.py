"""Field coercion and cross-field checks for redemption codes.

Nothing in here performs I/O: the form controller runs these before any
request is issued, so a rejected record never reaches the server.
"""

import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from quota_admin.core.errors import FieldFormatError, TimeWindowError
from quota_admin.schemas.redemption import UNLIMITED_USES, GiftKind, RedemptionCode, StandardKind

_INTEGER_RE = re.compile(r"-?[0-9]+")


def coerce_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise FieldFormatError(field, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise FieldFormatError(field, value)
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER_RE.fullmatch(text):
            raise FieldFormatError(field, value)
        return int(text)
    raise FieldFormatError(field, value)


def coerce_timestamp(field: str, value: Any) -> int:
    """Unix seconds; blank or ``None`` means 0 (unbounded)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    if isinstance(value, datetime):
        return math.floor(value.timestamp())
    seconds = coerce_int(field, value)
    if seconds < 0:
        raise FieldFormatError(field, value, "must not be negative")
    return seconds


def _coerce_max_uses(value: Any) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return UNLIMITED_USES
    max_uses = coerce_int("max_uses", value)
    if max_uses != UNLIMITED_USES and max_uses < 1:
        raise FieldFormatError("max_uses", value, "must be -1 (unlimited) or at least 1")
    return max_uses


def parse_form(inputs: Mapping[str, Any], key: str | None = None, editing_id: int | None = None) -> RedemptionCode:
    """Build a ``RedemptionCode`` from raw form values.

    ``count`` and ``key`` only apply when creating; ``max_uses`` is only read
    for gift codes.
    """
    quota = coerce_int("quota", inputs.get("quota"))
    if quota <= 0:
        raise FieldFormatError("quota", inputs.get("quota"), "must be positive")

    count = 1
    if editing_id is None:
        count = coerce_int("count", inputs.get("count"))
        if count < 1:
            raise FieldFormatError("count", inputs.get("count"), "must be at least 1")

    if inputs.get("is_gift"):
        kind: StandardKind | GiftKind = GiftKind(max_uses=_coerce_max_uses(inputs.get("max_uses")))
    else:
        kind = StandardKind()

    return RedemptionCode(
        id=editing_id,
        name=str(inputs.get("name") or ""),
        quota=quota,
        count=count,
        key=key if editing_id is None else None,
        kind=kind,
        valid_from=coerce_timestamp("valid_from", inputs.get("valid_from")),
        valid_until=coerce_timestamp("valid_until", inputs.get("valid_until")),
    )


def validate(record: RedemptionCode) -> None:
    """Raise ``TimeWindowError`` when a bounded window is empty or inverted."""
    if record.valid_from > 0 and record.valid_until > 0 and record.valid_from >= record.valid_until:
        raise TimeWindowError(record.valid_from, record.valid_until)
