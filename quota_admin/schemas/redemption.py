from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

UNLIMITED_USES = -1


class StandardKind(BaseModel):
    """Single-use code."""

    type: Literal["standard"] = "standard"


class GiftKind(BaseModel):
    """Reusable code, redeemable up to ``max_uses`` times (``-1`` = unlimited)."""

    type: Literal["gift"] = "gift"
    max_uses: int = UNLIMITED_USES


RedemptionKind = Annotated[Union[StandardKind, GiftKind], Field(discriminator="type")]


class RedemptionCode(BaseModel):
    id: int | None = None
    name: str = ""
    quota: int = 100000
    count: int = 1
    key: str | None = None
    kind: RedemptionKind = Field(default_factory=StandardKind)
    valid_from: int = 0
    valid_until: int = 0

    @property
    def is_gift(self) -> bool:
        return isinstance(self.kind, GiftKind)

    @property
    def max_uses(self) -> int:
        return self.kind.max_uses if isinstance(self.kind, GiftKind) else UNLIMITED_USES

    def to_create_payload(self) -> dict[str, Any]:
        payload = self._common_payload()
        payload["count"] = self.count
        key = (self.key or "").strip()
        if key:
            payload["key"] = key
        return payload

    def to_update_payload(self) -> dict[str, Any]:
        if self.id is None:
            raise ValueError("Cannot build an update payload without an id")
        payload = self._common_payload()
        payload["id"] = self.id
        return payload

    def _common_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quota": self.quota,
            "is_gift": self.is_gift,
            "max_uses": self.max_uses,
            "valid_from": self.valid_from,
            "valid_until": self.valid_until,
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "RedemptionCode":
        kind: StandardKind | GiftKind
        if data.get("is_gift"):
            kind = GiftKind(max_uses=_or_default(data.get("max_uses"), UNLIMITED_USES))
        else:
            kind = StandardKind()
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            quota=_or_default(data.get("quota"), 0),
            count=data.get("count") or 1,
            key=data.get("key"),
            kind=kind,
            valid_from=data.get("valid_from") or 0,
            valid_until=data.get("valid_until") or 0,
        )


def _or_default(value: Any, default: int) -> Any:
    return default if value is None else value
