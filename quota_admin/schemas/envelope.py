from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    success: bool
    message: str = ""
    data: T | None = None


class OptionItem(BaseModel):
    key: str
    value: Any = None


class OptionUpdateRequest(BaseModel):
    key: str
    value: Any
