"""Discriminated results returned by application services"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from domain.enums import ErrorCode
from domain.exceptions import ReservationError

T = TypeVar("T")


class Outcome(BaseModel, Generic[T]):
    """Either a value (ok) or an error code with a message"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    value: Optional[T] = None
    error: Optional[ErrorCode] = None
    message: str = ""

    @classmethod
    def success(cls, value: T, message: str = "") -> "Outcome[T]":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, exc: ReservationError) -> "Outcome[T]":
        return cls(ok=False, error=exc.code, message=exc.message)
