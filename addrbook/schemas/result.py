from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

from addrbook.errors import ErrorCode, ServiceError

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Error code, message and optional payload shared by every operation."""

    error_code: int = 0
    error_message: str = ""
    data: T | None = None

    @property
    def ok(self) -> bool:
        return self.error_code == ErrorCode.ok

    @classmethod
    def success(cls, data: T | None = None) -> Result[T]:
        return cls(data=data)

    @classmethod
    def failure(cls, error_code: int, error_message: str) -> Result[T]:
        return cls(error_code=int(error_code), error_message=error_message)

    @classmethod
    def from_error(cls, exc: ServiceError) -> Result[T]:
        return cls.failure(exc.error_code, exc.detail)
