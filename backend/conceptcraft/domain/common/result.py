"""Result<T> pattern: domain functions return this instead of raising exceptions for normal flow."""
from __future__ import annotations
from enum import Enum
from typing import TypeVar, Generic, Optional

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a domain operation was refused. The API layer maps these to status codes."""
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    ALREADY_LINKED = "already_linked"
    NOT_LINKED = "not_linked"
    HAS_CONCEPTS = "has_concepts"
    INVALID = "invalid"


class Result(Generic[T]):
    def __init__(
        self,
        is_success: bool,
        value: Optional[T] = None,
        error: Optional[str] = None,
        kind: Optional[ErrorKind] = None,
    ):
        self.is_success = is_success
        self.value = value
        self.error = error
        self.kind = kind

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.INVALID) -> "Result[T]":
        return cls(is_success=False, error=error, kind=kind)

    @classmethod
    def not_found(cls, error: str) -> "Result[T]":
        return cls.fail(error, ErrorKind.NOT_FOUND)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self.value!r})"
        return f"Result.fail({self.error!r}, {self.kind.value!r})"
