from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of a store operation. Stores never raise for expected failures;
    the HTTP layer decides how a failure is shown to the user.
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, kind: FailureKind = FailureKind.FAILURE) -> "Result[T]":
        return cls(ok=False, error=error, kind=kind)
