"""Tagged outcomes for validation-heavy code paths.

Validators, the pin store and the catalog return ``Ok(value)`` or
``Failure(ValidationError)`` instead of raising, so callers branch explicitly.
The HTTP layer calls :meth:`unwrap`, which hands the carried error to the
registered exception handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from pinmap.core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: ValidationError

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error)

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Failure]


def fail(message: str) -> Failure:
    return Failure(ValidationError(message))


__all__ = ["Failure", "Ok", "Result", "fail"]
