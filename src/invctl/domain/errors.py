"""Repository error taxonomy and the explicit result value.

Repository operations never raise for the three expected failure kinds.
They return an :class:`Outcome` holding either the value or a
:class:`RepositoryError`, and the caller decides whether to report,
skip, or abort. ``Outcome.unwrap()`` converts back to an exception for
callers that prefer unwinding.

INVARIANT: A failed operation leaves the repository unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar, cast

T = TypeVar("T")


class ErrorKind(StrEnum):
    """All repository failures are caller-recoverable logic errors."""

    DUPLICATE_KEY = "DUPLICATE_KEY"
    NOT_FOUND = "NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"


@dataclass(frozen=True)
class RepositoryError:
    """Structured failure returned by a repository operation."""

    kind: ErrorKind
    message: str
    item_id: int | None = None

    @classmethod
    def duplicate_key(cls, item_id: int) -> RepositoryError:
        return cls(ErrorKind.DUPLICATE_KEY, f"Item with ID {item_id} already exists", item_id)

    @classmethod
    def not_found(cls, item_id: int) -> RepositoryError:
        return cls(ErrorKind.NOT_FOUND, f"Item {item_id} not found", item_id)

    @classmethod
    def invalid_quantity(cls, item_id: int, quantity: int) -> RepositoryError:
        return cls(
            ErrorKind.INVALID_QUANTITY,
            f"Quantity cannot be negative (got {quantity})",
            item_id,
        )


class RepositoryFailure(Exception):
    """Raised by :meth:`Outcome.unwrap` when the outcome holds an error."""

    def __init__(self, error: RepositoryError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value or repository error, exactly one of the two."""

    value: T | None = None
    error: RepositoryError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: RepositoryError) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise :class:`RepositoryFailure`."""
        if self.error is not None:
            raise RepositoryFailure(self.error)
        return cast(T, self.value)
