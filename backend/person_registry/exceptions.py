"""Domain errors shared by the service and the storage layer.

Every failure the library raises on purpose is a :class:`PersonError`.  The
``kind`` attribute tells callers *what* went wrong, so they branch on
``err.kind`` rather than on a class hierarchy:

    try:
        service.create(person)
    except PersonError as err:
        if err.kind is ErrorKind.CONFLICT:
            ...

Anything that is *not* a ``PersonError`` is an unexpected bug.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories."""

    VALIDATION = "validation_error"
    CONFLICT = "conflict_error"
    NOT_FOUND = "not_found_error"
    STORAGE = "storage_error"


class PersonError(Exception):
    """Raised for every domain failure; carries a kind, a message and an optional cause."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"[{self.kind.value}] {self.message}: {self.cause}"
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        return f"PersonError(kind={self.kind.name}, message={self.message!r}, cause={self.cause!r})"


def validation_error(message: str) -> PersonError:
    return PersonError(ErrorKind.VALIDATION, message)


def conflict_error(message: str, cause: Optional[BaseException] = None) -> PersonError:
    return PersonError(ErrorKind.CONFLICT, message, cause)


def not_found_error(message: str) -> PersonError:
    return PersonError(ErrorKind.NOT_FOUND, message)


def storage_error(message: str, cause: Optional[BaseException] = None) -> PersonError:
    return PersonError(ErrorKind.STORAGE, message, cause)


__all__ = [
    "ErrorKind",
    "PersonError",
    "conflict_error",
    "not_found_error",
    "storage_error",
    "validation_error",
]
