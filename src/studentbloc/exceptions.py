"""Custom exception hierarchy for studentbloc."""

from __future__ import annotations


class StudentBlocError(Exception):
    """Base exception for all studentbloc errors."""


class StudentBlocConfigError(StudentBlocError):
    """Invalid or missing configuration."""


class StoreError(StudentBlocError):
    """Store-level fault while reading or mutating the collection."""


class DuplicateStudentError(StoreError):
    """A record with the same id is already present in the store.

    Raised when seeding the store with duplicate ids, or when the injected
    id factory hands out an id that is already in use.
    """

    def __init__(self, message: str, *, student_id: str) -> None:
        self.student_id = student_id
        super().__init__(message)


class CoordinatorClosedError(StudentBlocError):
    """An event was dispatched to a coordinator that has been closed."""
