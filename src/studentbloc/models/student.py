"""Student record model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictInt, field_validator

from studentbloc.models._base import StudentBlocModel


class Student(StudentBlocModel):
    """A single student record.

    ``id`` is assigned by the store and never changes.  Edits are expressed
    by building a new value with :meth:`copy_with`; two records are equal
    only when every field, ``id`` included, matches.
    """

    id: str = Field(..., description="Opaque unique identifier")
    name: str
    age: StrictInt = Field(..., ge=0)
    school: str

    @field_validator("id", "name", "school")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value

    def copy_with(self, **overrides: Any) -> Student:
        """Return a re-validated copy with *overrides* applied.

        The identity is fixed: passing ``id`` raises ``ValueError``.
        """
        if "id" in overrides:
            raise ValueError("id cannot be changed")
        return Student.model_validate({**self.model_dump(), **overrides})
