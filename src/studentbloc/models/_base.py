"""Base model for studentbloc values.

Every record, event and state inherits from :class:`StudentBlocModel`
which provides:

* ``frozen=True`` so values are immutable and hashable.
* ``extra="forbid"`` so typos in field names fail loudly.
* ``str_strip_whitespace=True`` so surrounding blanks never reach a record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StudentBlocModel(BaseModel):
    """Immutable pydantic base with value equality."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )
