"""Consumer intents.

Presentation code expresses every request as one of these events and hands
it to the coordinator.  Only the coordinator turns them into store calls.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from studentbloc.models import Student, StudentBlocModel


class LoadAll(StudentBlocModel):
    """Reload the full collection."""

    kind: Literal["load_all"] = "load_all"


class Create(StudentBlocModel):
    """Add a new student.

    Field contents are checked when the store builds the record, so an
    invalid submission is reported as ``OperationFailed``.
    """

    kind: Literal["create"] = "create"
    name: str
    age: int
    school: str


class Update(StudentBlocModel):
    """Replace the stored record that has ``record.id``."""

    kind: Literal["update"] = "update"
    record: Student


class Delete(StudentBlocModel):
    """Remove the record with ``id``."""

    kind: Literal["delete"] = "delete"
    id: str


StudentEvent = Annotated[LoadAll | Create | Update | Delete, Field(discriminator="kind")]

EVENT_ADAPTER: TypeAdapter[StudentEvent] = TypeAdapter(StudentEvent)
"""Parses ``{"kind": ..., ...}`` payloads into the matching event."""

EVENT_TYPES: tuple[type[StudentBlocModel], ...] = (LoadAll, Create, Update, Delete)
