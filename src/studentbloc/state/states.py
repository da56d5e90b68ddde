"""Observable outcomes broadcast by the coordinator."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from studentbloc.models import Student, StudentBlocModel


class Initial(StudentBlocModel):
    kind: Literal["initial"] = "initial"


class Pending(StudentBlocModel):
    kind: Literal["pending"] = "pending"


class Loaded(StudentBlocModel):
    """Snapshot of the whole collection, in store order."""

    kind: Literal["loaded"] = "loaded"
    records: tuple[Student, ...] = ()


class OperationSucceeded(StudentBlocModel):
    kind: Literal["operation_succeeded"] = "operation_succeeded"
    message: str


class OperationFailed(StudentBlocModel):
    """The single user-visible error channel."""

    kind: Literal["operation_failed"] = "operation_failed"
    reason: str


StudentState = Annotated[
    Initial | Pending | Loaded | OperationSucceeded | OperationFailed,
    Field(discriminator="kind"),
]

STATE_ADAPTER: TypeAdapter[StudentState] = TypeAdapter(StudentState)
"""Parses serialized states back into the matching variant."""
