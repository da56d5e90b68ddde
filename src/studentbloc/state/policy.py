"""Outcome policy.

Maps a processed event to the text a consumer sees.  This module contains
no store access; the coordinator decides *whether* an event succeeded and
asks here *what* to say about it.
"""

from __future__ import annotations

from enum import StrEnum

from studentbloc.state.events import Create, Delete, LoadAll, StudentEvent, Update


class NotFoundPolicy(StrEnum):
    """Outcome of an update or delete that matches no record."""

    SUCCEED = "succeed"
    FAIL = "fail"


_OPERATION_LABELS: dict[type, str] = {
    LoadAll: "load students",
    Create: "add student",
    Update: "update student",
    Delete: "delete student",
}

_SUCCESS_MESSAGES: dict[type, str] = {
    Create: "Student added successfully",
    Update: "Student updated successfully",
    Delete: "Student deleted successfully",
}


def operation_label(event: StudentEvent) -> str:
    return _OPERATION_LABELS[type(event)]


def success_message(event: StudentEvent) -> str | None:
    """Message to emit after the refreshed snapshot, or ``None`` for reads."""
    return _SUCCESS_MESSAGES.get(type(event))


def failure_reason(event: StudentEvent, error: BaseException | str) -> str:
    return f"Failed to {operation_label(event)}: {error}"


def not_found_reason(event: StudentEvent, student_id: str) -> str:
    return failure_reason(event, f"no student with id {student_id!r}")
