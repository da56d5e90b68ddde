"""In-memory student store.

This is the only component that holds the authoritative collection.  The
coordinator is its only caller; everybody else sees the immutable
snapshots it hands out.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable

from studentbloc.exceptions import DuplicateStudentError
from studentbloc.models import Student

_logger = logging.getLogger(__name__)


def new_student_id() -> str:
    """Default id factory: a random UUID4 string."""
    return str(uuid.uuid4())


class StudentStore:
    """Ordered list of students keyed by ``id``.

    Lookups are linear.  Records are frozen, so snapshots can share them
    with the internal list without copying.
    """

    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = new_student_id,
        initial: Iterable[Student] = (),
    ) -> None:
        self._id_factory = id_factory
        self._students: list[Student] = []
        for student in initial:
            if self._index_of(student.id) is not None:
                raise DuplicateStudentError(
                    f"Duplicate student id in initial data: {student.id}",
                    student_id=student.id,
                )
            self._students.append(student)

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student_id: object) -> bool:
        return isinstance(student_id, str) and self._index_of(student_id) is not None

    def _index_of(self, student_id: str) -> int | None:
        for index, student in enumerate(self._students):
            if student.id == student_id:
                return index
        return None

    def list_all(self) -> tuple[Student, ...]:
        """Snapshot of every record in insertion order."""
        return tuple(self._students)

    def get(self, student_id: str) -> Student | None:
        index = self._index_of(student_id)
        return None if index is None else self._students[index]

    def create(self, name: str, age: int, school: str) -> Student:
        """Build a record with a fresh id and append it.

        Raises ``pydantic.ValidationError`` for invalid field values and
        :class:`DuplicateStudentError` if the id factory repeats itself.
        """
        student = Student(id=self._id_factory(), name=name, age=age, school=school)
        if self._index_of(student.id) is not None:
            raise DuplicateStudentError(
                f"Id factory returned an id already in use: {student.id}",
                student_id=student.id,
            )
        self._students.append(student)
        _logger.debug("Created student id=%s (count=%d)", student.id, len(self._students))
        return student

    def update(self, student: Student) -> Student | None:
        """Replace the record with ``student.id`` in place.

        Returns ``None`` (and changes nothing) when no record matches.
        """
        index = self._index_of(student.id)
        if index is None:
            _logger.debug("Update skipped, unknown id=%s", student.id)
            return None
        self._students[index] = student
        _logger.debug("Updated student id=%s at position %d", student.id, index)
        return student

    def remove(self, student_id: str) -> bool:
        """Remove the record with *student_id*; return whether one existed."""
        index = self._index_of(student_id)
        if index is None:
            _logger.debug("Delete skipped, unknown id=%s", student_id)
            return False
        del self._students[index]
        _logger.debug("Deleted student id=%s (count=%d)", student_id, len(self._students))
        return True

    def delete(self, student_id: str) -> None:
        """Remove the record with *student_id*; unknown ids are a no-op."""
        self.remove(student_id)
