"""Value models for studentbloc."""

from studentbloc.models._base import StudentBlocModel
from studentbloc.models.student import Student

__all__ = [
    "Student",
    "StudentBlocModel",
]
