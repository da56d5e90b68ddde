"""studentbloc - Event-driven state container for an in-memory student list."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("studentbloc")
except PackageNotFoundError:
    __version__ = "0+local"
from studentbloc.config import StudentBlocConfig
from studentbloc.coordinator import Listener, StudentCoordinator
from studentbloc.exceptions import (
    CoordinatorClosedError,
    DuplicateStudentError,
    StoreError,
    StudentBlocConfigError,
    StudentBlocError,
)
from studentbloc.models import Student
from studentbloc.state.events import Create, Delete, LoadAll, StudentEvent, Update
from studentbloc.state.policy import NotFoundPolicy
from studentbloc.state.states import (
    Initial,
    Loaded,
    OperationFailed,
    OperationSucceeded,
    Pending,
    StudentState,
)
from studentbloc.state.store import StudentStore, new_student_id

__all__ = [
    "__version__",
    "CoordinatorClosedError",
    "Create",
    "Delete",
    "DuplicateStudentError",
    "Initial",
    "Listener",
    "LoadAll",
    "Loaded",
    "NotFoundPolicy",
    "OperationFailed",
    "OperationSucceeded",
    "Pending",
    "StoreError",
    "Student",
    "StudentBlocConfig",
    "StudentBlocConfigError",
    "StudentBlocError",
    "StudentCoordinator",
    "StudentEvent",
    "StudentState",
    "StudentStore",
    "Update",
    "new_student_id",
]
