from __future__ import annotations

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from studentbloc.exceptions import DuplicateStudentError
from studentbloc.models import Student
from studentbloc.state.store import StudentStore, new_student_id


def _seeded(id_factory: Callable[[], str]) -> tuple[StudentStore, Student, Student]:
    store = StudentStore(id_factory=id_factory)
    ann = store.create("Ann", 20, "Tech U")
    ben = store.create("Ben", 22, "State College")
    return store, ann, ben


def test_create_assigns_fresh_id_and_appends(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)

    carl = store.create("Carl", 19, "Tech U")

    assert carl.id not in {ann.id, ben.id}
    assert store.list_all() == (ann, ben, carl)
    matches = [s for s in store.list_all() if (s.name, s.age, s.school) == ("Carl", 19, "Tech U")]
    assert matches == [carl]


def test_create_then_get_round_trips(id_factory: Callable[[], str]) -> None:
    store = StudentStore(id_factory=id_factory)
    created = store.create("Ann", 20, "Tech U")
    assert store.get(created.id) == created


def test_get_missing_returns_none() -> None:
    assert StudentStore().get("nope") is None


def test_create_invalid_fields_leaves_store_unchanged(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)
    with pytest.raises(ValidationError):
        store.create("", 20, "Tech U")
    assert store.list_all() == (ann, ben)


def test_create_rejects_repeated_id() -> None:
    store = StudentStore(id_factory=lambda: "same")
    store.create("Ann", 20, "Tech U")
    with pytest.raises(DuplicateStudentError) as exc_info:
        store.create("Ben", 22, "State College")
    assert exc_info.value.student_id == "same"
    assert len(store) == 1


def test_initial_seed_rejects_duplicate_ids() -> None:
    ann = Student(id="s-1", name="Ann", age=20, school="Tech U")
    with pytest.raises(DuplicateStudentError):
        StudentStore(initial=[ann, ann.copy_with(name="Annie")])


def test_update_replaces_in_place(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)

    older = ann.copy_with(age=21)
    assert store.update(older) == older

    assert store.list_all() == (older, ben)
    assert len(store) == 2


def test_update_unknown_id_changes_nothing(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)
    ghost = Student(id="ghost", name="Ghost", age=99, school="Nowhere")

    assert store.update(ghost) is None
    assert store.list_all() == (ann, ben)
    assert "ghost" not in store


def test_delete_removes_exactly_one(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)

    store.delete(ann.id)

    assert store.list_all() == (ben,)
    assert ann.id not in store


def test_delete_unknown_id_is_noop(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)

    store.delete("nonexistent-id")

    assert store.list_all() == (ann, ben)


def test_remove_reports_whether_a_record_existed(id_factory: Callable[[], str]) -> None:
    store, ann, _ben = _seeded(id_factory)
    assert store.remove(ann.id) is True
    assert store.remove(ann.id) is False


def test_snapshot_is_detached_from_later_mutations(id_factory: Callable[[], str]) -> None:
    store, ann, ben = _seeded(id_factory)
    snapshot = store.list_all()
    store.delete(ann.id)
    assert snapshot == (ann, ben)


def test_default_ids_are_unique() -> None:
    ids = {new_student_id() for _ in range(100)}
    assert len(ids) == 100
