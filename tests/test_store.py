import pytest

from studybudget.models import Task
from studybudget.services.store import DuplicateRecordError, RecordNotFoundError, RecordStore


@pytest.fixture
def store():
    return RecordStore[Task]("task")


def _task(title="Read chapter 3"):
    return Task(title=title, due_date="2026-10-20")


def test_add_and_get(store):
    task = store.add(_task())
    assert store.get(task.id) is task
    assert task.id in store
    assert len(store) == 1


def test_snapshot_keeps_insertion_order(store):
    first = store.add(_task("first"))
    second = store.add(_task("second"))

    snapshot = store.snapshot()
    assert [t.id for t in snapshot] == [first.id, second.id]

    snapshot.clear()
    assert len(store) == 2


def test_duplicate_id_rejected(store):
    task = store.add(_task())
    with pytest.raises(DuplicateRecordError):
        store.add(task)


def test_update_keeps_id(store):
    task = store.add(_task())
    updated = store.update(task.id, _task("renamed"))

    assert updated.id == task.id
    assert store.get(task.id).title == "renamed"
    assert len(store) == 1


def test_missing_records(store):
    with pytest.raises(RecordNotFoundError) as exc:
        store.get("nope")
    assert exc.value.record_id == "nope"

    with pytest.raises(RecordNotFoundError):
        store.update("nope", _task())
    with pytest.raises(RecordNotFoundError):
        store.remove("nope")


def test_remove_and_clear(store):
    task = store.add(_task())
    store.add(_task("other"))

    assert store.remove(task.id).id == task.id
    assert task.id not in store
    assert store.clear() == 1
    assert store.snapshot() == []


def test_modify_applies_change_to_current_record(store):
    task = store.add(_task())
    store.update(task.id, task.model_copy(update={"title": "edited elsewhere"}))

    modified = store.modify(task.id, lambda t: t.model_copy(update={"completed": True}))

    assert modified.title == "edited elsewhere"
    assert modified.completed is True
    assert store.get(task.id) is modified


def test_modify_missing_record(store):
    with pytest.raises(RecordNotFoundError):
        store.modify("nope", lambda t: t)
