"""Task Service - CRUD contract, ordering, no-op cases, and change publishing.

Invariants:
    - list_tasks returns newest first
    - create_task always stores "todo"
    - set_status on a missing id returns None and publishes nothing
    - remove_task is idempotent and always True
    - Each successful mutation publishes one event after commit
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from taskboard.core.domain_types import ChangeKind, TaskId
from taskboard.core.errors import DatabaseError, InvalidStatusError
from taskboard.services.task_service import TaskService


@pytest.fixture
def service(test_db, broadcaster):
    return TaskService(test_db, broadcaster)


@pytest.fixture
def events(broadcaster):
    """Queue registered before the test acts, drained into a list on demand."""
    queue = broadcaster.subscribe()

    def drain():
        out = []
        while not queue.empty():
            out.append(queue.get_nowait())
        return out
    return drain


async def test_list_is_empty_on_fresh_store(service):
    assert await service.list_tasks() == []


async def test_list_returns_n_rows_newest_first(service):
    created = [await service.create_task(f"Task {i}") for i in range(5)]
    rows = await service.list_tasks()
    assert [r.id for r in rows] == [t.id for t in reversed(created)]


async def test_create_always_uses_todo_status(service):
    task = await service.create_task("Write docs")
    assert task.status == "todo"
    assert task.id is not None
    assert task.created_at is not None


async def test_create_accepts_empty_title(service):
    task = await service.create_task("")
    assert task.title == ""


async def test_ids_are_never_reused_after_delete(service):
    first = await service.create_task("A")
    await service.remove_task(TaskId(first.id))
    second = await service.create_task("B")
    assert second.id > first.id


async def test_set_status_changes_only_target(service):
    a = await service.create_task("A")
    b = await service.create_task("B")

    updated = await service.set_status(TaskId(a.id), "done")

    assert updated.id == a.id
    assert updated.status == "done"
    statuses = {r.id: r.status for r in await service.list_tasks()}
    assert statuses == {a.id: "done", b.id: "todo"}


async def test_set_status_on_missing_id_returns_none(service, events):
    assert await service.set_status(TaskId(999), "done") is None
    assert events() == []


async def test_set_status_rejects_unknown_value(service):
    task = await service.create_task("A")
    with pytest.raises(InvalidStatusError):
        await service.set_status(TaskId(task.id), "archived")
    assert (await service.get_task(TaskId(task.id))).status == "todo"


async def test_set_status_repairs_malformed_stored_status(service, test_db):
    task_id = TaskId((await service.create_task("A")).id)
    await test_db.execute(
        text("UPDATE tasks SET status = 'Blocked' WHERE id = :id"), {"id": task_id},
    )
    await test_db.commit()
    test_db.expire_all()
    assert (await service.get_task(task_id)).status == "Blocked"

    updated = await service.set_status(task_id, "in_progress")
    assert updated.status == "in_progress"


async def test_remove_excludes_id_and_is_idempotent(service):
    a = await service.create_task("A")
    b = await service.create_task("B")

    assert await service.remove_task(TaskId(a.id)) is True
    assert await service.remove_task(TaskId(a.id)) is True
    assert [r.id for r in await service.list_tasks()] == [b.id]


async def test_remove_unknown_id_reports_success(service):
    assert await service.remove_task(TaskId(12345)) is True


async def test_concrete_board_scenario(service):
    a = await service.create_task("A")
    b = await service.create_task("B")
    assert [r.title for r in await service.list_tasks()] == ["B", "A"]

    await service.set_status(TaskId(b.id), "in_progress")
    rows = {r.title: r.status for r in await service.list_tasks()}
    assert rows == {"B": "in_progress", "A": "todo"}

    await service.remove_task(TaskId(a.id))
    rows = await service.list_tasks()
    assert [(r.title, r.status) for r in rows] == [("B", "in_progress")]


async def test_each_mutation_publishes_one_event(service, events):
    task = await service.create_task("A")
    await service.set_status(TaskId(task.id), "done")
    await service.remove_task(TaskId(task.id))

    published = events()
    assert [e.kind for e in published] == [
        ChangeKind.CREATED, ChangeKind.UPDATED, ChangeKind.DELETED,
    ]
    assert all(e.task_id == task.id for e in published)
    assert published[0].task["title"] == "A"
    assert published[0].task["status"] == "todo"
    assert published[1].task["status"] == "done"
    assert published[2].task is None


async def test_store_failure_surfaces_as_database_error(service, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.db, "execute", failing_execute)
    with pytest.raises(DatabaseError) as exc_info:
        await service.list_tasks()
    assert exc_info.value.operation == "list"


async def test_refresh_failure_after_insert_surfaces_as_database_error(
    service, monkeypatch,
):
    async def failing_refresh(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.db, "refresh", failing_refresh)
    with pytest.raises(DatabaseError) as exc_info:
        await service.create_task("A")
    assert exc_info.value.operation == "create"
