"""Task GraphQL Types - wire shapes for tasks, the board, and change events.

Invariants:
    - Task.status is the stored string as-is (the store does not constrain it)
    - Task.created_at is ISO-8601 and keeps its snake_case wire name
    - TaskChange.task is null exactly for deletions
"""

from datetime import datetime

import strawberry

from taskboard.core.domain_types import ChangeKind, TaskChangeEvent, TaskStatus
from taskboard.models.task import Task as TaskModel

TaskChangeKind = strawberry.enum(ChangeKind, name="TaskChangeKind")


def _iso(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value) if value is not None else ""


@strawberry.type
class Task:
    id: strawberry.ID
    title: str
    status: str
    created_at: str = strawberry.field(name="created_at")

    @classmethod
    def from_model(cls, row: TaskModel) -> "Task":
        return cls(
            id=strawberry.ID(str(row.id)),
            title=row.title,
            status=row.status,
            created_at=_iso(row.created_at),
        )

    @classmethod
    def from_snapshot(cls, snapshot: dict) -> "Task":
        return cls(
            id=strawberry.ID(str(snapshot["id"])),
            title=snapshot["title"],
            status=snapshot["status"],
            created_at=_iso(snapshot.get("created_at")),
        )


@strawberry.type
class Board:
    todo: list[Task]
    in_progress: list[Task] = strawberry.field(name="in_progress")
    done: list[Task]

    @classmethod
    def from_buckets(cls, buckets: dict[TaskStatus, list[TaskModel]]) -> "Board":
        return cls(
            todo=[Task.from_model(t) for t in buckets[TaskStatus.TODO]],
            in_progress=[Task.from_model(t) for t in buckets[TaskStatus.IN_PROGRESS]],
            done=[Task.from_model(t) for t in buckets[TaskStatus.DONE]],
        )


@strawberry.type
class TaskChange:
    kind: TaskChangeKind
    id: strawberry.ID
    task: Task | None = None

    @classmethod
    def from_event(cls, event: TaskChangeEvent) -> "TaskChange":
        return cls(
            kind=event.kind,
            id=strawberry.ID(str(event.task_id)),
            task=Task.from_snapshot(event.task) if event.task else None,
        )
