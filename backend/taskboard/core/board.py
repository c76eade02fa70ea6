"""Board View - pure grouping of tasks into the three status columns.

Invariants:
    - Buckets match on exact status string (no trimming, no case folding)
    - Tasks whose status is not a TaskStatus value appear in no bucket
    - Input order is preserved inside each bucket
"""

from typing import Any, Iterable, TypeVar

from taskboard.core.domain_types import TaskStatus

T = TypeVar("T")


def _status_of(task: Any) -> str | None:
    if isinstance(task, dict):
        return task.get("status")
    return getattr(task, "status", None)


def bucket_by_status(tasks: Iterable[T]) -> dict[TaskStatus, list[T]]:
    """Group tasks by status. Works on ORM rows or snapshot dicts."""
    buckets: dict[TaskStatus, list[T]] = {s: [] for s in TaskStatus}
    for task in tasks:
        status = _status_of(task)
        for candidate in TaskStatus:
            if status == candidate.value:
                buckets[candidate].append(task)
                break
    return buckets


def dropped_tasks(tasks: Iterable[T]) -> list[T]:
    """Tasks that bucket_by_status leaves out (unknown status)."""
    known = {s.value for s in TaskStatus}
    return [t for t in tasks if _status_of(t) not in known]
