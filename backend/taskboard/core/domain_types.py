"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId wraps int; never pass raw GraphQL ID strings past the resolvers
    - All valid states encoded as Enums, no raw string matching
    - TaskChangeEvent.task is None exactly when kind is DELETED

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to their DB column values
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType

from taskboard.core.errors import InvalidTaskIdError


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", int)

# SQLite INTEGER is a signed 64-bit value
TASK_ID_MIN = -(2 ** 63)
TASK_ID_MAX = 2 ** 63 - 1


def parse_task_id(raw: str | int) -> TaskId:
    """Coerce a GraphQL ID (string) into a TaskId. Raises InvalidTaskIdError."""
    if isinstance(raw, bool):
        raise InvalidTaskIdError(str(raw))
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            raise InvalidTaskIdError(str(raw))
    if not TASK_ID_MIN <= value <= TASK_ID_MAX:
        raise InvalidTaskIdError(str(raw))
    return TaskId(value)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Board columns - maps to DB `status` column."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ChangeKind(str, Enum):
    """What a mutation did to a task."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class TaskChangeEvent:
    """Broadcast after every committed mutation."""
    kind: ChangeKind
    task_id: TaskId
    task: dict[str, Any] | None = None

    @property
    def deleted(self) -> bool:
        return self.kind is ChangeKind.DELETED
