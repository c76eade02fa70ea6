"""Status Transitions - closed status set with an explicit (permissive) transition table.

Invariants:
    - parse_status accepts only TaskStatus values (exact, case-sensitive)
    - Every status may move to every status, including itself
    - A stored status outside the enum may be replaced by any valid status
    - next_status/previous_status mirror the board's arrow buttons
"""

from taskboard.core.domain_types import TaskStatus
from taskboard.core.errors import InvalidStatusError, InvalidTransitionError


ALLOWED_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.TODO: frozenset(TaskStatus),
    TaskStatus.IN_PROGRESS: frozenset(TaskStatus),
    TaskStatus.DONE: frozenset(TaskStatus),
}

# Column order on the board, left to right.
STATUS_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE,
)


def parse_status(value: str) -> TaskStatus:
    """Map a raw status string to TaskStatus. Raises InvalidStatusError."""
    try:
        return TaskStatus(value)
    except ValueError:
        raise InvalidStatusError(value)


def coerce_stored_status(value: str) -> TaskStatus | None:
    """Stored status as TaskStatus, or None if the row holds an unknown value."""
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def can_transition(current: TaskStatus | None, target: TaskStatus) -> bool:
    if current is None:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def check_transition(current: TaskStatus | None, target: TaskStatus) -> None:
    """Raise InvalidTransitionError if current -> target is not allowed."""
    if not can_transition(current, target):
        raise InvalidTransitionError(
            current.value if current else "unknown", target.value,
        )


def next_status(current: TaskStatus) -> TaskStatus | None:
    """Status one column to the right, or None from the last column."""
    if current is TaskStatus.TODO:
        return TaskStatus.IN_PROGRESS
    if current is TaskStatus.IN_PROGRESS:
        return TaskStatus.DONE
    return None


def previous_status(current: TaskStatus) -> TaskStatus | None:
    """The back arrow always returns a task to todo; None if already there."""
    if current is TaskStatus.TODO:
        return None
    return TaskStatus.TODO
