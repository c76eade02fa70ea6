"""Task Service - the four board operations, one store statement each.

Invariants:
    - list_tasks orders by created_at DESC, id DESC (newest first, total order)
    - create_task always stores status "todo"
    - set_status on a missing id is a no-op: returns None, publishes nothing
    - remove_task always returns True, whether or not a row matched
    - Every successful mutation publishes exactly one TaskChangeEvent, after
      commit and before returning (publish-before-respond)
    - SQLAlchemy failures roll back and surface as DatabaseError

Design Decisions:
    - Receives session and broadcaster explicitly (no ambient store)
    - Status parsed into TaskStatus before touching the store: unknown values
      never reach the table through this service
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import (
    ChangeKind, TaskChangeEvent, TaskId, TaskStatus,
)
from taskboard.core.errors import DatabaseError, ErrorContext
from taskboard.core.status_transitions import (
    check_transition, coerce_stored_status, parse_status,
)
from taskboard.infrastructure.notifications import ChangeBroadcaster
from taskboard.models.task import Task

logger = logging.getLogger(__name__)


class TaskService:
    """CRUD over the tasks table plus change publishing."""

    def __init__(self, db: AsyncSession, broadcaster: ChangeBroadcaster):
        self.db = db
        self.broadcaster = broadcaster

    async def list_tasks(self) -> list[Task]:
        result = await self._run(
            "list",
            self.db.execute(
                select(Task).order_by(Task.created_at.desc(), Task.id.desc()),
            ),
        )
        return list(result.scalars().all())

    async def get_task(self, task_id: TaskId) -> Task | None:
        result = await self._run(
            "get", self.db.execute(select(Task).where(Task.id == task_id)),
        )
        return result.scalar_one_or_none()

    async def create_task(self, title: str) -> Task:
        """Insert with default status and return the stored row."""
        task = Task(title=title, status=TaskStatus.TODO.value)
        self.db.add(task)
        await self._commit("create")
        await self._run("create", self.db.refresh(task))
        logger.info("Task created", extra={"task_id": task.id})
        self.broadcaster.publish(TaskChangeEvent(
            ChangeKind.CREATED, TaskId(task.id), task.to_snapshot(),
        ))
        return task

    async def set_status(self, task_id: TaskId, status: str) -> Task | None:
        """Overwrite status. Returns None if no task has this id."""
        target = parse_status(status)
        task = await self.get_task(task_id)
        if task is None:
            logger.info(
                "Status change for missing task ignored",
                extra={"task_id": task_id},
            )
            return None
        check_transition(coerce_stored_status(task.status), target)
        task.status = target.value
        await self._commit("update")
        await self._run("update", self.db.refresh(task))
        logger.info(
            f"Task status set to {target.value}", extra={"task_id": task_id},
        )
        self.broadcaster.publish(TaskChangeEvent(
            ChangeKind.UPDATED, task_id, task.to_snapshot(),
        ))
        return task

    async def remove_task(self, task_id: TaskId) -> bool:
        """Delete by id. Idempotent."""
        result = await self._run(
            "delete", self.db.execute(delete(Task).where(Task.id == task_id)),
        )
        await self._commit("delete")
        if not result.rowcount:
            logger.info("Delete matched no task", extra={"task_id": task_id})
        self.broadcaster.publish(TaskChangeEvent(ChangeKind.DELETED, task_id))
        return True

    # -- helpers ---------------------------------------------------------------

    async def _run(self, operation: str, awaitable):
        try:
            return await awaitable
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"DB error during {operation}: {e}",
                extra={"operation": operation},
            )
            raise DatabaseError(
                "Database operation failed", operation,
                ErrorContext(operation=operation),
            )

    async def _commit(self, operation: str) -> None:
        await self._run(operation, self.db.commit())
