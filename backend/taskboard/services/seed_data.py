"""Demo seed rows inserted into an empty board at startup."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import TaskStatus
from taskboard.models.task import Task

logger = logging.getLogger(__name__)

DEMO_TASKS: tuple[tuple[str, TaskStatus], ...] = (
    ("Design new landing page", TaskStatus.TODO),
    ("Review pull requests", TaskStatus.IN_PROGRESS),
    ("Deploy to production", TaskStatus.DONE),
)


async def seed_demo_tasks(db: AsyncSession) -> int:
    """Insert DEMO_TASKS if the table is empty. Returns rows inserted."""
    existing = await db.scalar(select(func.count()).select_from(Task))
    if existing:
        logger.info(f"Skipping demo seed, board already has {existing} task(s)")
        return 0
    # Flushed one at a time so created_at follows list order.
    for title, status in DEMO_TASKS:
        db.add(Task(title=title, status=status.value))
        await db.flush()
    await db.commit()
    logger.info(f"Seeded {len(DEMO_TASKS)} demo tasks")
    return len(DEMO_TASKS)
