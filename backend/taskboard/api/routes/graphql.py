"""GraphQL Endpoint - queries, mutations, and the change subscription at /graphql.

Invariants:
    - HTTP (queries/mutations) and WebSocket (subscriptions) share one path
    - One AsyncSession per request, injected through the context getter
    - TaskBoardError surfaces in errors[].extensions; anything else is masked
    - taskUpdated streams only events published after the client subscribed

Design Decisions:
    - Context getter resolves get_db/get_broadcaster as FastAPI dependencies,
      so tests override them the same way as REST routes
    - Wire names follow the browser client: createTask, updateTaskStatus,
      deleteTask, taskUpdated, created_at
"""

import logging
from contextlib import aclosing
from functools import cached_property
from typing import AsyncGenerator

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.extensions import MaskErrors
from strawberry.fastapi import BaseContext, GraphQLRouter
from strawberry.types import Info

from taskboard.config import get_settings
from taskboard.core.board import bucket_by_status
from taskboard.core.domain_types import parse_task_id
from taskboard.core.errors import TaskBoardError
from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.notifications import (
    ChangeBroadcaster, get_broadcaster,
)
from taskboard.schemas.task import Board, Task, TaskChange
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)


class TaskBoardContext(BaseContext):
    """Per-request resolver context."""

    def __init__(self, db: AsyncSession, broadcaster: ChangeBroadcaster):
        super().__init__()
        self.db = db
        self.broadcaster = broadcaster

    @cached_property
    def service(self) -> TaskService:
        return TaskService(self.db, self.broadcaster)


async def get_context(
    db: AsyncSession = Depends(get_db),
    broadcaster: ChangeBroadcaster = Depends(get_broadcaster),
) -> TaskBoardContext:
    return TaskBoardContext(db, broadcaster)


async def stream_changes(
    broadcaster: ChangeBroadcaster,
) -> AsyncGenerator[TaskChange, None]:
    """Turn broadcaster events into TaskChange payloads until disconnect."""
    async with aclosing(broadcaster.listen()) as events:
        async for event in events:
            yield TaskChange.from_event(event)


@strawberry.type
class Query:
    @strawberry.field(description="All tasks, newest first.")
    async def tasks(self, info: Info) -> list[Task]:
        rows = await info.context.service.list_tasks()
        return [Task.from_model(r) for r in rows]

    @strawberry.field(description="Tasks grouped into the three board columns.")
    async def board(self, info: Info) -> Board:
        rows = await info.context.service.list_tasks()
        return Board.from_buckets(bucket_by_status(rows))


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_task(self, info: Info, title: str) -> Task:
        row = await info.context.service.create_task(title)
        return Task.from_model(row)

    @strawberry.mutation(description="Returns null when no task has this id.")
    async def update_task_status(
        self, info: Info, id: strawberry.ID, status: str,
    ) -> Task | None:
        row = await info.context.service.set_status(parse_task_id(id), status)
        return Task.from_model(row) if row else None

    @strawberry.mutation(description="Always true, also for unknown ids.")
    async def delete_task(self, info: Info, id: strawberry.ID) -> bool:
        return await info.context.service.remove_task(parse_task_id(id))


@strawberry.type
class Subscription:
    @strawberry.subscription
    async def task_updated(self, info: Info) -> AsyncGenerator[TaskChange, None]:
        async with aclosing(stream_changes(info.context.broadcaster)) as changes:
            async for change in changes:
                yield change


def _should_mask(error: GraphQLError) -> bool:
    original = error.original_error
    return original is not None and not isinstance(original, TaskBoardError)


class TaskBoardSchema(strawberry.Schema):
    """Schema that logs domain errors at warning level with their code."""

    def process_errors(self, errors, execution_context=None) -> None:
        unexpected = []
        for error in errors:
            original = error.original_error
            if isinstance(original, TaskBoardError):
                logger.warning(
                    f"TaskBoardError: {original.message}",
                    extra={"error_code": original.code},
                )
            else:
                unexpected.append(error)
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = TaskBoardSchema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=[
        lambda: MaskErrors(
            should_mask_error=_should_mask,
            error_message="An unexpected error occurred",
        ),
    ],
)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if get_settings().graphql_ide else None,
    )
