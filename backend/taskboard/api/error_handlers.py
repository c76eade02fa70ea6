"""Error Handlers - render TaskBoardError raised by the REST routes.

Only the /api/v1 routes reach these handlers. GraphQL errors are shaped
by the schema (see api/routes/graphql.py).
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from taskboard.core.errors import ErrorSeverity, TaskBoardError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskBoardError, task_board_error_handler)


async def task_board_error_handler(
    request: Request, exc: TaskBoardError,
) -> JSONResponse:
    level = (
        logging.ERROR if exc.severity is ErrorSeverity.CRITICAL
        else logging.WARNING
    )
    logger.log(
        level, f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
