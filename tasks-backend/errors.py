import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Task not found"


class TaskNotFoundError(Exception):
    """A lookup, update or delete matched zero rows."""

    def __init__(self, task_id=None):
        super().__init__(NOT_FOUND_MESSAGE)
        self.task_id = task_id


def error_body(message: str) -> dict:
    return {"status": "error", "message": message}


def engine_message(exc: SQLAlchemyError) -> str:
    """Message reported by the DB-API driver, without SQLAlchemy's SQL echo."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid request")
    return f"{loc}: {msg}" if loc else msg


async def handle_engine_error(request: Request, exc: SQLAlchemyError):
    message = engine_message(exc)
    logger.error("storage error on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content=error_body(message))


async def handle_not_found(request: Request, exc: TaskNotFoundError):
    logger.debug("task %s not found (%s %s)", exc.task_id, request.method, request.url.path)
    return JSONResponse(status_code=404, content=error_body(NOT_FOUND_MESSAGE))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.info("rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content=error_body(message))


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SQLAlchemyError, handle_engine_error)
    app.add_exception_handler(TaskNotFoundError, handle_not_found)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
