"""
FastAPI application for the Todo API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .config import Settings
from .errors import TodoApiError, TodoNotFoundError, ValidationError
from .filters import todo_validation_filter, with_filters
from .logging_setup import setup_logging
from .middleware import RequestLoggingMiddleware, RewriteMiddleware, default_rewrite_rules
from .schemas import Todo
from .service import TodoService, get_service, reset_service

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request body
# ---------------------------------------------------------------------------

async def read_todo(request: Request) -> Todo:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON in request body") from None
    return Todo.from_dict(body)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/todos")
def list_todos(service: TodoService = Depends(get_service)) -> JSONResponse:
    return JSONResponse(status_code=200, content=[todo.to_dict() for todo in service.list_todos()])


@router.get("/todos/{todo_id}")
def get_todo(todo_id: int, service: TodoService = Depends(get_service)) -> JSONResponse:
    todo = service.get_todo_by_id(todo_id)
    if todo is None:
        raise TodoNotFoundError(todo_id)
    return JSONResponse(status_code=200, content=todo.to_dict())


@router.post("/todos")
@with_filters(todo_validation_filter)
def create_todo(todo: Todo = Depends(read_todo), service: TodoService = Depends(get_service)) -> JSONResponse:
    service.add_todo(todo)
    return JSONResponse(
        status_code=201,
        content=todo.to_dict(),
        headers={"Location": f"/todos/{todo.id}"},
    )


@router.delete("/todos/{todo_id}")
def delete_todo(todo_id: int, service: TodoService = Depends(get_service)) -> Response:
    service.delete_todo_by_id(todo_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

async def handle_todo_api_error(request: Request, exc: TodoApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("path", "query"))
        messages.append(f"{location}: {error.get('msg', 'Invalid value')}")
    return JSONResponse(status_code=400, content=ValidationError("; ".join(messages)).to_dict())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error during %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if str(exc) else "Unknown error",
            },
        },
    )


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Todo API")
    app.state.settings = settings
    app.include_router(router)

    app.add_exception_handler(TodoApiError, handle_todo_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # The last middleware added runs first: rewrite, then logging, then routing.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RewriteMiddleware, rules=default_rewrite_rules(settings.rewrite_redirect_status))

    @app.on_event("startup")
    async def startup() -> None:
        reset_service()

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    setup_logging(settings.log_level_number, settings.log_file)
    logger.info("Starting Todo API on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
