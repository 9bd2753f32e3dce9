"""
Endpoint filters: interceptors scoped to a single route.

A filter is called as ``filter(context, call_next)``. It may inspect the route's
arguments, short-circuit with its own response, or call ``call_next(context)`` to
run the remaining filters and finally the route handler.
"""

from __future__ import annotations

import functools
import inspect
from datetime import datetime
from typing import Any, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from .schemas import Todo, utc_now

EndpointFilter = Callable[["FilterContext", Callable[["FilterContext"], Any]], Any]

DUE_DATE_IN_PAST = "Cannot have due date in the past."
COMPLETED_ON_CREATE = "Cannot add completed to-do."


class FilterContext:
    __slots__ = ("request", "arguments")

    def __init__(self, request: Optional[Request], arguments: list[Any]):
        self.request = request
        self.arguments = arguments

    def get_argument(self, index: int) -> Any:
        return self.arguments[index]


def with_filters(*filters: EndpointFilter) -> Callable:
    """Wrap a handler with endpoint filters; the first filter runs outermost.

    The handler's positional and keyword arguments (in signature order) become
    ``context.arguments``. A ``Request`` argument, if present, is exposed as
    ``context.request``.
    """

    def decorator(handler: Callable) -> Callable:
        signature = inspect.signature(handler, eval_str=True)

        @functools.wraps(handler)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            names = list(bound.arguments)
            values = list(bound.arguments.values())
            request = next((v for v in values if isinstance(v, Request)), None)

            def call_handler(ctx: FilterContext) -> Any:
                return handler(**dict(zip(names, ctx.arguments)))

            chain = call_handler
            for endpoint_filter in reversed(filters):
                chain = functools.partial(endpoint_filter, call_next=chain)
            return chain(FilterContext(request, values))

        wrapper.__signature__ = signature
        return wrapper

    return decorator


# ---------------------------------------------------------------------------
# Creation rule
# ---------------------------------------------------------------------------

def validate_new_todo(todo: Todo, now: Optional[datetime] = None) -> dict[str, list[str]]:
    """Return field name -> messages for every rule a new todo breaks."""
    if now is None:
        now = utc_now()
    errors: dict[str, list[str]] = {}
    if todo.due_date < now:
        errors["dueDate"] = [DUE_DATE_IN_PAST]
    if todo.is_completed:
        errors["isCompleted"] = [COMPLETED_ON_CREATE]
    return errors


def validation_problem(errors: dict[str, list[str]]) -> Response:
    return JSONResponse(
        status_code=400,
        media_type="application/problem+json",
        content={
            "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": errors,
        },
    )


def todo_validation_filter(context: FilterContext, call_next: Callable[[FilterContext], Any]) -> Any:
    todo = context.get_argument(0)
    errors = validate_new_todo(todo)
    if errors:
        return validation_problem(errors)
    return call_next(context)
