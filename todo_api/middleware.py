"""
ASGI middleware for the Todo API: path rewriting and request logging.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .schemas import format_timestamp, utc_now

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rewrite rules
# ---------------------------------------------------------------------------

class RewriteRule:
    """Regex path rename, searched for anywhere in the path without its leading slash.

    ``replacement`` takes ``$1``-style group references. With a
    ``redirect_status`` the client is redirected instead of the path being
    rewritten in place.
    """

    __slots__ = ("pattern", "replacement", "redirect_status")

    def __init__(self, pattern: str, replacement: str, redirect_status: Optional[int] = None):
        self.pattern = re.compile(pattern)
        self.replacement = re.sub(r"\$(\d+)", r"\\\1", replacement)
        self.redirect_status = redirect_status

    def apply(self, path: str) -> Optional[str]:
        relative = path[1:] if path.startswith("/") else path
        match = self.pattern.search(relative)
        if match is None:
            return None
        return "/" + match.expand(self.replacement)


def default_rewrite_rules(redirect_status: Optional[int] = None) -> list[RewriteRule]:
    return [RewriteRule(r"tasks/(.*)", "todos/$1", redirect_status)]


class RewriteMiddleware:
    def __init__(self, app: ASGIApp, rules: list[RewriteRule]):
        self.app = app
        self.rules = rules

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        for rule in self.rules:
            target = rule.apply(path)
            if target is None:
                continue
            if rule.redirect_status is not None:
                query = scope.get("query_string", b"").decode("latin-1")
                location = f"{target}?{query}" if query else target
                logger.debug("Redirecting %s -> %s", path, location)
                response = Response(status_code=rule.redirect_status, headers={"Location": location})
                await response(scope, receive, send)
                return
            logger.debug("Rewriting %s -> %s", path, target)
            raw_path = scope.get("raw_path")
            raw_target = rule.apply(raw_path.decode("latin-1")) if raw_path else None
            if raw_target is None:
                raw_path = target.encode("utf-8")
            else:
                raw_path = raw_target.encode("latin-1")
            scope = {**scope, "path": target, "raw_path": raw_path}
            break

        await self.app(scope, receive, send)


# ---------------------------------------------------------------------------
# Request logging
# ---------------------------------------------------------------------------

class RequestLoggingMiddleware:
    """Logs every HTTP request when handling starts and when it finishes.

    The "finished" line is written even when the inner app raises.
    """

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None):
        self.app = app
        self.logger = logger or logging.getLogger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        path = scope["path"]
        self.logger.info("[%s %s %s] started...", method, path, format_timestamp(utc_now()))
        try:
            await self.app(scope, receive, send)
        finally:
            self.logger.info("[%s %s %s] finished...", method, path, format_timestamp(utc_now()))
