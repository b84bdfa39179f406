"""
marketplace_gate.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Generate/propagate request IDs.
- Bind request metadata (including the caller's claimed role) into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from marketplace_gate.gate.credentials import USER_ROLE_COOKIE


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Tags every log line with the role cookie the caller presented, so a redirect
      and the page it lands on can be tied to the same user type
    """

    def __init__(self, app: ASGIApp, *, role_cookie: str = USER_ROLE_COOKIE) -> None:
        super().__init__(app)
        self._role_cookie = role_cookie

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            # Unvalidated; the gate decides whether it is a real role.
            user_role=request.cookies.get(self._role_cookie),
        )
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        # Gate redirects get the id too, so a redirect chain can be followed in the logs.
        response.headers["x-request-id"] = request_id
        return response
