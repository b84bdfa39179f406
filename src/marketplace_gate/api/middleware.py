"""
marketplace_gate.api.middleware

Starlette middleware that runs the request gate for every matching request.

Responsibilities:
- Read credential cookies and call `gate.core.decide`.
- Turn the returned `Decision` into a pass-through, a redirect, or a redirect
  that also deletes the credential cookies.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from marketplace_gate.gate.core import decide
from marketplace_gate.gate.credentials import Credentials
from marketplace_gate.gate.decisions import Allow, Decision, Redirect, RedirectAndClearCredentials
from marketplace_gate.gate.routes import RouteTable
from marketplace_gate.observability.logging import get_logger
from marketplace_gate.settings import Settings

log = get_logger(__name__)


class RequestGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, routes: RouteTable, settings: Settings) -> None:
        super().__init__(app)
        self._routes = routes
        self._settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not self._routes.gate_applies(path):
            return await call_next(request)

        creds = Credentials.from_cookies(
            request.cookies,
            token_key=self._settings.access_token_cookie,
            role_key=self._settings.user_role_cookie,
        )
        decision = decide(path, creds.token, creds.role, routes=self._routes)

        if isinstance(decision, Allow):
            log.debug("gate_allow", reason=decision.reason.value)
            return await call_next(request)

        log.info(
            "gate_redirect",
            reason=decision.reason.value,
            location=decision.location,
            has_token=creds.has_token,
            # Raw cookie, so an unrecognised role shows up as itself rather than None.
            role_cookie=request.cookies.get(self._settings.user_role_cookie),
        )
        return self._apply(request, decision)

    def _apply(self, request: Request, decision: Decision) -> Response:
        status_code = self._settings.redirect_status_code
        if isinstance(decision, RedirectAndClearCredentials):
            # Fresh URL on the same origin: the stale query string is not carried to login.
            url = request.url.replace(path=decision.location, query="", fragment="")
            response = RedirectResponse(str(url), status_code=status_code)
            response.delete_cookie(self._settings.access_token_cookie)
            response.delete_cookie(self._settings.user_role_cookie)
            return response
        if isinstance(decision, Redirect):
            url = request.url.replace(path=decision.location)
            return RedirectResponse(str(url), status_code=status_code)
        raise TypeError(f"Unhandled gate decision: {decision!r}")


# --- Module Notes -----------------------------------------------------------
# Registered in `api.app.create_app` inside `RequestContextMiddleware`, so gate logs
# carry the request id.
