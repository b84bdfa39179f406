"""
marketplace_gate.gate.core

The request gate decision function.

Responsibilities:
- Classify a request path against the route tables.
- Combine that with credential presence into exactly one `Decision`.

Rules run in a fixed order and the first match wins:
1. excluded path -> allow
2. public path -> allow, unless already signed in and on a login page
3. no token -> redirect to the login page for the requested area
4. token without a valid role -> redirect to login and clear credentials;
   role outside its own area -> redirect to the role's dashboard
5. allow
"""

from __future__ import annotations

from marketplace_gate.gate.decisions import (
    Allow,
    Decision,
    GateReason,
    Redirect,
    RedirectAndClearCredentials,
)
from marketplace_gate.gate.roles import Role, parse_role
from marketplace_gate.gate.routes import RouteTable


def decide(
    path: str,
    token: str | None,
    role: Role | str | None,
    *,
    routes: RouteTable,
) -> Decision:
    user_role = parse_role(role)

    if routes.is_excluded(path):
        return Allow(reason=GateReason.EXCLUDED)

    if routes.is_public(path):
        # Signed-in users have no business on a login page; send them home.
        if token and user_role is not None and routes.is_login_route(path):
            return Redirect(
                routes.dashboard_for(user_role), reason=GateReason.AUTHENTICATED_ON_LOGIN
            )
        return Allow(reason=GateReason.PUBLIC)

    if not token:
        return Redirect(routes.login_path_for(path), reason=GateReason.UNAUTHENTICATED)

    if user_role is None:
        # Clearing both cookies turns the next request into a plain unauthenticated one.
        return RedirectAndClearCredentials(routes.default_login)

    if routes.is_role_gated(path) and not routes.has_role_access(user_role, path):
        return Redirect(routes.dashboard_for(user_role), reason=GateReason.ROLE_DENIED)

    return Allow(reason=GateReason.PERMITTED)


# --- Module Notes -----------------------------------------------------------
# Keep this function free of I/O and logging; `api.middleware` logs the outcome.
