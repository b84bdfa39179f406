"""
marketplace_gate.gate

Route classification and role access decisions.

Responsibilities:
- Role and credential models.
- Immutable route tables.
- The pure `decide` function consumed by the HTTP middleware.
"""

from marketplace_gate.gate.core import decide
from marketplace_gate.gate.credentials import Credentials
from marketplace_gate.gate.decisions import (
    Allow,
    Decision,
    GateReason,
    Redirect,
    RedirectAndClearCredentials,
)
from marketplace_gate.gate.roles import Role, parse_role
from marketplace_gate.gate.routes import DEFAULT_ROUTE_TABLE, RouteTable, RouteTableError

__all__ = [
    "DEFAULT_ROUTE_TABLE",
    "Allow",
    "Credentials",
    "Decision",
    "GateReason",
    "Redirect",
    "RedirectAndClearCredentials",
    "Role",
    "RouteTable",
    "RouteTableError",
    "decide",
    "parse_role",
]


# --- Module Notes -----------------------------------------------------------
# Nothing in this package imports the web framework; the host adapter lives in `api`.
