"""
marketplace_gate.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the shared route table.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from marketplace_gate.gate.routes import RouteTable
from marketplace_gate.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app's own settings, not the env-cached ones: tests build apps with explicit Settings.
    return request.app.state.settings  # type: ignore[attr-defined]


def route_table_from_app(request: Request) -> RouteTable:
    # The table is built once in `marketplace_gate.api.app.create_app`.
    return request.app.state.route_table  # type: ignore[attr-defined]
