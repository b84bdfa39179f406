"""
marketplace_gate.api.app

FastAPI app factory for the marketplace gate service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Build the route table once per process and share it read-only.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from marketplace_gate import __version__
from marketplace_gate.api.middleware import RequestGateMiddleware
from marketplace_gate.api.routers.health import router as health_router
from marketplace_gate.observability.logging import configure_logging, get_logger
from marketplace_gate.observability.middleware import RequestContextMiddleware
from marketplace_gate.settings import Settings, route_table_from_settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    routes = route_table_from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            excluded_paths=list(routes.excluded_paths),
            public_routes=len(routes.public_routes),
        )
        yield
        log.info("shutdown")

    app = FastAPI(
        title="Marketplace Request Gate",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.route_table = routes

    # Starlette wraps in reverse order: the last middleware added runs first.
    app.add_middleware(RequestGateMiddleware, routes=routes, settings=settings)
    app.add_middleware(RequestContextMiddleware, role_cookie=settings.user_role_cookie)
    app.include_router(health_router, tags=["health"])

    return app


# --- Module Notes -----------------------------------------------------------
# Page routes belong to the host application; mount them on the returned app and
# they sit behind the gate automatically.
