"""
marketplace_gate.api.routers.health

Health endpoints.

Responsibilities:
- Provide a liveness probe (`/api/healthz`) that also reports the active route table
  and the cookie names the gate reads.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from marketplace_gate.api.deps import route_table_from_app, settings_dep
from marketplace_gate.gate.routes import RouteTable
from marketplace_gate.settings import Settings

# Lives under an excluded prefix so probes never hit the gate.
router = APIRouter(prefix="/api")


@router.get("/healthz")
async def healthz(
    routes: RouteTable = Depends(route_table_from_app),
    settings: Settings = Depends(settings_dep),
) -> dict[str, object]:
    return {
        "status": "ok",
        "service": settings.service_name,
        "env": settings.env,
        "cookies": [settings.access_token_cookie, settings.user_role_cookie],
        "roles": sorted(role.value for role in routes.role_access),
        "excluded_paths": len(routes.excluded_paths),
        "public_routes": len(routes.public_routes),
    }


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses /healthz for liveness; there is no readiness dependency
# because the gate has no backing store.
