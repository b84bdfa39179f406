"""
marketplace_gate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the service.
- Build the process-wide `RouteTable` from defaults plus env overrides.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from marketplace_gate.gate.credentials import ACCESS_TOKEN_COOKIE, USER_ROLE_COOKIE
from marketplace_gate.gate.routes import DEFAULT_ROUTE_TABLE, RouteTable


class Settings(BaseSettings):
    """
    Enterprise pattern:
    - Strict env-driven configuration
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="GATE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "marketplace-gate"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    # Redirect URLs are built from the request URL; behind a proxy uvicorn must trust
    # X-Forwarded-* from it or Location headers point at the internal host.
    forwarded_allow_ips: str = "127.0.0.1"

    # Cookie names written by the login flow.
    access_token_cookie: str = ACCESS_TOKEN_COOKIE
    user_role_cookie: str = USER_ROLE_COOKIE

    # 307 keeps the method and body, matching what browsers expect from a gate redirect.
    redirect_status_code: Literal[302, 303, 307, 308] = 307

    # Appended to the default tables (e.g. GATE_EXTRA_EXCLUDED_PATHS='["/static"]').
    extra_excluded_paths: list[str] = Field(default_factory=list)
    extra_public_routes: list[str] = Field(default_factory=list)


def route_table_from_settings(settings: Settings) -> RouteTable:
    if not settings.extra_excluded_paths and not settings.extra_public_routes:
        return DEFAULT_ROUTE_TABLE
    return DEFAULT_ROUTE_TABLE.extend(
        excluded_paths=settings.extra_excluded_paths,
        public_routes=settings.extra_public_routes,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Route tables are code-level defaults; env overrides only ever add entries.
