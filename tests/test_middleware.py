"""
tests.test_middleware

HTTP-level tests for the gate middleware.

Responsibilities:
- Check that each decision becomes the right response (pass-through, redirect,
  redirect with cookie deletion).
- Check host concerns the pure function does not see: query strings, cookie names,
  the matcher bypass.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from contextlib import asynccontextmanager

import httpx
import pytest
from fastapi import FastAPI

from marketplace_gate.api.app import create_app
from marketplace_gate.api.middleware import RequestGateMiddleware
from marketplace_gate.gate import DEFAULT_ROUTE_TABLE, Redirect, decide
from marketplace_gate.settings import Settings


def _app(settings: Settings | None = None) -> FastAPI:
    app = create_app(settings=settings or Settings(env="test"))

    # Stand-in for the host's pages; registered after the health router so it never shadows it.
    @app.get("/{full_path:path}")
    async def page(full_path: str) -> dict[str, str]:
        return {"page": "/" + full_path}

    return app


@asynccontextmanager
async def _client(app: FastAPI, cookies: dict[str, str] | None = None):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://test", cookies=cookies
    ) as client:
        yield client


def _deleted_cookies(response: httpx.Response) -> set[str]:
    deleted = set()
    for header in response.headers.get_list("set-cookie"):
        name = header.split("=", 1)[0]
        if "max-age=0" in header.lower():
            deleted.add(name)
    return deleted


@pytest.mark.asyncio
async def test_unauthenticated_request_redirects_to_login_keeping_query() -> None:
    async with _client(_app()) as client:
        r = await client.get("/account", params={"tab": "orders"})
    assert r.status_code == 307
    assert r.headers["location"] == "http://test/login?tab=orders"
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_unauthenticated_courier_area_uses_courier_login() -> None:
    async with _client(_app()) as client:
        r = await client.get("/courier/orders")
    assert r.status_code == 307
    assert r.headers["location"] == "http://test/courier/login"


@pytest.mark.asyncio
async def test_cross_role_request_goes_to_own_dashboard() -> None:
    async with _client(_app(), {"access_token": "t", "user_role": "VENDOR"}) as client:
        r = await client.get("/courier/orders")
    assert r.status_code == 307
    assert r.headers["location"] == "http://test/supplier/dashboard"
    assert not _deleted_cookies(r)


@pytest.mark.asyncio
async def test_signed_in_admin_on_login_page_goes_to_dashboard() -> None:
    async with _client(_app(), {"access_token": "t", "user_role": "ADMIN"}) as client:
        r = await client.get("/admin/login")
    assert r.headers["location"] == "http://test/admin/dashboard"


@pytest.mark.asyncio
async def test_permitted_request_reaches_the_page() -> None:
    async with _client(_app(), {"access_token": "t", "user_role": "CLIENT"}) as client:
        r = await client.get("/account/settings")
    assert r.status_code == 200
    assert r.json() == {"page": "/account/settings"}


@pytest.mark.asyncio
async def test_public_page_passes_without_cookies() -> None:
    async with _client(_app()) as client:
        r = await client.get("/register")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_corrupted_credentials_are_cleared() -> None:
    async with _client(_app(), {"access_token": "t"}) as client:
        r = await client.get("/account", params={"next": "/cart"})
    assert r.status_code == 307
    assert r.headers["location"] == "http://test/login"
    assert _deleted_cookies(r) == {"access_token", "user_role"}

    # A follow-up without the cleared cookies is an ordinary login redirect.
    async with _client(_app()) as client:
        r = await client.get("/account")
    assert r.headers["location"] == "http://test/login"
    assert not _deleted_cookies(r)


@pytest.mark.asyncio
async def test_unknown_role_cookie_is_treated_as_missing() -> None:
    async with _client(_app(), {"access_token": "t", "user_role": "root"}) as client:
        r = await client.get("/admin/users")
    assert r.headers["location"] == "http://test/login"
    assert _deleted_cookies(r) == {"access_token", "user_role"}


@pytest.mark.asyncio
async def test_excluded_and_unmatched_paths_bypass_the_gate() -> None:
    async with _client(_app()) as client:
        r = await client.get("/api/healthz")
        assert r.status_code == 200
        r = await client.get("/_next/static/chunk.js")
        assert r.status_code == 200
        assert r.json() == {"page": "/_next/static/chunk.js"}


@pytest.mark.asyncio
async def test_custom_cookie_names_and_status_code() -> None:
    settings = Settings(
        env="test",
        access_token_cookie="sid",
        user_role_cookie="role",
        redirect_status_code=303,
    )
    async with _client(_app(settings), {"sid": "t", "role": "DELIVERY"}) as client:
        r = await client.get("/supplier/products")
    assert r.status_code == 303
    assert r.headers["location"] == "http://test/courier/dashboard"

    async with _client(_app(settings), {"sid": "t"}) as client:
        r = await client.get("/courier")
    assert _deleted_cookies(r) == {"sid", "role"}


@pytest.mark.asyncio
async def test_extra_excluded_paths_from_settings() -> None:
    settings = Settings(env="test", extra_excluded_paths=["/static"])
    async with _client(_app(settings)) as client:
        r = await client.get("/static/app.css")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_matcher_skips_paths_the_gate_would_redirect() -> None:
    routes = dataclasses.replace(DEFAULT_ROUTE_TABLE, matcher=(r"/(?!reports).*",))
    # Without the matcher this request would be sent to login.
    assert decide("/reports/q1", None, None, routes=routes) == Redirect("/login")

    app = FastAPI()
    app.add_middleware(RequestGateMiddleware, routes=routes, settings=Settings(env="test"))

    @app.get("/{full_path:path}")
    async def page(full_path: str) -> dict[str, str]:
        return {"page": "/" + full_path}

    async with _client(app) as client:
        r = await client.get("/reports/q1")
        assert r.status_code == 200
        assert r.json() == {"page": "/reports/q1"}

        r = await client.get("/account")
        assert r.status_code == 307
        assert r.headers["location"] == "http://test/login"


@pytest.mark.asyncio
async def test_redirect_log_records_raw_role_cookie(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    async with _client(_app(), {"access_token": "t", "user_role": "root"}) as client:
        await client.get("/admin/users", headers={"x-request-id": "req-1"})

    events = [
        json.loads(record.getMessage())
        for record in caplog.records
        if record.name == "marketplace_gate.api.middleware"
    ]
    (event,) = [e for e in events if e["event"] == "gate_redirect"]
    assert event["reason"] == "corrupted_credentials"
    assert event["location"] == "/login"
    assert event["has_token"] is True
    assert event["role_cookie"] == "root"
    # Bound by the request-context middleware for every log line of the request.
    assert event["user_role"] == "root"
    assert event["request_id"] == "req-1"
    assert "t" not in (event.get("access_token"), event.get("token"))

# --- Module Notes -----------------------------------------------------------
# Redirects are not followed (httpx default), so each test sees the gate's own response.
