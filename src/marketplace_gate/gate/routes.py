"""
marketplace_gate.gate.routes

Static route tables consulted by the request gate.

Responsibilities:
- Hold the public/excluded/role-access/dashboard tables as one immutable value.
- Provide the path classification helpers used by `gate.core.decide`.
- Describe which paths the host should run the gate for at all (`matcher`).

Matching is plain string-prefix matching, not path-segment aware:
`/accountable` matches a `/account` rule. Callers rely on this, so keep it.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from marketplace_gate.gate.roles import Role

ROOT_PATH = "/"


class RouteTableError(ValueError):
    pass


def _frozen_access(raw: Mapping[Role, Iterable[str]]) -> Mapping[Role, tuple[str, ...]]:
    return MappingProxyType({Role(role): tuple(prefixes) for role, prefixes in raw.items()})


def _frozen_dashboards(raw: Mapping[Role, str]) -> Mapping[Role, str]:
    return MappingProxyType({Role(role): path for role, path in raw.items()})


@lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


@dataclass(frozen=True, slots=True)
class RouteTable:
    """
    Route configuration for the gate, built once at process start.

    `login_areas` is ordered: the first prefix that matches picks the login page.
    """

    public_routes: tuple[str, ...]
    excluded_paths: tuple[str, ...]
    login_routes: tuple[str, ...]
    role_access: Mapping[Role, tuple[str, ...]]
    role_dashboard: Mapping[Role, str]
    login_areas: tuple[tuple[str, str], ...] = ()
    default_login: str = "/login"
    matcher: tuple[str, ...] = field(default=(r"/.*",))

    def __post_init__(self) -> None:
        # Normalize to read-only containers so a shared table cannot drift between requests.
        object.__setattr__(self, "public_routes", tuple(self.public_routes))
        object.__setattr__(self, "excluded_paths", tuple(self.excluded_paths))
        object.__setattr__(self, "login_routes", tuple(self.login_routes))
        object.__setattr__(self, "login_areas", tuple(tuple(a) for a in self.login_areas))
        object.__setattr__(self, "matcher", tuple(self.matcher))
        try:
            object.__setattr__(self, "role_access", _frozen_access(self.role_access))
            object.__setattr__(self, "role_dashboard", _frozen_dashboards(self.role_dashboard))
        except ValueError as e:
            raise RouteTableError(f"Unknown role in route table: {e}") from e
        self._validate()

    def _validate(self) -> None:
        paths: list[str] = [
            *self.public_routes,
            *self.excluded_paths,
            *self.login_routes,
            self.default_login,
            *(p for prefixes in self.role_access.values() for p in prefixes),
            *self.role_dashboard.values(),
            *(p for area in self.login_areas for p in area),
        ]
        for path in paths:
            if not isinstance(path, str) or not path.startswith(ROOT_PATH):
                raise RouteTableError(f"Route entries must start with '/': {path!r}")
        for area in self.login_areas:
            if len(area) != 2:
                raise RouteTableError(f"Login area must be a (prefix, login_path) pair: {area!r}")
        for pattern in self.matcher:
            try:
                _compile(pattern)
            except re.error as e:
                raise RouteTableError(f"Invalid matcher pattern {pattern!r}: {e}") from e

    # Classification ---------------------------------------------------------

    def is_excluded(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.excluded_paths)

    def is_public(self, path: str) -> bool:
        for route in self.public_routes:
            # Root is exact-match only; everything else would be swallowed by "/".
            if route == ROOT_PATH:
                if path == ROOT_PATH:
                    return True
                continue
            if path.startswith(route):
                return True
        return False

    def is_login_route(self, path: str) -> bool:
        return any(path.startswith(route) for route in self.login_routes)

    def is_role_gated(self, path: str) -> bool:
        return any(
            path.startswith(prefix)
            for prefixes in self.role_access.values()
            for prefix in prefixes
        )

    def has_role_access(self, role: Role, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.role_access.get(role, ()))

    # Targets ----------------------------------------------------------------

    def login_path_for(self, path: str) -> str:
        for prefix, login_path in self.login_areas:
            if path.startswith(prefix):
                return login_path
        return self.default_login

    def dashboard_for(self, role: Role) -> str:
        return self.role_dashboard.get(role, ROOT_PATH)

    # Host registration ------------------------------------------------------

    def gate_applies(self, path: str) -> bool:
        return any(_compile(pattern).fullmatch(path) for pattern in self.matcher)

    def extend(
        self,
        *,
        excluded_paths: Iterable[str] = (),
        public_routes: Iterable[str] = (),
    ) -> RouteTable:
        return dataclasses.replace(
            self,
            excluded_paths=(*self.excluded_paths, *excluded_paths),
            public_routes=(*self.public_routes, *public_routes),
        )


def _area(prefix: str) -> str:
    # Mirrors a `/prefix/:path*` host matcher: the prefix itself or anything below it.
    return re.escape(prefix) + r"(?:/.*)?"


DEFAULT_ROUTE_TABLE = RouteTable(
    public_routes=(
        "/",
        "/public",
        "/login",
        "/register",
        "/admin/login",
        "/supplier/login",
        "/courier/login",
        "/reset-password",
        "/forgot-password",
        "/verify-signup",
        "/callback",
    ),
    excluded_paths=("/_next", "/api", "/public", "/favicon.ico"),
    login_routes=("/login", "/admin/login", "/supplier/login", "/courier/login"),
    role_access={
        Role.ADMIN: ("/admin", "/dashboard"),
        Role.VENDOR: ("/supplier",),
        Role.DELIVERY: ("/courier",),
        Role.CLIENT: ("/account", "/orders", "/cart", "/notifications"),
    },
    role_dashboard={
        Role.ADMIN: "/admin/dashboard",
        Role.VENDOR: "/supplier/dashboard",
        Role.DELIVERY: "/courier/dashboard",
        Role.CLIENT: "/account",
    },
    login_areas=(
        ("/admin", "/admin/login"),
        ("/supplier", "/supplier/login"),
        ("/courier", "/courier/login"),
    ),
    default_login="/login",
    matcher=(
        *(
            _area(p)
            for p in (
                "/admin",
                "/supplier",
                "/courier",
                "/dashboard",
                "/account",
                "/orders",
                "/cart",
                "/notifications",
            )
        ),
        r"/(?!_next/static|_next/image|favicon\.ico|public).*",
    ),
)


# --- Module Notes -----------------------------------------------------------
# `matcher` is registration config for the host, not gate logic: `decide` never reads it.
# The default excluded paths already cover what the matcher skips.
