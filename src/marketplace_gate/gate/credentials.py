"""
marketplace_gate.gate.credentials

Request credentials as seen by the gate.

Responsibilities:
- Normalize the raw `access_token` / `user_role` cookie values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from marketplace_gate.gate.roles import Role, parse_role

ACCESS_TOKEN_COOKIE = "access_token"
USER_ROLE_COOKIE = "user_role"


@dataclass(frozen=True, slots=True)
class Credentials:
    # Token content is never inspected; only its presence matters.
    token: str | None
    role: Role | None

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_cookies(
        cls,
        cookies: Mapping[str, str],
        *,
        token_key: str = ACCESS_TOKEN_COOKIE,
        role_key: str = USER_ROLE_COOKIE,
    ) -> Credentials:
        token = cookies.get(token_key) or None
        return cls(token=token, role=parse_role(cookies.get(role_key)))


# --- Module Notes -----------------------------------------------------------
# Cookies are written at login by the frontend; this service only reads and deletes them.
