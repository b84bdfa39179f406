"""
marketplace_gate.gate.roles

Closed set of marketplace roles.

Responsibilities:
- Define `Role`.
- Parse untrusted cookie values into a `Role` (or nothing).
"""

from __future__ import annotations

import enum


class Role(enum.StrEnum):
    ADMIN = "ADMIN"
    VENDOR = "VENDOR"
    DELIVERY = "DELIVERY"
    CLIENT = "CLIENT"


def parse_role(value: Role | str | None) -> Role | None:
    # Exact match only: "admin" or " ADMIN" are unknown roles, and unknown means absent.
    if isinstance(value, Role):
        return value
    if not value:
        return None
    try:
        return Role(value)
    except ValueError:
        return None


# --- Module Notes -----------------------------------------------------------
# Role values are the raw strings stored in the `user_role` cookie at login.
