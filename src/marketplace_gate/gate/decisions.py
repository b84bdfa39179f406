"""
marketplace_gate.gate.decisions

Decision values returned by the request gate.

Responsibilities:
- Define the three outcomes the host must apply (`Allow`, `Redirect`,
  `RedirectAndClearCredentials`).
- Record why a decision was taken (`GateReason`) for logging.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class GateReason(enum.StrEnum):
    EXCLUDED = "excluded"
    PUBLIC = "public"
    AUTHENTICATED_ON_LOGIN = "authenticated_on_login"
    UNAUTHENTICATED = "unauthenticated"
    CORRUPTED_CREDENTIALS = "corrupted_credentials"
    ROLE_DENIED = "role_denied"
    PERMITTED = "permitted"


@dataclass(frozen=True, slots=True)
class Allow:
    # Reason is diagnostic only; two Allows are equal whatever rule produced them.
    reason: GateReason = field(default=GateReason.PERMITTED, compare=False)


@dataclass(frozen=True, slots=True)
class Redirect:
    """
    Redirect to `location`, keeping the rest of the request URL (query string).
    """

    location: str
    reason: GateReason = field(default=GateReason.UNAUTHENTICATED, compare=False)


@dataclass(frozen=True, slots=True)
class RedirectAndClearCredentials:
    """
    Redirect to `location` and delete both credential cookies on the response.

    The host applies both effects on the same response; the gate itself performs no I/O.
    """

    location: str
    reason: GateReason = field(default=GateReason.CORRUPTED_CREDENTIALS, compare=False)


Decision = Allow | Redirect | RedirectAndClearCredentials


# --- Module Notes -----------------------------------------------------------
# Decisions are plain values so tests can compare them directly, e.g.
# `decide(...) == Redirect("/login")`.
