"""
marketplace_gate.api

API package for the marketplace gate service.

Responsibilities:
- FastAPI app factory, middleware and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: it reads cookies, delegates to `gate`, applies the result.
