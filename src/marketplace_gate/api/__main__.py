"""
marketplace_gate.api.__main__

Entrypoint for running the gate via `python -m marketplace_gate.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with proxy headers trusted from `forwarded_allow_ips`.
"""

from __future__ import annotations

import uvicorn

from marketplace_gate.api.app import create_app
from marketplace_gate.observability.logging import get_logger
from marketplace_gate.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    log.info(
        "serving",
        host=settings.api_host,
        port=settings.api_port,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
