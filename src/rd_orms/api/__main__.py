"""
rd_orms.api.__main__

Entrypoint for running a placeholder service via `python -m rd_orms.api [service]`.

Responsibilities:
- Resolve the service definition and its listen port.
- Bind the listening socket up front so bind failures are logged and exit non-zero.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import socket
import sys
from collections.abc import Sequence

import uvicorn

from rd_orms.api.app import create_app
from rd_orms.api.services import UnknownServiceError, get_service
from rd_orms.observability.logging import get_logger
from rd_orms.settings import get_settings

log = get_logger(__name__)


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except (OSError, OverflowError):
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        service = get_service(args[0] if args else "root")
    except UnknownServiceError as exc:
        print(exc, file=sys.stderr)
        return 1

    settings = get_settings()
    app = create_app(service=service, settings=settings)
    port = service.resolve_port()

    try:
        sock = bind_socket(settings.api_host, port)
    except (OSError, OverflowError) as exc:
        log.error("bind_failed", host=settings.api_host, port=port, error=str(exc))
        return 1

    log.info("listening", address=f"http://{settings.api_host}:{port}")
    server = uvicorn.Server(uvicorn.Config(app, log_config=None))  # structlog
    server.run(sockets=[sock])
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()


# --- Module Notes -----------------------------------------------------------
# uvicorn ignores host/port from its Config when handed pre-bound sockets.
