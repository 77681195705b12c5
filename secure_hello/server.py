"""Server bootstrap: pick HTTPS or plain HTTP and serve until a fatal error.

Exactly one listening mode is active per process. A failure to load the TLS
certificate, parse the port or bind the socket is logged and ends the process
with exit status 1; there is no retry and no fallback from HTTPS to HTTP.
"""

import logging
import socket
import sys
from typing import NoReturn

import uvicorn

from .config import Settings
from .main import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def bind_socket(port: str) -> socket.socket:
    """Open a listening socket on all interfaces, as ``:<port>`` does."""
    number = int(port)
    if socket.has_dualstack_ipv6():
        return socket.create_server(
            ("", number), family=socket.AF_INET6, dualstack_ipv6=True
        )
    return socket.create_server(("", number))


def build_config(settings: Settings) -> uvicorn.Config:
    return uvicorn.Config(
        create_app(settings),
        ssl_certfile=settings.cert_file if settings.tls_enabled else None,
        ssl_keyfile=settings.key_file if settings.tls_enabled else None,
        log_config=None,
        access_log=False,
    )


def fatal(message: str, *args) -> NoReturn:
    logger.critical(message, *args)
    sys.exit(1)


def serve(settings: Settings) -> None:
    logger.info("Server starting on port %s", settings.port)

    if settings.tls_enabled:
        scheme = "HTTPS"
        logger.info(
            "TLS cert and key files provided. Starting HTTPS server on port %s",
            settings.port,
        )
    else:
        scheme = "HTTP"
        logger.info(
            "TLS cert and key files not found in env vars. Starting HTTP server on port %s",
            settings.port,
        )

    config = build_config(settings)
    try:
        # Loading the config builds the SSL context, so a bad cert or key
        # fails here before anything is bound.
        config.load()
        sock = bind_socket(settings.port)
    except (OSError, ValueError, OverflowError) as exc:
        fatal("Error starting %s server: %s", scheme, exc)

    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    except OSError as exc:
        fatal("Error starting %s server: %s", scheme, exc)
    finally:
        sock.close()


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    serve(settings)
