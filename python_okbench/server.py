"""Main server application."""

import socket
from typing import Optional
import uvicorn
from fastapi import FastAPI
from python_okbench.config.config import Config, DEFAULT_PORT, ALL_INTERFACES
from python_okbench.handlers.ok import respond_ok
from python_okbench.middleware.logging import AccessLogMiddleware


class BindError(Exception):
    """The listening socket could not be bound."""

    def __init__(self, host: str, port: int, reason: str):
        super().__init__(f"cannot listen on {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create the FastAPI app answering every request with ``ok``."""
    if config is None:
        config = Config()

    # No docs or schema routes: every path belongs to the responder
    app = FastAPI(title="okbench", docs_url=None, redoc_url=None, openapi_url=None)

    if config.access_log:
        app.add_middleware(AccessLogMiddleware)

    # A mount matches any path and passes through any method
    app.mount("/", respond_ok, name="ok")

    return app


def bind_listener(host: str = ALL_INTERFACES, port: int = DEFAULT_PORT,
                  backlog: int = 2048) -> socket.socket:
    """Bind and listen on a TCP socket, raising BindError on failure.

    The address family follows ``host``: ``"0.0.0.0"`` is IPv4 only, ``"::"``
    is IPv6 (dual-stack where the host allows it).
    """
    try:
        family, _, _, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)[0]
    except OSError as e:
        raise BindError(host, port, e.strerror or str(e)) from e

    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(sockaddr)
        sock.listen(backlog)
    except OSError as e:
        sock.close()
        raise BindError(host, port, e.strerror or str(e)) from e
    return sock


def build_server(config: Config) -> uvicorn.Server:
    """Create the uvicorn server for the app, without binding anything."""
    # h11 accepts any method token; httptools only knows a fixed list.
    # With websockets off an Upgrade header is just another header.
    server_config = uvicorn.Config(
        create_app(config),
        http="h11",
        ws="none",
        log_level=config.log_level,
        access_log=False,
        backlog=config.backlog,
    )
    return uvicorn.Server(server_config)


def start_server(port: int = DEFAULT_PORT, host: str = ALL_INTERFACES,
                 config: Optional[Config] = None):
    """Bind ``host:port`` and serve until the process is terminated.

    Raises BindError if the socket cannot be bound; nothing is served then.
    """
    if config is None:
        config = Config()

    server = build_server(config)
    sock = bind_listener(host, port, config.backlog)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
