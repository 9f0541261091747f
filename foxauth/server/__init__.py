"""
Entry point for the authlib session server.
"""

import logging

import uvicorn

from foxauth.common.config import Config

from .core import AuthlibServer


def start_server(config: Config | None = None) -> None:
    """Start the authlib session server."""
    if config is None:
        config = Config()
    logging.basicConfig(level=config.LOG_LEVEL)
    server = AuthlibServer(config=config)
    uvicorn.run(
        server.app,
        host=server.server_host,
        port=server.server_port,
        proxy_headers=True,
    )
