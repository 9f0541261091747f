"""
FastAPI application wiring for the authlib session server.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from foxauth.common.config import Config
from foxauth.common.logging_utils import get_logger
from foxauth.server.auth import TokenAuthenticator
from foxauth.server.keystore import KeyStore
from foxauth.server.persistence import JsonIdentityStore
from foxauth.server.routes import AuthlibRoutes
from foxauth.server.services import AuthlibService
from foxauth.server.signer import Signer

if TYPE_CHECKING:
    from foxauth.common.interfaces import IIdentityStore


class AuthlibServer:
    """Owns the key store, signer and identity store of one server instance.

    Construction fails with ``KeyStorageError``/``KeyFormatError`` when no
    usable signing key is available; the server must not start without one.
    """

    def __init__(
        self,
        config: Config | None = None,
        log_level: int | None = None,
        keys_dir: Path | None = None,
        users_file_path: Path | None = None,
        identity_store: IIdentityStore | None = None,
        jwt_secret: str | None = None,
        server_host: str | None = None,
        server_port: int | None = None,
    ):
        self.config = config or Config()
        self.logger = get_logger(
            "foxauth", log_level if log_level is not None else self.config.LOG_LEVEL
        )
        self.server_host = server_host or self.config.SERVER_HOST
        self.server_port = server_port or self.config.SERVER_PORT
        self.keys_dir = keys_dir or self.config.KEYS_DIR
        self.users_file_path = users_file_path or self.config.USERS_FILE_PATH

        self.key_store = KeyStore(
            keys_dir=self.keys_dir, key_size=self.config.KEY_SIZE
        ).initialize()
        self.signer = Signer(self.key_store)
        self.identity_store: IIdentityStore = (
            identity_store
            if identity_store is not None
            else JsonIdentityStore(self.users_file_path)
        )
        self.authenticator = TokenAuthenticator(
            jwt_secret or self.config.JWT_SECRET, self.config
        )
        if not self.authenticator.secret:
            self.logger.warning("FOXAUTH_JWT_SECRET is not set, every join will be rejected")

        self.service = AuthlibService(
            config=self.config,
            signer=self.signer,
            identity_store=self.identity_store,
            authenticator=self.authenticator,
        )

        self.app = FastAPI(title=self.config.SERVER_NAME)
        self.app.state.authenticator = self.authenticator
        self.app.add_exception_handler(RequestValidationError, self._validation_error)
        AuthlibRoutes(self.service).setup_routes(self.app)

        self.logger.info(
            "Authlib server ready on http://%s:%s%s",
            self.server_host,
            self.server_port,
            self.config.API_PREFIX,
        )

    @staticmethod
    async def _validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logging.getLogger(__name__).warning(
            "Malformed request to %s: %s", request.url.path, exc.errors()
        )
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})
