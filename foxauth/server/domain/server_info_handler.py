"""
Server metadata handler for authlib-injector discovery.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from foxauth.common.crypto import CryptoUtils
from foxauth.common.models import ServerInfoResponse, ServerMeta

if TYPE_CHECKING:
    from foxauth.common.config import Config
    from foxauth.common.interfaces import ISigner


class ServerInfoHandler:
    """Builds the ``GET /authlib`` document."""

    def __init__(self, config: Config, signer: ISigner):
        self.config = config
        self.signer = signer

    def handle(self, host: str) -> ServerInfoResponse:
        public_key = CryptoUtils.strip_pem_newlines(self.signer.export_public_key_pem())
        return ServerInfoResponse(
            meta=ServerMeta(
                serverName=self.config.SERVER_NAME,
                implementationName=self.config.IMPLEMENTATION_NAME,
                implementationVersion=self.config.IMPLEMENTATION_VERSION,
            ),
            skinDomains=[host],
            signaturePublickey=public_key,
        )

    def api_location(self, scheme: str, netloc: str) -> str:
        return f"{scheme}://{netloc}{self.config.API_PREFIX}"
