"""Business logic services for the authlib session server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from foxauth.server.domain.has_joined_handler import HasJoinedHandler, ProfileHandler
from foxauth.server.domain.join_handler import JoinHandler
from foxauth.server.domain.server_info_handler import ServerInfoHandler
from foxauth.server.domain.textures import TexturesBuilder

if TYPE_CHECKING:
    from foxauth.common.config import Config
    from foxauth.common.interfaces import IIdentityStore, ISigner
    from foxauth.common.models import (
        JoinRequest,
        ProfileResponse,
        ServerInfoResponse,
        TokenContext,
    )
    from foxauth.server.auth import TokenAuthenticator


class AuthlibService:
    """Facade over the handshake handlers, shared by all requests."""

    def __init__(
        self,
        config: Config,
        signer: ISigner,
        identity_store: IIdentityStore,
        authenticator: TokenAuthenticator,
    ):
        self.config = config
        self.signer = signer
        self.identity_store = identity_store
        self.authenticator = authenticator

        textures = TexturesBuilder()
        self.server_info_handler = ServerInfoHandler(config=config, signer=signer)
        self.join_handler = JoinHandler(authenticator=authenticator)
        self.has_joined_handler = HasJoinedHandler(
            identity_store=identity_store, signer=signer, textures=textures
        )
        self.profile_handler = ProfileHandler(
            identity_store=identity_store, textures=textures
        )

    async def server_info(self, host: str) -> ServerInfoResponse:
        return self.server_info_handler.handle(host)

    def api_location(self, scheme: str, netloc: str) -> str:
        return self.server_info_handler.api_location(scheme, netloc)

    async def profile(self, uuid: str, base_url: str) -> ProfileResponse:
        return self.profile_handler.handle_profile(uuid, base_url)

    async def join(self, req: JoinRequest, context: TokenContext) -> None:
        self.join_handler.handle_join(req, context)

    async def has_joined(
        self,
        username: str | None,
        base_url: str,
        server_id: str | None = None,
        selected_profile: str | None = None,
        ip: str | None = None,
    ) -> ProfileResponse | None:
        return self.has_joined_handler.handle_has_joined(
            username,
            base_url,
            server_id=server_id,
            selected_profile=selected_profile,
            ip=ip,
        )
