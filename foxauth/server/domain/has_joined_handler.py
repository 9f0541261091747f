"""
hasJoined and profile lookup handlers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from foxauth.common.exceptions import MissingUsernameError, ProfileNotFoundError
from foxauth.server.domain.textures import TexturesBuilder

if TYPE_CHECKING:
    from foxauth.common.interfaces import IIdentityStore, ISigner
    from foxauth.common.models import Identity, ProfileResponse

logger = logging.getLogger(__name__)


def verification_string(server_id: str, identity: Identity) -> bytes:
    """Bytes signed for a server-side hasJoined answer."""
    return (server_id + identity.uuid).encode("utf-8")


class HasJoinedHandler:
    """Resolves hasJoined queries from clients and game servers.

    Unknown usernames and mismatched ``selectedProfile`` values both produce
    ``None`` so callers cannot tell the two apart.
    """

    def __init__(
        self,
        identity_store: IIdentityStore,
        signer: ISigner,
        textures: TexturesBuilder | None = None,
    ):
        self.identity_store = identity_store
        self.signer = signer
        self.textures = textures or TexturesBuilder()

    def handle_has_joined(
        self,
        username: str | None,
        base_url: str,
        server_id: str | None = None,
        selected_profile: str | None = None,
        ip: str | None = None,
    ) -> ProfileResponse | None:
        if not username:
            logger.warning("hasJoined called without username")
            raise MissingUsernameError("Username is required")

        identity = self.identity_store.get_by_username(username)
        if identity is None:
            logger.debug("User %s not found for hasJoined", username)
            return None

        if selected_profile and not identity.matches(selected_profile):
            logger.warning(
                "User %s (%s) queried with mismatched selectedProfile %s",
                username,
                identity.uuid,
                selected_profile,
            )
            return None

        if not server_id:
            logger.debug("Client-side hasJoined for %s (%s)", username, identity.uuid)
            return self.textures.build_profile(identity, base_url)

        logger.debug(
            "Server-side hasJoined for %s (%s) with serverId %s from ip %s",
            username,
            identity.uuid,
            server_id,
            ip,
        )
        signature = self.signer.sign(verification_string(server_id, identity))
        return self.textures.build_profile(identity, base_url, signature=signature)


class ProfileHandler:
    """Public profile lookup by UUID."""

    def __init__(
        self, identity_store: IIdentityStore, textures: TexturesBuilder | None = None
    ):
        self.identity_store = identity_store
        self.textures = textures or TexturesBuilder()

    def handle_profile(self, uuid: str, base_url: str) -> ProfileResponse:
        identity = self.identity_store.get_by_uuid(uuid)
        if identity is None:
            logger.debug("Profile not found for UUID %s", uuid)
            raise ProfileNotFoundError(f"Profile {uuid} not found")
        return self.textures.build_profile(identity, base_url)
