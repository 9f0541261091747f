"""
Join request handler.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from foxauth.common.exceptions import (
    MalformedRequestError,
    ProfileMismatchError,
    UnauthenticatedError,
)
from foxauth.common.models import normalize_uuid

if TYPE_CHECKING:
    from foxauth.common.models import JoinRequest, TokenContext
    from foxauth.server.auth import TokenAuthenticator

logger = logging.getLogger(__name__)


class JoinHandler:
    """Confirms that the caller vouches for their own profile.

    Nothing is recorded: the game server later asks ``hasJoined`` with the
    same ``serverId`` and gets a signed answer from there.
    """

    def __init__(self, authenticator: TokenAuthenticator):
        self.authenticator = authenticator

    def handle_join(self, req: JoinRequest, context: TokenContext) -> None:
        if not (req.accessToken and req.selectedProfile and req.serverId):
            logger.warning(
                "Join request missing required fields (accessToken=%s, selectedProfile=%s, serverId=%s)",
                bool(req.accessToken),
                req.selectedProfile,
                req.serverId,
            )
            raise MalformedRequestError(
                "accessToken, selectedProfile, and serverId are required"
            )

        # authlib-injector clients send the token in the body only
        if not context.is_authenticated_user:
            context = self.authenticator.decode(req.accessToken) or context
        if not context.is_authenticated_user or context.uuid is None:
            logger.warning("Unauthenticated join request for serverId %s", req.serverId)
            raise UnauthenticatedError("Unauthorized: Invalid token")

        if normalize_uuid(context.uuid) != normalize_uuid(req.selectedProfile):
            logger.warning(
                "Join rejected: selectedProfile %s does not match token profile %s for serverId %s",
                req.selectedProfile,
                context.uuid,
                req.serverId,
            )
            raise ProfileMismatchError(
                "Selected profile does not belong to the authenticated user."
            )

        logger.debug("Join accepted for %s on serverId %s", context.uuid, req.serverId)
