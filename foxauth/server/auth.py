"""
Bearer token authentication.

Tokens are HS256 JWTs issued by the launcher's login service, keyed with the
base64-decoded ``FOXAUTH_JWT_SECRET``. The caller's capabilities are resolved
once per request by :meth:`TokenAuthenticator.authenticate` and handed
to the handlers as a :class:`TokenContext`.
"""

from __future__ import annotations

import base64
import binascii
import logging
import time
from typing import Any, Iterable

import jwt
from fastapi import Request

from foxauth.common.config import Config
from foxauth.common.models import TokenContext

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class TokenAuthenticator:
    """Issues and validates launcher bearer tokens."""

    def __init__(self, secret: str | None, config: Config | None = None):
        self.config = config or Config()
        self.secret = secret
        self.key = self.decode_secret(secret) if secret else None
        self.algorithm = self.config.JWT_ALGORITHM

    @staticmethod
    def decode_secret(secret: str) -> bytes:
        """HMAC key bytes of a base64 secret, as printed by ``foxauth secret``."""
        try:
            return base64.b64decode(secret, validate=True)
        except binascii.Error as err:
            raise ValueError("JWT secret must be base64 encoded") from err

    @property
    def anonymous(self) -> TokenContext:
        return TokenContext(admin_role=self.config.ADMIN_ROLE)

    def issue(
        self,
        uuid: str,
        username: str | None = None,
        roles: Iterable[str] = (),
        ttl: int | None = None,
    ) -> str:
        """Mint a token for the given profile."""
        if not self.key:
            raise ValueError("JWT secret is not configured")
        now = int(time.time())
        claims: dict[str, Any] = {
            self.config.USER_UUID_CLAIM: uuid,
            self.config.ROLE_CLAIM: list(roles) or [self.config.USER_ROLE],
            "iat": now,
            "exp": now + (ttl if ttl is not None else self.config.TOKEN_TTL),
        }
        if username:
            claims[self.config.USERNAME_CLAIM] = username
        return jwt.encode(claims, self.key, algorithm=self.algorithm)

    def decode(self, token: str | None) -> TokenContext | None:
        """Validate ``token``; ``None`` if it is absent, invalid or has no UUID."""
        if not token or not self.key:
            return None
        try:
            claims: dict = jwt.decode(token, self.key, algorithms=[self.algorithm])
        except jwt.PyJWTError as err:
            logger.debug("Rejected bearer token: %s", err)
            return None

        uuid = claims.get(self.config.USER_UUID_CLAIM)
        if not uuid:
            logger.debug("Bearer token carries no %s claim", self.config.USER_UUID_CLAIM)
            return None

        roles = claims.get(self.config.ROLE_CLAIM) or ()
        if isinstance(roles, str):
            roles = (roles,)
        return TokenContext(
            uuid=str(uuid),
            username=claims.get(self.config.USERNAME_CLAIM),
            roles=tuple(roles),
            admin_role=self.config.ADMIN_ROLE,
        )

    async def authenticate(self, request: Request) -> TokenContext:
        """FastAPI dependency resolving the ``Authorization`` header."""
        header = request.headers.get("Authorization", "")
        if not header.lower().startswith(BEARER_PREFIX):
            return self.anonymous
        context = self.decode(header[len(BEARER_PREFIX) :].strip())
        return context or self.anonymous


async def get_token_context(request: Request) -> TokenContext:
    """Dependency resolving the caller through the app's authenticator."""
    authenticator: TokenAuthenticator = request.app.state.authenticator
    return await authenticator.authenticate(request)
