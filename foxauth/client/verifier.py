"""
Game-server side verification of hasJoined answers.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from foxauth.common.crypto import CryptoUtils
from foxauth.common.exceptions import SigningError
from foxauth.common.models import ProfileResponse

logger = logging.getLogger(__name__)


class SessionVerifier:
    """Checks that a player joined through a trusted authlib server.

    The server's public key is fetched once from ``GET <api_root>`` and every
    signed hasJoined answer is checked against ``serverId + profile id``.
    """

    def __init__(
        self,
        api_root: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.api_root = api_root.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._public_key: RSAPublicKey | None = None

    @property
    def public_key(self) -> RSAPublicKey:
        if self._public_key is None:
            self._public_key = self.fetch_public_key()
        return self._public_key

    def fetch_metadata(self) -> dict[str, Any]:
        r = self.session.get(self.api_root, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def fetch_public_key(self) -> RSAPublicKey:
        metadata = self.fetch_metadata()
        logger.info(
            "Using authlib server %s", metadata.get("meta", {}).get("serverName")
        )
        return CryptoUtils.load_public_key_pem(metadata["signaturePublickey"])

    def has_joined(
        self, username: str, server_id: str, ip: str | None = None
    ) -> ProfileResponse | None:
        """Return the verified profile, or ``None`` if the player did not join."""
        params = {"username": username, "serverId": server_id}
        if ip:
            params["ip"] = ip
        r = self.session.get(
            f"{self.api_root}/sessionserver/session/minecraft/hasJoined",
            params=params,
            timeout=self.timeout,
        )
        if r.status_code == 204:  # noqa: PLR2004
            logger.info("%s has not joined %s", username, server_id)
            return None
        r.raise_for_status()

        profile = ProfileResponse.model_validate(r.json())
        if not profile.signature:
            raise SigningError(f"hasJoined answer for {username} is unsigned")
        data = (server_id + profile.id).encode("utf-8")
        if not CryptoUtils.verify_signature(self.public_key, profile.signature, data):
            raise SigningError(f"Bad hasJoined signature for {username}")
        return profile
