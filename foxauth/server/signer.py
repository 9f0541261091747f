"""
RSA signing service built on the key store.
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from foxauth.common.crypto import CryptoUtils
from foxauth.common.exceptions import InvalidInputError, SigningError

if TYPE_CHECKING:
    from foxauth.server.keystore import KeyStore

logger = logging.getLogger(__name__)


class Signer:
    """Signs byte strings with RSASSA-PKCS1-v1_5 over SHA-256.

    The wrapped key is never mutated after startup, so one instance is
    shared by all request handlers.
    """

    def __init__(self, key_store: KeyStore):
        self.key_store = key_store

    def sign(self, data: bytes) -> str:
        """Return the base64 signature of ``data``."""
        if not data:
            raise InvalidInputError("Data to sign cannot be empty")

        private_key = self.key_store.private_key
        try:
            signature = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, TypeError) as err:
            logger.exception("Failed to sign %d bytes", len(data))
            raise SigningError("Failed to sign data") from err
        return base64.b64encode(signature).decode("ascii")

    def verify(self, data: bytes, signature: str) -> bool:
        return CryptoUtils.verify_signature(self.key_store.public_key, signature, data)

    def export_public_key_pem(self) -> str:
        return self.key_store.export_public_key_pem()
