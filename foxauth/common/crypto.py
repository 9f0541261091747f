"""Common cryptographic utilities.
"""

from __future__ import annotations

import base64
from typing import cast

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

PEM_LINE_LENGTH = 64
PEM_HEADER = "-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = "-----END PUBLIC KEY-----"


class CryptoUtils:
    """Utility class for PEM formatting and RSA signature checks."""

    @staticmethod
    def wrap_pem_body(base64_body: str, line_length: int = PEM_LINE_LENGTH) -> str:
        """Split a base64 string into lines of ``line_length`` characters."""
        return "\n".join(
            base64_body[i : i + line_length]
            for i in range(0, len(base64_body), line_length)
        )

    @staticmethod
    def public_key_to_pem(public_key: RSAPublicKey) -> str:
        """Encode a public key as SubjectPublicKeyInfo PEM without a trailing newline."""
        der = public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        body = CryptoUtils.wrap_pem_body(base64.b64encode(der).decode("ascii"))
        return f"{PEM_HEADER}\n{body}\n{PEM_FOOTER}"

    @staticmethod
    def strip_pem_newlines(pem: str) -> str:
        """Collapse a PEM document into a single line for embedding in JSON."""
        return pem.replace("\r", "").replace("\n", "")

    @staticmethod
    def load_public_key_pem(pem: str) -> RSAPublicKey:
        """Parse a PEM public key, tolerating the single-line form."""
        body = pem.replace(PEM_HEADER, "").replace(PEM_FOOTER, "")
        body = "".join(body.split())
        normalized = f"{PEM_HEADER}\n{CryptoUtils.wrap_pem_body(body)}\n{PEM_FOOTER}\n"
        return cast(
            "RSAPublicKey", serialization.load_pem_public_key(normalized.encode("ascii"))
        )

    @staticmethod
    def verify_signature(
        public_key: RSAPublicKey, signature_b64: str, data: bytes
    ) -> bool:
        """Check a base64 PKCS#1 v1.5 / SHA-256 signature over ``data``."""
        try:
            signature = base64.b64decode(signature_b64, validate=True)
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        except (InvalidSignature, ValueError):
            return False
        return True
