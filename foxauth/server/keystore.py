"""
RSA key store for the authlib signing key.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from foxauth.common.config import Config
from foxauth.common.crypto import CryptoUtils
from foxauth.common.exceptions import KeyFormatError, KeyStorageError, SigningError

logger = logging.getLogger(__name__)

PRIVATE_KEY_FILENAME = "private.pem"
PUBLIC_KEY_FILENAME = "public.pem"


class KeyStore:
    """Owns the single RSA keypair of a server instance.

    The keypair is generated on first start and written to
    ``private.pem``/``public.pem`` as DER bytes; later starts load the
    private key and derive the public key from it.
    """

    def __init__(
        self,
        keys_dir: Path | None = None,
        key_size: int | None = None,
        public_exponent: int | None = None,
    ):
        config = Config()
        self.keys_dir = keys_dir or config.KEYS_DIR
        self.key_size = key_size or config.KEY_SIZE
        self.public_exponent = public_exponent or config.PUBLIC_EXPONENT
        self._private_key: rsa.RSAPrivateKey | None = None

    @property
    def private_key_path(self) -> Path:
        return self.keys_dir / PRIVATE_KEY_FILENAME

    @property
    def public_key_path(self) -> Path:
        return self.keys_dir / PUBLIC_KEY_FILENAME

    @property
    def is_initialized(self) -> bool:
        return self._private_key is not None

    @property
    def private_key(self) -> rsa.RSAPrivateKey:
        if self._private_key is None:
            raise SigningError("RSA keys not loaded")
        return self._private_key

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self.private_key.public_key()

    def initialize(self, storage_directory: Path | None = None) -> KeyStore:
        """Load the keypair from disk, generating it first if either file is missing."""
        if storage_directory is not None:
            self.keys_dir = storage_directory

        if self.private_key_path.exists() and self.public_key_path.exists():
            logger.info("Loading existing authlib keys from %s", self.keys_dir)
            self._private_key = self._load_private_key()
            logger.debug("Loaded %s-bit RSA key", self._private_key.key_size)
        else:
            logger.info("Generating new authlib keys in %s", self.keys_dir)
            self._private_key = self._generate_keys()
            logger.info("New authlib keys generated and saved")
        return self

    def export_public_key_pem(self) -> str:
        """Public key as SubjectPublicKeyInfo PEM wrapped at 64 columns."""
        return CryptoUtils.public_key_to_pem(self.public_key)

    def _load_private_key(self) -> rsa.RSAPrivateKey:
        try:
            key_bytes = self.private_key_path.read_bytes()
        except OSError as err:
            msg = f"Cannot read private key {self.private_key_path}: {err}"
            raise KeyStorageError(msg) from err

        try:
            if key_bytes.lstrip().startswith(b"-----BEGIN"):
                key = serialization.load_pem_private_key(key_bytes, password=None)
            else:
                key = serialization.load_der_private_key(key_bytes, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as err:
            msg = f"Cannot parse private key {self.private_key_path}"
            raise KeyFormatError(msg) from err

        if not isinstance(key, rsa.RSAPrivateKey):
            msg = f"Private key {self.private_key_path} is not an RSA key"
            raise KeyFormatError(msg)
        return key

    def _generate_keys(self) -> rsa.RSAPrivateKey:
        private_key = rsa.generate_private_key(
            public_exponent=self.public_exponent, key_size=self.key_size
        )

        # PKCS#1 private key, SubjectPublicKeyInfo public key
        private_der = private_key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_der = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        try:
            self.keys_dir.mkdir(parents=True, exist_ok=True)
            self.private_key_path.write_bytes(private_der)
            self.private_key_path.chmod(0o600)
            self.public_key_path.write_bytes(public_der)
        except OSError as err:
            msg = f"Cannot write authlib keys to {self.keys_dir}: {err}"
            raise KeyStorageError(msg) from err

        logger.info("  Private: %s", self.private_key_path)
        logger.info("  Public: %s", self.public_key_path)
        return private_key
