"""
Configuration settings for the authlib session server.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


class Config:
    """Central configuration class for all system settings."""

    def __init__(self) -> None:
        # Advertised server metadata
        self.SERVER_NAME: str = os.getenv("FOXAUTH_SERVER_NAME", "FoxLauncher Authlib")
        self.IMPLEMENTATION_NAME: str = "fox-launcher-authserver"
        self.IMPLEMENTATION_VERSION: str = "1.0.0"
        self.API_PREFIX: str = "/authlib"

        # Server settings
        self.SERVER_HOST: str = os.getenv("FOXAUTH_SERVER_HOST", "127.0.0.1")
        self.SERVER_PORT: int = int(os.getenv("FOXAUTH_SERVER_PORT", "8000"))
        self.SERVER_URL: str = f"http://{self.SERVER_HOST}:{self.SERVER_PORT}"

        # File paths
        self.CONTENT_ROOT: Path = Path(os.getenv("FOXAUTH_CONTENT_ROOT", str(Path.cwd())))
        self.DATA_DIR: Path = self.CONTENT_ROOT / "data"
        self.KEYS_DIR: Path = Path(
            os.getenv("FOXAUTH_KEYS_DIR", str(self.DATA_DIR / "authlib"))
        )
        self.PRIVATE_KEY_PATH: Path = self.KEYS_DIR / "private.pem"
        self.PUBLIC_KEY_PATH: Path = self.KEYS_DIR / "public.pem"
        self.USERS_FILE_PATH: Path = Path(
            os.getenv("FOXAUTH_USERS_FILE", str(self.DATA_DIR / "users.json"))
        )

        # Signing key
        self.KEY_SIZE: int = 2048
        self.PUBLIC_EXPONENT: int = 65537

        # Bearer tokens
        self.JWT_SECRET: str | None = os.getenv("FOXAUTH_JWT_SECRET")  # base64
        self.JWT_ALGORITHM: str = "HS256"
        self.USER_UUID_CLAIM: str = "user_uuid"
        self.USERNAME_CLAIM: str = "unique_name"
        self.ROLE_CLAIM: str = "role"
        self.ADMIN_ROLE: str = "Admin"
        self.USER_ROLE: str = "User"
        self.TOKEN_TTL: int = 7 * 24 * 3600  # seconds

        # Logging
        self.LOG_LEVEL: int = logging.INFO
