"""
Builder for the ``textures`` profile property.
"""

from __future__ import annotations

import base64
import json
import time
from typing import Callable
from urllib.parse import urlparse

from foxauth.common.models import (
    Identity,
    ProfileProperty,
    ProfileResponse,
    TextureRef,
    TexturesPayload,
)

TEXTURES_PROPERTY = "textures"


class TexturesBuilder:
    """Builds profile responses with a base64 ``textures`` property."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    @staticmethod
    def resolve_url(url: str, base_url: str) -> str:
        """Make store-relative texture paths absolute against ``base_url``."""
        if urlparse(url).scheme:
            return url
        if not url.startswith("/"):
            url = "/" + url
        return base_url.rstrip("/") + url

    def build_payload(self, identity: Identity, base_url: str) -> TexturesPayload:
        textures: dict[str, TextureRef] = {}
        if identity.skin_url:
            textures["SKIN"] = TextureRef(url=self.resolve_url(identity.skin_url, base_url))
        if identity.active_cape_url:
            textures["CAPE"] = TextureRef(
                url=self.resolve_url(identity.active_cape_url, base_url)
            )
        return TexturesPayload(
            timestamp=int(self.clock() * 1000),
            profileId=identity.uuid,
            profileName=identity.username,
            isPublic=True,
            textures=textures,
        )

    @staticmethod
    def encode(payload: TexturesPayload) -> str:
        data = json.dumps(payload.model_dump(), separators=(",", ":"))
        return base64.b64encode(data.encode("utf-8")).decode("ascii")

    def build_profile(
        self,
        identity: Identity,
        base_url: str,
        signature: str | None = None,
    ) -> ProfileResponse:
        """Profile with a textures property.

        Unsigned profiles only carry the property when a skin or cape is set;
        signed profiles always carry it so the signature has a home.
        """
        profile = ProfileResponse(id=identity.uuid, name=identity.username)
        if identity.has_textures() or signature is not None:
            value = self.encode(self.build_payload(identity, base_url))
            profile.properties.append(
                ProfileProperty(name=TEXTURES_PROPERTY, value=value, signature=signature)
            )
        profile.signature = signature
        return profile
