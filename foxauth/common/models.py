"""
Pydantic models for request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


def normalize_uuid(value: str) -> str:
    """Canonical comparison form of a profile UUID: no dashes, lower case."""
    return value.replace("-", "").strip().lower()


class Identity(BaseModel):
    """A player profile owned by the user store."""

    model_config = ConfigDict(frozen=True)

    uuid: str
    username: str
    skin_url: str | None = None
    cape_url: str | None = None
    cape_active: bool = True

    def has_textures(self) -> bool:
        return bool(self.skin_url) or bool(self.active_cape_url)

    @property
    def active_cape_url(self) -> str | None:
        return self.cape_url if self.cape_active else None

    def matches(self, profile_uuid: str) -> bool:
        return normalize_uuid(self.uuid) == normalize_uuid(profile_uuid)


class JoinRequest(BaseModel):
    accessToken: str | None = None
    selectedProfile: str | None = None
    serverId: str | None = None


class ServerMeta(BaseModel):
    serverName: str
    implementationName: str
    implementationVersion: str


class ServerInfoResponse(BaseModel):
    meta: ServerMeta
    skinDomains: list[str]
    signaturePublickey: str


class TextureRef(BaseModel):
    url: str


class TexturesPayload(BaseModel):
    timestamp: int
    profileId: str
    profileName: str
    isPublic: bool = True
    textures: dict[str, TextureRef] = Field(default_factory=dict)


class ProfileProperty(BaseModel):
    name: str
    value: str
    signature: str | None = None


class ProfileResponse(BaseModel):
    id: str
    name: str
    properties: list[ProfileProperty] = Field(default_factory=list)
    signature: str | None = None


class TokenContext(BaseModel):
    """Capabilities resolved from a bearer token, once per request."""

    model_config = ConfigDict(frozen=True)

    uuid: str | None = None
    username: str | None = None
    roles: tuple[str, ...] = ()
    admin_role: str = "Admin"

    @property
    def is_authenticated_user(self) -> bool:
        return bool(self.uuid)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated_user and self.admin_role in self.roles
