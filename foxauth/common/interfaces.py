"""
Interfaces and protocols for dependency injection.
"""

from __future__ import annotations

from typing import Protocol

from foxauth.common.models import Identity


class IIdentityStore(Protocol):
    """Protocol for read-only identity lookups."""

    def get_by_uuid(self, uuid: str) -> Identity | None: ...

    def get_by_username(self, username: str) -> Identity | None: ...


class ISigner(Protocol):
    """Protocol for the server signing service."""

    def sign(self, data: bytes) -> str: ...

    def export_public_key_pem(self) -> str: ...
