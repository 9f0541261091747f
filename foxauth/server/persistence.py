"""
Identity lookups backed by the launcher's user store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path  # noqa: TC003
from typing import Any, Iterable

from pydantic import ValidationError

from foxauth.common.models import Identity, normalize_uuid

logger = logging.getLogger(__name__)


class InMemoryIdentityStore:
    """Identity store over a fixed collection of profiles."""

    def __init__(self, identities: Iterable[Identity] = ()):
        self._by_uuid: dict[str, Identity] = {}
        self._by_username: dict[str, Identity] = {}
        for identity in identities:
            self.add(identity)

    def add(self, identity: Identity) -> None:
        self._by_uuid[normalize_uuid(identity.uuid)] = identity
        self._by_username[identity.username] = identity

    def get_by_uuid(self, uuid: str) -> Identity | None:
        return self._by_uuid.get(normalize_uuid(uuid))

    def get_by_username(self, username: str) -> Identity | None:
        return self._by_username.get(username)

    def __len__(self) -> int:
        return len(self._by_uuid)


class JsonIdentityStore(InMemoryIdentityStore):
    """Identity store loaded from a ``users.json`` export.

    The file holds a list of ``{uuid, username, skin_url, cape_url,
    cape_active}`` records. A missing file yields an empty store.
    """

    def __init__(self, file_path: Path):
        self.file_path = file_path
        super().__init__(self._load(file_path))

    @staticmethod
    def _load(file_path: Path) -> list[Identity]:
        try:
            with file_path.open(encoding="utf-8") as f:
                records: Any = json.load(f)
        except FileNotFoundError:
            logger.info("No user store at %s, starting empty", file_path)
            return []
        except json.JSONDecodeError:
            logger.exception("User store %s is not valid JSON", file_path)
            return []

        if not isinstance(records, list):
            logger.error("User store %s does not hold a list of users", file_path)
            return []

        identities = []
        for record in records:
            try:
                identities.append(Identity(**record))
            except (ValidationError, TypeError):
                logger.warning("Skipping malformed user record in %s", file_path)
        logger.info("Loaded %d identities from %s", len(identities), file_path)
        return identities

    @staticmethod
    def save(file_path: Path, identities: Iterable[Identity]) -> None:
        """Write identities in the format ``JsonIdentityStore`` reads."""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8") as f:
            json.dump([identity.model_dump() for identity in identities], f, indent=2)
