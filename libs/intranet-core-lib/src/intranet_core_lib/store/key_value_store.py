"""Base interface for the persistence adapter."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Opaque string store with get/set-by-key semantics.

    Collections are stored as JSON arrays of flat records; single records
    (session, payment gateway config) as one JSON object.
    """

    def __init__(self, key_prefix: str = ""):
        self._key_prefix = key_prefix

    def qualified_key(self, key: str) -> str:
        """Return the physical key for a logical collection name."""
        return f"{self._key_prefix}{key}"

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw value stored under the key, if any."""

        raise NotImplementedError()

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a raw value under the key."""

        raise NotImplementedError()

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key; missing keys are ignored."""

        raise NotImplementedError()

    def read_collection(self, key: str) -> list[dict[str, Any]]:
        """Return the records of a collection; unreadable payloads read as empty."""
        raw = self.get(self.qualified_key(key))
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.error("Error parsing storage for key %s", self.qualified_key(key))
            return []
        if not isinstance(parsed, list):
            logger.error("Storage for key %s is not a collection", self.qualified_key(key))
            return []
        return [item for item in parsed if isinstance(item, dict)]

    def write_collection(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace the records of a collection."""
        self.set(self.qualified_key(key), json.dumps(records))

    def read_record(self, key: str) -> dict[str, Any] | None:
        """Return a single stored record, or None when absent or unreadable."""
        raw = self.get(self.qualified_key(key))
        if not raw:
            return None
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.error("Error parsing storage for key %s", self.qualified_key(key))
            return None
        return parsed if isinstance(parsed, dict) else None

    def write_record(self, key: str, record: dict[str, Any]) -> None:
        """Store a single record."""
        self.set(self.qualified_key(key), json.dumps(record))

    def remove(self, key: str) -> None:
        """Remove a logical key."""
        self.delete(self.qualified_key(key))
