"""Persistence of the signed-in user record."""

from __future__ import annotations

import logging

from intranet_core_api.models.user import User
from intranet_core_lib.principal import Principal
from intranet_core_lib.principal_factory import principal_from_record
from intranet_core_lib.store.key_value_store import KeyValueStore
from intranet_core_lib.store.storage_keys import StorageKey

logger = logging.getLogger(__name__)


class SessionStore:
    """Keeps at most one session record under the ``session`` key.

    The record is the user row without its password hash. Callers turn it
    into a ``Principal`` and pass that object explicitly from then on.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def save(self, user: User) -> Principal:
        record = user.to_record()
        record.pop("passwordHash", None)
        self._store.write_record(StorageKey.SESSION, record)
        return principal_from_record(record)

    def load(self) -> Principal | None:
        record = self._store.read_record(StorageKey.SESSION)
        if not record or "id" not in record:
            return None
        return principal_from_record(record)

    def clear(self) -> None:
        self._store.remove(StorageKey.SESSION)
