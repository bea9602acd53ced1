"""Key-value store abstractions."""

from intranet_core_lib.store.key_value_store import KeyValueStore
from intranet_core_lib.store.storage_keys import StorageKey

__all__ = [
    "KeyValueStore",
    "StorageKey",
]
