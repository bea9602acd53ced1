"""Dictionary backed store."""

from intranet_core_lib.store.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Keeps every value in process memory."""

    def __init__(self, key_prefix: str = "intranet_"):
        super().__init__(key_prefix=key_prefix)
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        """Return the physical keys currently stored."""
        return sorted(self._values)
