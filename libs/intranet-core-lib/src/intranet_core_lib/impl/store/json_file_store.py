"""Store that keeps one JSON file per key inside a directory."""

from __future__ import annotations

import logging
from pathlib import Path

from intranet_core_lib.impl.settings.store_settings import StoreSettings
from intranet_core_lib.store.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Persists each key as ``<root_dir>/<key>.json``.

    Reads are cached per file and refreshed when the file's mtime changes,
    so several processes sharing a directory observe each other's writes.
    Writes are last-write-wins.
    """

    def __init__(self, settings: StoreSettings):
        super().__init__(key_prefix=settings.key_prefix)
        self._root = Path(settings.root_dir)
        self._cache: dict[str, tuple[int, str]] = {}

    def _path(self, key: str) -> Path:
        return self._root / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            self._cache.pop(key, None)
            return None
        mtime_ns = path.stat().st_mtime_ns
        cached = self._cache.get(key)
        if cached and cached[0] == mtime_ns:
            return cached[1]
        value = path.read_text(encoding="utf-8")
        self._cache[key] = (mtime_ns, value)
        return value

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")
        self._cache[key] = (path.stat().st_mtime_ns, value)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            logger.debug("Removed storage file %s", path)
        self._cache.pop(key, None)
