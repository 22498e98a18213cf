"""
Local filesystem key-value adapter.

One file per key: {base_path}/{safe_key}.json holding the raw string value.
Writes go through a temporary file and an atomic rename so a crash never
leaves a half-written value behind.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from logic_looper.ports.kv import StorageUnavailableError

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class FileKeyValueStore:
    """Filesystem implementation of KeyValueStorePort."""

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path)

        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        # Sanitize key to prevent directory traversal
        safe_key = _UNSAFE.sub("_", key.replace("..", ""))
        return self.base_path / f"{safe_key}.json"

    def get(self, key: str) -> str | None:
        path = self._key_to_path(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise StorageUnavailableError("file", str(e)) from e

    def set(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageUnavailableError("file", str(e)) from e
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str) -> bool:
        path = self._key_to_path(key)
        if not path.exists():
            return False
        path.unlink()
        return True


def create_file_store(
    base_path: str | Path | None = None,
    *,
    env_var: str = "LOGIC_LOOPER_DATA_DIR",
    default_path: str = "./data",
) -> FileKeyValueStore:
    """
    Factory function to create FileKeyValueStore from config.

    Args:
        base_path: Explicit base path (overrides env var)
        env_var: Environment variable name for the data directory
        default_path: Default path if not configured
    """
    if base_path is None:
        base_path = os.environ.get(env_var, default_path)

    return FileKeyValueStore(base_path)
