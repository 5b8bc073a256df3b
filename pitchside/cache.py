"""
Disk backed cache for provider responses.
"""
from __future__ import annotations

import hashlib
import json
import os
import time
from pathlib import Path
from typing import Any, Optional


class DataCache:
    """
    Persist JSON payloads fetched from the provider so repeated lookups of the
    same player do not hit the network within the TTL.
    """

    def __init__(self, cache_dir: str, default_ttl: Optional[int] = None):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.default_ttl = default_ttl

    def _path_for_key(self, key: str) -> Path:
        readable = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in key)[:80]
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]
        return self.cache_dir / f"{readable}-{digest}.json"

    def get(self, key: str, *, max_age: Optional[int] = None) -> Any:
        """
        Return the cached payload, or None when missing, stale or unreadable.
        """
        path = self._path_for_key(key)
        if not path.exists():
            return None

        ttl = max_age if max_age is not None else self.default_ttl
        if ttl is not None and (time.time() - path.stat().st_mtime) > ttl:
            return None

        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError):
            return None

    def set(self, key: str, value: Any) -> None:
        path = self._path_for_key(key)
        tmp_path = Path(f"{path}.{os.getpid()}.tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(value, handle)
        tmp_path.replace(path)

    def invalidate(self, key: str) -> bool:
        """
        Drop a single entry. Returns True when something was removed.
        """
        path = self._path_for_key(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def clear(self) -> None:
        for file in self.cache_dir.glob("*.json"):
            file.unlink()
