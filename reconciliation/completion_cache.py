"""
Local cache of collection ids that have already been recognized.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Set, List

from config import collections_config

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class CompletionCacheError(Exception):
    """Raised when the cache file cannot be read."""


class CompletionCache:
    """
    File-backed list of completed collection ids under a single key.

    The file holds ``{"version": 1, "<key>": [...]}``. A bare JSON list is
    also accepted, with entries either plain ids or objects carrying ``id``.
    """

    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None):
        self.path = Path(path or collections_config.cache_path)
        self.key = key or collections_config.cache_key
        self._lock = threading.Lock()

    def _read(self) -> List[str]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as e:
            logger.error(f"Could not read completion cache {self.path}: {e}")
            raise CompletionCacheError(f"Corrupt completion cache: {self.path}") from e

        if isinstance(data, dict):
            data = data.get(self.key, [])
        if not isinstance(data, list):
            raise CompletionCacheError(f"Unexpected completion cache layout: {self.path}")

        ids = []
        for entry in data:
            if isinstance(entry, dict):
                entry = entry.get("id")
            if entry:
                ids.append(str(entry))
        return ids

    def _write(self, ids: List[str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": CACHE_VERSION, self.key: ids}
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def load(self) -> Set[str]:
        """Return the set of cached completion ids."""
        return set(self._read())

    def add(self, collection_id: str) -> bool:
        """
        Append an id if absent.

        Returns:
            True if the id was added, False if it was already cached
        """
        with self._lock:
            ids = self._read()
            if collection_id in ids:
                return False

            ids.append(collection_id)
            self._write(ids)

        logger.debug(f"Cached completed collection {collection_id}")
        return True

    def clear(self):
        """Remove every cached id."""
        with self._lock:
            self._write([])
