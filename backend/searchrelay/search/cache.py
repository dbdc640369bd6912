"""
Result cache: a flat JSON mapping of cache key -> projected result list.

The whole mapping is read at the start of a search and written back in full
after every new entry. There is no locking; concurrent writers race and the
last one wins.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from searchrelay.search.schemas import SearchRequest

logger = logging.getLogger(__name__)

CacheMapping = dict[str, list[dict]]


def cache_key(request: SearchRequest) -> str:
    """Key on the raw query, page and sort; the optimized query never enters the key."""
    return f"{request.query}-{request.page}-{request.sort.value}"


class CacheStore(Protocol):
    def load(self) -> CacheMapping: ...

    def save(self, mapping: CacheMapping) -> None: ...


class JsonFileCacheStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> CacheMapping:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Error loading cache file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring cache file %s: expected a JSON object, got %s", self.path, type(data).__name__)
            return {}
        entries = {k: v for k, v in data.items() if isinstance(v, list)}
        if len(entries) != len(data):
            logger.warning("Dropped %d malformed entries from cache file %s", len(data) - len(entries), self.path)
        return entries

    def save(self, mapping: CacheMapping) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(mapping, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving cache file %s: %s", self.path, e)


class InMemoryCacheStore:
    """Same contract as JsonFileCacheStore, kept in process. Copies on load/save like a file would."""

    def __init__(self, initial: CacheMapping | None = None):
        self._data: CacheMapping = json.loads(json.dumps(initial or {}))
        self.save_count = 0

    def load(self) -> CacheMapping:
        return json.loads(json.dumps(self._data))

    def save(self, mapping: CacheMapping) -> None:
        self._data = json.loads(json.dumps(mapping))
        self.save_count += 1
