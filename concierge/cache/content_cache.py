"""
Session Content Cache
In-memory caches for generated content, plus in-flight deduplication.

Writes are version-stamped: every clear() bumps the version, and a write
carrying an older version is dropped. A generation started before a
refresh therefore cannot repopulate the cache after it.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Generic, Hashable, Optional, TypeVar
from loguru import logger

T = TypeVar("T")


class ContentCache(Generic[T]):
    """
    Key -> generated content, scoped to one session.

    Usage:
        cache = ContentCache("insight")
        version = cache.version
        text = await generate()
        cache.put(key, text, version=version)  # ignored if cleared meanwhile
    """

    def __init__(self, name: str):
        self.name = name
        self.version = 0
        self._entries: Dict[Hashable, T] = {}
        self._hits = 0
        self._misses = 0
        self._stale_writes = 0

    def get(self, key: Hashable) -> Optional[T]:
        if key in self._entries:
            self._hits += 1
            return self._entries[key]
        self._misses += 1
        return None

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def put(self, key: Hashable, value: T, version: Optional[int] = None) -> bool:
        """Store a value. Returns False when the write is stale and was dropped."""
        if version is not None and version != self.version:
            self._stale_writes += 1
            logger.debug(f"Dropped stale {self.name} write for {key!r} (v{version} < v{self.version})")
            return False
        self._entries[key] = value
        return True

    def snapshot(self) -> Dict[Hashable, T]:
        return dict(self._entries)

    def clear(self):
        self._entries.clear()
        self.version += 1
        logger.debug(f"Cleared {self.name} cache (now v{self.version})")

    def get_stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        return {
            "name": self.name,
            "entries": len(self._entries),
            "version": self.version,
            "hits": self._hits,
            "misses": self._misses,
            "stale_writes": self._stale_writes,
            "hit_rate": round(self._hits / total, 3) if total else 0.0,
        }


class InFlightRegistry:
    """
    Single-flight deduplication: concurrent callers for the same key
    await one shared task instead of starting a second generation.
    """

    def __init__(self):
        self._tasks: Dict[Hashable, asyncio.Task] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    async def run_once(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
            task.add_done_callback(lambda done, k=key: self._forget(k, done))
        else:
            logger.debug(f"Joining in-flight generation for {key!r}")
        return await asyncio.shield(task)

    def _forget(self, key: Hashable, task: asyncio.Task):
        # a clear() may already have replaced the entry with a newer task
        if self._tasks.get(key) is task:
            del self._tasks[key]

    def clear(self):
        self._tasks.clear()
