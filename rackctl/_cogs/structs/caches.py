"""
An in-memory cache of the decoded responses of the cacheable reads.

The cache is keyed by the normalized request path (e.g. ``/images`` and
``/images/detail`` are two independent entries), and holds the last decoded
response body for that path until its time-to-live is over.

There is no eviction policy besides the time-to-live: the number of distinct
cacheable paths is small and fixed (the listings, limits, versions).

The cache belongs to one :class:`APIContext` and is not shared across threads.
"""
import dataclasses
import time
from collections.abc import Callable, Iterator
from typing import Any


@dataclasses.dataclass(frozen=True)
class CacheEntry:
    """ One cached response with its expiration moment (by the cache's clock). """
    value: Any
    expires_at: float


class ResponseCache:

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def get(self, key: str) -> CacheEntry | None:
        """ Get a fresh entry, if any. The expired entries are removed. """
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at <= self._clock():
            del self._entries[key]
            entry = None
        return entry

    def put(self, key: str, value: Any, *, ttl: float) -> CacheEntry:
        entry = CacheEntry(value=value, expires_at=self._clock() + ttl)
        self._entries[key] = entry
        return entry

    def drop(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
