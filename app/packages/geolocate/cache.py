"""Bounded, expiring store of simple geolocation responses."""

import threading
import time
from typing import TYPE_CHECKING, Callable, Optional

from cachetools import TTLCache

from packages.geolocate.schemas import IpGeoResponse

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

# Cache-Control sent to clients; independent of the server-side TTL below
CLIENT_CACHE_CONTROL = "public, max-age=1209600"


class ResultCache:
    """Thread-safe TTL cache keyed by the raw IP string.

    Keys are not canonicalized: "::1" and "0::1" are different entries.
    Concurrent inserts for the same key are last-write-wins.

    Args:
        max_entries: Maximum number of entries before eviction.
        ttl_seconds: Seconds an entry stays valid after insertion.
        timer: Monotonic clock, overridable for tests.
    """

    def __init__(
        self,
        max_entries: int = 10_000,
        ttl_seconds: float = 3600,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: TTLCache = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ResultCache":
        return cls(
            max_entries=settings.cache.CACHE_SIZE,
            ttl_seconds=settings.cache.CACHE_TTL_SECS,
        )

    def get(self, key: str) -> Optional[IpGeoResponse]:
        with self._lock:
            return self._entries.get(key)

    def insert(self, key: str, value: IpGeoResponse) -> None:
        with self._lock:
            self._entries[key] = value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
