# FieldScope - Resource Cache
# ===========================
"""
In-memory cache for resource documents keyed by resource URI.

Features:
- TTL-based expiration (default 1 hour); ttl <= 0 never expires
- LRU eviction when a new key is inserted at capacity
- Background sweep of expired entries on one daemon thread
- Hit/miss/eviction/expiration statistics
- Thread-safe operations (one lock guards entries and counters)
"""

import copy
import logging
import time
from dataclasses import dataclass, field
from threading import Event, Lock, Thread
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Pass as ttl to keep an entry until it is deleted or evicted
NO_EXPIRY = 0


@dataclass
class CacheEntry:
    """A cached resource document with expiry and access tracking."""
    uri: str
    content: Any
    metadata: Dict[str, Any] = field(default_factory=dict)
    cached_at: float = 0.0
    expires_at: Optional[float] = None   # None = never expires
    access_count: int = 0
    last_accessed: float = 0.0

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now > self.expires_at


class ResourceCache:
    """
    Resource document cache.

    Example:
        cache = ResourceCache(max_size=100, default_ttl=3600)

        entry = cache.get("jira://issue/fields")
        if entry is None:
            document = build_document(...)
            cache.set("jira://issue/fields", document, {"mimeType": "application/json"})
    """

    def __init__(self,
                 max_size: int = 100,
                 default_ttl: float = 3600,
                 sweep_interval: float = 300,
                 clock: Callable[[], float] = time.time,
                 start_sweeper: bool = True):
        """
        Initialize the resource cache.

        Args:
            max_size: Maximum number of entries to store
            default_ttl: Default time-to-live in seconds
            sweep_interval: Seconds between background sweeps (<= 0 disables the sweeper)
            clock: Returns the current time in seconds
            start_sweeper: Start the background sweep thread immediately
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self._entries: Dict[str, CacheEntry] = {}
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._lock = Lock()
        self.stats = self._empty_stats()

        self._stop = Event()
        self._sweeper: Optional[Thread] = None
        if start_sweeper and sweep_interval > 0:
            self._start_sweeper()

        logger.info(
            f"Resource cache created (max_size={max_size}, default_ttl={default_ttl}s, "
            f"sweep_interval={sweep_interval}s)"
        )

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'expirations': 0,
        }

    def get(self, uri: str) -> Optional[CacheEntry]:
        """
        Get a cached entry if present and not expired.

        Returns:
            The CacheEntry (access count and last access updated) or None
        """
        with self._lock:
            entry = self._entries.get(uri)
            if entry is None:
                self.stats['misses'] += 1
                logger.debug(f"Cache MISS for resource: {uri}")
                return None

            now = self._clock()
            if not self._is_well_formed(entry):
                del self._entries[uri]
                self.stats['misses'] += 1
                logger.warning(f"Dropping malformed cache entry for resource: {uri}")
                return None

            if entry.is_expired(now):
                del self._entries[uri]
                self.stats['expirations'] += 1
                self.stats['misses'] += 1
                logger.debug(f"Cache EXPIRED for resource: {uri}")
                return None

            entry.access_count += 1
            entry.last_accessed = now
            self.stats['hits'] += 1
            logger.debug(f"Cache HIT for resource: {uri} (accesses={entry.access_count})")
            return entry

    def set(self,
            uri: str,
            content: Any,
            metadata: Optional[Dict[str, Any]] = None,
            ttl: Optional[float] = None) -> None:
        """
        Store a deep copy of content.

        Args:
            uri: Resource URI
            content: Document to cache
            metadata: Resource metadata stored alongside the content
            ttl: Seconds until expiry (default_ttl if None; <= 0 never expires)
        """
        ttl = self.default_ttl if ttl is None else ttl

        with self._lock:
            now = self._clock()
            if uri not in self._entries and len(self._entries) >= self.max_size:
                self._evict_least_recently_used()

            self._entries[uri] = CacheEntry(
                uri=uri,
                content=copy.deepcopy(content),
                metadata=dict(metadata or {}),
                cached_at=now,
                expires_at=now + ttl if ttl > 0 else None,
                access_count=0,
                last_accessed=now,
            )
            logger.debug(f"Cache SET for resource: {uri} (ttl={ttl}s)")

    def has(self, uri: str) -> bool:
        """Check whether a live entry exists without counting an access."""
        with self._lock:
            entry = self._entries.get(uri)
            if entry is None:
                return False
            if not self._is_well_formed(entry) or entry.is_expired(self._clock()):
                del self._entries[uri]
                return False
            return True

    def delete(self, uri: str) -> bool:
        """
        Remove one entry.

        Returns:
            True if the entry was found and removed
        """
        with self._lock:
            if uri in self._entries:
                del self._entries[uri]
                logger.debug(f"Cache DELETE for resource: {uri}")
                return True
            return False

    def clear(self) -> None:
        """Remove every entry and reset statistics."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self.stats = self._empty_stats()
        logger.info(f"Resource cache CLEARED ({count} entries removed)")

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                uri for uri, entry in self._entries.items()
                if not self._is_well_formed(entry) or entry.is_expired(now)
            ]
            for uri in expired:
                del self._entries[uri]
            self.stats['expirations'] += len(expired)

        if expired:
            logger.debug(f"Cleaned {len(expired)} expired cache entries")
        return len(expired)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with entry counts, access totals, utilization and counters
        """
        with self._lock:
            now = self._clock()
            valid = [
                entry for entry in self._entries.values()
                if self._is_well_formed(entry) and not entry.is_expired(now)
            ]
            total_access = sum(
                entry.access_count for entry in self._entries.values()
                if self._is_well_formed(entry)
            )

            return {
                'total_entries': len(self._entries),
                'valid_entries': len(valid),
                'total_access': total_access,
                'max_size': self.max_size,
                'utilization': len(self._entries) / self.max_size,
                'hits': self.stats['hits'],
                'misses': self.stats['misses'],
                'evictions': self.stats['evictions'],
                'expirations': self.stats['expirations'],
            }

    def get_entries(self) -> List[Dict[str, Any]]:
        """
        Get information about all cache entries, newest first.

        Returns:
            List of entry info dicts
        """
        with self._lock:
            now = self._clock()
            entries = []
            for uri, entry in self._entries.items():
                if not self._is_well_formed(entry):
                    continue
                entries.append({
                    'uri': uri,
                    'cached_at': entry.cached_at,
                    'expires_at': entry.expires_at,
                    'access_count': entry.access_count,
                    'is_expired': entry.is_expired(now),
                    'age_seconds': round(now - entry.cached_at, 1),
                    'idle_seconds': round(now - entry.last_accessed, 1),
                })
            return sorted(entries, key=lambda x: x['cached_at'], reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_least_recently_used(self) -> None:
        """Evict the entry with the oldest last access. Caller holds the lock."""
        if not self._entries:
            return

        oldest_uri = min(
            self._entries.items(),
            key=lambda x: x[1].last_accessed if self._is_well_formed(x[1]) else float('-inf')
        )[0]

        del self._entries[oldest_uri]
        self.stats['evictions'] += 1
        logger.debug(f"Cache EVICT least recently used entry: {oldest_uri}")

    @staticmethod
    def _is_well_formed(entry: Any) -> bool:
        return (
            isinstance(entry, CacheEntry)
            and isinstance(entry.last_accessed, (int, float))
            and (entry.expires_at is None or isinstance(entry.expires_at, (int, float)))
        )

    # -------------------------------------------------------------------------
    # Background sweep
    # -------------------------------------------------------------------------

    def _start_sweeper(self) -> None:
        self._sweeper = Thread(target=self._sweep_loop, name="resource-cache-sweeper", daemon=True)
        self._sweeper.start()

    def _sweep_loop(self) -> None:
        # The next wait starts only after cleanup returns
        while not self._stop.wait(self.sweep_interval):
            try:
                self.cleanup_expired()
            except Exception as e:
                logger.error(f"Resource cache sweep failed: {e}")

    def shutdown(self) -> None:
        """Stop the background sweeper. Entries stay readable."""
        self._stop.set()
        sweeper = self._sweeper
        if sweeper is not None and sweeper.is_alive():
            sweeper.join(timeout=5)
        self._sweeper = None
        logger.info("Resource cache shut down")

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def __enter__(self) -> "ResourceCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
