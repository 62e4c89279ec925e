"""In-memory time-to-live cache for raw HTTP response bodies.

:class:`TTLCache` stores opaque ``bytes`` values under exact-match string
keys (typically request URLs).  Every entry records its insertion time and
expires ``ttl`` seconds later.  Expiry is enforced twice:

- **On read** -- :meth:`TTLCache.get` treats an entry whose age has reached
  the TTL as a miss, so callers never see a stale body even if the sweep
  has not run yet.
- **By the sweep** -- a daemon thread wakes every ``ttl`` seconds and
  removes expired entries so the table does not grow without bound.

The sweep thread is stopped deterministically with :meth:`TTLCache.close`
(or by leaving a ``with`` block).  Expiry is measured from insertion only;
reads never refresh an entry.

Example::

    with TTLCache(30) as cache:
        cache.add("https://pokeapi.co/api/v2/location-area", body)
        value, found = cache.get("https://pokeapi.co/api/v2/location-area")
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A single cached value and the monotonic time it was stored."""

    value: bytes
    created_at: float


class TTLCache:
    """Thread-safe key/value cache with a fixed global TTL and background sweep.

    A single :class:`threading.Lock` guards the entry table.  :meth:`add`,
    :meth:`get` and the sweep each hold it only for the dictionary
    operation itself.

    Args:
        ttl_seconds: Lifetime of every entry in seconds.  Must be positive
            and finite.
            Also used as the sweep period.
        clock: Monotonic time source.  Injected by tests.

    Raises:
        ValueError: If *ttl_seconds* is not a positive finite number.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if not math.isfinite(ttl_seconds) or ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive and finite, got {ttl_seconds!r}")

        self._ttl = float(ttl_seconds)
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._hits = 0
        self._misses = 0

        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name=f"ttl-cache-sweep-{id(self):x}",
            daemon=True,
        )
        self._sweeper.start()

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> TTLCache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def ttl(self) -> float:
        """Entry lifetime (and sweep period) in seconds."""
        return self._ttl

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has been called."""
        return self._stop.is_set()

    def add(self, key: str, value: bytes) -> None:
        """Insert or overwrite the entry for *key*.

        The entry is timestamped now; a previous value for the same key is
        replaced (last write wins).

        Args:
            key: Exact-match lookup key.  No normalisation is applied.
            value: The bytes to store.
        """
        entry = CacheEntry(value=bytes(value), created_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        logger.debug("Cache added for: %s", key)

    def get(self, key: str) -> tuple[bytes, bool]:
        """Look up *key*.

        Args:
            key: Exact-match lookup key.

        Returns:
            ``(value, True)`` when a fresh entry exists, otherwise
            ``(b"", False)``.  An entry whose age has reached the TTL is a
            miss even if the sweep has not removed it yet.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._is_expired(entry, now):
                self._misses += 1
                found = False
            else:
                self._hits += 1
                found = True

        if not found:
            logger.debug("Cache miss: %s", key)
            return b"", False

        logger.debug("Cache hit: %s", key)
        return entry.value, True

    def sweep(self) -> int:
        """Remove every expired entry now.

        Called periodically by the background thread; may also be called
        directly.

        Returns:
            The number of entries removed.
        """
        now = self._clock()
        with self._lock:
            stale = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Swept %d expired cache entries", len(stale))
        return len(stale)

    def stats(self) -> dict[str, Any]:
        """Return a snapshot of cache counters.

        Returns:
            A ``dict`` with ``entries`` (physically present, including
            expired entries awaiting the sweep), ``ttl_seconds``, ``hits``
            and ``misses``.
        """
        with self._lock:
            return {
                "entries": len(self._entries),
                "ttl_seconds": self._ttl,
                "hits": self._hits,
                "misses": self._misses,
            }

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop the sweep thread and wait for it to exit.

        Safe to call more than once.  The cache remains usable afterwards,
        but expired entries are then only hidden by :meth:`get`, never
        removed.

        Args:
            timeout: Maximum seconds to wait for the thread to finish.
                ``None`` waits indefinitely.
        """
        self._stop.set()
        if self._sweeper.is_alive() and self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return entry.created_at + self._ttl <= now

    def _sweep_loop(self) -> None:
        # Event.wait returns True once close() sets the flag.
        while not self._stop.wait(self._ttl):
            self.sweep()
        logger.debug("Cache sweep thread stopped")
