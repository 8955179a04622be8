"""
Expiring key/value cache.

This module provides the small TTL cache each collection directory uses to
avoid hitting the remote API on every filesystem query.
"""

import logging
import math
import threading
import time
from typing import Any, Callable, Hashable

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class ExpiringCache:
    """
    Key/value store with a fixed time-to-live and explicit invalidation.

    An entry populated at ``t0`` is served until ``t0 + ttl``; from then on
    (and for keys never inserted) the next ``get`` repopulates it. There is
    no size bound, only expiry.

    A single lock covers the whole lookup-or-populate sequence, so
    concurrent misses on the same key result in one ``populate`` call.
    """

    def __init__(self, ttl=15, timer=time.monotonic):
        """
        Initialize the cache.

        Parameters
        ----------
        ttl : float, default 15
            Seconds an entry stays valid after it is populated
        timer : callable, default time.monotonic
            Clock returning the current time in seconds
        """
        self.ttl = ttl
        self._entries = TTLCache(maxsize=math.inf, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: Hashable, populate: Callable[[], Any]) -> Any:
        """
        Return the value for ``key``, calling ``populate`` on a miss.

        Parameters
        ----------
        key : hashable
            The cache key
        populate : callable
            Zero-argument function producing the value; exceptions it
            raises propagate and nothing is stored

        Returns
        -------
        The cached or freshly populated value

        Notes
        -----
        The lock is held while ``populate`` runs, so a slow remote call also
        delays hits and misses on every other key of this cache. The TTL is
        counted from the moment the miss was detected, not from when
        ``populate`` returned.
        """
        # Freezing the timer makes the entry expire ttl after the lookup
        with self._lock, self._entries.timer:
            try:
                return self._entries[key]
            except KeyError:
                pass

            logger.debug("cache miss, repopulating %s", key)
            value = populate()
            self._entries[key] = value
            return value

    def invalidate(self, key: Hashable) -> None:
        """Drop any entry for ``key``."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            self._entries.expire()
            return len(self._entries)
