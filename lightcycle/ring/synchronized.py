"""
Lock wrapper for sharing a ring between threads.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional

from .controller import LightCycle


class SynchronizedRing:
    """
    Serializes every operation on a LightCycle behind one re-entrant lock.

    A rebalance discards and rebuilds the whole index, so lookups must not
    run while it is in progress; holding the lock for the full call covers
    that window.
    """

    def __init__(self, ring: Optional[LightCycle] = None):
        self.ring = ring if ring is not None else LightCycle()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """The lock, for callers grouping several operations atomically."""
        return self._lock

    def add(self, resource: Any) -> bool:
        with self._lock:
            return self.ring.add(resource)

    def remove(self, resource: Any) -> Optional[Any]:
        with self._lock:
            return self.ring.remove(resource)

    def locate(self, key: str) -> Optional[Any]:
        with self._lock:
            return self.ring.locate(key)

    def locate_id(self, key: str) -> Optional[str]:
        with self._lock:
            return self.ring.locate_id(key)

    def locate_many(self, key: str, count: int) -> List[Any]:
        with self._lock:
            return self.ring.locate_many(key, count)

    def rebalance(self):
        with self._lock:
            self.ring.rebalance()

    def resource_count(self) -> int:
        with self._lock:
            return self.ring.resource_count()

    def ring_size(self) -> int:
        with self._lock:
            return self.ring.ring_size()

    def get(self, identifier: str) -> Optional[Any]:
        with self._lock:
            return self.ring.get(identifier)

    def resources(self) -> List[Any]:
        with self._lock:
            return self.ring.resources()

    def distribution(self, sample_keys: Iterable[str]) -> Dict[str, int]:
        with self._lock:
            return self.ring.distribution(sample_keys)

    def ownership(self) -> Dict[str, float]:
        with self._lock:
            return self.ring.ownership()

    def ring_state(self, limit: int = 20) -> List[Dict]:
        with self._lock:
            return self.ring.ring_state(limit)

    def stats(self) -> Dict:
        with self._lock:
            return self.ring.stats()

    def __contains__(self, resource: Any) -> bool:
        with self._lock:
            return resource in self.ring

    def __len__(self) -> int:
        with self._lock:
            return len(self.ring)
