"""
Cache of computed replica keys.
"""

from typing import Dict, List

from ..hashing import HashFunction, replica_seed


class ReplicaKeyCache:
    """
    Per-resource cache of replica keys.

    Keys are pure functions of (identifier, index), so the cache only saves
    hashing work: growing the replica count reuses every index already
    computed and hashes only the new ones.
    """

    def __init__(self, hasher: HashFunction):
        self._hash = hasher
        self._keys: Dict[str, Dict[int, int]] = {}  # identifier -> {index: replica key}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, identifier: str, index: int) -> int:
        """Get the replica key for (identifier, index), hashing it on first use."""
        entries = self._keys.setdefault(identifier, {})
        key = entries.get(index)
        if key is None:
            key = self._hash(replica_seed(identifier, index))
            entries[index] = key
            self.misses += 1
        else:
            self.hits += 1
        return key

    def keys(self, identifier: str) -> List[int]:
        """Every cached replica key for a resource, in index order."""
        entries = self._keys.get(identifier, {})
        return [entries[i] for i in sorted(entries)]

    def purge(self, identifier: str) -> int:
        """Drop a resource's cached keys. Returns how many were dropped."""
        return len(self._keys.pop(identifier, {}))

    def clear(self):
        self._keys.clear()

    def stats(self) -> Dict[str, int]:
        return {
            "resources": len(self._keys),
            "keys": sum(len(entries) for entries in self._keys.values()),
            "hits": self.hits,
            "misses": self.misses,
        }

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._keys

    def __len__(self) -> int:
        return len(self._keys)
