"""
Ordered index of replica keys and the clockwise locate algorithm.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from sortedcontainers import SortedDict

from ..hashing import HashFunction


class RingIndex:
    """
    Ordered map from replica key to resource identifier.

    A lookup key is hashed into the same space as the replica keys and owned
    by the first replica at or after it, wrapping to the smallest key past
    the end of the space. Each replica therefore owns the half-open interval
    (previous replica key, its own key].

    Features:
    - O(log n) lookups
    - Wraparound at the top of the key space
    - Last-write-wins on colliding replica keys
    """

    def __init__(self, hasher: HashFunction):
        self._hash = hasher
        self._ring: SortedDict = SortedDict()  # replica key -> resource id

    def insert(self, replica_key: int, resource_id: str):
        """Insert a replica, overwriting any entry already at that key."""
        self._ring[replica_key] = resource_id

    def remove(self, replica_key: int) -> Optional[str]:
        """Remove a replica key. Returns the identifier it mapped to, if any."""
        return self._ring.pop(replica_key, None)

    def discard(self, replica_key: int, resource_id: str) -> bool:
        """Remove a replica key only if it still belongs to ``resource_id``."""
        if self._ring.get(replica_key) != resource_id:
            return False
        del self._ring[replica_key]
        return True

    def _position(self, lookup_key: str) -> int:
        # First entry with key >= hash(lookup_key)
        idx = self._ring.bisect_left(self._hash(lookup_key))
        if idx == len(self._ring):
            idx = 0  # Wrap around
        return idx

    def locate(self, lookup_key: str) -> Optional[str]:
        """
        Get the identifier of the resource responsible for a lookup key.

        Args:
            lookup_key: Any string; it is hashed before the search

        Returns:
            Resource identifier or None if the index is empty
        """
        if not self._ring:
            return None
        return self._ring.peekitem(self._position(lookup_key))[1]

    def successors(self, lookup_key: str) -> Iterator[str]:
        """
        Walk the ring clockwise from a lookup key's position, once round.

        Yields the identifier of every replica in ring order, so the same
        resource appears once per replica it owns.
        """
        if not self._ring:
            return
        start = self._position(lookup_key)
        size = len(self._ring)
        values = self._ring.values()
        for i in range(size):
            yield values[(start + i) % size]

    def keys_for(self, resource_id: str) -> List[int]:
        """Replica keys currently owned by a resource (linear scan)."""
        return [k for k, rid in self._ring.items() if rid == resource_id]

    def items(self) -> List[Tuple[int, str]]:
        return list(self._ring.items())

    def owned_spans(self, space: int) -> Dict[str, int]:
        """
        Size of the key-space interval owned by each resource.

        Args:
            space: Size of the hash space (2 ** digest bits)
        """
        spans: Dict[str, int] = {}
        keys = self._ring.keys()
        for i, key in enumerate(keys):
            prev = keys[i - 1]
            distance = key - prev if i > 0 else (space - prev) + key
            rid = self._ring[key]
            spans[rid] = spans.get(rid, 0) + distance
        return spans

    def clear(self):
        self._ring.clear()

    def __contains__(self, replica_key: int) -> bool:
        return replica_key in self._ring

    def __len__(self) -> int:
        return len(self._ring)
