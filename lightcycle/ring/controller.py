"""
Consistent hash ring controller.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import (
    DEFAULT_REPLICA_COUNT, DEFAULT_SIZE_THRESHOLD, HashAlgorithm, RingConfig,
    coerce_hash_algorithm, validate_ring_settings
)
from ..hashing import get_hasher, key_space
from ..registry import ResourceRegistry
from ..resource import resource_id
from .index import RingIndex
from .policy import RebalancePolicy
from .replica_cache import ReplicaKeyCache

log = logging.getLogger(__name__)


class LightCycle:
    """
    Consistent hash ring distributing lookup keys across resources.

    Each resource is placed on the ring ``replica_count`` times. A lookup key
    resolves to the resource owning the first replica clockwise from the
    key's hash, so adding or removing a resource only moves the keys next to
    its own replicas.

    Once the resource count grows past ``size_threshold`` the ring rebalances:
    the replica count and threshold are recomputed from the rebalance policy
    and the whole index is rebuilt from cached replica keys.

    Not safe for concurrent mutation; wrap in SynchronizedRing when shared
    between threads.
    """

    def __init__(self, replica_count: int = DEFAULT_REPLICA_COUNT,
                 size_threshold: int = DEFAULT_SIZE_THRESHOLD,
                 policy: Optional[RebalancePolicy] = None,
                 hash_algorithm: HashAlgorithm = HashAlgorithm.BLAKE3):
        validate_ring_settings(replica_count, size_threshold)

        self.replica_count = replica_count
        self.size_threshold = size_threshold
        self.policy = policy or RebalancePolicy()
        self.hash_algorithm = coerce_hash_algorithm(hash_algorithm)

        hasher = get_hasher(self.hash_algorithm)
        self._registry = ResourceRegistry()
        self._index = RingIndex(hasher)
        self._cache = ReplicaKeyCache(hasher)
        self._rebalances = 0

    @classmethod
    def from_config(cls, config: RingConfig) -> "LightCycle":
        """Create a ring from a RingConfig."""
        policy = RebalancePolicy(
            replica_pad=config.replica_pad,
            size_pad=config.size_pad,
            enabled=config.rebalance,
        )
        return cls(
            replica_count=config.replica_count,
            size_threshold=config.size_threshold,
            policy=policy,
            hash_algorithm=config.hash_algorithm,
        )

    def add(self, resource: Any) -> bool:
        """
        Add a resource to the ring.

        Args:
            resource: A HasId value (or a string identifier)

        Returns:
            False if a resource with the same identifier is already present,
            in which case nothing changes
        """
        ident = resource_id(resource)
        if ident in self._registry:
            log.debug("add ignored, resource=%s already on the ring", ident)
            return False

        for i in range(self.replica_count):
            self._index.insert(self._cache.get_or_compute(ident, i), ident)
        self._registry.register(ident, resource)
        log.debug("added resource=%s replicas=%d", ident, self.replica_count)

        if self.policy.should_rebalance(len(self._registry), self.size_threshold):
            self.rebalance()
        return True

    def remove(self, resource: Any) -> Optional[Any]:
        """
        Remove a resource from the ring.

        Args:
            resource: The resource, or its identifier

        Returns:
            The removed resource, or None if it was not on the ring
        """
        ident = resource_id(resource)
        if ident not in self._registry:
            log.debug("remove ignored, resource=%s not on the ring", ident)
            return None

        # Make sure the current replica range is cached so nothing indexed is missed
        for i in range(self.replica_count):
            self._cache.get_or_compute(ident, i)

        removed = 0
        for key in self._cache.keys(ident):
            if self._index.discard(key, ident):
                removed += 1
        self._cache.purge(ident)
        log.debug("removed resource=%s (cleaned %d replicas)", ident, removed)

        return self._registry.unregister(ident)

    def locate(self, key: str) -> Optional[Any]:
        """
        Get the resource responsible for a key.

        Returns:
            The resource, or None if the ring is empty
        """
        ident = self._index.locate(key)
        if ident is None:
            return None
        return self._registry.get(ident)

    def locate_id(self, key: str) -> Optional[str]:
        """Get the identifier of the resource responsible for a key."""
        return self._index.locate(key)

    def locate_many(self, key: str, count: int) -> List[Any]:
        """
        Get up to ``count`` distinct resources for a key, walking clockwise.

        The first entry is always ``locate(key)``.
        """
        found: List[Any] = []
        seen = set()
        if count < 1:
            return found

        for ident in self._index.successors(key):
            if ident not in seen:
                seen.add(ident)
                found.append(self._registry.get(ident))
                if len(found) >= count:
                    break
        return found

    def rebalance(self):
        """
        Rebuild the ring at the replica count the policy gives for the
        current resource count. Cached replica keys are reused.
        """
        count = len(self._registry)
        if count == 0:
            return

        old_replicas = self.replica_count
        self.replica_count = self.policy.replica_count_for(count)
        self.size_threshold = self.policy.size_threshold_for(count)

        identifiers = self._registry.identifiers()
        self._index.clear()
        for ident in identifiers:
            for i in range(self.replica_count):
                self._index.insert(self._cache.get_or_compute(ident, i), ident)

        self._rebalances += 1
        log.info(
            "rebalanced %d resources: replicas %d -> %d, next threshold %d",
            count, old_replicas, self.replica_count, self.size_threshold
        )

    def get(self, identifier: str) -> Optional[Any]:
        """Get a resource by identifier."""
        return self._registry.get(identifier)

    def resources(self) -> List[Any]:
        """Get all resources, in the order they were added."""
        return self._registry.values()

    def resource_count(self) -> int:
        """Number of resources on the ring."""
        return len(self._registry)

    def ring_size(self) -> int:
        """Total number of replica entries on the ring."""
        return len(self._index)

    def distribution(self, sample_keys: Iterable[str]) -> Dict[str, int]:
        """
        Get distribution of keys across resources.

        Args:
            sample_keys: Keys to locate

        Returns:
            Dict of resource id -> key count
        """
        counts: Dict[str, int] = {}
        for key in sample_keys:
            ident = self._index.locate(key)
            if ident is not None:
                counts[ident] = counts.get(ident, 0) + 1
        return counts

    def ownership(self) -> Dict[str, float]:
        """Fraction of the key space owned by each resource."""
        space = key_space(self.hash_algorithm)
        return {ident: span / space for ident, span in self._index.owned_spans(space).items()}

    def ring_state(self, limit: int = 20) -> List[Dict]:
        """Get the first entries of the ring for debugging."""
        return [
            {"key": f"{key:x}", "resource": ident}
            for key, ident in self._index.items()[:limit]
        ]

    def stats(self) -> Dict:
        return {
            "resources": len(self._registry),
            "ring_size": len(self._index),
            "replica_count": self.replica_count,
            "size_threshold": self.size_threshold,
            "rebalances": self._rebalances,
            "hash_algorithm": self.hash_algorithm.value,
            "cache": self._cache.stats(),
        }

    def __contains__(self, resource: Any) -> bool:
        return resource_id(resource) in self._registry

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self):
        return (
            f"LightCycle(resources={len(self._registry)}, ring_size={len(self._index)}, "
            f"replica_count={self.replica_count})"
        )
