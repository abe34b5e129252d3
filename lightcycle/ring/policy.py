"""
Rebalance policy: how replica density grows with the resource set.
"""

from dataclasses import dataclass

from ..config import DEFAULT_REPLICA_PAD, DEFAULT_SIZE_PAD, validate_padding


@dataclass(frozen=True)
class RebalancePolicy:
    """
    Padding rule for rebalancing.

    After a rebalance over ``n`` resources the ring holds ``n + replica_pad``
    replicas per resource and next rebalances once it grows past
    ``n + size_pad`` resources.
    """
    replica_pad: int = DEFAULT_REPLICA_PAD
    size_pad: int = DEFAULT_SIZE_PAD
    enabled: bool = True

    def __post_init__(self):
        validate_padding(self.replica_pad, self.size_pad)

    @classmethod
    def disabled(cls) -> "RebalancePolicy":
        """A policy that never rebalances on its own."""
        return cls(enabled=False)

    def replica_count_for(self, resource_count: int) -> int:
        return resource_count + self.replica_pad

    def size_threshold_for(self, resource_count: int) -> int:
        return resource_count + self.size_pad

    def should_rebalance(self, resource_count: int, size_threshold: int) -> bool:
        return self.enabled and resource_count > size_threshold
