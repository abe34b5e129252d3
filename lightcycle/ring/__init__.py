"""Hash ring components."""

from .index import RingIndex
from .replica_cache import ReplicaKeyCache
from .policy import RebalancePolicy
from .controller import LightCycle
from .synchronized import SynchronizedRing

__all__ = [
    'RingIndex',
    'ReplicaKeyCache',
    'RebalancePolicy',
    'LightCycle',
    'SynchronizedRing'
]
