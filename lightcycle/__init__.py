"""
LightCycle
A consistent hash ring with virtual replicas and replica-count rebalancing.
"""

__version__ = "1.0.0"
__author__ = "The LightCycle Contributors"

from .config import RingConfig, HashAlgorithm, ConfigError
from .resource import HasId, Resource, resource_id
from .registry import ResourceRegistry
from .ring import LightCycle, RebalancePolicy, RingIndex, ReplicaKeyCache, SynchronizedRing

__all__ = [
    # Config
    'RingConfig',
    'HashAlgorithm',
    'ConfigError',
    # Resources
    'HasId',
    'Resource',
    'resource_id',
    'ResourceRegistry',
    # Ring
    'LightCycle',
    'RebalancePolicy',
    'RingIndex',
    'ReplicaKeyCache',
    'SynchronizedRing',
]
