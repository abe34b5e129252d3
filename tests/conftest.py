"""
Shared fixtures for the ring tests.
"""

import sys
import os

import pytest

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lightcycle import LightCycle, RebalancePolicy, Resource


FRUITS = ["apple", "kumquat", "litchi", "papaya", "pear", "mangosteen", "durian"]


@pytest.fixture
def fruits():
    return [Resource(name) for name in FRUITS]


@pytest.fixture
def sample_keys():
    return [f"user:{i}" for i in range(2000)]


@pytest.fixture
def make_ring():
    """Factory for rings that never rebalance on their own."""
    def _make(resources=(), replica_count=4, **kwargs):
        kwargs.setdefault("policy", RebalancePolicy.disabled())
        ring = LightCycle(replica_count=replica_count, **kwargs)
        for resource in resources:
            ring.add(resource)
        return ring
    return _make
