"""
Ring Index, Replica Key Cache and Rebalance Policy Tests
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lightcycle import ConfigError, RebalancePolicy, ReplicaKeyCache, RingIndex
from lightcycle.hashing import get_hasher, replica_seed


def numeric_hash(key: str) -> int:
    """Lookup keys that are already numbers hash to themselves."""
    return int(key)


@pytest.fixture
def index():
    idx = RingIndex(numeric_hash)
    idx.insert(10, "a")
    idx.insert(20, "b")
    idx.insert(30, "c")
    return idx


def test_locate_successor(index):
    """A key is owned by the first replica at or after it."""
    assert index.locate("5") == "a"
    assert index.locate("10") == "a"
    assert index.locate("11") == "b"
    assert index.locate("20") == "b"
    assert index.locate("29") == "c"
    assert index.locate("30") == "c"


def test_locate_wraps_around(index):
    """Keys past the largest replica wrap to the smallest."""
    assert index.locate("31") == "a"
    assert index.locate("1000000") == "a"


def test_locate_empty():
    """An empty index has no owner for anything."""
    assert RingIndex(numeric_hash).locate("5") is None
    assert list(RingIndex(numeric_hash).successors("5")) == []


def test_successors_walk_clockwise(index):
    """successors visits every replica once, starting at the owner."""
    assert list(index.successors("15")) == ["b", "c", "a"]
    assert list(index.successors("35")) == ["a", "b", "c"]


def test_insert_collision_last_write_wins(index):
    """A second insert at the same key replaces the first."""
    index.insert(20, "z")
    assert len(index) == 3
    assert index.locate("15") == "z"


def test_remove_and_discard(index):
    """remove drops any entry; discard only an entry still owned."""
    assert index.discard(20, "a") is False
    assert 20 in index

    assert index.discard(20, "b") is True
    assert 20 not in index
    assert index.locate("15") == "c"

    assert index.remove(30) == "c"
    assert index.remove(30) is None
    assert index.locate("15") == "a"


def test_keys_for(index):
    index.insert(40, "a")
    assert index.keys_for("a") == [10, 40]
    assert index.keys_for("missing") == []


def test_owned_spans(index):
    """Each replica owns the interval back to its predecessor."""
    spans = index.owned_spans(100)
    # a wraps from 30 up to 100 then 0..10
    assert spans == {"a": 80, "b": 10, "c": 10}
    assert sum(spans.values()) == 100


def test_cache_computes_once():
    """Replica keys are hashed once and served from the cache afterwards."""
    hasher = get_hasher()
    cache = ReplicaKeyCache(hasher)

    key = cache.get_or_compute("apple", 0)
    assert key == hasher(replica_seed("apple", 0))
    assert cache.get_or_compute("apple", 0) == key

    assert cache.stats()["misses"] == 1
    assert cache.stats()["hits"] == 1
    assert "apple" in cache


def test_cache_keys_and_purge():
    """purge drops all keys of one resource only."""
    cache = ReplicaKeyCache(get_hasher())
    for i in range(3):
        cache.get_or_compute("apple", i)
    cache.get_or_compute("pear", 0)

    assert len(cache.keys("apple")) == 3
    assert cache.keys("apple")[0] == cache.get_or_compute("apple", 0)

    assert cache.purge("apple") == 3
    assert "apple" not in cache
    assert cache.keys("apple") == []
    assert cache.purge("apple") == 0
    assert len(cache) == 1


def test_cache_growth_reuses_lower_indices():
    """Growing a resource's replica range only hashes the new indices."""
    cache = ReplicaKeyCache(get_hasher())
    first = [cache.get_or_compute("apple", i) for i in range(4)]
    grown = [cache.get_or_compute("apple", i) for i in range(8)]

    assert grown[:4] == first
    assert cache.misses == 8
    assert cache.hits == 4


def test_replica_seed():
    assert replica_seed("apple", 3) == "apple:3"
    assert replica_seed("node1", 10) != replica_seed("node11", 0)


def test_policy_growth():
    policy = RebalancePolicy(replica_pad=4, size_pad=16)
    assert policy.replica_count_for(10) == 14
    assert policy.size_threshold_for(10) == 26
    assert policy.should_rebalance(17, 16)
    assert not policy.should_rebalance(16, 16)


def test_policy_disabled():
    policy = RebalancePolicy.disabled()
    assert not policy.enabled
    assert not policy.should_rebalance(1000, 1)


def test_policy_rejects_negative_padding():
    with pytest.raises(ConfigError):
        RebalancePolicy(replica_pad=-1)
    with pytest.raises(ValueError):
        RebalancePolicy(size_pad=-5)
