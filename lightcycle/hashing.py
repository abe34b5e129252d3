"""
Key hashing for the ring.

Replica keys and lookup keys are hashed with the same function so both land in
one ordered key space. Digests are decoded as big-endian unsigned integers,
which orders them the same way as their bytes.
"""

import hashlib
from typing import Callable, Dict

import blake3

from .config import HashAlgorithm


HashFunction = Callable[[str], int]


def _blake3(key: str) -> int:
    return int.from_bytes(blake3.blake3(key.encode()).digest(), "big")


def _sha256(key: str) -> int:
    return int.from_bytes(hashlib.sha256(key.encode()).digest(), "big")


def _blake2b(key: str) -> int:
    return int.from_bytes(hashlib.blake2b(key.encode()).digest(), "big")


def _md5(key: str) -> int:
    return int.from_bytes(hashlib.md5(key.encode()).digest(), "big")


_HASHERS: Dict[HashAlgorithm, HashFunction] = {
    HashAlgorithm.BLAKE3: _blake3,
    HashAlgorithm.SHA256: _sha256,
    HashAlgorithm.BLAKE2B: _blake2b,
    HashAlgorithm.MD5: _md5,
}


_DIGEST_SIZES: Dict[HashAlgorithm, int] = {
    HashAlgorithm.BLAKE3: 32,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.BLAKE2B: 64,
    HashAlgorithm.MD5: 16,
}


def get_hasher(algorithm: HashAlgorithm = HashAlgorithm.BLAKE3) -> HashFunction:
    """Get the hash function for an algorithm."""
    return _HASHERS[HashAlgorithm(algorithm)]


def key_space(algorithm: HashAlgorithm = HashAlgorithm.BLAKE3) -> int:
    """Number of distinct keys an algorithm can produce."""
    return 1 << (8 * _DIGEST_SIZES[HashAlgorithm(algorithm)])


def replica_seed(identifier: str, index: int) -> str:
    """The string hashed to place replica ``index`` of a resource."""
    return f"{identifier}:{index}"
