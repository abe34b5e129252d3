"""
Configuration management for the hash ring.
"""

import os
from dataclasses import dataclass
from enum import Enum


DEFAULT_REPLICA_COUNT = 4     # defaulting to pretty small
DEFAULT_SIZE_THRESHOLD = 16
DEFAULT_REPLICA_PAD = 4
DEFAULT_SIZE_PAD = 16


class ConfigError(ValueError):
    """Raised when a ring is constructed with unusable settings."""


class HashAlgorithm(Enum):
    """Digest used for replica keys and lookup keys."""
    BLAKE3 = "blake3"     # 256-bit, default
    SHA256 = "sha256"
    BLAKE2B = "blake2b"
    MD5 = "md5"           # ketama-compatible placement


def coerce_hash_algorithm(value) -> HashAlgorithm:
    """Accept a HashAlgorithm or its case-insensitive name."""
    if isinstance(value, HashAlgorithm):
        return value
    try:
        return HashAlgorithm(str(value).lower())
    except ValueError:
        raise ConfigError(f"Unknown hash algorithm: {value!r}") from None


def validate_ring_settings(replica_count: int, size_threshold: int):
    if replica_count < 1:
        raise ConfigError(f"replica_count must be positive, got {replica_count}")
    if size_threshold < 0:
        raise ConfigError(f"size_threshold must not be negative, got {size_threshold}")


def validate_padding(replica_pad: int, size_pad: int):
    if replica_pad < 0:
        raise ConfigError(f"replica_pad must not be negative, got {replica_pad}")
    if size_pad < 0:
        raise ConfigError(f"size_pad must not be negative, got {size_pad}")


@dataclass
class RingConfig:
    """Configuration for a single hash ring."""
    replica_count: int = DEFAULT_REPLICA_COUNT   # Replicas per resource
    size_threshold: int = DEFAULT_SIZE_THRESHOLD  # Resource count that triggers rebalancing

    # Rebalance settings
    rebalance: bool = True
    replica_pad: int = DEFAULT_REPLICA_PAD
    size_pad: int = DEFAULT_SIZE_PAD

    hash_algorithm: HashAlgorithm = HashAlgorithm.BLAKE3

    def __post_init__(self):
        """Coerce and validate settings."""
        self.hash_algorithm = coerce_hash_algorithm(self.hash_algorithm)
        validate_ring_settings(self.replica_count, self.size_threshold)
        validate_padding(self.replica_pad, self.size_pad)

    @classmethod
    def from_env(cls, prefix: str = "LIGHTCYCLE_", **overrides) -> "RingConfig":
        """
        Build a config from environment variables.

        Recognised variables (with the default prefix): LIGHTCYCLE_REPLICA_COUNT,
        LIGHTCYCLE_SIZE_THRESHOLD, LIGHTCYCLE_REPLICA_PAD, LIGHTCYCLE_SIZE_PAD,
        LIGHTCYCLE_REBALANCE and LIGHTCYCLE_HASH_ALGORITHM. Keyword overrides win.
        """
        values = {}
        for name in ("replica_count", "size_threshold", "replica_pad", "size_pad"):
            raw = os.environ.get(prefix + name.upper())
            if raw is not None:
                try:
                    values[name] = int(raw)
                except ValueError:
                    raise ConfigError(f"{prefix}{name.upper()} must be an integer, got {raw!r}") from None

        raw = os.environ.get(prefix + "REBALANCE")
        if raw is not None:
            values["rebalance"] = raw.strip().lower() not in ("0", "false", "no", "off", "")

        raw = os.environ.get(prefix + "HASH_ALGORITHM")
        if raw is not None:
            values["hash_algorithm"] = raw

        values.update(overrides)
        return cls(**values)
