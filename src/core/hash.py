"""Fast hashing for non-cryptographic use cases.

xxhash for export cache keys and emitted file checksums, SHA256 where a
stable cryptographic digest is wanted in exported manifests.
"""

from typing import Any, Protocol
from enum import Enum
import hashlib
import json

import orjson
import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys, checksums)
    SHA256 = "sha256"


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Args:
        algorithm: Hash algorithm to use

    Returns:
        Hasher instance

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    elif algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_bytes(
    data: bytes,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash bytes to hex digest.

    Args:
        data: Bytes to hash
        algorithm: Hash algorithm
        truncate: Optional length to truncate digest

    Returns:
        Hex digest string
    """
    digest = create_hasher(algorithm).digest(data)
    return digest[:truncate] if truncate else digest


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash string to hex digest.

    Examples:
        >>> hash_string("<button>Click me</button>", truncate=16)
        '...'
    """
    return hash_bytes(text.encode("utf-8"), algorithm, truncate)


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash multiple fields together (deterministic).

    Examples:
        >>> hash_fields("react", "tailwind", "el_1")
        'b4f3c2...'
    """
    combined = "\x00".join(fields)  # Null byte separator
    return hash_string(combined, algorithm)


def hash_object(obj: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Hash a JSON-serializable object with sorted keys."""
    try:
        encoded = orjson.dumps(obj, option=orjson.OPT_SORT_KEYS)
    except TypeError:
        # Fallback for edge cases (e.g., integers outside 64-bit range)
        encoded = json.dumps(obj, sort_keys=True, default=str).encode("utf-8")
    return hash_bytes(encoded, algorithm)


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "hash_bytes",
    "hash_fields",
    "hash_object",
]
