"""
Hashing Utilities
Digest and hash-function glue for Merkle tree construction.

This module provides:
- SHA-256 as the default hash primitive
- Lookup of other fixed-width hashlib algorithms by name
- Branch combination (hash of concatenated child digests)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Combination is left bytes followed by right bytes; it is not commutative
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from hashtree.schemas.errors import UnsupportedHashAlgorithmException


# A digest is the fixed-width output of a hash function.
Digest = bytes

# Any deterministic callable mapping bytes to a fixed-width digest.
HashFunction = Callable[[bytes], Digest]

DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> Digest:
    """
    Compute SHA-256 hash of raw bytes.
    
    Args:
        data: Raw bytes to hash
        
    Returns:
        32-byte SHA-256 digest
        
    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a hashlib algorithm name to a hash function.
    
    Only fixed-width algorithms are accepted. Extendable-output
    functions (shake_128, shake_256) have no natural digest width
    and are rejected.
    
    Args:
        name: Algorithm name as understood by hashlib (case-insensitive)
        
    Returns:
        Callable mapping bytes to a digest
        
    Raises:
        UnsupportedHashAlgorithmException: If the name is unknown or
            refers to a variable-length algorithm
    """
    lowered = name.strip().lower()
    # "SHA-256" -> "sha256", "SHA3-256" -> "sha3_256"
    candidates = [lowered, lowered.replace("-", ""), lowered.replace("-", "_")]
    normalized = next(
        (c for c in candidates if c in hashlib.algorithms_available),
        lowered,
    )
    if normalized == DEFAULT_HASH_ALGORITHM:
        return sha256

    if normalized not in hashlib.algorithms_available:
        raise UnsupportedHashAlgorithmException(
            f"Unknown hash algorithm: {name!r}",
            algorithm=name,
        )
    if normalized.startswith("shake"):
        raise UnsupportedHashAlgorithmException(
            f"Variable-length hash algorithm not supported: {name!r}",
            algorithm=name,
        )
    
    def hash_function(data: bytes) -> Digest:
        return hashlib.new(normalized, data).digest()
    
    hash_function.__name__ = normalized
    hash_function.__qualname__ = normalized
    return hash_function


def digest_size(hash_function: HashFunction) -> int:
    """Width in bytes of the digests produced by hash_function."""
    return len(hash_function(b""))


def hash_concat(
    left: Digest,
    right: Digest,
    hash_function: HashFunction = sha256,
) -> Digest:
    """
    Hash the concatenation of two digests.
    
    This is used for computing Merkle branch digests:
    branch = hash(left + right)
    
    Args:
        left: Left child digest
        right: Right child digest
        hash_function: Hash primitive to apply (default SHA-256)
        
    Returns:
        Digest of the concatenation
    """
    return hash_function(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.
    
    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.
    
    Args:
        hex_string: Hex string with 0x prefix
        
    Returns:
        Decoded bytes
        
    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )
    
    hex_content = hex_string[2:]
    
    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )
    
    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "Digest",
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "sha256",
    "get_hash_function",
    "digest_size",
    "hash_concat",
    "to_hex",
    "from_hex",
]
