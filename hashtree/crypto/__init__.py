"""
Cryptographic glue for the hash tree.

The tree only depends on the HashFunction contract; SHA-256 is the default.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    Digest,
    HashFunction,
    sha256,
    get_hash_function,
    digest_size,
    hash_concat,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "Digest",
    "HashFunction",
    "sha256",
    "get_hash_function",
    "digest_size",
    "hash_concat",
    "to_hex",
    "from_hex",
]
