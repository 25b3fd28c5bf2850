"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Data blocks
- Built trees
- Independently computed expected digests
"""

from typing import Optional

from hashtree.crypto.hashing import HashFunction, hash_concat, sha256
from hashtree.merkle import MerkleTree, build_tree


def make_blocks(count: int, prefix: str = "block") -> list[bytes]:
    """Create count distinct data blocks."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_tree(
    count: int = 7,
    hash_function: Optional[HashFunction] = None,
) -> MerkleTree:
    """Build a tree over make_blocks(count)."""
    return build_tree(make_blocks(count), hash_function=hash_function or sha256)


def expected_root(blocks: list[bytes], hash_function: HashFunction = sha256) -> bytes:
    """
    Compute the root digest without the tree, as a cross-check.

    Row 0 is padded by duplicating the last leaf; every later odd row
    pairs its last node with itself.
    """
    level = [hash_function(block) for block in blocks]
    if len(level) % 2 == 1:
        level.append(level[-1])
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [
            hash_concat(level[i], level[i + 1], hash_function)
            for i in range(0, len(level), 2)
        ]
    return level[0]
