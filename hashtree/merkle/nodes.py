"""
Merkle Tree Nodes

Closed node model: every node is either a Leaf over one data block or a
Branch over two children. Each node caches its digest at creation; it is
never recomputed.

Nodes compare by identity. The only intended aliasing in a tree is the
duplicated node used to balance an odd-length row, which is the very same
object appearing twice.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hashtree.crypto.hashing import Digest, HashFunction, hash_concat, sha256


@dataclass(frozen=True, eq=False)
class Leaf:
    """
    Tree node over a single input data block.
    
    Attributes:
        data: The original data block
        digest: hash(data)
    """
    data: bytes
    digest: Digest

    @classmethod
    def from_data(cls, data: bytes, hash_function: HashFunction = sha256) -> "Leaf":
        return cls(data=bytes(data), digest=hash_function(data))


@dataclass(frozen=True, eq=False)
class Branch:
    """
    Tree node combining two child digests.
    
    Attributes:
        left: Left child
        right: Right child (may be the left child itself for a self-paired node)
        digest: hash(left.digest + right.digest)
    """
    left: "Node"
    right: "Node"
    digest: Digest

    @classmethod
    def from_children(
        cls,
        left: "Node",
        right: "Node",
        hash_function: HashFunction = sha256,
    ) -> "Branch":
        return cls(
            left=left,
            right=right,
            digest=hash_concat(left.digest, right.digest, hash_function),
        )

    @property
    def is_self_paired(self) -> bool:
        """True when this branch pairs a node with itself."""
        return self.left is self.right


Node = Union[Leaf, Branch]


__all__ = [
    "Leaf",
    "Branch",
    "Node",
]
