"""
Merkle Tree Construction
Builds an immutable binary hash tree over an ordered set of data blocks.

Construction Rules (Hard Contracts):
1. Row 0 holds one Leaf per data block, in input order.
   Leaf digest = hash(data)
2. If the block count is odd, the last Leaf is appended again
   (the same object, not a re-hashed copy).
3. Each following row pairs adjacent nodes: (0,1), (2,3), ...
   Branch digest = hash(left.digest + right.digest)
4. If a row has odd length, its last node is paired with itself.
   This can happen at any level, not only row 0.
5. Construction stops at the first row of length 1; that node's
   digest is the root digest.
6. Zero data blocks is an error (EmptyInputException).

Determinism Notes:
- No randomness or reordering: leaf order is the caller's order
- The tree never hardcodes a hash algorithm; it uses the injected
  hash function or the one named by the default TreeConfig
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from hashtree.config.runtime import get_default_config
from hashtree.crypto.hashing import Digest, HashFunction, to_hex
from hashtree.merkle.merkle_proofs import MerkleProof, generate_proof, verify_proof
from hashtree.merkle.nodes import Branch, Leaf, Node
from hashtree.schemas.errors import EmptyInputException

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Immutable Merkle tree.
    
    Use build_tree() to construct one. Rows are stored bottom-up:
    rows[0] is the leaf row, rows[-1] holds the single root node.
    A built tree is read-only and may be shared between threads.
    """
    
    __slots__ = ("_rows", "_hash_function", "_leaf_count")
    
    def __init__(
        self,
        rows: Iterable[Iterable[Node]],
        hash_function: HashFunction,
        leaf_count: int,
    ) -> None:
        self._rows: tuple[tuple[Node, ...], ...] = tuple(tuple(row) for row in rows)
        self._hash_function = hash_function
        self._leaf_count = leaf_count
    
    @property
    def rows(self) -> tuple[tuple[Node, ...], ...]:
        return self._rows
    
    @property
    def leaves(self) -> tuple[Node, ...]:
        """Row 0, including the duplicated last leaf for odd block counts."""
        return self._rows[0]
    
    @property
    def root(self) -> Node:
        return self._rows[-1][0]
    
    @property
    def depth(self) -> int:
        """Number of rows, leaf row and root row included."""
        return len(self._rows)
    
    @property
    def leaf_count(self) -> int:
        """Number of data blocks the tree was built from."""
        return self._leaf_count
    
    @property
    def hash_function(self) -> HashFunction:
        return self._hash_function
    
    def root_digest(self) -> Digest:
        """Digest committing to every data block and their order."""
        return self.root.digest
    
    def index_of(self, leaf_digest: Digest) -> Optional[int]:
        """
        Find the first row-0 position whose digest equals leaf_digest.
        
        Duplicate data blocks share a digest; only the earliest
        position is ever returned.
        
        Returns:
            0-based index, or None if no leaf matches
        """
        for i, node in enumerate(self._rows[0]):
            if node.digest == leaf_digest:
                return i
        return None
    
    def __contains__(self, leaf_digest: object) -> bool:
        if not isinstance(leaf_digest, (bytes, bytearray)):
            return False
        return self.index_of(bytes(leaf_digest)) is not None
    
    def generate_proof(self, leaf_digest: Digest) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf with the given digest.
        
        Raises:
            LeafNotFoundException: If no leaf matches leaf_digest
        """
        return generate_proof(self, leaf_digest)
    
    def verify_proof(self, proof: MerkleProof, leaf_digest: Digest) -> bool:
        """
        Verify a proof against this tree's root.
        
        Returns False without replaying the proof when leaf_digest
        is not a leaf of this tree.
        """
        if leaf_digest not in self:
            return False
        return verify_proof(
            self.root_digest(),
            leaf_digest,
            proof,
            hash_function=self._hash_function,
        )
    
    def render(self, preview_bytes: Optional[int] = None) -> str:
        """
        Render the tree row by row, root row first.
        
        Each node is shown as <kind><row>-<column>(<digest prefix>),
        where kind is L for leaves and B for branches.
        """
        if preview_bytes is None:
            preview_bytes = get_default_config().render_preview_bytes
        
        lines: list[str] = []
        for i in range(len(self._rows) - 1, -1, -1):
            cells: list[str] = []
            for j, node in enumerate(self._rows[i]):
                if isinstance(node, Leaf):
                    kind = "L"
                elif isinstance(node, Branch):
                    kind = "B"
                else:
                    raise TypeError(f"Unexpected node type: {type(node).__name__}")
                cells.append(f"{kind}{i}-{j}({node.digest[:preview_bytes].hex()})")
            lines.append(" ".join(cells))
        return "\n".join(lines)
    
    def __str__(self) -> str:
        return self.render()
    
    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaf_count={self._leaf_count}, depth={self.depth}, "
            f"root={to_hex(self.root_digest())})"
        )


def build_tree(
    data_blocks: Iterable[bytes],
    hash_function: Optional[HashFunction] = None,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of data blocks.
    
    Algorithm:
    1. Hash each block into a Leaf (row 0)
    2. If the count is odd, append the last Leaf again by reference
    3. Pair adjacent nodes into Branches, pairing a trailing odd node
       with itself, until a row of length 1 remains
    
    Example: [a, b, c] -> [a, b, c, c] -> [ab, cc] -> [abcc]
    
    Args:
        data_blocks: Ordered data blocks. Order matters and is preserved.
        hash_function: Hash primitive. Defaults to the algorithm named
                       by the default TreeConfig (SHA-256 unless configured).
        
    Returns:
        Fully built, immutable MerkleTree
        
    Raises:
        EmptyInputException: If data_blocks is empty
    """
    blocks = list(data_blocks)
    if len(blocks) == 0:
        raise EmptyInputException()
    
    if hash_function is None:
        hash_function = get_default_config().hash_function()
    
    # Row 0, padded to even length with the same Leaf object
    leaves: list[Node] = [Leaf.from_data(block, hash_function) for block in blocks]
    if len(leaves) % 2 == 1:
        leaves.append(leaves[-1])
    
    rows: list[list[Node]] = [leaves]
    current_row = leaves
    
    while len(current_row) > 1:
        next_row: list[Node] = []
        for i in range(0, len(current_row), 2):
            left = current_row[i]
            # Trailing odd node pairs with itself
            right = current_row[i + 1] if i + 1 < len(current_row) else left
            next_row.append(Branch.from_children(left, right, hash_function))
        
        rows.append(next_row)
        current_row = next_row
    
    logger.debug(f"Built Merkle tree: {len(blocks)} blocks, {len(rows)} rows")
    
    return MerkleTree(rows, hash_function, leaf_count=len(blocks))


__all__ = [
    "MerkleTree",
    "build_tree",
]
