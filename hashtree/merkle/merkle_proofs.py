"""
Merkle Proofs
Inclusion proof generation from a built tree, and verification from a
root digest alone.

A proof is the ordered list of (direction, sibling digest) pairs from the
leaf row up to, but not including, the root row. Direction says which
operand the sibling is when recombining:
- LEFT:  running = hash(sibling + running)
- RIGHT: running = hash(running + sibling)

Verification failure is a False result, never an exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from hashtree.config.runtime import get_default_config
from hashtree.crypto.hashing import Digest, HashFunction, hash_concat, to_hex
from hashtree.schemas.errors import LeafNotFoundException

if TYPE_CHECKING:
    from hashtree.merkle.merkle_tree import MerkleTree

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which operand a sibling digest is during recombination."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of a Merkle proof.
    
    Attributes:
        direction: Side the sibling sits on
        sibling: Sibling digest at this level
    """
    direction: Direction
    sibling: Digest
    
    def __post_init__(self) -> None:
        """Normalize direction and sibling types."""
        object.__setattr__(self, "direction", Direction(self.direction))
        object.__setattr__(self, "sibling", bytes(self.sibling))


@dataclass(frozen=True)
class MerkleProof:
    """
    Ordered inclusion proof, leaf-adjacent step first.
    
    Holds copies of sibling digests only, never references to tree nodes.
    """
    steps: tuple[ProofStep, ...] = ()
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
    
    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)
    
    def __len__(self) -> int:
        return len(self.steps)
    
    def __getitem__(self, index: int) -> ProofStep:
        return self.steps[index]
    
    @property
    def siblings(self) -> list[Digest]:
        return [step.sibling for step in self.steps]
    
    @property
    def directions(self) -> list[Direction]:
        return [step.direction for step in self.steps]


def generate_proof(tree: MerkleTree, leaf_digest: Digest) -> MerkleProof:
    """
    Generate the sibling path from a leaf to the root.
    
    Algorithm:
    1. Locate the first row-0 node whose digest equals leaf_digest
    2. For each row below the root:
       - odd index: sibling at index - 1, recorded as LEFT
       - even index: sibling at index + 1, recorded as RIGHT
         (a trailing self-paired node is its own sibling)
       - index = index // 2
    
    Args:
        tree: Built MerkleTree
        leaf_digest: Digest of the leaf to prove
        
    Returns:
        MerkleProof with exactly tree.depth - 1 steps
        
    Raises:
        LeafNotFoundException: If no leaf matches leaf_digest
        TypeError: If leaf_digest is not bytes
    """
    if not isinstance(leaf_digest, (bytes, bytearray)):
        raise TypeError(
            f"leaf_digest must be bytes, got {type(leaf_digest).__name__}"
        )
    leaf_digest = bytes(leaf_digest)
    
    index = tree.index_of(leaf_digest)
    if index is None:
        raise LeafNotFoundException(
            f"Leaf not found: {to_hex(leaf_digest)}",
            leaf_digest=to_hex(leaf_digest),
        )
    
    steps: list[ProofStep] = []
    for row in tree.rows[:-1]:
        if index % 2 == 1:
            steps.append(ProofStep(Direction.LEFT, row[index - 1].digest))
        else:
            sibling = row[index + 1] if index + 1 < len(row) else row[index]
            steps.append(ProofStep(Direction.RIGHT, sibling.digest))
        index = index // 2
    
    logger.debug(f"Generated proof for {to_hex(leaf_digest)}: {len(steps)} steps")
    
    return MerkleProof(tuple(steps))


def verify_proof(
    root_digest: Digest,
    leaf_digest: Digest,
    proof: Iterable[ProofStep],
    hash_function: Optional[HashFunction] = None,
) -> bool:
    """
    Recompute a root from a leaf digest and a proof and compare.
    
    Needs only the root digest, not the tree.
    
    Args:
        root_digest: Known root digest
        leaf_digest: Digest of the leaf claimed to be included
        proof: Proof steps in leaf-to-root order
        hash_function: Hash primitive the tree was built with. Defaults to
                       the algorithm named by the default TreeConfig
        
    Returns:
        True if the recomputed root equals root_digest, False otherwise
    """
    if hash_function is None:
        hash_function = get_default_config().hash_function()
    
    running = leaf_digest
    for step in proof:
        if step.direction == Direction.LEFT:
            running = hash_concat(step.sibling, running, hash_function)
        else:
            running = hash_concat(running, step.sibling, hash_function)
    
    return running == root_digest


class ProofGenerator:
    """
    Generates proofs from one tree.
    
    Example:
        >>> tree = build_tree([b"a", b"b", b"c"])
        >>> proof = ProofGenerator(tree).prove_data(b"a")
        >>> len(proof)
        2
    """
    
    def __init__(self, tree: MerkleTree) -> None:
        self.tree = tree
    
    def prove(self, leaf_digest: Digest) -> MerkleProof:
        return generate_proof(self.tree, leaf_digest)
    
    def prove_data(self, data: bytes) -> MerkleProof:
        """Hash a data block with the tree's hash function, then prove it."""
        return generate_proof(self.tree, self.tree.hash_function(data))


class ProofVerifier:
    """
    Verifies proofs with a fixed hash function, without a tree.
    
    Example:
        >>> verifier = ProofVerifier()
        >>> verifier.verify(tree.root_digest(), sha256(b"a"), proof)
        True
    """
    
    def __init__(self, hash_function: Optional[HashFunction] = None) -> None:
        if hash_function is None:
            hash_function = get_default_config().hash_function()
        self.hash_function = hash_function
    
    def verify(
        self,
        root_digest: Digest,
        leaf_digest: Digest,
        proof: Iterable[ProofStep],
    ) -> bool:
        return verify_proof(root_digest, leaf_digest, proof, self.hash_function)
    
    def verify_data(
        self,
        root_digest: Digest,
        data: bytes,
        proof: Iterable[ProofStep],
    ) -> bool:
        """Verify a raw data block, hashing it first."""
        return self.verify(root_digest, self.hash_function(data), proof)


__all__ = [
    "Direction",
    "ProofStep",
    "MerkleProof",
    "generate_proof",
    "verify_proof",
    "ProofGenerator",
    "ProofVerifier",
]
