"""
Merkle Tree and Inclusion Proofs

This package provides:
- Leaf / Branch: the closed node model
- MerkleTree / build_tree: immutable tree construction
- generate_proof / verify_proof: inclusion proofs
- ProofGenerator / ProofVerifier: convenience wrappers

Usage:
    from hashtree.merkle import build_tree, verify_proof
    from hashtree.crypto import sha256
    
    tree = build_tree([b"a", b"b", b"c"])
    proof = tree.generate_proof(sha256(b"a"))
    assert verify_proof(tree.root_digest(), sha256(b"a"), proof)
"""
from .nodes import Leaf, Branch, Node
from .merkle_tree import MerkleTree, build_tree
from .merkle_proofs import (
    Direction,
    ProofStep,
    MerkleProof,
    generate_proof,
    verify_proof,
    ProofGenerator,
    ProofVerifier,
)


__all__ = [
    # Node model
    "Leaf",
    "Branch",
    "Node",
    # Tree
    "MerkleTree",
    "build_tree",
    # Proofs
    "Direction",
    "ProofStep",
    "MerkleProof",
    "generate_proof",
    "verify_proof",
    # Convenience classes
    "ProofGenerator",
    "ProofVerifier",
]
