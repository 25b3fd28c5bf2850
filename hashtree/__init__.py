"""
hashtree - binary Merkle trees with inclusion proofs.

Builds a hash tree over ordered data blocks, producing a root digest that
commits to every block and its position, and generates and verifies
compact inclusion proofs for individual blocks.

Usage:
    from hashtree import build_tree, verify_proof, sha256

    tree = build_tree([b"a", b"b", b"c"])
    proof = tree.generate_proof(sha256(b"a"))
    assert verify_proof(tree.root_digest(), sha256(b"a"), proof)
"""
from hashtree.schemas.errors import (
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    EmptyInputException,
    LeafNotFoundException,
    UnsupportedHashAlgorithmException,
    ProofDecodingException,
    ConfigException,
)
from hashtree.crypto.hashing import (
    Digest,
    HashFunction,
    sha256,
    get_hash_function,
    hash_concat,
    to_hex,
    from_hex,
)
from hashtree.config.runtime import TreeConfig, get_default_config, set_default_config
from hashtree.merkle import (
    Leaf,
    Branch,
    Node,
    MerkleTree,
    build_tree,
    Direction,
    ProofStep,
    MerkleProof,
    generate_proof,
    verify_proof,
    ProofGenerator,
    ProofVerifier,
)
from hashtree.schemas.proof import ProofDocument, encode_proof, decode_proof

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "EmptyInputException",
    "LeafNotFoundException",
    "UnsupportedHashAlgorithmException",
    "ProofDecodingException",
    "ConfigException",
    # Hashing
    "Digest",
    "HashFunction",
    "sha256",
    "get_hash_function",
    "hash_concat",
    "to_hex",
    "from_hex",
    # Configuration
    "TreeConfig",
    "get_default_config",
    "set_default_config",
    # Tree and proofs
    "Leaf",
    "Branch",
    "Node",
    "MerkleTree",
    "build_tree",
    "Direction",
    "ProofStep",
    "MerkleProof",
    "generate_proof",
    "verify_proof",
    "ProofGenerator",
    "ProofVerifier",
    # Serialization
    "ProofDocument",
    "encode_proof",
    "decode_proof",
]
