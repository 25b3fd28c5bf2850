"""
Proof serialization.

Two encodings of a MerkleProof:

- ProofDocument: a self-describing Pydantic model carrying the algorithm,
  root, leaf and steps, with digests as 0x-prefixed hex strings.
- Binary: concatenated entries of one direction byte (0x00 = left,
  0x01 = right) followed by exactly digest_size digest bytes, in
  proof order. The digest size is agreed out of band.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hashtree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    Digest,
    HashFunction,
    from_hex,
    get_hash_function,
    to_hex,
)
from hashtree.config.runtime import get_default_config
from hashtree.merkle.merkle_proofs import Direction, MerkleProof, ProofStep, verify_proof
from hashtree.schemas.errors import ProofDecodingException, UnsupportedHashAlgorithmException

PROOF_SCHEMA_VERSION = "1.0.0"

_DIRECTION_BYTES: dict[Direction, int] = {
    Direction.LEFT: 0x00,
    Direction.RIGHT: 0x01,
}
_BYTE_DIRECTIONS: dict[int, Direction] = {v: k for k, v in _DIRECTION_BYTES.items()}


def _validate_hex_digest(value: str) -> str:
    digest = from_hex(value)
    if len(digest) == 0:
        raise ValueError("Digest must not be empty")
    return value.lower()


class ProofStepModel(BaseModel):
    """Serialized form of a single proof step."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    direction: Direction = Field(..., description="Side the sibling sits on")
    sibling: str = Field(..., description="Sibling digest, 0x-prefixed hex")

    @field_validator("sibling")
    @classmethod
    def validate_sibling(cls, v: str) -> str:
        return _validate_hex_digest(v)


class ProofDocument(BaseModel):
    """
    Self-describing inclusion proof.

    Carries everything a verifier needs besides trust in the root:
    the hash algorithm, the root and leaf digests, and the steps.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    algorithm: str = Field(default=DEFAULT_HASH_ALGORITHM, min_length=1)
    root: str = Field(..., description="Root digest, 0x-prefixed hex")
    leaf: str = Field(..., description="Leaf digest, 0x-prefixed hex")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Only algorithms a verifier can resolve are accepted."""
        try:
            get_hash_function(v)
        except UnsupportedHashAlgorithmException as e:
            raise ValueError(e.message) from e
        return v

    @field_validator("root", "leaf")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        return _validate_hex_digest(v)

    @model_validator(mode="after")
    def validate_digest_widths(self) -> "ProofDocument":
        """All digests in one proof come from the same hash function."""
        width = len(self.root)
        if len(self.leaf) != width:
            raise ValueError("Leaf digest width differs from root digest width")
        for i, step in enumerate(self.steps):
            if len(step.sibling) != width:
                raise ValueError(f"Step {i} sibling width differs from root digest width")
        return self

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        root: Digest,
        leaf: Digest,
        algorithm: Optional[str] = None,
    ) -> "ProofDocument":
        """Wrap a proof; algorithm defaults to the default TreeConfig's."""
        if algorithm is None:
            algorithm = get_default_config().hash_algorithm
        return cls(
            algorithm=algorithm,
            root=to_hex(root),
            leaf=to_hex(leaf),
            steps=[
                ProofStepModel(direction=step.direction, sibling=to_hex(step.sibling))
                for step in proof
            ],
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            tuple(ProofStep(step.direction, from_hex(step.sibling)) for step in self.steps)
        )

    @property
    def root_digest(self) -> Digest:
        return from_hex(self.root)

    @property
    def leaf_digest(self) -> Digest:
        return from_hex(self.leaf)

    def verify(self, hash_function: Optional[HashFunction] = None) -> bool:
        """
        Verify the carried proof against the carried root.

        Uses the document's algorithm unless a hash function is given.
        """
        if hash_function is None:
            hash_function = get_hash_function(self.algorithm)
        return verify_proof(
            self.root_digest,
            self.leaf_digest,
            self.to_proof(),
            hash_function=hash_function,
        )


def encode_proof(proof: MerkleProof) -> bytes:
    """
    Encode a proof as direction-flagged fixed-width entries.

    Raises:
        ValueError: If sibling digests differ in width
    """
    widths = {len(step.sibling) for step in proof}
    if len(widths) > 1:
        raise ValueError(f"Proof mixes digest widths: {sorted(widths)}")

    out = bytearray()
    for step in proof:
        out.append(_DIRECTION_BYTES[step.direction])
        out += step.sibling
    return bytes(out)


def decode_proof(data: bytes, digest_size: int = 32) -> MerkleProof:
    """
    Decode a proof produced by encode_proof().

    Args:
        data: Encoded proof
        digest_size: Width of each sibling digest in bytes

    Raises:
        ProofDecodingException: On truncated input or an unknown direction byte
    """
    if digest_size < 1:
        raise ValueError(f"digest_size must be positive, got {digest_size}")

    entry_size = digest_size + 1
    if len(data) % entry_size != 0:
        raise ProofDecodingException(
            f"Encoded proof length {len(data)} is not a multiple of {entry_size}",
            offset=len(data) - len(data) % entry_size,
            details={"digest_size": digest_size},
        )

    steps: list[ProofStep] = []
    for offset in range(0, len(data), entry_size):
        flag = data[offset]
        direction = _BYTE_DIRECTIONS.get(flag)
        if direction is None:
            raise ProofDecodingException(
                f"Unknown direction byte 0x{flag:02x}",
                offset=offset,
            )
        steps.append(ProofStep(direction, data[offset + 1:offset + entry_size]))

    return MerkleProof(tuple(steps))


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "ProofStepModel",
    "ProofDocument",
    "encode_proof",
    "decode_proof",
]
