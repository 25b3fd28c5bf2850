"""
Schemas: error taxonomy and proof serialization models.

Proof serialization lives in hashtree.schemas.proof and is imported
explicitly, since it depends on the merkle package.
"""

from .errors import (
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    EmptyInputException,
    LeafNotFoundException,
    UnsupportedHashAlgorithmException,
    ProofDecodingException,
    ConfigException,
)

__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "EmptyInputException",
    "LeafNotFoundException",
    "UnsupportedHashAlgorithmException",
    "ProofDecodingException",
    "ConfigException",
]
