"""Verifier-side primitives for circle STARK proofs: BLAKE2s hashing, Merkle decommitment checks, queries and per-tree containers."""

__version__ = "0.1.0"

__all__ = [
    "blake2s",
    "blake2_hash",
    "merkle_hasher",
    "merkle",
    "utils",
    "polyutils",
    "queries",
    "treevec",
]