"""Merkle node hashing built on the raw BLAKE2s compression function."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import Optional, Protocol, Tuple

from .blake2_hash import Blake2sHash
from .blake2s import compress

_BLOCK_WORDS = 16


class MerkleHasher(Protocol):
    """Hashes a Merkle node from optional child hashes and the node's column values.

    The largest layer has no child hashes; every other layer does. Each node holds
    one value from each column of the layer's size.
    """

    @staticmethod
    def hash_node(children_hashes, column_values): ...


class Blake2sMerkleHasher:
    """Merkle hasher that chains BLAKE2s compressions from an all-zero state."""

    @staticmethod
    def hash_node(
        children_hashes: Optional[Tuple[Blake2sHash, Blake2sHash]],
        column_values: Iterable[int],
    ) -> Blake2sHash:
        """Hashes a node: first the two children, then the values in zero-padded blocks of 16."""
        state: tuple[int, ...] = (0,) * 8
        if children_hashes is not None:
            left, right = children_hashes
            words = struct.unpack("<16I", bytes(left) + bytes(right))
            state = compress(state, words, 0, 0, 0, 0)

        values = [int(v) for v in column_values]
        if any(not 0 <= v < 2**32 for v in values):
            raise ValueError("column values must be unsigned 32-bit integers")
        padding = -len(values) % _BLOCK_WORDS
        values.extend([0] * padding)
        for start in range(0, len(values), _BLOCK_WORDS):
            state = compress(state, values[start : start + _BLOCK_WORDS], 0, 0, 0, 0)

        return Blake2sHash(struct.pack("<8I", *state))