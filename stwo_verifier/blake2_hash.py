"""BLAKE2s-256 digests and an incremental hasher producing them."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

HASH_SIZE = 32


@dataclass(frozen=True, repr=False)
class Blake2sHash:
    """A 32-byte BLAKE2s digest. The default value is all zeros."""

    data: bytes = field(default=bytes(HASH_SIZE))

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != HASH_SIZE:
            raise ValueError(
                f"a Blake2sHash holds {HASH_SIZE} bytes, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview | list[int]) -> Blake2sHash:
        """Builds a hash from exactly 32 bytes; raises ValueError otherwise."""
        return cls(bytes(data))

    def hex(self) -> str:
        """Returns the digest as lower-case hexadecimal."""
        return self.data.hex()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return self.hex()


class Blake2sHasher:
    """An incremental BLAKE2s-256 hasher."""

    def __init__(self) -> None:
        self._state = hashlib.blake2s(digest_size=HASH_SIZE)

    def update(self, data: bytes | bytearray | memoryview) -> None:
        """Feeds more bytes into the hash."""
        self._state.update(bytes(data))

    def finalize(self) -> Blake2sHash:
        """Returns the digest of everything fed so far."""
        return Blake2sHash(self._state.digest())

    def finalize_reset(self) -> Blake2sHash:
        """Returns the digest so far and restarts the hasher from empty."""
        digest = self.finalize()
        self._state = hashlib.blake2s(digest_size=HASH_SIZE)
        return digest

    @staticmethod
    def concat_and_hash(v1: Blake2sHash, v2: Blake2sHash) -> Blake2sHash:
        """Hashes the concatenation of two digests."""
        hasher = Blake2sHasher()
        hasher.update(bytes(v1))
        hasher.update(bytes(v2))
        return hasher.finalize()

    @staticmethod
    def hash(data: bytes | bytearray | memoryview) -> Blake2sHash:
        """Hashes a single byte string."""
        hasher = Blake2sHasher()
        hasher.update(data)
        return hasher.finalize()