"""Sampling and folding of query positions over an evaluation domain."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import groupby
from typing import Protocol

UPPER_BOUND_QUERY_BYTES = 4

_WORD_MASK = 0xFFFFFFFF


class RandomBytesSource(Protocol):
    """Anything that can hand out a fresh batch of random bytes."""

    def draw_random_bytes(self) -> bytes: ...


@dataclass
class Queries:
    """An ordered set of query positions in a domain of size ``2 ** log_domain_size``."""

    positions: list[int] = field(default_factory=list)
    log_domain_size: int = 0

    @classmethod
    def generate(
        cls, channel: RandomBytesSource, log_domain_size: int, n_queries: int
    ) -> Queries:
        """Draws ``n_queries`` positions uniformly from ``[0, 2 ** log_domain_size)``.

        Each position comes from a little-endian 4-byte chunk of the channel's random
        bytes; a trailing partial chunk is ignored. Repeated positions collapse, so
        the result may hold fewer than ``n_queries`` positions.
        """
        if log_domain_size < 0:
            raise ValueError("log_domain_size must be non-negative")
        if n_queries < 0:
            raise ValueError("n_queries must be non-negative")
        max_query = ((1 << log_domain_size) - 1) & _WORD_MASK
        positions: set[int] = set()
        drawn = 0
        while drawn < n_queries:
            random_bytes = bytes(channel.draw_random_bytes())
            usable = len(random_bytes) - len(random_bytes) % UPPER_BOUND_QUERY_BYTES
            for start in range(0, usable, UPPER_BOUND_QUERY_BYTES):
                chunk = random_bytes[start : start + UPPER_BOUND_QUERY_BYTES]
                positions.add(int.from_bytes(chunk, "little") & max_query)
                drawn += 1
                if drawn == n_queries:
                    break
        return cls(sorted(positions), log_domain_size)

    def fold(self, n_folds: int) -> Queries:
        """Maps the queries onto the domain folded ``n_folds`` times."""
        if not 0 <= n_folds <= self.log_domain_size:
            raise ValueError("n_folds must be between 0 and log_domain_size")
        folded = [key for key, _ in groupby(q >> n_folds for q in self.positions)]
        return Queries(folded, self.log_domain_size - n_folds)

    @classmethod
    def from_positions(cls, positions: Iterable[int], log_domain_size: int) -> Queries:
        """Builds queries from sorted positions that lie inside the domain."""
        positions = list(positions)
        if any(a > b for a, b in zip(positions, positions[1:])):
            raise ValueError("positions must be sorted")
        size = 1 << log_domain_size
        if any(not 0 <= p < size for p in positions):
            raise ValueError("positions must lie inside the domain")
        return cls(positions, log_domain_size)

    def __iter__(self) -> Iterator[int]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __getitem__(self, index: int) -> int:
        return self.positions[index]