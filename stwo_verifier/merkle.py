"""Verification of Merkle decommitments over columns of several sizes."""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import islice
from typing import Optional

from .blake2_hash import Blake2sHash
from .merkle_hasher import Blake2sMerkleHasher


@dataclass
class MerkleDecommitment:
    """Data the verifier needs but cannot compute itself.

    ``hash_witness`` holds the missing node hashes and ``column_witness`` the
    missing column values, both in the order the verifier consumes them.
    """

    hash_witness: list[Blake2sHash] = field(default_factory=list)
    column_witness: list[int] = field(default_factory=list)


class MerkleVerificationError(Exception):
    """Base class for a failed Merkle decommitment check."""

    message = "Merkle verification failed."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)


class WitnessTooShortError(MerkleVerificationError):
    message = "Witness is too short."


class WitnessTooLongError(MerkleVerificationError):
    message = "Witness is too long."


class TooManyQueriedValuesError(MerkleVerificationError):
    message = "too many Queried values"


class TooFewQueriedValuesError(MerkleVerificationError):
    message = "too few queried values"


class RootMismatchError(MerkleVerificationError):
    message = "Root mismatch."


def next_decommitment_node(
    prev_queries: Sequence[int], layer_queries: Sequence[int]
) -> Optional[int]:
    """Returns the next node of the current layer to decommit, or None when done.

    ``prev_queries`` are the pending node indices of the previous (larger) layer and
    ``layer_queries`` the pending column queries of this layer; only their first
    elements are looked at.
    """
    candidates = []
    if prev_queries:
        candidates.append(prev_queries[0] // 2)
    if layer_queries:
        candidates.append(layer_queries[0])
    return min(candidates, default=None)


def _next_or(iterator: Iterator[Blake2sHash], error: type[MerkleVerificationError]) -> Blake2sHash:
    try:
        return next(iterator)
    except StopIteration:
        raise error() from None


def _is_exhausted(iterator: Iterator) -> bool:
    return next(iterator, None) is None


class MerkleVerifier:
    """Checks decommitments against a Merkle root over columns of given log sizes."""

    hasher = Blake2sMerkleHasher

    def __init__(self, root: Blake2sHash, column_log_sizes: Iterable[int]) -> None:
        self.root = root
        self.column_log_sizes: list[int] = list(column_log_sizes)
        self.n_columns_per_log_size: dict[int, int] = dict(
            sorted(Counter(self.column_log_sizes).items())
        )

    def verify(
        self,
        queries_per_log_size: Mapping[int, Sequence[int]],
        queried_values: Iterable[int],
        decommitment: MerkleDecommitment,
    ) -> None:
        """Verifies the decommitment of the queried columns.

        ``queries_per_log_size`` maps a log size to the sorted query positions on the
        columns of that size. ``queried_values`` are the values at those positions,
        layer by layer from the largest. Raises a MerkleVerificationError subclass
        when a witness or the values are too short or too long, or when the computed
        root differs from the committed one.
        """
        if not self.column_log_sizes:
            return
        max_log_size = max(self.column_log_sizes)

        values_iter = iter(queried_values)
        hash_witness = iter(decommitment.hash_witness)
        column_witness = iter(decommitment.column_witness)

        last_layer_hashes: Optional[list[tuple[int, Blake2sHash]]] = None
        for layer_log_size in range(max_log_size, -1, -1):
            n_columns = self.n_columns_per_log_size.get(layer_log_size, 0)
            layer_hashes: list[tuple[int, Blake2sHash]] = []

            prev_queries = deque(index for index, _ in last_layer_hashes or ())
            prev_hashes = deque(last_layer_hashes) if last_layer_hashes is not None else None
            column_queries = deque(queries_per_log_size.get(layer_log_size, ()))

            while (node := next_decommitment_node(prev_queries, column_queries)) is not None:
                while prev_queries and prev_queries[0] // 2 == node:
                    prev_queries.popleft()

                children = None
                if prev_hashes is not None:
                    children = (
                        self._child_hash(prev_hashes, 2 * node, hash_witness),
                        self._child_hash(prev_hashes, 2 * node + 1, hash_witness),
                    )

                if column_queries and column_queries[0] == node:
                    column_queries.popleft()
                    source, error = values_iter, TooFewQueriedValuesError
                else:
                    source, error = column_witness, WitnessTooShortError

                node_values = list(islice(source, n_columns))
                if len(node_values) != n_columns:
                    raise error()
                layer_hashes.append((node, self.hasher.hash_node(children, node_values)))

            last_layer_hashes = layer_hashes

        if not _is_exhausted(hash_witness):
            raise WitnessTooLongError()
        if not _is_exhausted(values_iter):
            raise TooManyQueriedValuesError()
        if not _is_exhausted(column_witness):
            raise WitnessTooLongError()

        if last_layer_hashes is None or len(last_layer_hashes) != 1:
            raise ValueError("no queries reached the root of the tree")
        (_, computed_root), = last_layer_hashes
        if computed_root != self.root:
            raise RootMismatchError()

    @staticmethod
    def _child_hash(
        prev_hashes: deque[tuple[int, Blake2sHash]],
        index: int,
        hash_witness: Iterator[Blake2sHash],
    ) -> Blake2sHash:
        if prev_hashes and prev_hashes[0][0] == index:
            return prev_hashes.popleft()[1]
        return _next_or(hash_witness, WitnessTooShortError)