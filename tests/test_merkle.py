import random
from collections import deque

import pytest
from hypothesis import given, settings, strategies as st

from stwo_verifier.blake2_hash import Blake2sHash
from stwo_verifier.merkle import (
    MerkleDecommitment,
    MerkleVerificationError,
    MerkleVerifier,
    RootMismatchError,
    TooFewQueriedValuesError,
    TooManyQueriedValuesError,
    WitnessTooLongError,
    WitnessTooShortError,
    next_decommitment_node,
)
from stwo_verifier.merkle_hasher import Blake2sMerkleHasher

P = 2**31 - 1
LOG_SIZES = [5, 3, 5, 2, 4, 3]
QUERIES = {5: [1, 7, 20], 3: [2, 5], 2: [0], 4: [3, 9]}


def _make_columns(seed=0):
    rng = random.Random(seed)
    return [[rng.randrange(P) for _ in range(1 << s)] for s in LOG_SIZES]


def _sorted_columns(columns):
    return sorted(columns, key=lambda c: -len(c))


def _commit(columns):
    cols = _sorted_columns(columns)
    max_log = len(cols[0]).bit_length() - 1
    layers = []
    for log_size in range(max_log, -1, -1):
        layer_columns = [c for c in cols if len(c) == 1 << log_size]
        prev = layers[-1] if layers else None
        layer = [
            Blake2sMerkleHasher.hash_node(
                None if prev is None else (prev[2 * i], prev[2 * i + 1]),
                [c[i] for c in layer_columns],
            )
            for i in range(1 << log_size)
        ]
        layers.append(layer)
    layers.reverse()
    return layers


def _decommit(layers, queries, columns):
    cols = _sorted_columns(columns)
    queried, hash_witness, column_witness = [], [], []
    last_queries = []
    for log_size in range(len(layers) - 1, -1, -1):
        prev_layer = layers[log_size + 1] if log_size + 1 < len(layers) else None
        layer_columns = [c for c in cols if len(c) == 1 << log_size]
        prev = deque(last_queries)
        col_queries = deque(queries.get(log_size, []))
        total = []
        while (node := next_decommitment_node(prev, col_queries)) is not None:
            if prev_layer is not None:
                for child in (2 * node, 2 * node + 1):
                    if prev and prev[0] == child:
                        prev.popleft()
                    else:
                        hash_witness.append(prev_layer[child])
            values = [c[node] for c in layer_columns]
            if col_queries and col_queries[0] == node:
                col_queries.popleft()
                queried.extend(values)
            else:
                column_witness.extend(values)
            total.append(node)
        last_queries = total
    return queried, MerkleDecommitment(hash_witness, column_witness)


def _prepare(queries=QUERIES, seed=0):
    columns = _make_columns(seed)
    layers = _commit(columns)
    values, decommitment = _decommit(layers, queries, columns)
    verifier = MerkleVerifier(layers[0][0], LOG_SIZES)
    return queries, decommitment, values, verifier


def test_merkle_success():
    queries, decommitment, values, verifier = _prepare()
    assert verifier.verify(queries, values, decommitment) is None
    assert len(decommitment.column_witness) > 0
    assert len(decommitment.hash_witness) > 0


def test_merkle_invalid_witness():
    queries, decommitment, values, verifier = _prepare()
    decommitment.hash_witness[len(decommitment.hash_witness) // 2] = Blake2sHash()
    with pytest.raises(RootMismatchError):
        verifier.verify(queries, values, decommitment)


def test_merkle_invalid_value():
    queries, decommitment, values, verifier = _prepare()
    values[6] = (values[6] + 1) % P
    with pytest.raises(RootMismatchError):
        verifier.verify(queries, values, decommitment)


def test_merkle_invalid_column_witness():
    queries, decommitment, values, verifier = _prepare()
    decommitment.column_witness[0] = (decommitment.column_witness[0] + 1) % P
    with pytest.raises(RootMismatchError):
        verifier.verify(queries, values, decommitment)


def test_merkle_witness_too_short():
    queries, decommitment, values, verifier = _prepare()
    decommitment.hash_witness.pop()
    with pytest.raises(WitnessTooShortError):
        verifier.verify(queries, values, decommitment)


def test_merkle_witness_too_long():
    queries, decommitment, values, verifier = _prepare()
    decommitment.hash_witness.append(Blake2sHash())
    with pytest.raises(WitnessTooLongError):
        verifier.verify(queries, values, decommitment)


def test_merkle_column_witness_too_long():
    queries, decommitment, values, verifier = _prepare()
    decommitment.column_witness.append(0)
    with pytest.raises(WitnessTooLongError):
        verifier.verify(queries, values, decommitment)


def test_merkle_column_witness_too_short():
    queries, decommitment, values, verifier = _prepare()
    decommitment.column_witness.pop()
    with pytest.raises(WitnessTooShortError):
        verifier.verify(queries, values, decommitment)


def test_merkle_column_values_too_long():
    queries, decommitment, values, verifier = _prepare()
    values.insert(3, 0)
    with pytest.raises(TooManyQueriedValuesError):
        verifier.verify(queries, values, decommitment)


def test_merkle_column_values_too_short():
    queries, decommitment, values, verifier = _prepare()
    values.pop(3)
    with pytest.raises(TooFewQueriedValuesError):
        verifier.verify(queries, values, decommitment)


def test_merkle_wrong_root():
    queries, decommitment, values, _ = _prepare()
    verifier = MerkleVerifier(Blake2sHash(), LOG_SIZES)
    with pytest.raises(RootMismatchError):
        verifier.verify(queries, values, decommitment)


def test_errors_share_base_class_and_messages():
    assert issubclass(RootMismatchError, MerkleVerificationError)
    assert str(WitnessTooShortError()) == "Witness is too short."
    assert str(WitnessTooLongError()) == "Witness is too long."
    assert str(TooManyQueriedValuesError()) == "too many Queried values"
    assert str(TooFewQueriedValuesError()) == "too few queried values"
    assert str(RootMismatchError()) == "Root mismatch."


def test_verifier_counts_columns_per_log_size():
    verifier = MerkleVerifier(Blake2sHash(), LOG_SIZES)
    assert verifier.n_columns_per_log_size == {2: 1, 3: 2, 4: 1, 5: 2}
    assert verifier.column_log_sizes == LOG_SIZES


def test_empty_verifier_accepts_anything():
    verifier = MerkleVerifier(Blake2sHash(), [])
    assert verifier.verify({}, [1, 2, 3], MerkleDecommitment([Blake2sHash()], [4])) is None


def test_no_queries_cannot_reach_root():
    verifier = MerkleVerifier(Blake2sHash(), [2])
    with pytest.raises(ValueError):
        verifier.verify({}, [], MerkleDecommitment())


def test_next_decommitment_node():
    assert next_decommitment_node(deque([4, 6]), deque([3])) == 2
    assert next_decommitment_node(deque([8]), deque([1, 5])) == 1
    assert next_decommitment_node(deque(), deque([7])) == 7
    assert next_decommitment_node(deque([9]), deque()) == 4
    assert next_decommitment_node(deque(), deque()) is None


@settings(max_examples=15, deadline=None)
@given(
    st.lists(st.integers(0, 31), min_size=1, max_size=6, unique=True),
    st.lists(st.integers(0, 7), max_size=3, unique=True),
    st.integers(0, 100),
)
def test_random_queries_verify(top_queries, small_queries, seed):
    queries = {5: sorted(top_queries), 3: sorted(small_queries)}
    queries, decommitment, values, verifier = _prepare(queries, seed)
    assert verifier.verify(queries, values, decommitment) is None
    if values:
        values[0] = (values[0] + 1) % P
        with pytest.raises(RootMismatchError):
            verifier.verify(queries, values, decommitment)