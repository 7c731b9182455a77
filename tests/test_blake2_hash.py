import pytest
from hypothesis import given, strategies as st

from stwo_verifier.blake2_hash import Blake2sHash, Blake2sHasher


def test_single_hash():
    hash_a = Blake2sHasher.hash(b"a")
    assert str(hash_a) == "4a0d129873403037c2cd9b9048203687f6233fb6738956e0349bd4320fec3e90"


def test_hash_state():
    state = Blake2sHasher()
    state.update(b"a")
    state.update(b"b")
    digest = state.finalize_reset()
    digest_empty = state.finalize()
    assert str(digest) == str(Blake2sHasher.hash(b"ab"))
    assert str(digest_empty) == str(Blake2sHasher.hash(b""))


def test_repr_and_hex_agree():
    digest = Blake2sHasher.hash(b"a")
    assert repr(digest) == digest.hex() == str(digest)


def test_default_is_zero():
    assert bytes(Blake2sHash()) == bytes(32)


@given(st.binary(min_size=32, max_size=32))
def test_bytes_round_trip(data):
    digest = Blake2sHash.from_bytes(data)
    assert bytes(digest) == data
    assert Blake2sHash.from_bytes(list(data)) == digest


@pytest.mark.parametrize("length", [0, 31, 33, 64])
def test_wrong_length_raises(length):
    with pytest.raises(ValueError):
        Blake2sHash.from_bytes(bytes(length))


@given(st.binary(min_size=32, max_size=32), st.binary(min_size=32, max_size=32))
def test_concat_and_hash_is_hash_of_concatenation(a, b):
    v1, v2 = Blake2sHash(a), Blake2sHash(b)
    assert Blake2sHasher.concat_and_hash(v1, v2) == Blake2sHasher.hash(a + b)


@given(st.lists(st.binary(max_size=40), max_size=5))
def test_incremental_equals_oneshot(parts):
    hasher = Blake2sHasher()
    for part in parts:
        hasher.update(part)
    assert hasher.finalize() == Blake2sHasher.hash(b"".join(parts))


def test_hashes_are_hashable_and_comparable():
    a = Blake2sHasher.hash(b"a")
    assert {a, Blake2sHasher.hash(b"a")} == {a}