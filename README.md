# stwo_verifier

Pure-Python building blocks for the verifier side of circle STARK proofs:
BLAKE2s hashing, Merkle decommitment checks, query sampling and folding, and
containers that hold one entry per commitment tree. The package has no
runtime dependencies.

## Modules

- `stwo_verifier.blake2s` – `compress(h_vecs, msg_vecs, count_low, count_high, lastblock, lastnode)`,
  the BLAKE2s compression function on an 8-word state and a 16-word block.
  Words must be unsigned 32-bit integers; a `ValueError` is raised otherwise.
- `stwo_verifier.blake2_hash` – `Blake2sHash`, an immutable 32-byte digest
  (`hex()`, `bytes()`, `Blake2sHash.from_bytes(...)`; the default value is all
  zeros), and `Blake2sHasher`, an incremental BLAKE2s-256 hasher with
  `update`, `finalize`, `finalize_reset` and the static helpers `hash` and
  `concat_and_hash`.
- `stwo_verifier.merkle_hasher` – `Blake2sMerkleHasher.hash_node(children_hashes, column_values)`.
  Starting from an all-zero state it compresses the two child hashes (if
  given), then the column values in zero-padded blocks of 16 words.
- `stwo_verifier.merkle` – `MerkleVerifier`, `MerkleDecommitment` and
  `next_decommitment_node`. `MerkleVerifier(root, column_log_sizes)` checks a
  decommitment of columns of several sizes. Failures raise a subclass of
  `MerkleVerificationError`: `WitnessTooShortError`, `WitnessTooLongError`,
  `TooManyQueriedValuesError`, `TooFewQueriedValuesError` or
  `RootMismatchError`.
- `stwo_verifier.utils` – index arithmetic for bit-reversed circle domains
  (`bit_reverse_index`, `offset_bit_reversed_circle_domain_index`,
  `previous_bit_reversed_circle_domain_index`,
  `coset_index_to_circle_domain_index`, `coset_order_to_circle_domain_order`,
  `bit_reverse_coset_to_circle_domain_order`), `egcd`, and small helpers:
  `chunk_slice`, `all_unique`, and `peek_take_while`, which pops items from
  the front of a `collections.deque` while a predicate holds and leaves the
  first failing item in place.
- `stwo_verifier.polyutils` – `fold(values, folding_factors)` for hierarchical
  folding and `repeat_value(values, duplicity)`.
- `stwo_verifier.queries` – `Queries`, a sorted list of positions in a domain
  of size `2 ** log_domain_size`. `Queries.generate(channel, log_domain_size, n_queries)`
  draws positions from any object with a `draw_random_bytes()` method, reading
  little-endian 4-byte chunks; `fold(n_folds)` maps them onto a folded domain;
  `Queries.from_positions` builds them from sorted, in-range positions.
- `stwo_verifier.treevec` – `TreeVec`, a `list` subclass with one element per
  commitment tree (`map`, `zip`, `zip_eq`, `map_cols`, `zip_cols`, `flatten`,
  `flatten_cols`, `append_cols`, `concat_cols`, `sub_tree`), and
  `TreeSubspan`, a column range within one tree.

## Installation

```
pip install .
```

## Examples

Hashing:

```python
from stwo_verifier.blake2_hash import Blake2sHasher

print(Blake2sHasher.hash(b"a").hex())
# 4a0d129873403037c2cd9b9048203687f6233fb6738956e0349bd4320fec3e90
```

Verifying a Merkle decommitment of one column with two values, querying
position 0:

```python
from stwo_verifier.merkle import MerkleDecommitment, MerkleVerifier, MerkleVerificationError
from stwo_verifier.merkle_hasher import Blake2sMerkleHasher

left = Blake2sMerkleHasher.hash_node(None, [7])
right = Blake2sMerkleHasher.hash_node(None, [9])
root = Blake2sMerkleHasher.hash_node((left, right), [])

verifier = MerkleVerifier(root, column_log_sizes=[1])
decommitment = MerkleDecommitment(hash_witness=[right])
try:
    verifier.verify({1: [0]}, [7], decommitment)
    print("accepted")
except MerkleVerificationError as err:
    print("rejected:", err)
```

Working with per-tree columns:

```python
from stwo_verifier.treevec import TreeVec

tv = TreeVec([[1, 2], [3]])
print(tv.map_cols(lambda x: x * 10).flatten())  # [10, 20, 30]
```

## What the package does not do

It holds the parts listed above and nothing more. There is no prover, no
Fiat–Shamir channel, no field arithmetic, no FRI or commitment-scheme
verifier and no end-to-end proof verification; callers supply the random
bytes for `Queries.generate` and assemble the checks themselves. There is no
command-line tool.

## Running the tests

```
pip install ".[test]"
pytest
```