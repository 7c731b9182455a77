"""The BLAKE2s compression function."""

from __future__ import annotations

from collections.abc import Sequence

IV: tuple[int, ...] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

SIGMA: tuple[tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

_MASK = 0xFFFFFFFF

# (a, b, c, d) state indices for the four column steps, then the four diagonal steps.
_MIX_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _mix(v: list[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    v[a] = (v[a] + v[b] + x) & _MASK
    v[d] = _rotr(v[d] ^ v[a], 16)
    v[c] = (v[c] + v[d]) & _MASK
    v[b] = _rotr(v[b] ^ v[c], 12)
    v[a] = (v[a] + v[b] + y) & _MASK
    v[d] = _rotr(v[d] ^ v[a], 8)
    v[c] = (v[c] + v[d]) & _MASK
    v[b] = _rotr(v[b] ^ v[c], 7)


def _check_words(words: Sequence[int], count: int, name: str) -> tuple[int, ...]:
    result = tuple(int(w) for w in words)
    if len(result) != count:
        raise ValueError(f"{name} must hold {count} words, got {len(result)}")
    if any(not 0 <= w <= _MASK for w in result):
        raise ValueError(f"{name} words must be unsigned 32-bit integers")
    return result


def compress(
    h_vecs: Sequence[int],
    msg_vecs: Sequence[int],
    count_low: int,
    count_high: int,
    lastblock: int,
    lastnode: int,
) -> tuple[int, ...]:
    """Performs a BLAKE2s compression of one 16-word block into an 8-word state."""
    h = _check_words(h_vecs, 8, "h_vecs")
    m = _check_words(msg_vecs, 16, "msg_vecs")
    v = [
        *h,
        *IV[:4],
        IV[4] ^ (count_low & _MASK),
        IV[5] ^ (count_high & _MASK),
        IV[6] ^ (lastblock & _MASK),
        IV[7] ^ (lastnode & _MASK),
    ]
    for sigma in SIGMA:
        for step, (a, b, c, d) in enumerate(_MIX_LANES):
            _mix(v, a, b, c, d, m[sigma[2 * step]], m[sigma[2 * step + 1]])
    return tuple(h[i] ^ v[i] ^ v[i + 8] for i in range(8))