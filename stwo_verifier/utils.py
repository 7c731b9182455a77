"""Index arithmetic for bit-reversed circle domains and small iteration helpers."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSequence, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

_USIZE_BITS = 64


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _trunc_div(a, b)


def egcd(x: int, y: int) -> tuple[int, int, int]:
    """Returns ``(s, t, g)`` such that ``g = gcd(x, y)`` and ``s*x + t*y = g``."""
    if x == 0:
        return 0, 1, y
    k = _trunc_div(y, x)
    s, t, g = egcd(_trunc_rem(y, x), x)
    return t - s * k, s, g


def bit_reverse_index(i: int, log_size: int) -> int:
    """Returns the bit-reversed index of ``i`` represented by ``log_size`` bits."""
    if i < 0:
        raise ValueError("index must be non-negative")
    if not 0 <= log_size <= _USIZE_BITS:
        raise ValueError(f"log_size must be between 0 and {_USIZE_BITS}")
    if log_size == 0:
        return i
    low_bits = i & ((1 << log_size) - 1)
    return int(format(low_bits, f"0{log_size}b")[::-1], 2)


def offset_bit_reversed_circle_domain_index(
    i: int, domain_log_size: int, eval_log_size: int, offset: int
) -> int:
    """Returns the index ``offset`` steps away from ``i`` in a bit-reversed circle evaluation.

    The evaluation has log size ``eval_log_size`` and the steps are taken relative to a
    smaller domain of log size ``domain_log_size``.
    """
    if eval_log_size < domain_log_size + 1:
        raise ValueError("eval_log_size must exceed domain_log_size")
    index = bit_reverse_index(i, eval_log_size)
    half_size = 1 << (eval_log_size - 1)
    step_size = offset * (1 << (eval_log_size - domain_log_size - 1))
    if index < half_size:
        index = (index + step_size) % half_size
    else:
        index = (index - step_size) % half_size + half_size
    return bit_reverse_index(index, eval_log_size)


def previous_bit_reversed_circle_domain_index(
    i: int, domain_log_size: int, eval_log_size: int
) -> int:
    """Returns the index of the previous element in a bit-reversed circle evaluation."""
    return offset_bit_reversed_circle_domain_index(i, domain_log_size, eval_log_size, -1)


def coset_order_to_circle_domain_order(values: Sequence[T]) -> list[T]:
    """Reorders values given in coset order into circle-domain order."""
    half_len = len(values) // 2
    forward = list(values[::2][:half_len])
    backward = list(values[::-1][::2][:half_len])
    return forward + backward


def coset_index_to_circle_domain_index(coset_index: int, log_domain_size: int) -> int:
    """Converts an index within a coset to the matching index in a circle domain."""
    if coset_index % 2 == 0:
        return coset_index // 2
    return ((2 << log_domain_size) - coset_index) // 2


def bit_reverse_coset_to_circle_domain_order(values: MutableSequence[Any]) -> None:
    """Permutes ``values`` in place from coset natural order to bit-reversed circle-domain order.

    Raises ValueError if the length is not a power of two.
    """
    n = len(values)
    if n == 0 or n & (n - 1):
        raise ValueError("length must be a power of two")
    log_n = n.bit_length() - 1
    for i in range(n):
        j = bit_reverse_index(coset_index_to_circle_domain_index(i, log_n), log_n)
        if j > i:
            values[i], values[j] = values[j], values[i]


def chunk_slice(values: Sequence[T], n: int) -> list[tuple[T, ...]]:
    """Splits ``values`` into tuples of exactly ``n`` items, dropping an incomplete tail."""
    if n <= 0:
        raise ValueError("chunk size must be positive")
    full = len(values) - len(values) % n
    return [tuple(values[start : start + n]) for start in range(0, full, n)]


def all_unique(iterable: Iterable[Hashable]) -> bool:
    """Returns True if no item repeats; stops at the first repeat."""
    seen: set[Hashable] = set()
    for item in iterable:
        if item in seen:
            return False
        seen.add(item)
    return True


def peek_take_while(iterator: deque[T], predicate: Callable[[T], bool]) -> Iterator[T]:
    """Lazily pops items from the front of ``iterator`` while ``predicate`` holds.

    Unlike ``itertools.takewhile``, the first item failing the predicate stays in place.
    """
    while iterator and predicate(iterator[0]):
        yield iterator.popleft()