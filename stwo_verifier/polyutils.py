"""Helpers for polynomial evaluation: hierarchical folding and value repetition."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def fold(values: Sequence[Any], folding_factors: Sequence[Any]) -> Any:
    """Folds ``values`` recursively by a hierarchy of folding factors.

    With factors ``[x, y, z]`` and eight values, the leaves are paired with ``z``,
    the next level with ``y`` and the top with ``x``: each pair ``(l, r)`` becomes
    ``l + r * factor``. Raises ValueError unless ``len(values) == 2 ** len(folding_factors)``.
    """
    n = len(values)
    if n != 1 << len(folding_factors):
        raise ValueError("number of values must be 2 ** number of folding factors")
    if n == 1:
        return values[0]
    half = n // 2
    factor, rest = folding_factors[0], folding_factors[1:]
    lhs = fold(values[:half], rest)
    rhs = fold(values[half:], rest)
    return lhs + rhs * factor


def repeat_value(values: Sequence[T], duplicity: int) -> list[T]:
    """Repeats each value ``duplicity`` times in sequence."""
    return [v for v in values for _ in range(duplicity)]