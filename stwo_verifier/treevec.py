"""Containers holding one entry per commitment tree."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from itertools import chain
from typing import Any


@dataclass(frozen=True)
class TreeSubspan:
    """A contiguous range ``[col_start, col_end)`` of columns in one tree."""

    tree_index: int
    col_start: int
    col_end: int


def _zip_eq(a: list[Any], b: list[Any]) -> list[tuple[Any, Any]]:
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    return list(zip(a, b))


class TreeVec(list):
    """A list with one element per commitment tree.

    When each element is itself a list of columns, the ``*_cols`` methods work on
    the columns of every tree.
    """

    def map(self, f: Callable[[Any], Any]) -> TreeVec:
        """Applies ``f`` to every tree."""
        return TreeVec(f(tree) for tree in self)

    def zip(self, other: Iterable[Any]) -> TreeVec:
        """Pairs trees with ``other``, stopping at the shorter one."""
        return TreeVec(zip(self, other))

    def zip_eq(self, other: Iterable[Any]) -> TreeVec:
        """Pairs trees with ``other``; raises ValueError if the lengths differ."""
        return TreeVec(_zip_eq(list(self), list(other)))

    def map_cols(self, f: Callable[[Any], Any]) -> TreeVec:
        """Applies ``f`` to every column of every tree."""
        return TreeVec([f(column) for column in tree] for tree in self)

    def zip_cols(self, other: Iterable[Iterable[Any]]) -> TreeVec:
        """Pairs columns of two tree vectors of the same shape.

        Raises ValueError if the number of trees or of columns in a tree differs.
        """
        return TreeVec(
            _zip_eq(list(mine), list(theirs))
            for mine, theirs in _zip_eq(list(self), list(other))
        )

    def flatten(self) -> list[Any]:
        """Returns the columns of all trees in one list."""
        return list(chain.from_iterable(self))

    def flatten_cols(self) -> list[Any]:
        """Returns the items of all columns of all trees in one list."""
        return list(chain.from_iterable(chain.from_iterable(self)))

    def append_cols(self, other: Iterable[Iterable[Any]]) -> None:
        """Appends the columns of ``other`` tree by tree, adding trees as needed."""
        other = list(other)
        while len(self) < len(other):
            self.append([])
        for index, columns in enumerate(other):
            self[index] = list(self[index])
            self[index].extend(columns)

    @classmethod
    def concat_cols(cls, trees: Iterable[Iterable[Iterable[Any]]]) -> TreeVec:
        """Concatenates the columns of several tree vectors."""
        result = cls()
        for tree in trees:
            result.append_cols(tree)
        return result

    def sub_tree(self, locations: Iterable[TreeSubspan]) -> TreeVec:
        """Extracts the column ranges named by ``locations``.

        Raises ValueError if two locations share a tree index and IndexError if a
        location lies outside the tree vector.
        """
        locations = list(locations)
        tree_indices = {location.tree_index for location in locations}
        if len(tree_indices) != len(locations):
            raise ValueError("locations must have distinct tree indices")
        max_tree_index = max(tree_indices, default=0)
        result = TreeVec([] for _ in range(max_tree_index + 1))
        for location in locations:
            result[location.tree_index] = self._chunk(location)
        return result

    def _chunk(self, location: TreeSubspan) -> list[Any]:
        if not 0 <= location.tree_index < len(self):
            raise IndexError(f"no tree at index {location.tree_index}")
        tree = self[location.tree_index]
        if not 0 <= location.col_start <= location.col_end <= len(tree):
            raise IndexError(
                f"columns {location.col_start}..{location.col_end} out of range"
            )
        return list(tree[location.col_start : location.col_end])

    def __repr__(self) -> str:
        return f"TreeVec({list.__repr__(self)})"