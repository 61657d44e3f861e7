"""Shapes of rectangular multidimensional arrays."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

_INT64_MAX = 2**63 - 1


class Shape:
    """The shape of a rectangular multidimensional array.

    The empty shape is a scalar and holds exactly one element.
    """

    __slots__ = ("_dimension_sizes", "_size")

    def __init__(self, dimension_sizes: Iterable[int] = ()) -> None:
        sizes = tuple(int(d) for d in dimension_sizes)
        size = 1
        for dim_size in sizes:
            if dim_size < 0:
                raise ValueError(
                    f"Dimension sizes must be nonnegative, found: {dim_size}"
                )
            size *= dim_size
            if size > _INT64_MAX:
                raise OverflowError(
                    f"Number of elements of shape {sizes} overflows int64"
                )
        self._dimension_sizes = sizes
        self._size = size

    @property
    def num_dimensions(self) -> int:
        """The rank of the shape."""
        return len(self._dimension_sizes)

    @property
    def dimension_sizes(self) -> tuple[int, ...]:
        """The size of every dimension, outermost first."""
        return self._dimension_sizes

    def dimension_size(self, i: int) -> int:
        """The size of dimension ``i``."""
        return self._dimension_sizes[i]

    @property
    def size(self) -> int:
        """The number of possible values of the multi-dimensional index."""
        return self._size

    def multi_index_is_valid(self, multi_index: Sequence[int]) -> bool:
        """True if ``multi_index`` has the right rank and is in bounds."""
        if len(multi_index) != len(self._dimension_sizes):
            return False
        return all(
            0 <= value < dim
            for value, dim in zip(multi_index, self._dimension_sizes)
        )

    def flatten_index(self, multi_index: Sequence[int]) -> int:
        """Row-major flat index of an in-bounds multi-index."""
        if len(multi_index) != len(self._dimension_sizes):
            raise ValueError(
                f"Index {tuple(multi_index)} has {len(multi_index)} dimensions, "
                f"but shape {self} has {self.num_dimensions}"
            )
        flat = 0
        for axis, (value, dim) in enumerate(
            zip(multi_index, self._dimension_sizes)
        ):
            if not 0 <= value < dim:
                raise IndexError(
                    f"Index {value} out of range [0, {dim}) on axis {axis} "
                    f"of shape {self}"
                )
            flat = flat * dim + value
        return flat

    def expand_index(self, flat_index: int) -> tuple[int, ...]:
        """Inverse of :meth:`flatten_index`."""
        if not 0 <= flat_index < self._size:
            raise IndexError(
                f"Flat index {flat_index} out of range [0, {self._size}) "
                f"for shape {self}"
            )
        digits = []
        remaining = flat_index
        for dim in reversed(self._dimension_sizes):
            remaining, digit = divmod(remaining, dim)
            digits.append(digit)
        return tuple(reversed(digits))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self._dimension_sizes == other._dimension_sizes

    def __hash__(self) -> int:
        return hash(self._dimension_sizes)

    def __str__(self) -> str:
        return ",".join(str(d) for d in self._dimension_sizes)

    def __repr__(self) -> str:
        return f"Shape({list(self._dimension_sizes)!r})"

    @classmethod
    def from_vector(cls, vector: Sequence[Any]) -> Shape:
        """The rank one shape of a flat sequence."""
        return cls([len(vector)])

    @classmethod
    def from_vector_2d(cls, vector2d: Sequence[Sequence[Any]]) -> Shape:
        """The rank two shape of nested rows; raises on ragged input."""
        cols = len(vector2d[0]) if vector2d else 0
        for row in vector2d:
            if len(row) != cols:
                raise ValueError(
                    f"Ragged matrix: expected rows of length {cols}, "
                    f"found {len(row)}"
                )
        return cls([len(vector2d), cols])

    @classmethod
    def from_vector_3d(
        cls, vector3d: Sequence[Sequence[Sequence[Any]]]
    ) -> Shape:
        """The rank three shape of nested matrices; raises on ragged input."""
        rows = len(vector3d[0]) if vector3d else 0
        cols = len(vector3d[0][0]) if vector3d and vector3d[0] else 0
        for matrix in vector3d:
            if len(matrix) != rows:
                raise ValueError(
                    f"Ragged tensor: expected matrices with {rows} rows, "
                    f"found {len(matrix)}"
                )
            for row in matrix:
                if len(row) != cols:
                    raise ValueError(
                        f"Ragged tensor: expected rows of length {cols}, "
                        f"found {len(row)}"
                    )
        return cls([len(vector3d), rows, cols])