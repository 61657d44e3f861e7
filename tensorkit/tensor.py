"""Dense multidimensional arrays stored flat in row-major order."""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterable, Sequence
from typing import Any

from tensorkit.shape import Shape
from tensorkit.tensor_shapes import (
    expand_dims_shape,
    slice_shape,
    squeeze_all_shape,
    squeeze_shape,
    sub_tensor_shape,
)


def _as_shape(shape: Shape | Iterable[int] | None) -> Shape:
    if shape is None:
        return Shape()
    if isinstance(shape, Shape):
        return shape
    return Shape(shape)


class Tensor:
    """A rectangular multidimensional array of arbitrary values.

    Values are kept in a single flat list in row-major order.  A tensor
    built with no shape is a scalar holding ``fill_value``.
    """

    __slots__ = ("_shape", "_values")

    def __init__(
        self, shape: Shape | Iterable[int] | None = None, fill_value: Any = 0.0
    ) -> None:
        self._shape = _as_shape(shape)
        self._values = [fill_value] * self._shape.size

    @classmethod
    def _from_parts(cls, shape: Shape, values: list[Any]) -> Tensor:
        result = cls.__new__(cls)
        result._shape = shape
        result._values = values
        return result

    @classmethod
    def scalar(cls, value: Any) -> Tensor:
        """A rank zero tensor holding ``value``."""
        return cls._from_parts(Shape(), [value])

    @classmethod
    def vector(cls, values: Sequence[Any]) -> Tensor:
        """A rank one tensor holding ``values``."""
        return cls._from_parts(Shape.from_vector(values), list(values))

    @classmethod
    def matrix(cls, rows: Sequence[Sequence[Any]]) -> Tensor:
        """A rank two tensor from a list of equal-length rows."""
        shape = Shape.from_vector_2d(rows)
        return cls._from_parts(shape, [v for row in rows for v in row])

    @classmethod
    def cube(cls, matrices: Sequence[Sequence[Sequence[Any]]]) -> Tensor:
        """A rank three tensor from a list of equally shaped matrices."""
        shape = Shape.from_vector_3d(matrices)
        values = [v for matrix in matrices for row in matrix for v in row]
        return cls._from_parts(shape, values)

    @classmethod
    def from_flat_data(
        cls, shape: Shape | Iterable[int], flat_data: Iterable[Any]
    ) -> Tensor:
        """A tensor of ``shape`` whose row-major values are ``flat_data``."""
        shape = _as_shape(shape)
        values = list(flat_data)
        if len(values) != shape.size:
            raise ValueError(
                f"Flat data has {len(values)} values, but shape {shape} "
                f"needs {shape.size}"
            )
        return cls._from_parts(shape, values)

    @property
    def shape(self) -> Shape:
        """The shape of the tensor."""
        return self._shape

    @property
    def size(self) -> int:
        """The number of elements."""
        return self._shape.size

    def value(self, index: Sequence[int]) -> Any:
        """The element at multi-index ``index``."""
        return self._values[self._shape.flatten_index(index)]

    def set_value(self, index: Sequence[int], value: Any) -> None:
        """Replace the element at multi-index ``index``."""
        self._values[self._shape.flatten_index(index)] = value

    def _check_flat_index(self, flat_index: int) -> None:
        if not 0 <= flat_index < len(self._values):
            raise IndexError(
                f"Flat index {flat_index} out of range "
                f"[0, {len(self._values)})"
            )

    def flat_value(self, flat_index: int) -> Any:
        """The element at row-major position ``flat_index``."""
        self._check_flat_index(flat_index)
        return self._values[flat_index]

    def set_flat_value(self, flat_index: int, value: Any) -> None:
        """Replace the element at row-major position ``flat_index``."""
        self._check_flat_index(flat_index)
        self._values[flat_index] = value

    @property
    def flat_values(self) -> list[Any]:
        """The elements in row-major order; mutating the list edits the tensor."""
        return self._values

    def vector_slice(self, fixed_indices: Sequence[int]) -> list[Any]:
        """The values along the single axis marked by a negative index.

        Every other entry of ``fixed_indices`` fixes the position on its axis.
        """
        fixed = list(fixed_indices)
        if len(fixed) != self._shape.num_dimensions:
            raise ValueError(
                f"Expected {self._shape.num_dimensions} indices, "
                f"found {len(fixed)}"
            )
        free_index = None
        for axis, (value, dim) in enumerate(
            zip(fixed, self._shape.dimension_sizes)
        ):
            if value < 0:
                if free_index is not None:
                    raise ValueError(
                        f"Found two free indices: {free_index} and {axis}."
                    )
                free_index = axis
            elif value >= dim:
                raise IndexError(
                    f"Index {value} out of range [0, {dim}) on axis {axis}"
                )
        if free_index is None:
            raise ValueError("No free index found in vector slice.")
        result = []
        for i in range(self._shape.dimension_size(free_index)):
            fixed[free_index] = i
            result.append(self.value(fixed))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        values = ", ".join(str(v) for v in self._values)
        return f"shape: {self._shape}, values: [{values}]"

    def __repr__(self) -> str:
        return f"Tensor({self})"

    def copy(self) -> Tensor:
        """A shallow copy with its own value list."""
        return Tensor._from_parts(self._shape, list(self._values))

    def reshape_in_place(self, replacement_shape: Shape | Iterable[int]) -> None:
        """Give this tensor a new shape with the same number of elements."""
        replacement_shape = _as_shape(replacement_shape)
        if replacement_shape.size != self._shape.size:
            raise ValueError(
                f"Cannot reshape tensor of shape {self._shape} "
                f"({self._shape.size} elements) to shape {replacement_shape} "
                f"({replacement_shape.size} elements)"
            )
        self._shape = replacement_shape

    def reshape(self, replacement_shape: Shape | Iterable[int]) -> Tensor:
        """A copy with a new shape of the same number of elements."""
        result = self.copy()
        result.reshape_in_place(replacement_shape)
        return result

    def validate_squeeze(self, axes: Sequence[int]) -> Shape:
        """The shape squeezing ``axes`` would give; raises if invalid."""
        return squeeze_shape(self._shape, axes)

    def squeeze_in_place(self, axes: Sequence[int] | None = None) -> None:
        """Remove size-one axes: all of them, or only those in ``axes``."""
        if axes is None:
            self.reshape_in_place(squeeze_all_shape(self._shape))
        else:
            self.reshape_in_place(squeeze_shape(self._shape, axes))

    def squeeze(self, axes: Sequence[int] | None = None) -> Tensor:
        """A copy with size-one axes removed; see :meth:`squeeze_in_place`."""
        result = self.copy()
        result.squeeze_in_place(axes)
        return result

    def validate_expand_dims(self, axis: int) -> Shape:
        """The shape expanding at ``axis`` would give; raises if invalid."""
        return expand_dims_shape(self._shape, axis)

    def expand_dims_in_place(self, axis: int) -> None:
        """Insert a dimension of size one at ``axis``."""
        self.reshape_in_place(expand_dims_shape(self._shape, axis))

    def expand_dims(self, axis: int) -> Tensor:
        """A copy with a dimension of size one inserted at ``axis``."""
        result = self.copy()
        result.expand_dims_in_place(axis)
        return result

    def validate_slice(
        self, begin_indices: Sequence[int], sizes: Sequence[int]
    ) -> Shape:
        """The shape of the requested slice; raises if it is out of bounds."""
        return slice_shape(self._shape, begin_indices, sizes)

    def slice(self, begin_indices: Sequence[int], sizes: Sequence[int]) -> Tensor:
        """The rectangular sub-tensor from ``begin_indices`` with ``sizes``."""
        result_shape = slice_shape(self._shape, begin_indices, sizes)
        ranges = (range(b, b + s) for b, s in zip(begin_indices, sizes))
        values = [self.value(index) for index in itertools.product(*ranges)]
        return Tensor._from_parts(result_shape, values)

    def sub_tensor(self, start_index: int, size: int) -> Tensor:
        """Entries whose first index lies in [start_index, start_index + size)."""
        if start_index < 0:
            raise ValueError(
                f"start={start_index} must be nonnegative for SubTensor()."
            )
        output_shape = sub_tensor_shape(self._shape, start_index, size)
        stride = math.prod(self._shape.dimension_sizes[1:])
        first = start_index * stride
        values = self._values[first : first + output_shape.size]
        return Tensor._from_parts(output_shape, values)

    def row(self, index: int, keep_dims: bool = False) -> Tensor:
        """The entries at ``index`` along the first axis.

        With ``keep_dims`` the leading axis of size one is kept.
        """
        result = self.sub_tensor(index, 1)
        if not keep_dims:
            result.squeeze_in_place([0])
        return result


def has_infinite_or_nan(tensor: Tensor) -> bool:
    """True if any element of a numeric tensor is infinite or NaN."""
    return any(not math.isfinite(v) for v in tensor.flat_values)