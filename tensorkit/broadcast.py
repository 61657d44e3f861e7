"""NumPy-style broadcasting shared by the elementwise and matmul operations."""

from __future__ import annotations

import enum
import functools
import operator as _op
from collections.abc import Callable
from typing import Any

from tensorkit.shape import Shape
from tensorkit.tensor import Tensor

UnaryOperator = Callable[[Any, int], Any]
BinaryOperator = Callable[[Any, Any, int], Any]


class MultiplicationPosition(enum.Enum):
    """Which side of a matrix product an operand is on."""

    LEFT = "left"
    RIGHT = "right"


def broadcast_pad_if_needed(shape: Shape, target_num_dimensions: int) -> Shape:
    """Pad ``shape`` with leading ones up to ``target_num_dimensions``."""
    missing = target_num_dimensions - shape.num_dimensions
    if missing > 0:
        return Shape((1,) * missing + shape.dimension_sizes)
    return shape


def max_num_dimensions(shape_left: Shape, shape_right: Shape) -> int:
    """The larger of the two ranks."""
    return max(shape_left.num_dimensions, shape_right.num_dimensions)


def _check_same_rank(padded_left: Shape, padded_right: Shape) -> None:
    if padded_left.num_dimensions != padded_right.num_dimensions:
        raise ValueError(
            f"Padded shapes must have equal rank, found left: {padded_left} "
            f"and right: {padded_right}"
        )


def result_shape(padded_left: Shape, padded_right: Shape) -> Shape:
    """The broadcast shape of two padded shapes of equal rank.

    Raises ValueError if the shapes are incompatible.
    """
    _check_same_rank(padded_left, padded_right)
    sizes = []
    for i, (a, b) in enumerate(
        zip(padded_left.dimension_sizes, padded_right.dimension_sizes)
    ):
        if a != 1 and b != 1 and a != b:
            raise ValueError(
                f"Incompatible shapes left: {padded_left} and right: "
                f"{padded_right} at index: {i}"
            )
        sizes.append(max(a, b))
    return Shape(sizes)


def matmul_result_shape(padded_left: Shape, padded_right: Shape) -> Shape:
    """The shape of a batched matrix product of two padded shapes.

    Leading dimensions broadcast; the last two multiply as matrices.
    Raises ValueError if the shapes are incompatible.
    """
    _check_same_rank(padded_left, padded_right)
    rank = padded_left.num_dimensions
    if rank < 2:
        raise ValueError(
            f"Matrix multiplication needs rank at least two, found: {rank}"
        )
    sizes = []
    for i in range(rank - 2):
        left_size = padded_left.dimension_size(i)
        right_size = padded_right.dimension_size(i)
        if left_size != 1 and right_size != 1 and left_size != right_size:
            raise ValueError(
                f"Incompatible shapes a: {padded_left} and b: {padded_right} "
                f"at index: {i}"
            )
        sizes.append(max(left_size, right_size))
    left_height, left_width = padded_left.dimension_sizes[-2:]
    right_height, right_width = padded_right.dimension_sizes[-2:]
    if left_width != right_height:
        raise ValueError(
            f"Incompatible shapes left: {padded_left} and right: {padded_right} "
            f"last dimension of left={left_width} does not agree with next to "
            f"last dimension of right={right_height}"
        )
    sizes.extend((left_height, right_width))
    return Shape(sizes)


class Broadcaster:
    """Relates elements of a broadcast result to elements of one operand."""

    __slots__ = ("_true_shape", "_padded_shape", "_broadcast_shape")

    def __init__(
        self, true_shape: Shape, padded_true_shape: Shape, broadcast_shape: Shape
    ) -> None:
        self._true_shape = true_shape
        self._padded_shape = padded_true_shape
        self._broadcast_shape = broadcast_shape

    def _padded_multi_index(self, broadcast_index: int) -> list[int]:
        multi_index = self._broadcast_shape.expand_index(broadcast_index)
        return [
            0 if dim == 1 else value
            for value, dim in zip(multi_index, self._padded_shape.dimension_sizes)
        ]

    def broadcast_index_to_true_index(self, broadcast_index: int) -> int:
        """The operand's flat index behind result flat index ``broadcast_index``."""
        return self._padded_shape.flatten_index(
            self._padded_multi_index(broadcast_index)
        )

    def broadcast_index_to_matmul_slice_arg(
        self, broadcast_index: int, mult_pos: MultiplicationPosition
    ) -> list[int]:
        """The vector-slice argument picking the operand's row or column.

        The free axis is marked by -1, and padding axes are dropped.
        """
        multi_index = self._padded_multi_index(broadcast_index)
        if mult_pos is MultiplicationPosition.LEFT:
            multi_index[-1] = -1
        elif mult_pos is MultiplicationPosition.RIGHT:
            multi_index[-2] = -1
        else:
            raise ValueError(f"Unknown multiplication position: {mult_pos!r}")
        padding = self._padded_shape.num_dimensions - self._true_shape.num_dimensions
        if padding > 0:
            if padding >= len(multi_index):
                raise ValueError(
                    f"Padding of {padding} leaves nothing of index {multi_index}"
                )
            del multi_index[:padding]
        return multi_index


def unary_elementwise_op(input: Tensor, operator: UnaryOperator) -> Tensor:
    """Apply ``operator(value, flat_index)`` to every element."""
    values = [operator(v, i) for i, v in enumerate(input.flat_values)]
    return Tensor.from_flat_data(input.shape, values)


def _padded_shapes(left: Tensor, right: Tensor) -> tuple[Shape, Shape]:
    rank = max_num_dimensions(left.shape, right.shape)
    return (
        broadcast_pad_if_needed(left.shape, rank),
        broadcast_pad_if_needed(right.shape, rank),
    )


def binary_elementwise_op(
    left: Tensor, right: Tensor, operator: BinaryOperator
) -> Tensor:
    """Apply ``operator(left_value, right_value, flat_index)`` with broadcasting.

    Raises ValueError if the shapes do not broadcast.
    """
    padded_left, padded_right = _padded_shapes(left, right)
    out_shape = result_shape(padded_left, padded_right)
    broadcast_left = Broadcaster(left.shape, padded_left, out_shape)
    broadcast_right = Broadcaster(right.shape, padded_right, out_shape)
    left_values = left.flat_values
    right_values = right.flat_values
    values = [
        operator(
            left_values[broadcast_left.broadcast_index_to_true_index(i)],
            right_values[broadcast_right.broadcast_index_to_true_index(i)],
            i,
        )
        for i in range(out_shape.size)
    ]
    return Tensor.from_flat_data(out_shape, values)


def matmul(left: Tensor, right: Tensor) -> Tensor:
    """Batched matrix product with broadcasting over leading dimensions.

    Both operands need rank at least two.  Raises ValueError otherwise
    or when the shapes are incompatible.
    """
    for name, tensor in (("left", left), ("right", right)):
        if tensor.shape.num_dimensions < 2:
            raise ValueError(
                f"MatMul needs {name} operand of rank at least two, found "
                f"shape: {tensor.shape}"
            )
    padded_left, padded_right = _padded_shapes(left, right)
    out_shape = matmul_result_shape(padded_left, padded_right)
    broadcast_left = Broadcaster(left.shape, padded_left, out_shape)
    broadcast_right = Broadcaster(right.shape, padded_right, out_shape)
    values = []
    for i in range(out_shape.size):
        left_row = left.vector_slice(
            broadcast_left.broadcast_index_to_matmul_slice_arg(
                i, MultiplicationPosition.LEFT
            )
        )
        right_col = right.vector_slice(
            broadcast_right.broadcast_index_to_matmul_slice_arg(
                i, MultiplicationPosition.RIGHT
            )
        )
        if len(left_row) != len(right_col):
            raise ValueError(
                f"Row of length {len(left_row)} cannot multiply column of "
                f"length {len(right_col)}"
            )
        products = [a * b for a, b in zip(left_row, right_col)]
        values.append(functools.reduce(_op.add, products) if products else 0.0)
    return Tensor.from_flat_data(out_shape, values)