"""Elementwise arithmetic and matrix products on tensors.

Binary operations follow NumPy broadcasting: the shorter shape is padded
with leading ones and each dimension must agree or be one.
"""

from __future__ import annotations

from tensorkit.broadcast import (
    binary_elementwise_op,
    broadcast_pad_if_needed,
    matmul_result_shape,
    max_num_dimensions,
    result_shape,
    unary_elementwise_op,
)
from tensorkit.broadcast import matmul as _matmul
from tensorkit.shape import Shape
from tensorkit.tensor import Tensor


def binary_op_output_shape(left: Shape, right: Shape) -> Shape:
    """The shape of an elementwise binary op; raises ValueError if incompatible."""
    rank = max_num_dimensions(left, right)
    return result_shape(
        broadcast_pad_if_needed(left, rank), broadcast_pad_if_needed(right, rank)
    )


def matmul_output_shape(left: Shape, right: Shape) -> Shape:
    """The shape of a matrix product; raises ValueError if incompatible."""
    for name, shape in (("left", left), ("right", right)):
        if shape.num_dimensions < 2:
            raise ValueError(
                f"MatMul needs {name} shape of rank at least two, found: {shape}"
            )
    rank = max_num_dimensions(left, right)
    return matmul_result_shape(
        broadcast_pad_if_needed(left, rank), broadcast_pad_if_needed(right, rank)
    )


def elementwise_negate(input: Tensor) -> Tensor:
    """Every element negated."""
    return unary_elementwise_op(input, lambda v, _: -v)


def elementwise_relu(input: Tensor) -> Tensor:
    """max(x, 0) of every element."""
    return unary_elementwise_op(input, lambda v, _: max(v, 0.0))


def elementwise_clipped_relu(input: Tensor, cap: float) -> Tensor:
    """min(cap, max(x, 0)) of every element."""
    return unary_elementwise_op(input, lambda v, _: min(cap, max(v, 0.0)))


def add(left: Tensor, right: Tensor) -> Tensor:
    """left + right elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: a + b)


def subtract(left: Tensor, right: Tensor) -> Tensor:
    """left - right elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: a - b)


def multiply(left: Tensor, right: Tensor) -> Tensor:
    """left * right elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: a * b)


def divide(left: Tensor, right: Tensor) -> Tensor:
    """left / right elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: a / b)


def matmul(left: Tensor, right: Tensor) -> Tensor:
    """The (batched) matrix product of left and right."""
    return _matmul(left, right)


def elementwise_maximum(left: Tensor, right: Tensor) -> Tensor:
    """max(left, right) elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: max(a, b))


def elementwise_minimum(left: Tensor, right: Tensor) -> Tensor:
    """min(left, right) elementwise."""
    return binary_elementwise_op(left, right, lambda a, b, _: min(a, b))