"""Reductions of tensors along chosen axes."""

from __future__ import annotations

import functools
import operator as _op
from collections.abc import Callable, Sequence
from typing import Any

from tensorkit.shape import Shape
from tensorkit.tensor import Tensor

ReduceOperator = Callable[[Sequence[Any], int], Any]


def reduce_output_shape(input_shape: Shape, axes: Sequence[int]) -> Shape:
    """The shape left after reducing ``input_shape`` along ``axes``.

    ``axes`` must be sorted, free of duplicates and within the rank;
    raises ValueError otherwise.
    """
    rank = input_shape.num_dimensions
    previous = None
    for i, axis in enumerate(axes):
        if previous is not None and axis <= previous:
            raise ValueError(
                f"axes vector is not sorted or contains duplicates at index {i}."
            )
        if not 0 <= axis < rank:
            raise ValueError(
                f"axis={axis} should have been in[0..rank(input)={rank})."
            )
        previous = axis
    removed = set(axes)
    return Shape(
        size
        for d, size in enumerate(input_shape.dimension_sizes)
        if d not in removed
    )


def _input_slice(
    input: Tensor, axes: Sequence[int], output_shape: Shape, flat_index: int
) -> Tensor:
    """The block of ``input`` that reduces to output element ``flat_index``."""
    kept = iter(output_shape.expand_index(flat_index))
    reduced = set(axes)
    begins = []
    sizes = []
    for d, dim in enumerate(input.shape.dimension_sizes):
        if d in reduced:
            begins.append(0)
            sizes.append(dim)
        else:
            begins.append(next(kept))
            sizes.append(1)
    return input.slice(begins, sizes)


def reduce(
    input: Tensor, axes: Sequence[int], reduce_operator: ReduceOperator
) -> Tensor:
    """Reduce ``input`` along ``axes`` with ``reduce_operator``.

    The operator receives the values of one block and the output flat index.
    """
    axes = list(axes)
    output_shape = reduce_output_shape(input.shape, axes)
    values = [
        reduce_operator(_input_slice(input, axes, output_shape, i).flat_values, i)
        for i in range(output_shape.size)
    ]
    return Tensor.from_flat_data(output_shape, values)


def _sum(values: Sequence[Any]) -> Any:
    if not values:
        return 0.0
    return functools.reduce(_op.add, values)


def _mean(values: Sequence[Any]) -> Any:
    if not values:
        raise ValueError("Cannot take the mean of no values.")
    return _sum(values) / len(values)


def _reduce_with(
    input: Tensor, axes: Sequence[int] | None, fold: Callable[[Sequence[Any]], Any]
) -> Any:
    if axes is None:
        all_axes = range(input.shape.num_dimensions)
        return reduce(input, all_axes, lambda values, _: fold(values)).flat_value(0)
    return reduce(input, axes, lambda values, _: fold(values))


def reduce_max(input: Tensor, axes: Sequence[int] | None = None) -> Any:
    """Maximum along ``axes``; with no axes, the maximum of all elements."""
    return _reduce_with(input, axes, max)


def reduce_min(input: Tensor, axes: Sequence[int] | None = None) -> Any:
    """Minimum along ``axes``; with no axes, the minimum of all elements."""
    return _reduce_with(input, axes, min)


def reduce_mean(input: Tensor, axes: Sequence[int] | None = None) -> Any:
    """Mean along ``axes``; with no axes, the mean of all elements."""
    return _reduce_with(input, axes, _mean)


def reduce_sum(input: Tensor, axes: Sequence[int] | None = None) -> Any:
    """Sum along ``axes``; with no axes, the sum of all elements."""
    return _reduce_with(input, axes, _sum)