"""Output shapes of tensor reshaping and slicing operations."""

from __future__ import annotations

from collections.abc import Sequence

from tensorkit.shape import Shape


def squeeze_all_shape(input_shape: Shape) -> Shape:
    """The shape with every dimension of size one removed."""
    return Shape(d for d in input_shape.dimension_sizes if d != 1)


def squeeze_shape(input_shape: Shape, axes: Sequence[int]) -> Shape:
    """The shape with the listed size-one axes removed.

    Raises ValueError if ``axes`` is empty, holds an axis out of range,
    or names an axis whose size is not one.
    """
    axes = list(axes)
    if not axes:
        raise ValueError("Cannot call Squeeze(axes) with an empty axes list.")
    rank = input_shape.num_dimensions
    axes_text = ", ".join(str(a) for a in axes)
    for axis in axes:
        if not 0 <= axis < rank:
            raise ValueError(
                f"Cannot squeeze shape {input_shape} on axes: [{axes_text}], "
                f"all squeezed axes must fall in [0, {rank}), "
                f"but found axis: {axis}"
            )
        if input_shape.dimension_size(axis) != 1:
            raise ValueError(
                f"Cannot squeeze shape {input_shape} on axes: [{axes_text}], "
                "all squeezed axes must have dimension size of 1, "
                f"but dimension size of axis {axis} is "
                f"{input_shape.dimension_size(axis)}"
            )
    removed = set(axes)
    return Shape(
        size
        for d, size in enumerate(input_shape.dimension_sizes)
        if d not in removed
    )


def expand_dims_shape(input_shape: Shape, axis: int) -> Shape:
    """The shape with a dimension of size one inserted at ``axis``."""
    rank = input_shape.num_dimensions
    if not 0 <= axis <= rank:
        raise ValueError(
            f"To call ExpandDims on a tensor of shape: {input_shape}, "
            f"axis must lie in [0, {rank}], but found: {axis}"
        )
    sizes = list(input_shape.dimension_sizes)
    sizes.insert(axis, 1)
    return Shape(sizes)


def slice_shape(
    input_shape: Shape, begin_indices: Sequence[int], sizes: Sequence[int]
) -> Shape:
    """The shape of the slice starting at ``begin_indices`` with ``sizes``.

    Raises ValueError when the slice is not within the input shape.
    """
    rank = input_shape.num_dimensions
    if len(begin_indices) != rank:
        raise ValueError(
            f"begin_indices has {len(begin_indices)} dimensions != {rank} "
            "dimensions on input_dimension."
        )
    if len(sizes) != rank:
        raise ValueError(
            f"sizes has {len(sizes)} dimensions != {rank} "
            "dimensions on input_dimension."
        )
    for d, (begin, size, dim) in enumerate(
        zip(begin_indices, sizes, input_shape.dimension_sizes)
    ):
        if begin < 0:
            raise ValueError(
                f"begin_indices[{d}] = {begin} < 0, must be nonnegative."
            )
        if size < 0:
            raise ValueError(f"sizes[{d}] = {size} < 0, must be nonnegative.")
        if begin + size > dim:
            raise ValueError(
                f"begin_indices[{d}] + sizes[{d}] = {begin + size} > "
                f"input_dimension[{d}] = {dim} requesting out of bounds "
                "indices in tensor slice."
            )
    return Shape(sizes)


def sub_tensor_shape(input_shape: Shape, start: int, size: int) -> Shape:
    """The shape of ``size`` entries along the first axis from ``start``."""
    if input_shape.num_dimensions < 1:
        raise ValueError("SubTensor() cannot be called on scalars.")
    if input_shape.dimension_size(0) < start + size:
        raise ValueError(
            f"start={start} + size= {size} exceeds first dimension of tensor "
            f"with shape: {input_shape}"
        )
    sizes = list(input_shape.dimension_sizes)
    sizes[0] = size
    return Shape(sizes)