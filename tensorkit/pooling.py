"""2D pooling over tensors of shape (batch, height, width, channels)."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from typing import Any

from tensorkit.shape import Shape
from tensorkit.tensor import Tensor
from tensorkit.window import PaddingType, Position2D, WindowExtractor2D

PoolOperator = Callable[[Sequence[Any], int], Any]


def _extractor(
    input_shape: Shape,
    window_size: Position2D,
    strides: Position2D,
    padding: PaddingType,
) -> WindowExtractor2D:
    if input_shape.num_dimensions != 4:
        raise ValueError(
            "Expected input to be rank four, with shape (batch, height, "
            f"width, channels), but had shape: {input_shape}"
        )
    return WindowExtractor2D(
        Position2D(input_shape.dimension_size(1), input_shape.dimension_size(2)),
        window_size,
        strides,
        padding,
    )


def pool_2d_output_shape(
    input_shape: Shape,
    window_size: Position2D,
    strides: Position2D,
    padding: PaddingType,
) -> Shape:
    """The output shape of pooling; raises ValueError on bad arguments."""
    extractor = _extractor(input_shape, window_size, strides, padding)
    return Shape(
        [
            input_shape.dimension_size(0),
            extractor.output_size.row,
            extractor.output_size.col,
            input_shape.dimension_size(3),
        ]
    )


def pool(
    input: Tensor,
    window_size: Position2D,
    strides: Position2D,
    padding: PaddingType,
    element_operator: PoolOperator,
) -> Tensor:
    """Apply ``element_operator`` to every window of ``input``.

    The operator receives the window's values and the output flat index.
    Padding contributes a single zero to a window that reaches outside
    the input.
    """
    padding_value = 0.0
    extractor = _extractor(input.shape, window_size, strides, padding)
    output_shape = pool_2d_output_shape(input.shape, window_size, strides, padding)
    batch, height, width, channels = output_shape.dimension_sizes
    values = []
    for flat_index, (b, oy, ox, c) in enumerate(
        itertools.product(range(batch), range(height), range(width), range(channels))
    ):
        rectangle = extractor.get_window(Position2D(oy, ox))
        window = []
        padding_found = False
        for iy in range(rectangle.start.row, rectangle.start.row + rectangle.size.row):
            for ix in range(
                rectangle.start.col, rectangle.start.col + rectangle.size.col
            ):
                if not extractor.is_padding(Position2D(iy, ix)):
                    window.append(input.value((b, iy, ix, c)))
                elif not padding_found:
                    window.append(padding_value)
                    padding_found = True
        values.append(element_operator(window, flat_index))
    return Tensor.from_flat_data(output_shape, values)


def max_pool(
    input: Tensor,
    window_size: Position2D,
    strides: Position2D,
    padding: PaddingType,
) -> Tensor:
    """The maximum of every window of ``input``."""
    return pool(input, window_size, strides, padding, lambda window, _: max(window))