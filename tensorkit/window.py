"""Rectangular 2D windows swept over an input, with strides and padding."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PaddingType(enum.Enum):
    """How windows treat the border of the input."""

    SAME = "SAME"
    VALID = "VALID"

    def __str__(self) -> str:
        return self.value


def padding_type_from_string(padding_name: str) -> PaddingType:
    """The padding type named ``padding_name``; raises ValueError if unknown."""
    try:
        return PaddingType(padding_name)
    except ValueError:
        raise ValueError(f"Unknown padding type: {padding_name}") from None


@dataclass(frozen=True)
class Position2D:
    """A (row, col) pair, that is (y, x)."""

    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class Rectangle:
    """A rectangle given by its start position and its size."""

    start: Position2D
    size: Position2D


def _div_round_up(num: int, denom: int) -> int:
    return -(-num // denom)


def _same_padding_size(input_size: int, stride: int, window_size: int) -> int:
    remainder = input_size % stride
    if remainder == 0:
        return max(window_size - stride, 0)
    return max(window_size - remainder, 0)


def _check_positive(
    input_size: Position2D, window_size: Position2D, strides: Position2D
) -> None:
    checks = (
        ("input height", input_size.row),
        ("input width", input_size.col),
        ("window height", window_size.row),
        ("window width", window_size.col),
        ("stride row", strides.row),
        ("stride col", strides.col),
    )
    for name, value in checks:
        if value <= 0:
            raise ValueError(f"Expected {name} > 0, found: {value}")


class WindowExtractor2D:
    """Maps each output position to a window of the input.

    Input sizes, window sizes and strides must be positive; with VALID
    padding the window must fit inside the input.  Construction raises
    ValueError otherwise.
    """

    __slots__ = (
        "_input_size",
        "_window_size",
        "_strides",
        "_padding",
        "_padding_top",
        "_padding_left",
        "_output_size",
    )

    def __init__(
        self,
        input_size: Position2D,
        window_size: Position2D,
        strides: Position2D,
        padding: PaddingType,
    ) -> None:
        _check_positive(input_size, window_size, strides)
        self._input_size = input_size
        self._window_size = window_size
        self._strides = strides
        self._padding = padding

        if padding is PaddingType.SAME:
            pad_height = _same_padding_size(
                input_size.row, strides.row, window_size.row
            )
            pad_width = _same_padding_size(
                input_size.col, strides.col, window_size.col
            )
            self._padding_top = pad_height // 2
            self._padding_left = pad_width // 2
            output = Position2D(
                _div_round_up(input_size.row, strides.row),
                _div_round_up(input_size.col, strides.col),
            )
        else:
            self._padding_top = 0
            self._padding_left = 0
            output = Position2D(
                _div_round_up(input_size.row - window_size.row + 1, strides.row),
                _div_round_up(input_size.col - window_size.col + 1, strides.col),
            )
        if output.row <= 0 or output.col <= 0:
            raise ValueError(
                "Output dimension is nonpositive; window does not fit in input"
            )
        self._output_size = output

    def get_window(self, output_position: Position2D) -> Rectangle:
        """The input window for ``output_position``.

        The window may reach outside the input; those positions are padding.
        """
        if not 0 <= output_position.row < self._output_size.row:
            raise IndexError(
                f"Output row {output_position.row} out of range "
                f"[0, {self._output_size.row})"
            )
        if not 0 <= output_position.col < self._output_size.col:
            raise IndexError(
                f"Output col {output_position.col} out of range "
                f"[0, {self._output_size.col})"
            )
        start = Position2D(
            output_position.row * self._strides.row - self._padding_top,
            output_position.col * self._strides.col - self._padding_left,
        )
        return Rectangle(start, self._window_size)

    def is_padding(self, position: Position2D) -> bool:
        """True if ``position`` lies outside the input."""
        return not (
            0 <= position.row < self._input_size.row
            and 0 <= position.col < self._input_size.col
        )

    @property
    def output_size(self) -> Position2D:
        """The size of the output."""
        return self._output_size

    @property
    def padding(self) -> PaddingType:
        """The padding type in use."""
        return self._padding