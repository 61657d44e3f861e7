"""Comparisons of tensors for use in tests."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tensorkit.shape import Shape
from tensorkit.tensor import Tensor

NearFunction = Callable[[Any, Any, float], "str | None"]


@dataclass(frozen=True)
class MatchResult:
    """The outcome of a comparison, with an explanation when it fails."""

    matches: bool
    explanation: str = ""

    def __bool__(self) -> bool:
        return self.matches


def numeric_difference(left: Any, right: Any, tolerance: float) -> str | None:
    """None if ``left`` and ``right`` are within ``tolerance``, else a message."""
    diff = abs(left - right)
    if diff > tolerance:
        return (
            f"Expected left: {left} and {right} to be within tolerance "
            f"{tolerance}, but difference was {diff}"
        )
    return None


def tensor_near(
    lhs: Tensor,
    rhs: Tensor,
    tolerance: float = 1e-5,
    is_near: NearFunction = numeric_difference,
) -> MatchResult:
    """Whether the tensors have equal shapes and elements within ``tolerance``.

    ``is_near(left, right, tolerance)`` returns None for a close pair and
    a message describing the difference otherwise.
    """
    if lhs.shape != rhs.shape:
        return MatchResult(
            False,
            f"Tensors should have same shapes, but on left found {lhs.shape} "
            f"and on right found {rhs.shape}",
        )
    errors = []
    for i, (left_value, right_value) in enumerate(
        zip(lhs.flat_values, rhs.flat_values)
    ):
        error = is_near(left_value, right_value, tolerance)
        if error is not None:
            position = ", ".join(str(p) for p in lhs.shape.expand_index(i))
            errors.append(f"At [{position}]: {error}")
    if errors:
        return MatchResult(False, "; ".join(errors))
    return MatchResult(True)


def tensor_equals(lhs: Tensor, rhs: Tensor) -> MatchResult:
    """Whether the tensors have equal shapes and exactly equal elements."""
    return tensor_near(lhs, rhs, 0.0)


def _point_in_range(
    point: float, center: float, half_width: float, name: str
) -> str | None:
    if point > center + half_width:
        return (
            f"Expected {name} to be at most: {center + half_width}, "
            f"but found: {point}"
        )
    if point < center - half_width:
        return (
            f"Expected {name} to be at least: {center - half_width}, "
            f"but found: {point}"
        )
    return None


def is_iid_random_normal(
    tensor: Tensor, shape: Shape, mean: float, stddev: float
) -> MatchResult:
    """Whether ``tensor`` looks like iid Normal(mean, stddev) draws of ``shape``.

    Checks that the maximum, minimum and sum of the entries lie in their
    typical ranges; iid normal input passes with probability about 0.9999.
    """
    if tensor.shape != shape:
        return MatchResult(
            False, f"Expected shape: {shape}, but found shape: {tensor.shape}"
        )
    n = tensor.size
    if n == 0:
        return MatchResult(True)
    flat = tensor.flat_values
    spread = stddev * math.sqrt(2 * math.log(n))
    width = (4 if n < 10 else 2) * stddev
    sum_stddev = math.sqrt(n * stddev * stddev)
    checks = (
        (max(flat), mean + spread, width, "max"),
        (min(flat), mean - spread, width, "min"),
        (math.fsum(flat), n * mean, 4 * sum_stddev, "sum"),
    )
    for point, center, half_width, name in checks:
        error = _point_in_range(point, center, half_width, name)
        if error is not None:
            return MatchResult(False, error)
    return MatchResult(True)