import pytest

from tensorkit.shape import Shape
from tensorkit.tensor_shapes import (
    expand_dims_shape,
    slice_shape,
    squeeze_all_shape,
    squeeze_shape,
    sub_tensor_shape,
)


def test_squeeze_all_basic():
    assert squeeze_all_shape(Shape([1, 3, 1, 1])) == Shape([3])


def test_squeeze_all_to_scalar():
    assert squeeze_all_shape(Shape([1, 1, 1])) == Shape()


def test_squeeze_all_preserves_size():
    shape = Shape([1, 4, 1, 2, 1])
    result = squeeze_all_shape(shape)
    assert result.size == shape.size
    assert 1 not in result.dimension_sizes


@pytest.mark.parametrize(
    "axes, expected",
    [
        ([2, 3], [1, 3]),
        ([0, 3], [3, 1]),
        ([0, 2, 3], [3]),
        ([0], [3, 1, 1]),
    ],
)
def test_squeeze_on_axes(axes, expected):
    assert squeeze_shape(Shape([1, 3, 1, 1]), axes) == Shape(expected)


def test_squeeze_empty_axes():
    with pytest.raises(ValueError) as info:
        squeeze_shape(Shape([1, 3, 1, 1]), [])
    assert str(info.value) == "Cannot call Squeeze(axes) with an empty axes list."


@pytest.mark.parametrize("axes", [[5], [0, 5], [-1]])
def test_squeeze_axis_out_of_range(axes):
    with pytest.raises(ValueError, match="all squeezed axes must fall in"):
        squeeze_shape(Shape([1, 3, 1, 1]), axes)


@pytest.mark.parametrize("axes", [[1], [0, 1]])
def test_squeeze_axis_not_size_one(axes):
    with pytest.raises(
        ValueError, match="all squeezed axes must have dimension size of 1"
    ):
        squeeze_shape(Shape([1, 3, 1, 1]), axes)


@pytest.mark.parametrize(
    "axis, expected", [(0, [1, 2, 3]), (1, [2, 1, 3]), (2, [2, 3, 1])]
)
def test_expand_dims(axis, expected):
    assert expand_dims_shape(Shape([2, 3]), axis) == Shape(expected)


@pytest.mark.parametrize("axis", [-1, 3])
def test_expand_dims_bad_axis(axis):
    with pytest.raises(ValueError, match="To call ExpandDims on a tensor"):
        expand_dims_shape(Shape([2, 3]), axis)


def test_expand_then_squeeze_round_trip():
    shape = Shape([4, 2, 5])
    for axis in range(shape.num_dimensions + 1):
        assert squeeze_shape(expand_dims_shape(shape, axis), [axis]) == shape


@pytest.mark.parametrize(
    "begin, sizes",
    [([0, 0], [2, 3]), ([0, 0], [1, 1]), ([1, 2], [1, 1]), ([1, 0], [0, 0])],
)
def test_slice_valid(begin, sizes):
    assert slice_shape(Shape([2, 3]), begin, sizes) == Shape(sizes)


def test_slice_begin_wrong_rank():
    with pytest.raises(ValueError, match="begin_indices has 3 dimensions != 2"):
        slice_shape(Shape([2, 3]), [0, 0, 0], [1, 1])


def test_slice_sizes_wrong_rank():
    with pytest.raises(ValueError, match="sizes has 1 dimensions != 2"):
        slice_shape(Shape([2, 3]), [0, 0], [1])


@pytest.mark.parametrize("begin, sizes", [([0, -1], [1, 1]), ([0, 0], [1, -1])])
def test_slice_negative(begin, sizes):
    with pytest.raises(ValueError, match="must be nonnegative"):
        slice_shape(Shape([2, 3]), begin, sizes)


@pytest.mark.parametrize("begin, sizes", [([0, 0], [4, 3]), ([0, 2], [1, 2])])
def test_slice_out_of_bounds(begin, sizes):
    with pytest.raises(
        ValueError, match="requesting out of bounds indices in tensor slice"
    ):
        slice_shape(Shape([2, 3]), begin, sizes)


def test_sub_tensor_range():
    assert sub_tensor_shape(Shape([3, 2]), 1, 2) == Shape([2, 2])
    assert sub_tensor_shape(Shape([3, 2]), 0, 3) == Shape([3, 2])


def test_sub_tensor_keeps_trailing_dims():
    shape = Shape([5, 4, 2])
    result = sub_tensor_shape(shape, 2, 1)
    assert result.dimension_sizes[1:] == shape.dimension_sizes[1:]
    assert result.dimension_size(0) == 1


def test_sub_tensor_scalar():
    with pytest.raises(ValueError, match="cannot be called on scalars"):
        sub_tensor_shape(Shape(), 0, 1)


def test_sub_tensor_out_of_bounds():
    with pytest.raises(ValueError, match="exceeds first dimension of tensor"):
        sub_tensor_shape(Shape([3]), 1, 3)