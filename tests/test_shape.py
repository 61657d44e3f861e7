import pytest

from tensorkit.shape import Shape


def test_scalar_dimension_default():
    shape = Shape()
    assert shape.size == 1
    assert shape.num_dimensions == 0
    assert shape.dimension_sizes == ()
    assert shape.flatten_index([]) == 0
    assert shape.expand_index(0) == ()
    assert shape == Shape()
    assert not (shape != Shape())
    assert shape != Shape([3])
    assert not (shape == Shape([3]))


def test_scalar_dimension_empty():
    shape1 = Shape([])
    assert shape1.size == 1
    assert shape1.num_dimensions == 0
    assert shape1 == Shape()


def test_multi_index_is_valid_simple():
    shape = Shape([4, 6, 2])
    assert shape.multi_index_is_valid([0, 0, 0])
    assert shape.multi_index_is_valid([1, 1, 1])
    assert shape.multi_index_is_valid([3, 5, 1])
    assert not shape.multi_index_is_valid([3, 7, 1])
    assert not shape.multi_index_is_valid([3, 5, -1])
    assert not shape.multi_index_is_valid([3, 5, 1, 1])
    assert not shape.multi_index_is_valid([0, 0, 0, 0])
    assert not shape.multi_index_is_valid([0, 0])
    assert not shape.multi_index_is_valid([])


def test_multi_index_is_valid_scalar():
    shape = Shape()
    assert shape.multi_index_is_valid([])
    assert not shape.multi_index_is_valid([0])
    assert not shape.multi_index_is_valid([-1])
    assert not shape.multi_index_is_valid([1])
    assert not shape.multi_index_is_valid([0, 0])


def test_single_dimension():
    shape = Shape([7])
    assert shape.size == 7
    assert shape.num_dimensions == 1
    assert shape.dimension_sizes == (7,)
    for i in range(7):
        assert shape.flatten_index([i]) == i
        assert shape.expand_index(i) == (i,)


def test_single_dimension_size_negative():
    with pytest.raises(ValueError):
        Shape([-3])


@pytest.mark.parametrize("index", [[-2], [7]])
def test_single_dimension_index_out_of_range(index):
    with pytest.raises(IndexError):
        Shape([7]).flatten_index(index)


@pytest.mark.parametrize("index", [[], [1, 2]])
def test_single_dimension_index_wrong_rank(index):
    with pytest.raises(ValueError):
        Shape([7]).flatten_index(index)


def test_second_dimension():
    shape = Shape([7, 5])
    assert shape.size == 35
    assert shape.num_dimensions == 2
    assert shape.dimension_sizes == (7, 5)
    for flat, multi in [
        (0, (0, 0)),
        (1, (0, 1)),
        (4, (0, 4)),
        (5, (1, 0)),
        (9, (1, 4)),
        (34, (6, 4)),
    ]:
        assert shape.flatten_index(multi) == flat
        assert shape.expand_index(flat) == multi


def test_round_trip():
    shape = Shape([3, 6, 4])
    for i in range(shape.size):
        assert shape.flatten_index(shape.expand_index(i)) == i
    for i in range(3):
        for j in range(6):
            for k in range(4):
                assert shape.expand_index(shape.flatten_index([i, j, k])) == (
                    i,
                    j,
                    k,
                )


@pytest.mark.parametrize("index", [[7, 3], [3, 6]])
def test_second_dimension_index_big(index):
    with pytest.raises(IndexError):
        Shape([7, 5]).flatten_index(index)


def test_expand_index_out_of_range():
    with pytest.raises(IndexError):
        Shape([7, 5]).expand_index(35)
    with pytest.raises(IndexError):
        Shape([7, 5]).expand_index(-1)


def test_dimension_size():
    shape = Shape([5, 3, 4])
    assert shape.size == 60
    assert shape.dimension_size(1) == 3


def test_operators_when_equal():
    a = Shape([3, 6, 2])
    b = Shape([3, 6, 2])
    assert a == b
    assert not (a != b)
    assert hash(a) == hash(b)


def test_operators_when_not_equal():
    a = Shape([3, 6, 4])
    b = Shape([3, 6, 2])
    assert not (a == b)
    assert a != b


def test_to_string():
    text = str(Shape([3, 6, 4]))
    assert text == "3,6,4"
    assert "17" not in text


def test_repr_round_trip():
    shape = Shape([3, 6, 4])
    assert "3, 6, 4" in repr(shape)


def test_bad_data_in_middle():
    with pytest.raises(ValueError):
        Shape([5, -2, 4])


def test_overflow():
    with pytest.raises(OverflowError):
        Shape([2**40, 2**40])


def test_from_vector():
    assert Shape.from_vector([100, 3, 1]) == Shape([3])


def test_from_vector_2d():
    assert Shape.from_vector_2d([[100, 3, 1], [0, 0, 0]]) == Shape([2, 3])


def test_from_vector_3d():
    shape = Shape.from_vector_3d(
        [[[100, 3, 1], [0, 0, 0]], [[10, 10, 10], [10, 10, 10]]]
    )
    assert shape == Shape([2, 2, 3])


def test_from_vector_2d_ragged():
    with pytest.raises(ValueError):
        Shape.from_vector_2d([[100, 3, 1], [0, 0]])


def test_from_vector_3d_ragged_columns():
    with pytest.raises(ValueError):
        Shape.from_vector_3d([[[100, 3, 1], [0, 0, 0]], [[10, 10, 10]]])


def test_from_vector_3d_ragged_rows():
    with pytest.raises(ValueError):
        Shape.from_vector_3d(
            [[[100, 3, 1], [0, 0, 0, 0]], [[10, 10, 10], [10, 10, 10]]]
        )