import pytest

from tensorkit.embedding_lookup import (
    embedding_lookup,
    embedding_lookup_output_shape,
)
from tensorkit.shape import Shape
from tensorkit.tensor import Tensor

NUM_LOOKUPS = 3
NUM_CLASSES = 100
EMBEDDING_DIMENSION = 10
BATCH_SIZE = 1

PARAMS_SHAPE = Shape([NUM_CLASSES, EMBEDDING_DIMENSION])
IDS_SHAPE = Shape([BATCH_SIZE, NUM_LOOKUPS, NUM_CLASSES])
RESULT_SHAPE = Shape([BATCH_SIZE, NUM_LOOKUPS, EMBEDDING_DIMENSION])

WEIGHTS = Tensor.matrix([[-0.2, -0.1], [-0.3, 0.6], [-1.0, 0.0]])


def assert_tensor_near(actual, expected, tol=1e-5):
    assert actual.shape == expected.shape
    assert actual.flat_values == pytest.approx(expected.flat_values, abs=tol)


def test_output_shape_simple():
    assert embedding_lookup_output_shape(PARAMS_SHAPE, IDS_SHAPE) == RESULT_SHAPE


def test_output_shape_matrix_out():
    params = Shape([NUM_CLASSES, 10, 10])
    ids = Shape([BATCH_SIZE, NUM_LOOKUPS, NUM_CLASSES])
    expected = Shape([BATCH_SIZE, NUM_LOOKUPS, 10, 10])
    assert embedding_lookup_output_shape(params, ids) == expected


def test_output_shape_multidimensional_input():
    ids = Shape([BATCH_SIZE, 3, 5, NUM_CLASSES])
    expected = Shape([BATCH_SIZE, 3, 5, EMBEDDING_DIMENSION])
    assert embedding_lookup_output_shape(PARAMS_SHAPE, ids) == expected


def test_output_shape_bad_params_rank():
    with pytest.raises(
        ValueError, match="Rank of params must be at least two, found: 1"
    ):
        embedding_lookup_output_shape(Shape([EMBEDDING_DIMENSION]), IDS_SHAPE)


def test_output_shape_bad_ids_rank():
    with pytest.raises(ValueError, match="Rank of ids must be at least two, found: 1"):
        embedding_lookup_output_shape(PARAMS_SHAPE, Shape([NUM_CLASSES]))


def test_output_shape_mismatched():
    ids = Shape([BATCH_SIZE, NUM_LOOKUPS, NUM_CLASSES + 2])
    with pytest.raises(ValueError, match="Incompatible ids and params shapes"):
        embedding_lookup_output_shape(PARAMS_SHAPE, ids)


def test_simple_embedding_one_lookup():
    ids = Tensor.matrix([[1.0, 0.0, 0.0]])
    assert_tensor_near(embedding_lookup(WEIGHTS, ids), Tensor.matrix([[-0.2, -0.1]]))


def test_simple_embedding_two_lookups():
    ids = Tensor.matrix([[0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    expected = Tensor.matrix([[-0.3, 0.6], [-1.0, 0.0]])
    assert_tensor_near(embedding_lookup(WEIGHTS, ids), expected)


def test_mixed_ids_weighted_sum():
    ids = Tensor.matrix([[0.5, 0.5, 0.0]])
    expected = Tensor.matrix([[-0.25, 0.25]])
    assert_tensor_near(embedding_lookup(WEIGHTS, ids), expected)


def test_lookup_bad_shapes_raise():
    ids = Tensor.matrix([[1.0, 0.0]])
    with pytest.raises(ValueError, match="Incompatible ids and params shapes"):
        embedding_lookup(WEIGHTS, ids)