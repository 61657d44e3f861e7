"""Embedding lookup as a weighted sum over embedding rows."""

from __future__ import annotations

import functools
import operator as _op

from tensorkit.shape import Shape
from tensorkit.tensor import Tensor


def embedding_lookup_output_shape(params_shape: Shape, ids_shape: Shape) -> Shape:
    """For params [C, x1..xm] and ids [y1..yn, C], the shape [y1..yn, x1..xm].

    Raises ValueError if either rank is below two or the class counts differ.
    """
    if params_shape.num_dimensions <= 1:
        raise ValueError(
            "Rank of params must be at least two, found: "
            f"{params_shape.num_dimensions}"
        )
    if ids_shape.num_dimensions <= 1:
        raise ValueError(
            f"Rank of ids must be at least two, found: {ids_shape.num_dimensions}"
        )
    if ids_shape.dimension_sizes[-1] != params_shape.dimension_size(0):
        raise ValueError("Incompatible ids and params shapes")
    return Shape(ids_shape.dimension_sizes[:-1] + params_shape.dimension_sizes[1:])


def embedding_lookup(embedding_weights: Tensor, ids: Tensor) -> Tensor:
    """result[i, :] = sum over classes k of weights[k, :] * ids[i, k]."""
    out_shape = embedding_lookup_output_shape(embedding_weights.shape, ids.shape)
    rank_from_ids = ids.shape.num_dimensions - 1
    values = []
    for i in range(out_shape.size):
        coords = list(out_shape.expand_index(i))
        ids_slice = ids.vector_slice(coords[:rank_from_ids] + [-1])
        weight_slice = embedding_weights.vector_slice([-1] + coords[rank_from_ids:])
        products = [w * k for w, k in zip(weight_slice, ids_slice)]
        values.append(functools.reduce(_op.add, products) if products else 0.0)
    return Tensor.from_flat_data(out_shape, values)