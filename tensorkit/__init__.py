"""Dense tensors with broadcasting, pooling, reductions and embedding lookups."""

__version__ = "0.1.0"

__all__ = [
    "broadcast",
    "embedding_lookup",
    "pooling",
    "reduce",
    "shape",
    "tensor",
    "tensor_math",
    "tensor_shapes",
    "tensor_testing",
    "window",
]