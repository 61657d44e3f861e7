# tensorkit

`tensorkit` provides small, dependency-free dense tensors for Python. The
elements can be of any type that supports the operations you ask for:
floats, intervals, symbolic expressions and so on. Values are stored in a
single flat list in row-major order.

Invalid shapes, indices and arguments raise `ValueError` (or `IndexError`
for out-of-range indices) with a message explaining what is wrong.

## Installation

```
pip install tensorkit
```

To run the test suite:

```
pip install "tensorkit[test]"
pytest
```

## Shapes

```python
from tensorkit.shape import Shape

shape = Shape([3, 6, 4])
shape.size                       # 72
shape.num_dimensions             # 3
shape.dimension_sizes            # (3, 6, 4)
shape.flatten_index([1, 2, 3])   # 35
shape.expand_index(35)           # (1, 2, 3)
shape.multi_index_is_valid([3, 0, 0])  # False
str(shape)                       # "3,6,4"
Shape()                          # a scalar shape, size 1
```

`Shape.from_vector`, `Shape.from_vector_2d` and `Shape.from_vector_3d` give
the shape of nested lists and raise `ValueError` on ragged input. Shapes
are hashable and compare equal when their dimension sizes are equal.

`tensorkit.tensor_shapes` holds the shape calculations behind the tensor
methods below: `squeeze_all_shape`, `squeeze_shape`, `expand_dims_shape`,
`slice_shape` and `sub_tensor_shape`.

## Tensors

```python
from tensorkit.tensor import Tensor, has_infinite_or_nan

t = Tensor.matrix([[2.0, 3.0, 4.0], [5.0, 6.0, 7.0]])
t.shape                      # Shape([2, 3])
t.size                       # 6
t.value([1, 2])              # 7.0
t.set_value([1, 2], 8.0)
t.flat_values                # [2.0, 3.0, 4.0, 5.0, 6.0, 8.0]
t.slice([0, 1], [2, 2])      # tensor [[3.0, 4.0], [6.0, 8.0]]
t.expand_dims(0)             # shape 1,2,3
t.row(1)                     # tensor [5.0, 6.0, 8.0]
t.row(1, keep_dims=True)     # tensor [[5.0, 6.0, 8.0]]
t.sub_tensor(0, 1)           # tensor [[2.0, 3.0, 4.0]]
t.vector_slice([-1, 0])      # [2.0, 5.0]
t.reshape([3, 2])            # same values, shape 3,2
has_infinite_or_nan(t)       # False
```

Other constructors are `Tensor(shape, fill_value)` (the fill value defaults
to `0.0`, and no shape gives a scalar), `Tensor.scalar`, `Tensor.vector`,
`Tensor.cube` and `Tensor.from_flat_data`. Methods ending in `_in_place`
(`reshape_in_place`, `squeeze_in_place`, `expand_dims_in_place`) modify the
tensor; the others return a new one. `squeeze()` with no axes removes every
dimension of size one.

`validate_squeeze`, `validate_expand_dims` and `validate_slice` return the
shape the operation would produce, or raise `ValueError`.

## Elementwise math and matrix products

```python
from tensorkit.tensor import Tensor
from tensorkit.tensor_math import add, multiply, matmul, elementwise_relu

a = Tensor.matrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
add(a, Tensor.scalar(10.0))                  # broadcasts like NumPy
multiply(a, Tensor.vector([2.0, 4.0, 6.0]))
matmul(a, Tensor.matrix([[10.0, 20.0], [30.0, 40.0], [50.0, 60.0]]))
elementwise_relu(a)
```

`tensorkit.tensor_math` also has `subtract`, `divide`, `elementwise_maximum`,
`elementwise_minimum`, `elementwise_negate` and `elementwise_clipped_relu`.
`binary_op_output_shape` and `matmul_output_shape` compute result shapes
alone. `matmul` needs operands of rank at least two and broadcasts over the
leading dimensions.

The building blocks live in `tensorkit.broadcast`: `unary_elementwise_op`
and `binary_elementwise_op` apply any function (called with the values and
the output flat index), and `Broadcaster` maps result positions back to an
operand.

## Pooling

```python
from tensorkit.shape import Shape
from tensorkit.tensor import Tensor
from tensorkit.window import PaddingType, Position2D
from tensorkit.pooling import max_pool, pool_2d_output_shape

image = Tensor.from_flat_data(Shape([1, 3, 3, 1]), [float(v) for v in range(1, 10)])
max_pool(image, Position2D(2, 2), Position2D(1, 1), PaddingType.VALID)
# shape 1,2,2,1 with values [5.0, 6.0, 8.0, 9.0]
```

Inputs have the layout (batch, height, width, channels). With `SAME`
padding the output height and width are the input's divided by the stride,
rounded up; a window reaching outside the input contributes one zero.
`pool` accepts any function of a window's values and the output flat index.

`tensorkit.window.WindowExtractor2D` computes the windows themselves;
`padding_type_from_string("SAME")` turns a name into a `PaddingType`.

## Reductions and embedding lookups

```python
from tensorkit.reduce import reduce_max, reduce_sum
from tensorkit.embedding_lookup import embedding_lookup

reduce_max(a, [0])          # tensor of column maxima
reduce_sum(a)               # a single value: the sum of every element

weights = Tensor.matrix([[-0.2, -0.1], [-0.3, 0.6], [-1.0, 0.0]])
ids = Tensor.matrix([[0.0, 1.0, 0.0]])
embedding_lookup(weights, ids)   # tensor [[-0.3, 0.6]]
```

`reduce_min`, `reduce_mean` and the general `reduce` work the same way.
Reduction axes must be sorted, must not repeat and must be within the rank.

## Comparing tensors in tests

```python
from tensorkit.tensor_testing import tensor_near, tensor_equals, is_iid_random_normal

result = tensor_near(a, a, 1e-5)
assert result, result.explanation
```

Each comparison returns a `MatchResult`, which is true when the tensors
match and otherwise carries an explanation. `tensor_near` accepts its own
element comparison through `is_near`. `is_iid_random_normal` checks that the
maximum, minimum and sum of a tensor's entries lie where samples from a
normal distribution with the given mean and standard deviation would put
them.

## What it does not do

`tensorkit` is a library only: it has no command-line tool, and it does not
save or load tensors in any file format.