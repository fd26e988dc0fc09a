from typing import Any, Union

import jax

Array = jax.Array
Scalar = Union[Array, float]
ArrayLike = Any
