__all__ = ["vectorize"]

from functools import wraps
from typing import Any

import jax
import jax.numpy as jnp

from synthlc.light_curves.types import LightCurveFunc
from synthlc.types import Array, Scalar


def vectorize(func: LightCurveFunc) -> LightCurveFunc:
    """Vectorize a scalar light curve function to work with array inputs

    Like ``jax.numpy.vectorize``, this automatically wraps a function which operates on
    a scalar to handle array inputs, but it only broadcasts the first input
    (``time``).

    Args:
        func: A function which takes a scalar time as the first input

    Returns:
        An updated function which can operate on times of any shape
    """

    @wraps(func)
    def wrapped(time: Scalar, *args: Any, **kwargs: Any) -> Array:
        time = jnp.asarray(time)

        def inner(time: Array) -> Array:
            return func(time, *args, **kwargs)

        for _ in time.shape:
            inner = jax.vmap(inner)

        return inner(time)

    return wrapped
