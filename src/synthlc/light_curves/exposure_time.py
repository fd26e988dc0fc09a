__all__ = ["integrate"]

from functools import wraps
from typing import Any

import jax
import jax.numpy as jnp

from synthlc.light_curves.types import LightCurveFunc
from synthlc.light_curves.utils import vectorize
from synthlc.types import Array, Scalar


def integrate(
    func: LightCurveFunc,
    exposure_time: Scalar | None = None,
    order: int = 0,
    num_samples: int = 7,
) -> LightCurveFunc:
    """Integrate a light curve function over a finite exposure time

    Each output is the stencil-weighted mean of ``func`` evaluated at
    ``num_samples`` times spanning the exposure centered on the input time.

    Args:
        func: A light curve function taking the time [days] as its first argument
        exposure_time: The length of each exposure [days]. If ``None``, ``func`` is
            returned unchanged.
        order: The integration rule: 0 for midpoints, 1 for the trapezoid rule, and 2
            for Simpson's rule
        num_samples: The number of evaluations per exposure; rounded up to an odd
            number

    Returns:
        The integrated light curve function, which accepts times of any shape
    """
    if exposure_time is None:
        return func

    if jnp.ndim(exposure_time) != 0:
        raise ValueError(
            "The exposure time passed to 'integrate' has shape "
            f"{jnp.shape(exposure_time)}, but a scalar was expected; "
            "To use exposure time integration with different exposures at different "
            "times, manually 'vmap' or 'vectorize' the function"
        )

    # Ensure 'num_samples' is an odd number
    num_samples = int(num_samples)
    num_samples += 1 - num_samples % 2
    stencil = jnp.ones(num_samples)

    # Construct exposure time integration stencil
    if order == 0:
        dt = jnp.linspace(-0.5, 0.5, 2 * num_samples + 1)[1:-1:2]
    elif order == 1:
        dt = jnp.linspace(-0.5, 0.5, num_samples)
        stencil = 2 * stencil
        stencil = stencil.at[0].set(1)
        stencil = stencil.at[-1].set(1)
    elif order == 2:
        dt = jnp.linspace(-0.5, 0.5, num_samples)
        stencil = stencil.at[1:-1:2].set(4)
        stencil = stencil.at[2:-1:2].set(2)
    else:
        raise ValueError("The parameter 'order' in 'integrate' must be 0, 1, or 2")
    dt = dt * exposure_time
    stencil /= jnp.sum(stencil)

    @wraps(func)
    @vectorize
    def wrapped(time: Scalar, *args: Any, **kwargs: Any) -> Array:
        values = jax.vmap(lambda t: func(t, *args, **kwargs))(time + dt)
        return jnp.tensordot(stencil, values, axes=1)

    return wrapped
