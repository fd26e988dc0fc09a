__all__ = ["get_dtype_eps", "is_concrete", "safe_arccos", "zero_safe_sqrt"]

import jax
import jax.numpy as jnp


def get_dtype_eps(x):
    return jnp.finfo(jax.dtypes.result_type(x)).eps


def is_concrete(*args) -> bool:
    """Check whether all arguments can be inspected on the host"""
    return not any(isinstance(arg, jax.core.Tracer) for arg in args)


@jax.custom_jvp
def zero_safe_sqrt(x):
    return jnp.sqrt(jnp.maximum(x, 0))


@zero_safe_sqrt.defjvp
def zero_safe_sqrt_jvp(primals, tangents):
    (x,) = primals
    (x_dot,) = tangents
    primal_out = jnp.sqrt(jnp.maximum(x, 0))
    cond = jnp.less(x, 10 * get_dtype_eps(x))
    denom = jnp.where(cond, jnp.ones_like(x), primal_out)
    tangent_out = jnp.where(cond, jnp.zeros_like(x), 0.5 * x_dot / denom)
    return primal_out, tangent_out


def safe_arccos(x):
    """The inverse cosine with its argument clipped to ``[-1, 1]``

    Roundoff at the ingress/egress boundaries can push the argument slightly
    outside of the valid range; the gradient is zero outside of the range.
    """
    one = jnp.ones_like(x)
    inside = jnp.less(jnp.abs(x), one)
    x_ = jnp.where(inside, x, jnp.zeros_like(x))
    return jnp.where(inside, jnp.arccos(x_), jnp.where(x > 0, 0.0, jnp.pi))
