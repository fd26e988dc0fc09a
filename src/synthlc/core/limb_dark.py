"""This module provides the stellar surface brightness profile for the four parameter
nonlinear limb darkening law of `Claret (2000)
<https://ui.adsabs.harvard.edu/abs/2000A%26A...363.1081C>`_, and the radial integrals
of that profile that are needed to compute the flux blocked by a transiting planet.

The intensity at the normalized radius :math:`r` on the stellar disk is

.. math::

    I(r) = 1 - \\sum_{n=1}^4 c_n\\,(1 - \\mu^{n/2}),\\quad \\mu = \\sqrt{1 - r^2}

and, with :math:`c_0 = 1 - c_1 - c_2 - c_3 - c_4`, the disk-integrated intensity is
:math:`4\\pi\\Omega` where :math:`\\Omega = \\sum_{n=0}^4 c_n / (n + 4)`.
"""

__all__ = [
    "DEFAULT_QUADRATURE_ORDER",
    "DEFAULT_STEP",
    "INTEGRATION_METHODS",
    "CumulativeIntensity",
    "annulus_mean",
    "check_integration_config",
    "coefficient_vector",
    "integrated_intensity",
    "integrator",
    "intensity",
    "omega",
]

from collections.abc import Callable

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np
from scipy.special import roots_legendre

from synthlc.errors import DomainError
from synthlc.types import Array, ArrayLike
from synthlc.utils import is_concrete

# The radial step of the fixed-step integrators. Both the accuracy and the cost of
# a light curve scale with this value: the rectangle rule overshoots its upper bound
# by up to one step, so the bias in the blocked flux is O(DEFAULT_STEP), while the
# number of intensity evaluations per timestamp is O(1 / DEFAULT_STEP).
DEFAULT_STEP = 1e-3
DEFAULT_QUADRATURE_ORDER = 20
INTEGRATION_METHODS = ("rectangle", "table", "quadrature")


def coefficient_vector(u: ArrayLike) -> Array:
    """Build the 5-element coefficient vector from the 4 limb darkening coefficients

    Args:
        u (Array): The coefficients ``c1, c2, c3, c4`` of the nonlinear law

    Returns:
        The array ``[1 - c1 - c2 - c3 - c4, c1, c2, c3, c4]``

    Raises:
        ValueError: If ``u`` does not contain exactly 4 coefficients
    """
    u = jnp.asarray(u)
    if u.shape != (4,):
        raise ValueError(
            "The nonlinear limb darkening law requires exactly 4 coefficients, "
            f"but an array with shape {u.shape} was provided"
        )
    return jnp.concatenate([1 - jnp.sum(u, keepdims=True), u])


def omega(coeffs: ArrayLike) -> Array:
    """The normalization constant for the 5-element coefficient vector"""
    coeffs = jnp.asarray(coeffs)
    if coeffs.shape[-1:] != (5,):
        raise ValueError(
            "'omega' expects the 5-element coefficient vector built by "
            f"'coefficient_vector', but got shape {coeffs.shape}"
        )
    n = jnp.arange(5)
    return jnp.sum(coeffs / (n + 4.0), axis=-1)


def intensity(r: ArrayLike, u: ArrayLike) -> Array:
    """The relative surface brightness at the normalized radius ``r``

    The result is not normalized; see :func:`omega` for the disk-integrated value.

    Args:
        r (Array): The normalized radius on the stellar disk, in ``[0, 1]``
        u (Array): The coefficients ``c1, c2, c3, c4`` of the nonlinear law

    Raises:
        DomainError: If ``r`` is outside of the stellar disk
        ValueError: If ``u`` does not contain exactly 4 coefficients
    """
    u = jnp.asarray(u)
    if u.shape != (4,):
        raise ValueError(
            "The nonlinear limb darkening law requires exactly 4 coefficients, "
            f"but an array with shape {u.shape} was provided"
        )
    if is_concrete(r):
        r_ = np.asarray(r)
        if np.any(r_ < 0) or np.any(r_ > 1):
            raise DomainError(
                "The intensity profile is only defined for radii in [0, 1], "
                f"got values in [{r_.min()}, {r_.max()}]"
            )
    return _intensity(jnp.asarray(r), u)


def _intensity(r: Array, u: Array) -> Array:
    mu2 = jnp.maximum(1 - jnp.square(r), 0)
    n = jnp.arange(1, 5)
    return 1 - jnp.sum(u * (1 - mu2[..., None] ** (0.25 * n)), axis=-1)


def check_integration_config(
    dr: float, method: str, order: int = DEFAULT_QUADRATURE_ORDER
) -> None:
    """Validate the static configuration of an integrator

    Raises:
        ValueError: If the step is not positive, the method is unknown, or the
            quadrature order is not a positive integer
    """
    if not dr > 0:
        raise ValueError(f"The integration step 'dr' must be positive; got {dr}")
    if method not in INTEGRATION_METHODS:
        raise ValueError(
            f"Unknown integration method '{method}'; "
            f"expected one of {INTEGRATION_METHODS}"
        )
    if int(order) != order or order < 1:
        raise ValueError(
            f"The quadrature order must be a positive integer; got {order}"
        )


def integrator(
    coeffs: Array,
    *,
    dr: float = DEFAULT_STEP,
    method: str = "rectangle",
    order: int = DEFAULT_QUADRATURE_ORDER,
) -> Callable[[Array, Array], Array]:
    """Get a function computing :math:`\\int_{r_l}^{r_h} I(r)\\,2r\\,dr`

    Anything that only depends on the coefficients (like the cumulative table for
    ``method="table"``) is computed here, once, so that the returned function can be
    evaluated cheaply for many pairs of bounds. The returned function does not check
    its bounds: callers must guarantee ``0 <= rlow <= rhigh <= 1``.

    Args:
        coeffs (Array): The 5-element coefficient vector
        dr (float): The radial step for the ``"rectangle"`` and ``"table"`` methods
        method (str): One of ``"rectangle"`` (fixed-step rectangle rule),
            ``"table"`` (interpolation in a precomputed cumulative integral), or
            ``"quadrature"`` (fixed-order Gauss-Legendre quadrature)
        order (int): The quadrature order for ``method="quadrature"``
    """
    check_integration_config(dr, method, order)
    u = jnp.asarray(coeffs)[1:]

    if method == "rectangle":
        return lambda rlow, rhigh: _rectangle(u, rlow, rhigh, dr)
    elif method == "table":
        return CumulativeIntensity(coeffs, dr=dr)
    return lambda rlow, rhigh: _quadrature(u, rlow, rhigh, order)


def integrated_intensity(
    coeffs: ArrayLike,
    rlow: ArrayLike,
    rhigh: ArrayLike,
    *,
    dr: float = DEFAULT_STEP,
    method: str = "rectangle",
    order: int = DEFAULT_QUADRATURE_ORDER,
) -> Array:
    """Integrate the intensity profile, weighted by :math:`2r`, over ``[rlow, rhigh]``

    See :func:`integrator` for a description of the arguments.

    Raises:
        DomainError: If the bounds are not ordered or lie outside of ``[0, 1]``
    """
    if is_concrete(rlow, rhigh):
        rlow_, rhigh_ = np.asarray(rlow), np.asarray(rhigh)
        if np.any(rlow_ < 0) or np.any(rhigh_ > 1) or np.any(rlow_ > rhigh_):
            raise DomainError(
                "Integration bounds must satisfy 0 <= rlow <= rhigh <= 1; "
                f"got rlow={rlow}, rhigh={rhigh}"
            )
    integrate = integrator(jnp.asarray(coeffs), dr=dr, method=method, order=order)
    return integrate(jnp.asarray(rlow), jnp.asarray(rhigh))


def annulus_mean(
    coeffs: Array,
    *,
    dr: float = DEFAULT_STEP,
    method: str = "rectangle",
    order: int = DEFAULT_QUADRATURE_ORDER,
) -> Callable[[Array, Array], Array]:
    """Get a function computing the area weighted mean intensity over an annulus

    The mean over ``[rlow, rhigh]`` is the integral from :func:`integrator` divided by
    the area weight of the same rule. For ``method="rectangle"`` that weight is the
    discrete sum of :math:`2r\\,dr` over the samples that were included, not
    :math:`r_h^2 - r_l^2`, since the rectangle rule can include one more sample than
    the interval width accounts for. Degenerate annuli return :math:`I` at the
    midpoint, which is the limit of the mean as the width goes to zero.

    See :func:`integrator` for a description of the arguments; the bounds are not
    checked.
    """
    check_integration_config(dr, method, order)
    u = jnp.asarray(coeffs)[1:]

    if method == "rectangle":

        def impl(rlow: Array, rhigh: Array) -> Array:
            total, weight = _rectangle_sums(u, rlow, rhigh, dr)
            empty = jnp.less_equal(weight, 0)
            mean = total / jnp.where(empty, jnp.ones_like(weight), weight)
            return jnp.where(empty, _intensity(0.5 * (rlow + rhigh), u), mean)

        return impl

    integrate = integrator(coeffs, dr=dr, method=method, order=order)

    def impl(rlow: Array, rhigh: Array) -> Array:
        area = jnp.square(rhigh) - jnp.square(rlow)
        thin = jnp.less(area, dr * dr)
        mean = integrate(rlow, rhigh) / jnp.where(thin, jnp.ones_like(area), area)
        return jnp.where(thin, _intensity(0.5 * (rlow + rhigh), u), mean)

    return impl


def _rectangle(u: Array, rlow: Array, rhigh: Array, dr: float) -> Array:
    return _rectangle_sums(u, rlow, rhigh, dr)[0]


def _rectangle_sums(
    u: Array, rlow: Array, rhigh: Array, dr: float
) -> tuple[Array, Array]:
    # Returns the sum of I(r) 2r dr and of 2r dr over the same samples
    rlow, rhigh = jnp.broadcast_arrays(rlow, rhigh)

    # Enough steps to cross the full disk; the unused ones are masked
    num_steps = int(np.floor(1.0 / dr)) + 2

    def body(k, carry):
        total, weight = carry
        r = rlow + k * dr
        w = jnp.where(r <= rhigh, dr * 2 * r, jnp.zeros_like(r))
        return total + _intensity(jnp.minimum(r, 1.0), u) * w, weight + w

    init = jnp.zeros(rlow.shape, dtype=jnp.result_type(float))
    return jax.lax.fori_loop(0, num_steps, body, (init, init))


def _quadrature(u: Array, rlow: Array, rhigh: Array, order: int) -> Array:
    roots, weights = roots_legendre(order)
    rlow = jnp.asarray(rlow)[..., None]
    half = 0.5 * (jnp.asarray(rhigh)[..., None] - rlow)
    r = rlow + half * (roots + 1)
    f = 2 * r * _intensity(r, u)
    return jnp.sum(half * weights * f, axis=-1)


class CumulativeIntensity(eqx.Module):
    """A lookup table for the cumulative integral of the intensity profile

    The integral :math:`C(r) = \\int_0^r I(r')\\,2r'\\,dr'` is tabulated once on a
    uniform grid with spacing ``dr`` using the trapezoid rule, and calling the table
    with a pair of bounds linearly interpolates :math:`C(r_h) - C(r_l)`.

    Args:
        coeffs (Array): The 5-element coefficient vector
        dr (float): The grid spacing
    """

    radius: Array
    cumulative: Array

    def __init__(self, coeffs: ArrayLike, *, dr: float = DEFAULT_STEP):
        check_integration_config(dr, "table")
        u = jnp.asarray(coeffs)[1:]
        num_nodes = max(int(np.round(1.0 / dr)), 1) + 1
        self.radius = jnp.linspace(0.0, 1.0, num_nodes)
        f = 2 * self.radius * _intensity(self.radius, u)
        steps = 0.5 * (f[1:] + f[:-1]) * jnp.diff(self.radius)
        self.cumulative = jnp.concatenate(
            [jnp.zeros_like(steps[:1]), jnp.cumsum(steps)]
        )

    @property
    def total(self) -> Array:
        """The integral over the whole disk, approximately :math:`4\\Omega`"""
        return self.cumulative[-1]

    def __call__(self, rlow: Array, rhigh: Array) -> Array:
        return jnp.interp(rhigh, self.radius, self.cumulative) - jnp.interp(
            rlow, self.radius, self.cumulative
        )
