"""The light curve generator

For every timestamp, the projected separation between the centers of the star and
the planet (in units of the stellar radius) selects one of three regimes: the planet
disk is either fully inside the stellar disk, partially overlapping its limb, or
outside of it. The flux deficit in the first two regimes is the mean limb darkened
intensity under the planet times the occulted area, normalized by the
disk-integrated intensity of the star.
"""

__all__ = ["ECLIPSE_WINDOW", "generate", "light_curve"]

from collections.abc import Callable
from functools import partial

import jax
import jax.numpy as jnp
import numpy as np

from synthlc import constants
from synthlc.core.limb_dark import (
    DEFAULT_QUADRATURE_ORDER,
    DEFAULT_STEP,
    annulus_mean,
    check_integration_config,
)
from synthlc.light_curves.types import LightCurveFunc
from synthlc.light_curves.utils import vectorize
from synthlc.model import DerivedParameters, Model
from synthlc.types import Array, ArrayLike, Scalar
from synthlc.utils import is_concrete, safe_arccos, zero_safe_sqrt

# Half-width of the orbital phase window, centered on the primary transit, outside
# of which the flux is fixed to 1. This is not derived from the transit geometry: it
# only has to exclude phase 0.5, where the projected separation also vanishes but
# the planet is behind the star.
ECLIPSE_WINDOW = 0.25


def generate(
    timestamps: ArrayLike,
    model: Model,
    *,
    dr: float = DEFAULT_STEP,
    method: str = "rectangle",
    eclipse_window: float = ECLIPSE_WINDOW,
    order: int = DEFAULT_QUADRATURE_ORDER,
) -> Array:
    """Compute the relative stellar flux at a set of observation times

    Args:
        timestamps (Array): The observation times [Julian date]. Any shape and order
            is supported, and the output has the same shape.
        model (Model): The parameters of the system
        dr (float): The radial step of the intensity integrals; see
            :func:`synthlc.core.limb_dark.integrator`
        method (str): The integration method; see
            :func:`synthlc.core.limb_dark.integrator`
        eclipse_window (float): The half-width of the orbital phase window, around
            the transit, where the flux is modeled
        order (int): The quadrature order for ``method="quadrature"``

    Returns:
        The flux relative to the unocculted star, one value per timestamp
    """
    check_integration_config(dr, method, order)
    if not 0 < eclipse_window <= 0.5:
        raise ValueError(
            f"'eclipse_window' must be in the range (0, 0.5]; got {eclipse_window}"
        )

    params = DerivedParameters.from_model(model)
    dt = _days_since_epoch(timestamps, model.epoch)
    return _flux(
        params, dt, dr=dr, method=method, eclipse_window=eclipse_window, order=order
    )


def light_curve(
    model: Model,
    *,
    dr: float = DEFAULT_STEP,
    method: str = "rectangle",
    eclipse_window: float = ECLIPSE_WINDOW,
    order: int = DEFAULT_QUADRATURE_ORDER,
) -> LightCurveFunc:
    """Get a function which evaluates the flux of ``model`` at a given time

    Unlike :func:`generate`, the returned function is traceable with respect to the
    time so it can be composed with JAX transforms, like
    :func:`synthlc.light_curves.exposure_time.integrate`. The offset from the epoch
    is computed in the JAX default precision, so absolute Julian dates require
    ``JAX_ENABLE_X64``.

    See :func:`generate` for a description of the arguments.
    """
    check_integration_config(dr, method, order)
    params = DerivedParameters.from_model(model)
    mean_intensity = annulus_mean(params.coeffs, dr=dr, method=method, order=order)

    @vectorize
    def light_curve_impl(time: Scalar) -> Array:
        if jnp.ndim(time) != 0:
            raise ValueError(
                "The time passed to 'light_curve' has shape "
                f"{jnp.shape(time)}, but a scalar was expected"
            )
        return _flux_at_time(
            params, mean_intensity, time - model.epoch, eclipse_window=eclipse_window
        )

    return light_curve_impl


def _days_since_epoch(timestamps: ArrayLike, epoch: Scalar) -> Array:
    # Julian dates don't fit in single precision, so subtract on the host if we can
    if is_concrete(timestamps, epoch):
        return jnp.asarray(
            np.asarray(timestamps, dtype=np.float64) - np.float64(epoch)
        )
    return jnp.asarray(timestamps) - epoch


@partial(jax.jit, static_argnames=("dr", "method", "eclipse_window", "order"))
def _flux(
    params: DerivedParameters,
    dt: Array,
    *,
    dr: float,
    method: str,
    eclipse_window: float,
    order: int,
) -> Array:
    mean_intensity = annulus_mean(params.coeffs, dr=dr, method=method, order=order)
    func = partial(
        _flux_at_time, params, mean_intensity, eclipse_window=eclipse_window
    )
    return jnp.reshape(jax.vmap(func)(jnp.ravel(dt)), jnp.shape(dt))


def _flux_at_time(
    params: DerivedParameters,
    mean_intensity: Callable[[Array, Array], Array],
    dt: Scalar,
    *,
    eclipse_window: float,
) -> Array:
    t = dt * constants.seconds_in_day
    z = projected_separation(params, t)
    p = params.radius_ratio

    full = _full_overlap_flux(params, mean_intensity, z)
    partial_ = _partial_overlap_flux(params, mean_intensity, z)
    flux = jnp.where(z <= 1 - p, full, jnp.where(z > 1 + p, 1.0, partial_))

    in_window = jnp.abs(orbital_phase(params, t)) < eclipse_window
    return jnp.where(in_window, flux, 1.0)


def projected_separation(params: DerivedParameters, t: Scalar) -> Array:
    """The sky-projected star-planet separation, in stellar radii, ``t`` seconds
    after mid-transit"""
    angle = params.ang_freq * t
    return params.normalized_distance * zero_safe_sqrt(
        jnp.square(jnp.sin(angle))
        + jnp.square(params.cos_inclination * jnp.cos(angle))
    )


def orbital_phase(params: DerivedParameters, t: Scalar) -> Array:
    """The orbital phase ``t`` seconds after mid-transit, folded into (-0.5, 0.5]"""
    phase = jnp.abs(jnp.fmod(t / params.period_seconds, 1.0))
    return jnp.where(phase > 0.5, phase - 1.0, phase)


def _full_overlap_flux(params, mean_intensity, z):
    p = params.radius_ratio
    rlow = jnp.clip(jnp.abs(z - p), 0.0, 1.0)
    rhigh = jnp.clip(z + p, rlow, 1.0)
    mean = mean_intensity(rlow, rhigh)
    return 1 - jnp.square(p) * mean / (4 * params.omega)


def _partial_overlap_flux(params, mean_intensity, z):
    p = params.radius_ratio
    rlow = jnp.clip(jnp.abs(z - p), 0.0, 1.0)
    mean = mean_intensity(rlow, jnp.ones_like(rlow))

    # Area of the planet disk beyond the chord at distance z - 1 from its center
    d = z - 1
    p2 = jnp.square(p)
    p_ = jnp.where(p > 0, p, 1.0)
    area = p2 * safe_arccos(d / p_) - d * zero_safe_sqrt(p2 - jnp.square(d))
    area = jnp.maximum(area, 0.0)
    return 1 - mean * area / (4 * jnp.pi * params.omega)
