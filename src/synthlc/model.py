"""The physical description of a star with a transiting planet on a circular orbit"""

__all__ = ["DerivedParameters", "Model"]

import logging

import equinox as eqx
import jax.numpy as jnp

from synthlc import constants
from synthlc.core.limb_dark import coefficient_vector, omega
from synthlc.types import Array, ArrayLike, Scalar
from synthlc.utils import is_concrete

logger = logging.getLogger(__name__)


class Model(eqx.Module):
    """Orbital, stellar, and planetary parameters of a transiting system

    Args:
        a: Semi-major axis of the orbit [AU].
        rs: Radius of the star [solar radii].
        rp: Radius of the planet [Jupiter radii].
        period: Orbital period [days].
        epoch: Reference mid-transit time [Julian date].
        i: Inclination of the orbital plane [degrees].
        c1, c2, c3, c4 (Optional[Scalar]): Coefficients of the nonlinear limb
            darkening law. Default is 0, a uniform disk.

    Raises:
        ValueError: If any parameter is not a scalar, or if ``a``, ``rs``,
            ``period`` are not positive or ``rp`` is negative.
    """

    a: Scalar
    rs: Scalar
    rp: Scalar
    period: Scalar
    epoch: Scalar
    i: Scalar
    c1: Scalar = 0.0
    c2: Scalar = 0.0
    c3: Scalar = 0.0
    c4: Scalar = 0.0

    def __check_init__(self) -> None:
        params = (
            self.a,
            self.rs,
            self.rp,
            self.period,
            self.epoch,
            self.i,
            self.c1,
            self.c2,
            self.c3,
            self.c4,
        )
        if any(jnp.ndim(arg) != 0 for arg in params):
            raise ValueError(
                "All parameters of a 'Model' must be scalars; "
                "to evaluate several models, use 'jax.vmap'"
            )

        if is_concrete(self.a, self.rs, self.rp, self.period):
            for name in ("a", "rs", "period"):
                if not getattr(self, name) > 0:
                    raise ValueError(f"'{name}' must be positive")
            if self.rp < 0:
                raise ValueError("'rp' must be non-negative")

    @classmethod
    def from_coefficients(
        cls,
        *,
        a: Scalar,
        rs: Scalar,
        rp: Scalar,
        period: Scalar,
        epoch: Scalar,
        i: Scalar,
        u: ArrayLike,
    ) -> "Model":
        """Initialize a model with the limb darkening coefficients as one array

        Raises:
            ValueError: If ``u`` does not contain exactly 4 coefficients
        """
        c1, c2, c3, c4 = coefficient_vector(u)[1:]
        return cls(
            a=a,
            rs=rs,
            rp=rp,
            period=period,
            epoch=epoch,
            i=i,
            c1=c1,
            c2=c2,
            c3=c3,
            c4=c4,
        )

    @property
    def u(self) -> Array:
        """The limb darkening coefficients ``[c1, c2, c3, c4]``"""
        return jnp.stack([jnp.asarray(c) for c in (self.c1, self.c2, self.c3, self.c4)])


class DerivedParameters(eqx.Module):
    """The timestamp-independent quantities shared by every flux evaluation

    Args:
        coeffs: The 5-element limb darkening coefficient vector.
        omega: The normalization constant of ``coeffs``.
        normalized_distance: The semi-major axis in units of the stellar radius.
        ang_freq: The orbital angular frequency [radians per second].
        period_seconds: The orbital period [seconds].
        radius_ratio: The ratio of the planet radius to the stellar radius.
        cos_inclination: The cosine of the inclination.
    """

    coeffs: Array
    omega: Array
    normalized_distance: Scalar
    ang_freq: Scalar
    period_seconds: Scalar
    radius_ratio: Scalar
    cos_inclination: Scalar

    @classmethod
    def from_model(cls, model: Model) -> "DerivedParameters":
        coeffs = coefficient_vector(model.u)
        period_seconds = model.period * constants.seconds_in_day
        params = cls(
            coeffs=coeffs,
            omega=omega(coeffs),
            normalized_distance=model.a * constants.AU / (model.rs * constants.R_sun),
            ang_freq=2 * jnp.pi / period_seconds,
            period_seconds=period_seconds,
            radius_ratio=model.rp * constants.R_jup / (model.rs * constants.R_sun),
            cos_inclination=jnp.cos(model.i * constants.radians_in_degree),
        )
        logger.debug(
            "Derived parameters: p=%s, a/rs=%s, omega=%s, period=%s s",
            params.radius_ratio,
            params.normalized_distance,
            params.omega,
            params.period_seconds,
        )
        return params
