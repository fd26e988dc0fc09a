__all__ = [
    "annulus_mean",
    "coefficient_vector",
    "integrated_intensity",
    "intensity",
    "omega",
]

from synthlc.core.limb_dark import (
    annulus_mean as annulus_mean,
    coefficient_vector as coefficient_vector,
    integrated_intensity as integrated_intensity,
    intensity as intensity,
    omega as omega,
)
