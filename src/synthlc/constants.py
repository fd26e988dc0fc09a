"""Physical constants needed to express the orbital geometry in stellar radii"""

__all__ = [
    "AU",
    "R_jup",
    "R_sun",
    "radians_in_degree",
    "seconds_in_day",
]

import math

from synthlc.units import unit_registry as ureg

AU = float((1.0 * ureg.astronomical_unit).to(ureg.m).magnitude)
R_sun = float((1.0 * ureg.R_sun).to(ureg.m).magnitude)
R_jup = float((1.0 * ureg.R_jup).to(ureg.m).magnitude)
seconds_in_day = float((1.0 * ureg.day).to(ureg.s).magnitude)
radians_in_degree = math.pi / 180.0
