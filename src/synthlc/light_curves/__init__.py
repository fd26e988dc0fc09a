__all__ = ["exposure_time", "generate", "light_curve"]

from synthlc.light_curves import exposure_time as exposure_time
from synthlc.light_curves.generate import (
    generate as generate,
    light_curve as light_curve,
)
