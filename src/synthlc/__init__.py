__all__ = ["core", "light_curves", "Model", "generate"]

from synthlc import (
    core as core,
    light_curves as light_curves,
)
from synthlc.light_curves.generate import generate as generate
from synthlc.model import Model as Model
from synthlc.synthlc_version import __version__ as __version__
