__all__ = ["unit_registry"]

from synthlc.units.registry import unit_registry as unit_registry
