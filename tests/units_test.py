from synthlc.test_utils import assert_allclose
from synthlc.units import unit_registry as ureg


def test_stellar_and_planetary_radii():
    assert_allclose((1.0 * ureg.R_sun).to(ureg.km).magnitude, 695700.0)
    assert_allclose((1.0 * ureg.R_jup).to(ureg.km).magnitude, 71492.0)
    ratio = (1.0 * ureg.R_sun / ureg.R_jup).to(ureg.dimensionless)
    assert_allclose(ratio.magnitude, 9.731158)


def test_semimajor_axis_in_stellar_radii():
    calc = (1.0 * ureg.astronomical_unit / ureg.R_sun).to(ureg.dimensionless)
    assert_allclose(calc.magnitude, 215.032, rtol=1e-5)
