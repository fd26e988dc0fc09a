import jax.numpy as jnp
import numpy as np
import pytest

from synthlc.light_curves.exposure_time import integrate
from synthlc.light_curves.generate import light_curve
from synthlc.light_curves.utils import vectorize
from synthlc.model import Model
from synthlc.test_utils import assert_allclose


@vectorize
def linear(time):
    return 1.0 + 0.5 * time


def test_no_exposure_time():
    assert integrate(linear) is linear


@pytest.mark.parametrize("order", [0, 1, 2])
@pytest.mark.parametrize("num_samples", [4, 7, 11])
def test_linear_function_is_unchanged(order, num_samples):
    func = integrate(linear, exposure_time=0.1, order=order, num_samples=num_samples)
    time = jnp.linspace(-1.0, 1.0, 9)
    assert_allclose(func(time), linear(time), atol=1e-6)


def test_shapes():
    func = integrate(linear, exposure_time=0.1)
    assert func(jnp.zeros((3, 4))).shape == (3, 4)
    assert func(0.0).shape == ()


def test_invalid_order():
    with pytest.raises(ValueError, match="order"):
        integrate(linear, exposure_time=0.1, order=3)


def test_invalid_exposure_time():
    with pytest.raises(ValueError, match="scalar"):
        integrate(linear, exposure_time=jnp.array([0.1, 0.2]))


def test_smooths_transit():
    model = Model(
        a=0.05,
        rs=1.0,
        rp=1.0,
        period=3.0,
        epoch=0.0,
        i=90.0,
        c1=0.5,
        c2=-0.1,
        c3=0.4,
        c4=-0.2,
    )
    instant = light_curve(model, method="table")
    smooth = integrate(instant, exposure_time=0.02, order=1, num_samples=9)

    time = jnp.array([0.0, 0.3])
    calc = np.asarray(smooth(time))
    expect = np.asarray(instant(time))
    assert calc[0] < 1.0
    assert calc[0] >= expect[0] - 1e-6
    assert_allclose(calc[1], 1.0)
