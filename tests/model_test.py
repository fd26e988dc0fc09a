import logging

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from synthlc import constants
from synthlc.model import DerivedParameters, Model
from synthlc.test_utils import assert_allclose


@pytest.fixture
def model():
    return Model(
        a=0.05,
        rs=1.0,
        rp=1.0,
        period=3.0,
        epoch=2455000.0,
        i=88.0,
        c1=0.5,
        c2=-0.1,
        c3=0.4,
        c4=-0.2,
    )


def test_default_limb_darkening_is_uniform():
    model = Model(a=0.05, rs=1.0, rp=1.0, period=3.0, epoch=0.0, i=90.0)
    assert_allclose(model.u, jnp.zeros(4))


def test_from_coefficients(model):
    calc = Model.from_coefficients(
        a=0.05,
        rs=1.0,
        rp=1.0,
        period=3.0,
        epoch=2455000.0,
        i=88.0,
        u=[0.5, -0.1, 0.4, -0.2],
    )
    assert_allclose(calc.u, model.u)


def test_from_coefficients_requires_four():
    with pytest.raises(ValueError, match="exactly 4"):
        Model.from_coefficients(
            a=0.05, rs=1.0, rp=1.0, period=3.0, epoch=0.0, i=90.0, u=[0.5, 0.1]
        )


def test_scalar_parameters():
    with pytest.raises(ValueError, match="scalars"):
        Model(a=jnp.array([0.05, 0.1]), rs=1.0, rp=1.0, period=3.0, epoch=0.0, i=90.0)


@pytest.mark.parametrize(
    "name,value", [("a", 0.0), ("rs", -1.0), ("period", 0.0), ("rp", -0.1)]
)
def test_invalid_parameters(name, value):
    params = {"a": 0.05, "rs": 1.0, "rp": 1.0, "period": 3.0, "epoch": 0.0, "i": 90.0}
    params[name] = value
    with pytest.raises(ValueError, match=name):
        Model(**params)


def test_derived_parameters(model):
    params = DerivedParameters.from_model(model)
    assert_allclose(jnp.sum(params.coeffs), 1.0)
    assert_allclose(params.coeffs[0], 0.4)
    assert_allclose(
        params.omega, 0.4 / 4 + 0.5 / 5 - 0.1 / 6 + 0.4 / 7 - 0.2 / 8, rtol=1e-5
    )
    assert_allclose(params.normalized_distance, 0.05 * 215.032, rtol=1e-5)
    assert_allclose(params.radius_ratio, 0.102763, rtol=1e-5)
    assert_allclose(params.period_seconds, 3.0 * 86400.0)
    assert_allclose(params.ang_freq, 2 * np.pi / (3.0 * 86400.0), rtol=1e-5)
    assert_allclose(params.cos_inclination, np.cos(np.radians(88.0)), rtol=1e-5)


def test_model_is_a_pytree(model):
    @jax.jit
    def depth(model):
        params = DerivedParameters.from_model(model)
        return jnp.square(params.radius_ratio)

    assert_allclose(depth(model), 0.102763**2, rtol=1e-4)


def test_constants():
    assert_allclose(constants.AU, 1.495978707e11)
    assert_allclose(constants.R_sun, 6.957e8)
    assert_allclose(constants.R_jup, 7.1492e7)
    assert constants.seconds_in_day == 86400.0
    assert_allclose(constants.radians_in_degree * 180.0, np.pi)


def test_derived_parameters_debug_logging(model, caplog):
    with caplog.at_level(logging.DEBUG, logger="synthlc.model"):
        DerivedParameters.from_model(model)
    assert "Derived parameters" in caplog.text
    assert all(record.name == "synthlc.model" for record in caplog.records)
