import jax.numpy as jnp
import pytest

from synthlc.light_curves.utils import vectorize


@pytest.mark.parametrize("shape", [(), (10,), (10, 3)])
def test_vectorize_scalar(shape):
    @vectorize
    def lc(time):
        assert time.shape == ()
        return time**2

    time = jnp.ones(shape)
    assert lc(time).shape == time.shape


def test_vectorize_extra_arguments():
    @vectorize
    def lc(time, depth, *, baseline=1.0):
        return baseline - depth * jnp.exp(-(time**2))

    time = jnp.linspace(-1, 1, 5)
    calc = lc(time, 0.01, baseline=2.0)
    assert calc.shape == (5,)
    assert jnp.allclose(calc[2], 1.99)


def test_vectorize_python_scalars():
    @vectorize
    def lc(time):
        return 2 * time

    assert lc(1.5).shape == ()
    assert lc([1.0, 2.0]).shape == (2,)
