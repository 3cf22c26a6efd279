import numpy as np
import pytest

from romsx.grid import Box, Field
from romsx.mixing import t3dmix, uv3dmix

BX = Box((0, 0, 0), (4, 4, 1))


def _t3dmix_run(t, diff=1.0, dt=0.1):
    big = BX.grow((1, 1, 0))
    ones = lambda: Field(big, value=1.0)  # noqa: E731
    t3dmix(BX, t, Field(big, value=diff), ones(), ones(), ones(), ones(), ones(),
           0, 1, dt, 2)


def test_t3dmix_uniform_tracer_unchanged():
    t = Field(BX.grow((1, 1, 0)), 2, value=5.0)
    _t3dmix_run(t)
    np.testing.assert_allclose(t.data[..., 1], 5.0)


def test_t3dmix_smooths_a_bump():
    t = Field(BX.grow((1, 1, 0)), 2)
    for k in (0, 1):
        t[2, 2, k, 0] = 1.0
    before = t.data[..., 0].copy()
    _t3dmix_run(t)
    np.testing.assert_array_equal(t.data[..., 0], before)
    for k in (0, 1):
        assert t[2, 2, k, 1] < 0.0
        assert t[3, 2, k, 1] > 0.0
        assert t[2, 3, k, 1] > 0.0


def test_t3dmix_zero_diffusivity_leaves_tracer():
    rng = np.random.default_rng(7)
    t = Field(BX.grow((1, 1, 0)), 2)
    t.data[..., 0] = rng.uniform(0.0, 1.0, t.data.shape[:3])
    _t3dmix_run(t, diff=0.0)
    np.testing.assert_array_equal(t.data[..., 1], 0.0)


def _uv3dmix_run(uold, vold, visc=1.0, dt=0.1):
    big = BX.grow((2, 2, 0))
    slab = big.make_slab(2, 0)
    u, v = Field(big), Field(big)
    rufrc, rvfrc = Field(slab), Field(slab)
    ones = lambda: Field(big, value=1.0)  # noqa: E731
    uv3dmix(BX, u, v, uold, vold, rufrc, rvfrc, Field(big, value=visc),
            Field(big, value=visc), ones(), ones(), ones(), ones(), ones(),
            ones(), ones(), 0, 0, dt, 2)
    return u, v, rufrc, rvfrc


def test_uv3dmix_uniform_flow_unchanged():
    big = BX.grow((2, 2, 0))
    u, v, rufrc, rvfrc = _uv3dmix_run(Field(big, value=0.3), Field(big, value=-0.2))
    np.testing.assert_allclose(u.data, 0.0, atol=1e-14)
    np.testing.assert_allclose(v.data, 0.0, atol=1e-14)
    np.testing.assert_allclose(rufrc.data, 0.0, atol=1e-14)
    np.testing.assert_allclose(rvfrc.data, 0.0, atol=1e-14)


def test_uv3dmix_damps_velocity_bumps():
    big = BX.grow((2, 2, 0))
    uold, vold = Field(big), Field(big)
    for k in (0, 1):
        uold[2, 2, k] = 1.0
        vold[2, 2, k] = 1.0
    u, v, rufrc, rvfrc = _uv3dmix_run(uold, vold)
    for k in (0, 1):
        assert u[2, 2, k] < 0.0
        assert v[2, 2, k] < 0.0
    assert rufrc[2, 2, 0] < 0.0
    assert rvfrc[2, 2, 0] < 0.0


def test_uv3dmix_zero_viscosity_does_nothing():
    rng = np.random.default_rng(8)
    big = BX.grow((2, 2, 0))
    uold, vold = Field(big), Field(big)
    uold.data[:] = rng.uniform(-1.0, 1.0, uold.data.shape)
    vold.data[:] = rng.uniform(-1.0, 1.0, vold.data.shape)
    u, v, _, _ = _uv3dmix_run(uold, vold, visc=0.0)
    np.testing.assert_array_equal(u.data, 0.0)
    np.testing.assert_array_equal(v.data, 0.0)


def test_uv3dmix_increment_scales_with_time_step():
    rng = np.random.default_rng(9)
    big = BX.grow((2, 2, 0))
    uold, vold = Field(big), Field(big)
    uold.data[:] = rng.uniform(-1.0, 1.0, uold.data.shape)
    vold.data[:] = rng.uniform(-1.0, 1.0, vold.data.shape)
    u1, v1, rufrc1, _ = _uv3dmix_run(uold, vold, dt=0.1)
    u2, v2, rufrc2, _ = _uv3dmix_run(uold, vold, dt=0.2)
    np.testing.assert_allclose(u2.data, 2.0 * u1.data)
    np.testing.assert_allclose(v2.data, 2.0 * v1.data)
    np.testing.assert_allclose(rufrc2.data, rufrc1.data)
    assert np.any(u1.data != 0.0)