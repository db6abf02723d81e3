"""Tests for the dynsim.config module."""

import jax
import jax.numpy as jnp
import pytest

from dynsim.config import get_dtype, set_dtype
from dynsim.integrators import rk4_step
from dynsim.simulation import ConfigRule, FailureKind, integrate
from dynsim.systems import LORENZ, LOTKA_VOLTERRA
from dynsim.vector import add, magnitude


@pytest.fixture(autouse=True)
def reset_dtype():
    """Restore float64 before and after each test."""
    set_dtype(jnp.float64)
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float64")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float32)
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestDtypeSwitchingOutputs:
    """Verify that output dtypes follow the configured dtype."""

    def test_vector_dtype_float64(self):
        assert add([1.0], [2.0]).dtype == jnp.float64
        assert magnitude([3.0, 4.0]).dtype == jnp.float64

    def test_vector_dtype_float32(self):
        set_dtype(jnp.float32)
        assert add([1.0], [2.0]).dtype == jnp.float32

    def test_rk4_dtype_float32(self):
        set_dtype(jnp.float32)
        result = rk4_step(lambda x, p: -x, jnp.array([1.0]), {}, 0.1)
        assert result.dtype == jnp.float32

    def test_trajectory_dtype_follows_setting(self):
        config = LORENZ.default_run_config(t_max=0.1)

        set_dtype(jnp.float32)
        traj32 = integrate(LORENZ, config).unwrap()
        assert traj32.states.dtype == jnp.float32

        set_dtype(jnp.float64)
        traj64 = integrate(LORENZ, config).unwrap()
        assert traj64.states.dtype == jnp.float64
        assert traj64.times.dtype == jnp.float64

    def test_initial_state_overflowing_dtype(self):
        """1e5 is finite as a double but exceeds the float16 range."""
        set_dtype(jnp.float16)
        config = LORENZ.default_run_config(t_max=0.1, initial_state=(1e5, 1.0, 1.0))
        outcome = integrate(LORENZ, config)
        assert outcome.kind == FailureKind.NON_FINITE_INITIAL_STATE
        assert "NaN or Infinity" in outcome.detail

    def test_times_stay_double_under_float16(self):
        """float16 cannot tell 29.97 from 29.98; the time axis must still increase."""
        set_dtype(jnp.float16)
        config = LOTKA_VOLTERRA.default_run_config(dt=0.01, t_max=30.0)
        trajectory = integrate(LOTKA_VOLTERRA, config).unwrap()
        assert trajectory.states.dtype == jnp.float16
        assert trajectory.times.dtype == jnp.float64
        assert bool(jnp.all(jnp.diff(trajectory.times) > 0))
        assert float(trajectory.times[-1]) >= 30.0

    def test_clock_advances_by_represented_step(self):
        set_dtype(jnp.float16)
        step = float(jnp.asarray(0.01, dtype=jnp.float16))
        config = LORENZ.default_run_config(dt=0.01, t_max=0.1)
        trajectory = integrate(LORENZ, config).unwrap()
        assert jnp.allclose(jnp.diff(trajectory.times), step, rtol=1e-9)

    def test_time_step_vanishing_in_dtype(self):
        set_dtype(jnp.float16)
        config = LORENZ.default_run_config(dt=1e-9, t_max=0.1)
        outcome = integrate(LORENZ, config)
        assert outcome.kind == FailureKind.INVALID_CONFIG
        assert outcome.reason.violation.rule == ConfigRule.INVALID_TIME_STEP
        assert "float16" in outcome.detail
