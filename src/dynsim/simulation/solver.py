"""Fixed-step trajectory integration.

:func:`integrate` drives :func:`~dynsim.integrators.rk4_step` across the
requested horizon and returns a :data:`~dynsim.simulation.SolverOutcome`.
A run moves through ``validating -> stepping -> completed | failed``:

- The configuration is validated; a violation ends the run as
  ``InvalidConfig``.
- Time advances as ``t += dt`` while ``t < t_max``, capped at
  ``ceil(t_max / dt) + 1`` steps.  Reaching the cap before the horizon
  ends the run as ``StepBudgetExceeded``.
- The first step producing a NaN or infinite component ends the run as
  ``NumericalInstability``, reporting the simulation time at which that
  step started.

The time grid is accumulated on the host in double precision, exactly as
the loop above describes, and is always stored as float64 whatever the
state dtype.  The step added to the clock is the time step as the state
dtype represents it, so clock and state advance together.

The states for that grid are produced by a single jitted ``jax.lax.scan``
of the RK4 step, after which the first non-finite row (if any) is located.
The scan length is rounded up by :func:`padded_length` so that runs with
nearby horizons reuse one compilation.  Steps are independent of wall-clock
time and ordering, so a given ``(system, config)`` always yields a
bit-for-bit identical trajectory.
"""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp
from jax import Array

from dynsim.config import get_dtype
from dynsim.integrators.rk4 import Derivative, rk4_step
from dynsim.simulation._types import (
    ConfigRule,
    ConfigViolation,
    DimensionMismatch,
    Failure,
    InvalidConfig,
    NonFiniteInitialState,
    NumericalInstability,
    RunConfig,
    SolverOutcome,
    StepBudgetExceeded,
    Success,
    Trajectory,
)
from dynsim.simulation.validation import validate_run_config
from dynsim.vector import DimensionMismatchError

if TYPE_CHECKING:
    from dynsim.systems import SystemDefinition

logger = logging.getLogger(__name__)


def padded_length(n_steps: int) -> int:
    """Round *n_steps* up to the next power of two.

    The compiled scan is specialized on its length, so nearby horizons share
    one compilation and the extra steps are dropped afterwards.
    """
    return 1 << (n_steps - 1).bit_length() if n_steps > 1 else 1


def step_budget(dt: float, t_max: float) -> int:
    """Return the hard step cap ``ceil(t_max / dt) + 1`` for a run."""
    return math.ceil(t_max / dt) + 1


def time_grid(dt: float, t_max: float, max_steps: int) -> tuple[list[float], bool]:
    """Accumulate the sample times of a run.

    Args:
        dt: Time step.
        t_max: Horizon.
        max_steps: Step cap.

    Returns:
        A ``(times, reached)`` tuple: the sample times starting at 0, and
        whether the last time reached *t_max* before the cap.
    """
    times = [0.0]
    t = 0.0
    steps = 0
    while t < t_max and steps < max_steps:
        t += dt
        steps += 1
        times.append(t)
    return times, t >= t_max


@partial(jax.jit, static_argnames=("derivative", "n_steps"))
def _propagate(
    derivative: Derivative,
    state0: Array,
    params: dict[str, Array],
    dt: Array,
    n_steps: int,
) -> Array:
    def body(state, _):
        next_state = rk4_step(derivative, state, params, dt)
        return next_state, next_state

    _, states = jax.lax.scan(body, state0, None, length=n_steps)
    return states


def _fail(system: SystemDefinition, failure: Failure) -> Failure:
    logger.info("Integration of '%s' failed (%s): %s", system.id, failure.kind, failure.detail)
    return failure


def integrate(
    system: SystemDefinition,
    config: RunConfig,
    max_steps: int | None = None,
) -> SolverOutcome:
    """Integrate *system* from ``t = 0`` to ``config.t_max``.

    Args:
        system: The system to integrate.
        config: Time step, horizon, initial state and parameter values.
        max_steps: Optional tighter step cap.  The effective cap is the
            smaller of this and ``ceil(t_max / dt) + 1``.

    Returns:
        ``Success(trajectory)`` whose first point is ``(0, initial_state)``,
        or ``Failure(reason)`` with one of the failure reasons.  A failure
        never carries a partial trajectory.

    Examples:
        ```python
        from dynsim.simulation import integrate
        from dynsim.systems import get_system
        lorenz = get_system("lorenz")
        outcome = integrate(lorenz, lorenz.default_run_config(t_max=1.0))
        if outcome.ok:
            trajectory = outcome.trajectory
        else:
            print(outcome.detail)
        ```
    """
    logger.debug(
        "Integrating '%s' with dt=%s, t_max=%s", system.id, config.dt, config.t_max
    )

    violation = validate_run_config(system, config)
    if violation is not None:
        return _fail(system, Failure(InvalidConfig(violation)))

    dtype = get_dtype()
    dt = float(config.dt)
    t_max = float(config.t_max)

    step = jnp.asarray(dt, dtype=dtype)
    if not (math.isfinite(float(step)) and float(step) > 0):
        violation = ConfigViolation(
            ConfigRule.INVALID_TIME_STEP,
            f"Time step dt ({dt}) is not representable as a positive {jnp.dtype(dtype).name}",
        )
        return _fail(system, Failure(InvalidConfig(violation)))
    dt = float(step)

    state0 = jnp.asarray([float(x) for x in config.initial_state], dtype=dtype)
    if not bool(jnp.all(jnp.isfinite(state0))):
        return _fail(system, Failure(NonFiniteInitialState()))

    budget = step_budget(dt, t_max)
    if max_steps is not None:
        budget = min(budget, max_steps)
    times, reached = time_grid(dt, t_max, budget)
    n_steps = len(times) - 1

    params = {
        name: jnp.asarray(float(config.parameter_values[name]), dtype=dtype)
        for name in system.parameter_names
    }

    try:
        stepped = _propagate(
            system.derivative, state0, params, step, padded_length(n_steps)
        )[:n_steps]
    except DimensionMismatchError as e:
        return _fail(system, Failure(DimensionMismatch(e.expected, e.actual)))

    finite = jnp.all(jnp.isfinite(stepped), axis=1)
    if not bool(jnp.all(finite)):
        first_bad = int(jnp.argmin(finite))
        return _fail(system, Failure(NumericalInstability(at_time=times[first_bad])))

    if not reached:
        return _fail(system, Failure(StepBudgetExceeded(budget, times[-1])))

    trajectory = Trajectory(
        times=jnp.asarray(times, dtype=jnp.float64),
        states=jnp.concatenate([state0[None, :], stepped], axis=0),
        variables=tuple(system.state_variables),
    )
    logger.debug(
        "Integrated '%s': %d steps to t=%s", system.id, n_steps, times[-1]
    )
    return Success(trajectory)
