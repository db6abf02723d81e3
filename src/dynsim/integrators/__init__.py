"""Fixed-step numerical integrators for parameterized dynamical systems.

Available integrators:

- :func:`rk4_step` -- Classic 4th-order Runge-Kutta (fixed step)

Step functions share the interface::

    next_state = step_fn(derivative, state, params, dt)

where ``derivative(x, params) -> dx`` defines the ODE right-hand side.
"""

from dynsim.integrators.rk4 import Derivative, rk4_step

__all__ = [
    "Derivative",
    "rk4_step",
]
