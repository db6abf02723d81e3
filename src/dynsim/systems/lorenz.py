"""Lorenz attractor.

Three coupled ordinary differential equations with chaotic solutions for
the classical parameter values, producing the butterfly-shaped attractor:

.. math::

    \\dot{x} &= \\sigma (y - x) \\\\
    \\dot{y} &= x (\\rho - z) - y \\\\
    \\dot{z} &= x y - \\beta z

where :math:`\\sigma` is the Prandtl number, :math:`\\rho` the Rayleigh
number and :math:`\\beta` a geometric factor.

References:
    1. E. N. Lorenz, "Deterministic Nonperiodic Flow", *Journal of the
       Atmospheric Sciences*, vol. 20, no. 2, pp. 130-141, 1963.
"""

from __future__ import annotations

from collections.abc import Mapping

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from dynsim.systems._types import Parameter, SystemDefinition


def lorenz_derivative(state: ArrayLike, params: Mapping[str, ArrayLike]) -> Array:
    """Time derivative of the Lorenz state ``[x, y, z]``.

    Args:
        state: ``[x, y, z]``.
        params: Mapping with ``sigma``, ``rho`` and ``beta``.

    Returns:
        ``[dx/dt, dy/dt, dz/dt]``.
    """
    x, y, z = state[0], state[1], state[2]
    sigma, rho, beta = params["sigma"], params["rho"], params["beta"]
    return jnp.stack([
        sigma * (y - x),
        x * (rho - z) - y,
        x * y - beta * z,
    ])


LORENZ = SystemDefinition(
    id="lorenz",
    name="Lorenz Attractor",
    description="A chaotic system exhibiting the famous butterfly attractor",
    state_variables=("x", "y", "z"),
    parameters=(
        Parameter("sigma", "σ (Sigma)", min=0.0, max=20.0, step=0.1, default=10.0),
        Parameter("rho", "ρ (Rho)", min=0.0, max=50.0, step=0.5, default=28.0),
        Parameter("beta", "β (Beta)", min=0.0, max=10.0, step=0.1, default=8.0 / 3.0),
    ),
    default_initial_state=(1.0, 1.0, 1.0),
    derivative=lorenz_derivative,
    default_time_step=0.01,
    default_horizon=50.0,
)
