"""Lotka-Volterra predator-prey model.

A pair of first-order nonlinear equations describing two interacting
populations, prey :math:`x` and predator :math:`y`:

.. math::

    \\dot{x} &= \\alpha x - \\beta x y \\\\
    \\dot{y} &= \\delta x y - \\gamma y

where :math:`\\alpha` is the prey growth rate, :math:`\\beta` the
predation rate, :math:`\\delta` the predator efficiency (conversion of
prey into predators) and :math:`\\gamma` the predator death rate.

Away from the fixed points, solutions are closed orbits around
:math:`(\\gamma / \\delta, \\alpha / \\beta)`, and the quantity

.. math::

    V = \\delta x - \\gamma \\ln x + \\beta y - \\alpha \\ln y

is conserved along them.
"""

from __future__ import annotations

from collections.abc import Mapping

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from dynsim.systems._types import Parameter, SystemDefinition


def lotka_volterra_derivative(state: ArrayLike, params: Mapping[str, ArrayLike]) -> Array:
    """Time derivative of the population state ``[prey, predator]``.

    Args:
        state: ``[prey, predator]``.
        params: Mapping with ``alpha``, ``beta``, ``delta`` and ``gamma``.

    Returns:
        ``[d(prey)/dt, d(predator)/dt]``.
    """
    prey, predator = state[0], state[1]
    alpha, beta = params["alpha"], params["beta"]
    delta, gamma = params["delta"], params["gamma"]
    return jnp.stack([
        alpha * prey - beta * prey * predator,
        delta * prey * predator - gamma * predator,
    ])


def lotka_volterra_invariant(state: ArrayLike, params: Mapping[str, ArrayLike]) -> Array:
    """Conserved quantity :math:`V` of a strictly positive population state."""
    prey, predator = state[0], state[1]
    return (
        params["delta"] * prey
        - params["gamma"] * jnp.log(prey)
        + params["beta"] * predator
        - params["alpha"] * jnp.log(predator)
    )


LOTKA_VOLTERRA = SystemDefinition(
    id="lotka-volterra",
    name="Lotka-Volterra",
    description="Predator-prey population dynamics model",
    state_variables=("Prey", "Predator"),
    parameters=(
        Parameter("alpha", "α (Prey Growth Rate)", min=0.0, max=3.0, step=0.1, default=1.5),
        Parameter("beta", "β (Predation Rate)", min=0.0, max=2.0, step=0.1, default=1.0),
        Parameter("delta", "δ (Predator Efficiency)", min=0.0, max=2.0, step=0.1, default=1.0),
        Parameter("gamma", "γ (Predator Death Rate)", min=0.0, max=5.0, step=0.1, default=3.0),
    ),
    default_initial_state=(10.0, 5.0),
    derivative=lotka_volterra_derivative,
    default_time_step=0.01,
    default_horizon=30.0,
)
