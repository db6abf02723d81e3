"""Type definitions for dynamical system descriptions.

- :class:`Parameter`: A bounded, adjustable model parameter.
- :class:`SystemDefinition`: A complete system: state variables, declared
  parameters, default initial state and derivative function.
- :class:`SystemSummary`: The ``(id, name, description)`` triple shown by
  a system picker.

Definitions are frozen dataclasses.  Structural invariants (bounds
ordering, unique names, matching lengths) are enforced once, at
construction; run-time inputs are checked separately by
:func:`dynsim.simulation.validate_run_config`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple

from dynsim.integrators.rk4 import Derivative
from dynsim.simulation._types import RunConfig


@dataclass(frozen=True)
class Parameter:
    """A named model parameter with bounds and slider granularity.

    Args:
        name: Identifier used as the key in parameter value mappings.
        label: Human-readable display label.
        min: Lower bound (inclusive).
        max: Upper bound (inclusive).
        step: Granularity of user adjustments.  Must be positive.
        default: Default value, within ``[min, max]``.

    Raises:
        ValueError: If the bounds, step or default are inconsistent.
    """

    name: str
    label: str
    min: float
    max: float
    step: float
    default: float

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Parameter name must be a non-empty string")
        if not self.min <= self.max:
            raise ValueError(
                f"Parameter '{self.name}': min ({self.min}) must not exceed "
                f"max ({self.max})"
            )
        if not self.step > 0:
            raise ValueError(
                f"Parameter '{self.name}': step must be positive, got {self.step}"
            )
        if not self.min <= self.default <= self.max:
            raise ValueError(
                f"Parameter '{self.name}': default ({self.default}) is outside "
                f"[{self.min}, {self.max}]"
            )

    def contains(self, value: float) -> bool:
        """Return ``True`` if *value* is finite and within ``[min, max]``."""
        return math.isfinite(value) and self.min <= value <= self.max


class SystemSummary(NamedTuple):
    """Identifying information of a system, without its dynamics."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class SystemDefinition:
    """A parameterized dynamical system ``dx/dt = f(x, p)``.

    Args:
        id: Unique registry key.
        name: Display name.
        description: One-line description.
        state_variables: Ordered names of the ``N`` state components.
        parameters: Declared parameters.  Names must be unique.
        default_initial_state: Initial state of length ``N``.
        derivative: Right-hand side ``f(x, params) -> dx/dt``, where
            *params* maps every declared parameter name to its value.
        default_time_step: Time step used when none is requested.
        default_horizon: Integration horizon used when none is requested.

    Raises:
        ValueError: If the definition is structurally inconsistent.
    """

    id: str
    name: str
    description: str
    state_variables: tuple[str, ...]
    parameters: tuple[Parameter, ...]
    default_initial_state: tuple[float, ...]
    derivative: Derivative
    default_time_step: float = 0.01
    default_horizon: float = 10.0

    def __post_init__(self) -> None:
        if len(self.state_variables) < 1:
            raise ValueError(f"System '{self.id}' must declare at least one state variable")
        names = self.parameter_names
        if len(set(names)) != len(names):
            raise ValueError(f"System '{self.id}' declares duplicate parameter names: {names}")
        if len(self.default_initial_state) != len(self.state_variables):
            raise ValueError(
                f"System '{self.id}': default initial state has length "
                f"{len(self.default_initial_state)}, expected {len(self.state_variables)}"
            )

    @property
    def dimension(self) -> int:
        """Number of state variables."""
        return len(self.state_variables)

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Declared parameter names, in declaration order."""
        return tuple(p.name for p in self.parameters)

    def default_parameters(self) -> dict[str, float]:
        """Return a mapping of every declared parameter to its default."""
        return {p.name: p.default for p in self.parameters}

    def summary(self) -> SystemSummary:
        return SystemSummary(self.id, self.name, self.description)

    def default_run_config(
        self,
        dt: float | None = None,
        t_max: float | None = None,
        initial_state: tuple[float, ...] | None = None,
        **overrides: float,
    ) -> RunConfig:
        """Build a run configuration seeded from the declared defaults.

        Args:
            dt: Time step.  Defaults to :attr:`default_time_step`.
            t_max: Horizon.  Defaults to :attr:`default_horizon`.
            initial_state: Initial state.  Defaults to
                :attr:`default_initial_state`.
            **overrides: Parameter values replacing the defaults, by name.

        Returns:
            RunConfig: A configuration for this system.  It is not
            validated; values outside the declared bounds are reported by
            the solver.

        Raises:
            ValueError: If *overrides* names a parameter this system does
                not declare.

        Examples:
            ```python
            from dynsim.systems import get_system
            lorenz = get_system("lorenz")
            config = lorenz.default_run_config(t_max=5.0, rho=14.0)
            ```
        """
        unknown = [name for name in overrides if name not in self.parameter_names]
        if unknown:
            raise ValueError(
                f"System '{self.id}' has no parameter(s): {', '.join(unknown)}"
            )
        values: Mapping[str, float] = {**self.default_parameters(), **overrides}
        return RunConfig(
            dt=self.default_time_step if dt is None else dt,
            t_max=self.default_horizon if t_max is None else t_max,
            initial_state=tuple(
                self.default_initial_state if initial_state is None else initial_state
            ),
            parameter_values=values,
        )
