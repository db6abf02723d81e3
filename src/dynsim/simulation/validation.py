"""Run configuration validation.

Checks a :class:`~dynsim.simulation.RunConfig` against the contract
declared by a :class:`~dynsim.systems.SystemDefinition` before any
integration starts.  Rules are evaluated in a fixed priority order and
the first violation wins:

1. ``dt`` finite and positive.
2. ``t_max`` finite and positive.
3. ``dt <= t_max``.
4. Initial state is a sequence whose length equals the number of state
   variables.
5. Every initial state component finite.
6. Parameter values form a mapping holding every declared parameter (all
   missing names reported together).
7. Every parameter value finite and within its declared bounds.

Numbers must be numeric values; text such as ``"0.01"`` is rejected.
Validation is stateless and never modifies the configuration.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import TYPE_CHECKING

from dynsim.simulation._types import ConfigRule, ConfigViolation, RunConfig

if TYPE_CHECKING:
    from dynsim.systems import SystemDefinition


def _to_float(value) -> float:
    """Convert *value* to float; values that are not numbers become NaN.

    Text is not a number, even when it spells one.
    """
    if isinstance(value, (str, bytes)):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _as_list(value) -> list | None:
    if isinstance(value, (str, bytes)):
        return None
    try:
        return list(value)
    except TypeError:
        return None


def validate_run_config(
    system: SystemDefinition, config: RunConfig
) -> ConfigViolation | None:
    """Validate *config* against *system*.

    Args:
        system: The system the run is for.
        config: The proposed run configuration.

    Returns:
        ``None`` if the configuration is valid, otherwise the first
        :class:`ConfigViolation` in rule priority order.

    Examples:
        ```python
        from dynsim.simulation import validate_run_config
        from dynsim.systems import get_system
        lorenz = get_system("lorenz")
        validate_run_config(lorenz, lorenz.default_run_config(dt=0.0)).rule
        # ConfigRule.INVALID_TIME_STEP
        ```
    """
    dt = _to_float(config.dt)
    t_max = _to_float(config.t_max)

    if not math.isfinite(dt):
        return ConfigViolation(
            ConfigRule.INVALID_TIME_STEP, "Time step dt must be a finite number"
        )
    if dt <= 0:
        return ConfigViolation(
            ConfigRule.INVALID_TIME_STEP, f"Time step dt must be positive, got {dt}"
        )

    if not math.isfinite(t_max):
        return ConfigViolation(
            ConfigRule.INVALID_HORIZON, "Maximum time tMax must be a finite number"
        )
    if t_max <= 0:
        return ConfigViolation(
            ConfigRule.INVALID_HORIZON, f"Maximum time tMax must be positive, got {t_max}"
        )

    if dt > t_max:
        return ConfigViolation(
            ConfigRule.TIME_STEP_EXCEEDS_HORIZON,
            f"Time step dt ({dt}) cannot be larger than maximum time tMax ({t_max})",
        )

    initial_state = _as_list(config.initial_state)
    if initial_state is None:
        return ConfigViolation(
            ConfigRule.INITIAL_STATE_LENGTH, "Initial conditions must be a sequence of numbers"
        )
    if len(initial_state) != system.dimension:
        return ConfigViolation(
            ConfigRule.INITIAL_STATE_LENGTH,
            f"Initial conditions length ({len(initial_state)}) must match "
            f"number of state variables ({system.dimension})",
        )
    if not all(math.isfinite(_to_float(x)) for x in initial_state):
        return ConfigViolation(
            ConfigRule.NON_FINITE_INITIAL_STATE,
            "All initial conditions must be finite numbers",
        )

    values = config.parameter_values
    if not isinstance(values, Mapping):
        return ConfigViolation(
            ConfigRule.MISSING_PARAMETERS, "Parameters must be a mapping of names to values"
        )
    missing = [name for name in system.parameter_names if name not in values]
    if missing:
        return ConfigViolation(
            ConfigRule.MISSING_PARAMETERS,
            f"Missing required parameters: {', '.join(missing)}",
        )

    for param in system.parameters:
        value = _to_float(values[param.name])
        if not math.isfinite(value):
            return ConfigViolation(
                ConfigRule.INVALID_PARAMETER_VALUE,
                f"Parameter {param.name} must be a finite number",
            )
        if not param.contains(value):
            return ConfigViolation(
                ConfigRule.INVALID_PARAMETER_VALUE,
                f"Parameter {param.name} ({value}) is outside valid range "
                f"[{param.min}, {param.max}]",
            )

    return None
