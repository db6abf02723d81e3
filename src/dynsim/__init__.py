"""
dynsim is a small fixed-step integration engine for parameterized dynamical systems, implemented in JAX.
"""

from .config import set_dtype, get_dtype

from .vector import (
    DimensionMismatchError,
    add,
    subtract,
    scale,
    dot,
    magnitude,
)

from .integrators import rk4_step

from .simulation import (
    ConfigRule,
    ConfigViolation,
    Failure,
    FailureKind,
    IntegrationError,
    RunConfig,
    SolverOutcome,
    Success,
    Trajectory,
    TrajectoryPoint,
    integrate,
    validate_run_config,
)

from .systems import (
    LORENZ,
    LOTKA_VOLTERRA,
    Parameter,
    SystemDefinition,
    SystemSummary,
    get_system,
    list_systems,
)

__all__ = [
    # Config
    "set_dtype",
    "get_dtype",
    # Vector arithmetic
    "DimensionMismatchError",
    "add",
    "subtract",
    "scale",
    "dot",
    "magnitude",
    # Integrators
    "rk4_step",
    # Simulation
    "ConfigRule",
    "ConfigViolation",
    "Failure",
    "FailureKind",
    "IntegrationError",
    "RunConfig",
    "SolverOutcome",
    "Success",
    "Trajectory",
    "TrajectoryPoint",
    "integrate",
    "validate_run_config",
    # Systems
    "LORENZ",
    "LOTKA_VOLTERRA",
    "Parameter",
    "SystemDefinition",
    "SystemSummary",
    "get_system",
    "list_systems",
]
