"""Trajectory integration: run configuration, validation and outcomes.

Provides :func:`integrate`, which validates a :class:`RunConfig` against a
system definition and integrates it with fixed-step RK4, returning either
``Success(trajectory)`` or ``Failure(reason)``.
"""

from dynsim.simulation._types import (
    ConfigRule,
    ConfigViolation,
    DimensionMismatch,
    Failure,
    FailureKind,
    FailureReason,
    IntegrationError,
    InvalidConfig,
    NonFiniteInitialState,
    NumericalInstability,
    RunConfig,
    SolverOutcome,
    StepBudgetExceeded,
    Success,
    Trajectory,
    TrajectoryPoint,
)
from dynsim.simulation.solver import integrate, padded_length, step_budget, time_grid
from dynsim.simulation.validation import validate_run_config

__all__ = [
    "ConfigRule",
    "ConfigViolation",
    "DimensionMismatch",
    "Failure",
    "FailureKind",
    "FailureReason",
    "IntegrationError",
    "InvalidConfig",
    "NonFiniteInitialState",
    "NumericalInstability",
    "RunConfig",
    "SolverOutcome",
    "StepBudgetExceeded",
    "Success",
    "Trajectory",
    "TrajectoryPoint",
    "integrate",
    "padded_length",
    "step_budget",
    "time_grid",
    "validate_run_config",
]
