"""Type definitions for integration runs and their outcomes.

- :class:`RunConfig`: Per-run inputs (time step, horizon, initial state,
  parameter values).
- :class:`TrajectoryPoint` / :class:`Trajectory`: The sampled solution.
- :class:`Success` / :class:`Failure`: The two variants of a solver
  outcome.  A failure carries one of the reason types below and never a
  partial trajectory.
- :class:`ConfigRule` / :class:`ConfigViolation`: Validation results.

Outcomes are values, not exceptions, so every caller handles the failure
path explicitly.  :meth:`Failure.unwrap` converts a failure into an
:class:`IntegrationError` for callers that prefer raising.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, NamedTuple, Union

from jax import Array


@dataclass(frozen=True)
class RunConfig:
    """Inputs of a single integration run.

    Args:
        dt: Fixed time step.  Must be finite, positive and ``<= t_max``.
        t_max: Integration horizon.  Must be finite and positive.
        initial_state: State at ``t = 0``, one value per state variable.
        parameter_values: Value of every declared parameter, by name.
            Names the system does not declare are ignored.
    """

    dt: float
    t_max: float
    initial_state: Sequence[float]
    parameter_values: Mapping[str, float]


class ConfigRule(Enum):
    """Validation rules, in the order they are checked."""

    INVALID_TIME_STEP = "invalid_time_step"
    INVALID_HORIZON = "invalid_horizon"
    TIME_STEP_EXCEEDS_HORIZON = "time_step_exceeds_horizon"
    INITIAL_STATE_LENGTH = "initial_state_length"
    NON_FINITE_INITIAL_STATE = "non_finite_initial_state"
    MISSING_PARAMETERS = "missing_parameters"
    INVALID_PARAMETER_VALUE = "invalid_parameter_value"

    def __str__(self) -> str:
        return self.value


class ConfigViolation(NamedTuple):
    """The first rule a run configuration breaks.

    Attributes:
        rule: The violated rule.
        detail: Human-readable explanation, including offending values.
    """

    rule: ConfigRule
    detail: str


class TrajectoryPoint(NamedTuple):
    """State of the system at one sample time."""

    t: float
    state: Array


@dataclass(frozen=True, eq=False)
class Trajectory:
    """A sampled solution ``x(t)``.

    Attributes:
        times: Sample times as float64, shape ``(M,)``.  Starts at 0 and is
            strictly increasing in steps of ``dt``.
        states: States at each sample time, shape ``(M, N)``.
        variables: Names of the ``N`` state variables, in column order.
    """

    times: Array
    states: Array
    variables: tuple[str, ...]

    def __len__(self) -> int:
        return int(self.times.shape[0])

    @property
    def points(self) -> tuple[TrajectoryPoint, ...]:
        """The trajectory as a sequence of ``(t, state)`` pairs."""
        return tuple(
            TrajectoryPoint(float(t), state) for t, state in zip(self.times, self.states)
        )

    @property
    def final_state(self) -> Array:
        return self.states[-1]

    def variable(self, name: str) -> Array:
        """Return the time series of the state variable *name*.

        Raises:
            KeyError: If *name* is not one of :attr:`variables`.
        """
        try:
            index = self.variables.index(name)
        except ValueError:
            raise KeyError(
                f"Unknown state variable '{name}'. Available: {', '.join(self.variables)}"
            ) from None
        return self.states[:, index]


class FailureKind(Enum):
    """Machine-distinguishable category of a failed run."""

    INVALID_CONFIG = "invalid_config"
    NON_FINITE_INITIAL_STATE = "non_finite_initial_state"
    NUMERICAL_INSTABILITY = "numerical_instability"
    STEP_BUDGET_EXCEEDED = "step_budget_exceeded"
    DIMENSION_MISMATCH = "dimension_mismatch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InvalidConfig:
    """The run configuration broke a validation rule."""

    kind: ClassVar[FailureKind] = FailureKind.INVALID_CONFIG

    violation: ConfigViolation

    @property
    def detail(self) -> str:
        return self.violation.detail


@dataclass(frozen=True)
class NonFiniteInitialState:
    """The initial state contains NaN or infinite values."""

    kind: ClassVar[FailureKind] = FailureKind.NON_FINITE_INITIAL_STATE

    @property
    def detail(self) -> str:
        return "Initial conditions contain NaN or Infinity"


@dataclass(frozen=True)
class NumericalInstability:
    """A step produced NaN or infinite values.

    Attributes:
        at_time: Simulation time at the start of the step whose result
            was non-finite, i.e. the time of the last finite state.
    """

    kind: ClassVar[FailureKind] = FailureKind.NUMERICAL_INSTABILITY

    at_time: float

    @property
    def detail(self) -> str:
        return (
            f"Numerical instability detected at t={self.at_time:.2f}. "
            "State contains NaN or Infinity. "
            "Try reducing the time step or adjusting parameters."
        )


@dataclass(frozen=True)
class StepBudgetExceeded:
    """The step cap was reached before the horizon."""

    kind: ClassVar[FailureKind] = FailureKind.STEP_BUDGET_EXCEEDED

    max_steps: int
    reached_time: float

    @property
    def detail(self) -> str:
        return (
            f"Maximum number of integration steps ({self.max_steps}) exceeded "
            f"at t={self.reached_time:.2f}"
        )


@dataclass(frozen=True)
class DimensionMismatch:
    """The derivative function returned a vector of the wrong length."""

    kind: ClassVar[FailureKind] = FailureKind.DIMENSION_MISMATCH

    expected: int
    actual: int

    @property
    def detail(self) -> str:
        return (
            f"Derivative returned {self.actual} components for a state "
            f"of length {self.expected}"
        )


FailureReason = Union[
    InvalidConfig,
    NonFiniteInitialState,
    NumericalInstability,
    StepBudgetExceeded,
    DimensionMismatch,
]


class IntegrationError(RuntimeError):
    """Raised by :meth:`Failure.unwrap`.

    Attributes:
        failure: The failed outcome.
    """

    def __init__(self, failure: Failure) -> None:
        self.failure = failure
        super().__init__(failure.detail)


class Success(NamedTuple):
    """A completed run."""

    trajectory: Trajectory

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Trajectory:
        return self.trajectory


class Failure(NamedTuple):
    """An abandoned run.

    Attributes:
        reason: Structured cause; one of the reason dataclasses.
    """

    reason: FailureReason

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> FailureKind:
        return self.reason.kind

    @property
    def detail(self) -> str:
        return self.reason.detail

    def unwrap(self) -> Trajectory:
        """Raise :class:`IntegrationError`; a failure has no trajectory."""
        raise IntegrationError(self)


SolverOutcome = Union[Success, Failure]
