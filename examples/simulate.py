# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "dynsim"]
#
# [tool.uv.sources]
# dynsim = { path = ".." }
# ///
"""Integrate a built-in dynamical system and summarize the trajectory.

Looks up a system from the registry, seeds a run configuration from its
declared defaults, applies any overrides given on the command line, and
integrates it with fixed-step RK4.  Prints the sampled trajectory at a
few evenly spaced times, or the failure reason if the run is abandoned.

Requires dynsim to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/simulate.py [SYSTEM] [OPTIONS]

Examples:
    # List the available systems
    uv run examples/simulate.py --list

    # Lorenz attractor with defaults (dt=0.01, t_max=50)
    uv run examples/simulate.py lorenz

    # Non-chaotic Lorenz regime, shorter horizon
    uv run examples/simulate.py lorenz --t-max 10 --param rho=14

    # Predator-prey with a custom initial population
    uv run examples/simulate.py lotka-volterra --initial 4 --initial 2 --param alpha=1.1

    # Overflow: huge populations trigger a numerical instability failure
    uv run examples/simulate.py lotka-volterra --initial 1e100 --initial 1e100
"""

import logging
import sys
import time
from typing import Annotated

import typer

from dynsim.simulation import integrate
from dynsim.systems import get_system, list_systems


def _parse_params(items: list[str]) -> dict[str, float]:
    params = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected NAME=VALUE, got '{item}'", param_hint="--param")
        try:
            params[name.strip()] = float(value)
        except ValueError:
            raise typer.BadParameter(
                f"Value of '{name}' is not a number: '{value}'", param_hint="--param"
            ) from None
    return params


def main(
    system_id: Annotated[str, typer.Argument(help="Registry id of the system")] = "lorenz",
    list_: Annotated[bool, typer.Option("--list", help="List available systems and exit")] = False,
    dt: Annotated[float | None, typer.Option(help="Integration time step")] = None,
    t_max: Annotated[float | None, typer.Option(help="Integration horizon")] = None,
    initial: Annotated[
        list[float] | None,
        typer.Option(help="Initial state, one value per state variable (repeat the option)"),
    ] = None,
    param: Annotated[
        list[str] | None, typer.Option(help="Parameter override NAME=VALUE (repeatable)")
    ] = None,
    samples: Annotated[int, typer.Option(help="Number of trajectory rows to print")] = 10,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
) -> None:
    """Integrate a built-in dynamical system with fixed-step RK4."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if list_:
        for summary in list_systems():
            print(f"{summary.id:<16} {summary.name}: {summary.description}")
        return

    system = get_system(system_id)
    if system is None:
        known = ", ".join(s.id for s in list_systems())
        print(f"ERROR: Unknown system '{system_id}'. Available: {known}")
        sys.exit(1)

    try:
        config = system.default_run_config(
            dt=dt,
            t_max=t_max,
            initial_state=tuple(initial) if initial else None,
            **_parse_params(param or []),
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"System: {system.name} ({system.id})")
    print(f"  Parameters: {dict(config.parameter_values)}")
    print(f"  Initial state: {list(config.initial_state)}")
    print(f"  dt={config.dt}, t_max={config.t_max}")

    t0 = time.perf_counter()
    outcome = integrate(system, config)
    elapsed = time.perf_counter() - t0

    if not outcome.ok:
        print(f"\nFAILED [{outcome.kind}] after {elapsed:.2f}s: {outcome.detail}")
        sys.exit(1)

    trajectory = outcome.trajectory
    print(f"\nIntegrated {len(trajectory)} points in {elapsed:.2f}s\n")

    header = f"{'t':>10} " + " ".join(f"{name:>14}" for name in trajectory.variables)
    print(header)
    print("-" * len(header))
    n = len(trajectory)
    stride = max(1, (n - 1) // max(1, samples - 1))
    rows = list(range(0, n, stride))
    if rows[-1] != n - 1:
        rows.append(n - 1)
    for i in rows:
        t = float(trajectory.times[i])
        values = " ".join(f"{float(v):>14.6f}" for v in trajectory.states[i])
        print(f"{t:>10.4f} {values}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
