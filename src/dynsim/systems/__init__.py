"""Built-in dynamical systems and their registry.

The registry is a fixed, read-only catalog of :class:`SystemDefinition`
instances keyed by id:

- ``"lorenz"`` -- :data:`LORENZ`, the 3-variable chaotic Lorenz attractor.
- ``"lotka-volterra"`` -- :data:`LOTKA_VOLTERRA`, the 2-variable
  predator-prey oscillator.

Lookups do not validate the definitions; they are constructed (and their
structure checked) once, at import.
"""

from __future__ import annotations

from dynsim.systems._types import Parameter, SystemDefinition, SystemSummary
from dynsim.systems.lorenz import LORENZ, lorenz_derivative
from dynsim.systems.lotka_volterra import (
    LOTKA_VOLTERRA,
    lotka_volterra_derivative,
    lotka_volterra_invariant,
)

SYSTEMS: tuple[SystemDefinition, ...] = (LORENZ, LOTKA_VOLTERRA)

_BY_ID: dict[str, SystemDefinition] = {system.id: system for system in SYSTEMS}


def list_systems() -> list[SystemSummary]:
    """Return the ``(id, name, description)`` of every built-in system.

    Returns:
        list[SystemSummary]: Summaries in registry order.

    Examples:
        ```python
        from dynsim.systems import list_systems
        [s.id for s in list_systems()]  # ['lorenz', 'lotka-volterra']
        ```
    """
    return [system.summary() for system in SYSTEMS]


def get_system(system_id: str) -> SystemDefinition | None:
    """Look up a built-in system by id.

    Args:
        system_id: Registry key, e.g. ``"lorenz"``.

    Returns:
        The matching definition, or ``None`` if no system has that id.
    """
    return _BY_ID.get(system_id)


__all__ = [
    "LORENZ",
    "LOTKA_VOLTERRA",
    "Parameter",
    "SYSTEMS",
    "SystemDefinition",
    "SystemSummary",
    "get_system",
    "list_systems",
    "lorenz_derivative",
    "lotka_volterra_derivative",
    "lotka_volterra_invariant",
]
