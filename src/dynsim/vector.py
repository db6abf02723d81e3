"""Elementary arithmetic on fixed-length state vectors.

All functions accept any array-like of numbers, convert it to a 1-D
``jax.Array`` of the configured dtype, and return a new array (or scalar
array for the reductions).  Nothing is modified in place.

Length checks compare static shapes, so a mismatch is detected at trace
time when these helpers run inside ``jax.jit`` or ``jax.lax.scan``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from dynsim.config import get_dtype


class DimensionMismatchError(ValueError):
    """Two vectors combined element-wise have different lengths.

    This signals a broken contract between a system's derivative function
    and the state it is evaluated on, not a user input problem.

    Attributes:
        expected: Length of the left-hand operand.
        actual: Length of the right-hand operand.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Vector length mismatch: {expected} != {actual}")


def _as_vector(v: ArrayLike) -> Array:
    return jnp.atleast_1d(jnp.asarray(v, dtype=get_dtype()))


def _check_lengths(a: Array, b: Array) -> None:
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(a.shape[0], b.shape[0])


def add(a: ArrayLike, b: ArrayLike) -> Array:
    """Add two vectors element-wise.

    Args:
        a: First vector.
        b: Second vector, same length as *a*.

    Returns:
        ``a + b``.

    Raises:
        DimensionMismatchError: If the lengths differ.
    """
    a = _as_vector(a)
    b = _as_vector(b)
    _check_lengths(a, b)
    return a + b


def subtract(a: ArrayLike, b: ArrayLike) -> Array:
    """Subtract vector *b* from vector *a* element-wise.

    Raises:
        DimensionMismatchError: If the lengths differ.
    """
    a = _as_vector(a)
    b = _as_vector(b)
    _check_lengths(a, b)
    return a - b


def scale(v: ArrayLike, k: ArrayLike) -> Array:
    """Multiply every component of *v* by the scalar *k*."""
    return _as_vector(v) * jnp.asarray(k, dtype=get_dtype())


def dot(a: ArrayLike, b: ArrayLike) -> Array:
    """Dot product of two vectors.

    Raises:
        DimensionMismatchError: If the lengths differ.
    """
    a = _as_vector(a)
    b = _as_vector(b)
    _check_lengths(a, b)
    return jnp.sum(a * b)


def magnitude(v: ArrayLike) -> Array:
    """Euclidean (L2) norm of *v*.  The empty vector has magnitude 0."""
    v = _as_vector(v)
    return jnp.sqrt(jnp.sum(v * v))
