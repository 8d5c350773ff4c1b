# utils.py

"""Utility functions for argument types."""

import jax
import jax.numpy as jnp

from kernox._orientation import Orientation
from kernox.typing import ArrayLike, OrientationLike, ScalarLike

__all__ = ["allclose", "as_matrix", "as_orientation", "as_scalar", "copytri"]


def as_orientation(sigma: OrientationLike) -> Orientation:
    """Convert an orientation representation into an :class:`Orientation`.

    Args:
        sigma: Orientation member or its value, ``"row"`` or ``"col"``.

    Raises:
        ValueError
            If ``sigma`` does not name an orientation.
    """
    if isinstance(sigma, Orientation):
        return sigma
    try:
        return Orientation(sigma)
    except ValueError as e:
        msg = f"The given orientation {sigma!r} must be one of 'row' or 'col'."
        raise ValueError(msg) from e


def as_matrix(X: ArrayLike, name: str = "X") -> jax.Array:
    """Convert an object into a two-dimensional floating point JAX array.

    Args:
        X: Object to convert.
        name: Name of the argument used in error messages.

    Raises:
        ValueError
            If ``X`` is not two-dimensional.
    """
    X = jnp.asarray(X)
    if X.ndim != 2:
        msg = f"{name} must be a matrix, got an array with shape {X.shape}."
        raise ValueError(msg)
    if not jnp.issubdtype(X.dtype, jnp.floating):
        X = X.astype(jnp.result_type(float))
    return X


def as_scalar(x: ScalarLike) -> float:
    """Convert a scalar into a python float.

    Raises:
        ValueError
            If :code:`x` can not be interpreted as a scalar.
    """
    if jnp.ndim(x) != 0:
        msg = "The given input is not a scalar."
        raise ValueError(msg)
    return float(x)


@jax.jit
def _mirror_upper(K: jax.Array) -> jax.Array:
    return jnp.triu(K) + jnp.triu(K, 1).swapaxes(-1, -2)


@jax.jit
def _mirror_lower(K: jax.Array) -> jax.Array:
    return jnp.tril(K) + jnp.tril(K, -1).swapaxes(-1, -2)


def copytri(K: jax.Array, uplo: str = "U") -> jax.Array:
    """Copy one triangle of a square matrix into the other.

    Args:
        K: Square matrix.
        uplo: ``"U"`` mirrors the upper triangle into the lower one, ``"L"`` the
            lower triangle into the upper one.
    """
    if uplo == "U":
        return _mirror_upper(K)
    if uplo == "L":
        return _mirror_lower(K)
    msg = f"uplo must be 'U' or 'L', got {uplo!r}."
    raise ValueError(msg)


def allclose(
    a: ArrayLike,
    b: ArrayLike,
    rtol: float = 1e-5,
    atol: float = 1e-8,
) -> bool:
    """Check if two pairwise matrices are close to each other.

    Args:
        a: First matrix.
        b: Second matrix.
        rtol: Relative tolerance.
        atol: Absolute tolerance.
    Returns:
        Whether the two matrices are close to each other.
    """
    return bool(jnp.allclose(jnp.asarray(a), jnp.asarray(b), rtol=rtol, atol=atol))
