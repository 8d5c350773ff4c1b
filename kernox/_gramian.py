# _gramian.py

r"""Inner product and squared distance matrices via matrix multiplication.

This module computes pairwise matrices of the two kernels that decompose into
inner products without evaluating any pair individually:

- :func:`gramian_`: :math:`G = XX^\top` (symmetric rank update, upper triangle
  only) or :math:`G = XY^\top` (general matrix multiply)
- :func:`dot_vectors_`: squared norms :math:`x_i^\top x_i` of every sample
- :func:`squared_distance_`: turns a Gram matrix into squared distances using
  :math:`\|x - y\|^2 = x^\top x - 2 x^\top y + y^\top y`

Functions with a trailing underscore write into a caller supplied destination
and return it. JAX arrays are immutable, so "writing" means returning the
destination with the owned entries replaced; entries the function does not own
keep the caller's values.
"""

import jax
import jax.numpy as jnp

from kernox._errors import DimensionMismatch
from kernox._orientation import Orientation
from kernox.typing import ArrayLike, OrientationLike
from kernox.utils import as_matrix, as_orientation, copytri

_PRECISION = jax.lax.Precision.HIGHEST


@jax.jit
def _write_upper(G: jax.Array, new: jax.Array) -> jax.Array:
    n = G.shape[-1]
    mask = jnp.triu(jnp.ones((n, n), dtype=bool))
    return jnp.where(mask, new.astype(G.dtype), G)


@jax.jit
def _syrk(G: jax.Array, A: jax.Array) -> jax.Array:
    """Upper triangle of ``A A^T``. JAX has no syrk, only its write pattern is kept."""
    return _write_upper(G, jnp.matmul(A, A.swapaxes(-1, -2), precision=_PRECISION))


@jax.jit
def _gemm(G: jax.Array, A: jax.Array, B: jax.Array) -> jax.Array:
    return jnp.matmul(A, B.swapaxes(-1, -2), precision=_PRECISION).astype(G.dtype)


def _check_features(sigma: Orientation, X: jax.Array, Y: jax.Array) -> None:
    if sigma.n_features(X) != sigma.n_features(Y):
        msg = (
            f"Feature dimension of X ({sigma.n_features(X)}) must match feature "
            f"dimension of Y ({sigma.n_features(Y)})."
        )
        raise DimensionMismatch(msg)


def gramian_(
    sigma: OrientationLike,
    G: jax.Array,
    X: jax.Array,
    Y: jax.Array | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Write the matrix of inner products of the samples of ``X`` (and ``Y``) into ``G``.

    Without ``Y`` only the upper triangle (including the diagonal) of ``G`` is
    written, as a symmetric rank update would; the lower triangle is mirrored from
    it if ``symmetrize`` and left untouched otherwise.

    Args:
        sigma: Orientation of ``X`` and ``Y``.
        G: Destination of shape ``(n, n)`` or ``(n, m)``.
        X: First feature matrix with ``n`` samples.
        Y: Optional second feature matrix with ``m`` samples.
        symmetrize: Whether to mirror the upper triangle (single dataset only).

    Raises:
        DimensionMismatch
            If ``G`` does not have the shape implied by the samples.
    """
    sigma = as_orientation(sigma)
    if Y is None:
        n = sigma.n_samples(X)
        if G.shape[0] != G.shape[1]:
            msg = f"Gramian G must be square, got shape {G.shape}."
            raise DimensionMismatch(msg)
        if G.shape[0] != n:
            msg = f"Size of G ({G.shape[0]}) must match sample count of X ({n})."
            raise DimensionMismatch(msg)
        G = _syrk(G, sigma.as_rows(X))
        return copytri(G, "U") if symmetrize else G

    _check_features(sigma, X, Y)
    n, m = sigma.n_samples(X), sigma.n_samples(Y)
    if G.shape[0] != n:
        msg = f"Rows of G ({G.shape[0]}) must match sample count of X ({n})."
        raise DimensionMismatch(msg)
    if G.shape[1] != m:
        msg = f"Columns of G ({G.shape[1]}) must match sample count of Y ({m})."
        raise DimensionMismatch(msg)
    return _gemm(G, sigma.as_rows(X), sigma.as_rows(Y))


def gramian(
    sigma: OrientationLike,
    X: ArrayLike,
    Y: ArrayLike | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Allocating variant of :func:`gramian_`."""
    sigma = as_orientation(sigma)
    X = as_matrix(X, "X")
    Y = None if Y is None else as_matrix(Y, "Y")
    m = sigma.n_samples(X if Y is None else Y)
    G = jnp.zeros((sigma.n_samples(X), m), dtype=X.dtype)
    return gramian_(sigma, G, X, Y, symmetrize=symmetrize)


def dot_vectors_(sigma: OrientationLike, xtx: jax.Array, X: jax.Array) -> jax.Array:
    """Write the squared norm of every sample of ``X`` into ``xtx``.

    Raises:
        DimensionMismatch
            If ``xtx`` does not have one entry per sample.
    """
    sigma = as_orientation(sigma)
    if xtx.shape != (sigma.n_samples(X),):
        msg = (
            f"Length of xtx {xtx.shape} must match sample count of X "
            f"({sigma.n_samples(X)}) along dimension {sigma.sample_axis}."
        )
        raise DimensionMismatch(msg)
    return jnp.sum(X**2, axis=sigma.feature_axis).astype(xtx.dtype)


def dot_vectors(sigma: OrientationLike, X: ArrayLike) -> jax.Array:
    sigma = as_orientation(sigma)
    X = as_matrix(X, "X")
    return dot_vectors_(sigma, jnp.zeros(sigma.n_samples(X), dtype=X.dtype), X)


@jax.jit
def _squared_distance_upper(G: jax.Array, xtx: jax.Array) -> jax.Array:
    return _write_upper(G, xtx[:, None] - 2 * G + xtx[None, :])


@jax.jit
def _squared_distance_full(G: jax.Array, xtx: jax.Array, yty: jax.Array) -> jax.Array:
    return xtx[:, None] - 2 * G + yty[None, :]


def squared_distance_(
    G: jax.Array,
    xtx: jax.Array,
    yty: jax.Array | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    r"""Convert a Gram matrix into a squared distance matrix.

    Computes :math:`G_{ij} \leftarrow x_i^\top x_i - 2 G_{ij} + y_j^\top y_j` where
    ``G`` holds the inner products. Without ``yty`` the matrix is treated as
    symmetric and only the upper triangle is updated (and mirrored if
    ``symmetrize``).

    Raises:
        DimensionMismatch
            If the norm vectors do not match the shape of ``G``.
    """
    if yty is None:
        n = xtx.shape[0]
        if not n == G.shape[0] == G.shape[1]:
            msg = (
                f"Gramian G must be square with size matching length of xtx ({n}), "
                f"got shape {G.shape}."
            )
            raise DimensionMismatch(msg)
        G = _squared_distance_upper(G, xtx)
        return copytri(G, "U") if symmetrize else G

    if G.shape[0] != xtx.shape[0]:
        msg = f"Length of xtx ({xtx.shape[0]}) must match rows of G ({G.shape[0]})."
        raise DimensionMismatch(msg)
    if G.shape[1] != yty.shape[0]:
        msg = f"Length of yty ({yty.shape[0]}) must match columns of G ({G.shape[1]})."
        raise DimensionMismatch(msg)
    return _squared_distance_full(G, xtx, yty)


@jax.jit
def _nonnegative_upper(D: jax.Array) -> jax.Array:
    """Clip the upper triangle of a squared distance matrix of one dataset.

    Rounding can leave small negative entries; the diagonal is set to exactly zero.
    """
    n = D.shape[-1]
    return _write_upper(D, jnp.maximum(D, 0).at[jnp.diag_indices(n)].set(0))
