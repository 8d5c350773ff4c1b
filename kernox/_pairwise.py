# _pairwise.py

r"""Pairwise matrices of :class:`PairwiseKernel`\ s.

For a kernel :math:`\kappa(x, y) = \sum_i \phi(x_i, y_i)` and feature matrices
:math:`X` (:math:`n` samples) and :math:`Y` (:math:`m` samples) this module
computes

- :func:`pairwise`: a single evaluation :math:`\kappa(x, y)`
- :func:`pairwise_matrix_` / :func:`pairwise_matrix`: the matrix
  :math:`K_{ij} = \kappa(x_i, x_j)` (upper triangle only, optionally mirrored) or
  :math:`K_{ij} = \kappa(x_i, y_j)`

Kernels tagged as inner product or squared distance forms never reach the
per-pair loop; they are delegated to :mod:`kernox._gramian`. Squared distances
computed this way are clipped at zero, and the diagonal of a single dataset
matrix is exactly zero.
"""

import jax
import jax.numpy as jnp

from kernox._errors import DimensionMismatch
from kernox._gramian import (
    _nonnegative_upper,
    dot_vectors,
    gramian_,
    squared_distance_,
)
from kernox._kernel import PairwiseKernel
from kernox._orientation import Orientation
from kernox.config import warn as _warn
from kernox.typing import ArrayLike, OrientationLike
from kernox.utils import as_matrix, as_orientation, copytri


def unsafe_pairwise(kernel: PairwiseKernel, x: jax.Array, y: jax.Array) -> jax.Array:
    """Accumulate ``phi`` over two vectors of equal length, left to right."""
    dtype = jnp.result_type(x.dtype, y.dtype, float)

    def step(s: jax.Array, xy: tuple[jax.Array, jax.Array]) -> tuple[jax.Array, None]:
        xi, yi = xy
        return (s + kernel.phi(xi, yi)).astype(dtype), None

    s, _ = jax.lax.scan(step, jnp.zeros((), dtype=dtype), (x, y))
    return s


def pairwise(kernel: PairwiseKernel, x: ArrayLike, y: ArrayLike) -> jax.Array:
    """Evaluate a pairwise kernel on two scalars or two vectors.

    Raises:
        DimensionMismatch
            If ``x`` and ``y`` do not have the same length.
    """
    x, y = jnp.asarray(x), jnp.asarray(y)
    if x.ndim == 0 and y.ndim == 0:
        return kernel.phi(x, y)
    if x.shape != y.shape:
        msg = f"Arrays x and y must have the same length, got {x.shape} and {y.shape}."
        raise DimensionMismatch(msg)
    return unsafe_pairwise(kernel, jnp.ravel(x), jnp.ravel(y))


def init_pairwise_matrix(
    sigma: OrientationLike, X: jax.Array, Y: jax.Array | None = None
) -> jax.Array:
    """Allocate a destination for :func:`pairwise_matrix_`."""
    sigma = as_orientation(sigma)
    m = sigma.n_samples(X if Y is None else Y)
    return jnp.zeros((sigma.n_samples(X), m), dtype=X.dtype)


def check_pairwise_dimensions(
    sigma: OrientationLike,
    K: jax.Array,
    X: jax.Array,
    Y: jax.Array | None = None,
) -> int | tuple[int, int]:
    """Validate the destination ``K`` against the samples of ``X`` (and ``Y``).

    Returns:
        ``n`` for a single dataset, ``(n, m)`` for two datasets.

    Raises:
        DimensionMismatch
            Naming the dimension of ``K`` that disagrees.
    """
    sigma = as_orientation(sigma)
    dim = sigma.sample_axis + 1
    if Y is None:
        n = K.shape[0]
        if K.shape[1] != n:
            msg = f"Kernel matrix K must be square, got shape {K.shape}."
            raise DimensionMismatch(msg)
        if sigma.n_samples(X) != n:
            msg = (
                f"Dimensions of K ({n}) must match dimension {dim} of X "
                f"({sigma.n_samples(X)})."
            )
            raise DimensionMismatch(msg)
        return n

    n, m = sigma.n_samples(X), sigma.n_samples(Y)
    if K.shape[0] != n:
        msg = f"Dimension 1 of K ({K.shape[0]}) must match dimension {dim} of X ({n})."
        raise DimensionMismatch(msg)
    if K.shape[1] != m:
        msg = f"Dimension 2 of K ({K.shape[1]}) must match dimension {dim} of Y ({m})."
        raise DimensionMismatch(msg)
    if sigma.n_features(X) != sigma.n_features(Y):
        msg = (
            f"Feature dimension of X ({sigma.n_features(X)}) must match feature "
            f"dimension of Y ({sigma.n_features(Y)})."
        )
        raise DimensionMismatch(msg)
    return n, m


def _evaluate_pairs(
    kernel: PairwiseKernel,
    sigma: Orientation,
    X: jax.Array,
    Y: jax.Array,
    rows: jax.Array,
    cols: jax.Array,
) -> jax.Array:
    def evaluate(i: jax.Array, j: jax.Array) -> jax.Array:
        return unsafe_pairwise(kernel, sigma.subvector(X, i), sigma.subvector(Y, j))

    return jax.vmap(evaluate)(rows, cols)


def pairwise_matrix_(
    sigma: OrientationLike,
    K: jax.Array,
    kernel: PairwiseKernel,
    X: jax.Array,
    Y: jax.Array | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Write the pairwise matrix of ``kernel`` into the destination ``K``.

    For a single dataset only the upper triangle (including the diagonal) is
    computed; it is mirrored into the lower triangle if ``symmetrize``, otherwise
    the lower triangle keeps the values of ``K`` and must not be relied upon.

    Args:
        sigma: Orientation of ``X`` and ``Y``.
        K: Destination of shape ``(n, n)`` or ``(n, m)``.
        kernel: Pairwise kernel to evaluate.
        X: First feature matrix with ``n`` samples.
        Y: Optional second feature matrix with ``m`` samples.
        symmetrize: Whether to mirror the upper triangle (single dataset only).

    Raises:
        DimensionMismatch
            If ``K``, ``X`` and ``Y`` do not agree.
        TypeError
            If ``kernel`` is not a :class:`PairwiseKernel`.
    """
    sigma = as_orientation(sigma)
    if not isinstance(kernel, PairwiseKernel):
        msg = f"{kernel} is not a pairwise kernel, use kernel_matrix instead."
        raise TypeError(msg)

    if Y is None:
        n = check_pairwise_dimensions(sigma, K, X)
        if kernel.is_inner_product_form():
            return gramian_(sigma, K, X, symmetrize=symmetrize)
        if kernel.is_squared_distance_form():
            K = gramian_(sigma, K, X, symmetrize=False)
            K = squared_distance_(K, dot_vectors(sigma, X), symmetrize=False)
            K = _nonnegative_upper(K)
            return copytri(K, "U") if symmetrize else K
        if n == 0:
            return K

        _warn(f"Kernel {kernel} is evaluated elementwise on {n * (n + 1) // 2} pairs.")
        rows, cols = jnp.triu_indices(n)
        values = _evaluate_pairs(kernel, sigma, X, X, rows, cols)
        K = K.at[rows, cols].set(values.astype(K.dtype))
        return copytri(K, "U") if symmetrize else K

    n, m = check_pairwise_dimensions(sigma, K, X, Y)
    if kernel.is_inner_product_form():
        return gramian_(sigma, K, X, Y)
    if kernel.is_squared_distance_form():
        K = gramian_(sigma, K, X, Y)
        D = squared_distance_(K, dot_vectors(sigma, X), dot_vectors(sigma, Y))
        return jnp.maximum(D, 0).astype(K.dtype)
    if n * m == 0:
        return K

    _warn(f"Kernel {kernel} is evaluated elementwise on {n * m} pairs.")
    rows, cols = (idx.ravel() for idx in jnp.indices((n, m)))
    values = _evaluate_pairs(kernel, sigma, X, Y, rows, cols)
    return K.at[rows, cols].set(values.astype(K.dtype))


def pairwise_matrix(
    sigma: OrientationLike,
    kernel: PairwiseKernel,
    X: ArrayLike,
    Y: ArrayLike | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Allocating variant of :func:`pairwise_matrix_`."""
    sigma = as_orientation(sigma)
    X = as_matrix(X, "X")
    Y = None if Y is None else as_matrix(Y, "Y")
    K = init_pairwise_matrix(sigma, X, Y)
    return pairwise_matrix_(sigma, K, kernel, X, Y, symmetrize=symmetrize)
