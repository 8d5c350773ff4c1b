# _kernel_matrix.py

r"""Evaluation of arbitrary (composite) kernels.

Composite kernels are evaluated by evaluating the kernels they wrap and
combining the results elementwise. Every leaf therefore takes its own fastest
path: a :class:`KernelAffinity` of a :class:`SquaredDistanceKernel` costs one
squared distance matrix plus an elementwise update.
"""

import jax
import jax.numpy as jnp
import plum  # type: ignore  # noqa: PGH003

from kernox._algebra import KernelAffinity, KernelProduct, KernelSum
from kernox._composition import KernelComposition
from kernox._kernel import Kernel, PairwiseKernel
from kernox._orientation import Orientation
from kernox._pairwise import (
    check_pairwise_dimensions,
    init_pairwise_matrix,
    pairwise,
    pairwise_matrix_,
)
from kernox.config import warn as _warn
from kernox.typing import ArrayLike, OrientationLike
from kernox.utils import as_matrix, as_orientation

# --------------------------------------------------------------------------- #
# Single evaluations
# --------------------------------------------------------------------------- #


@plum.dispatch
def kernel(k: Kernel, x, y) -> jax.Array:  # noqa: ANN001
    """Evaluate ``k`` on two feature vectors."""
    msg = f"Evaluation of {type(k).__name__} is not implemented."
    raise NotImplementedError(msg)


@kernel.dispatch
def _(k: PairwiseKernel, x, y) -> jax.Array:  # noqa: ANN001
    return pairwise(k, x, y)


@kernel.dispatch
def _(k: KernelAffinity, x, y) -> jax.Array:  # noqa: ANN001
    return k.phi(kernel(k.kernel, x, y))


@kernel.dispatch
def _(k: KernelSum, x, y) -> jax.Array:  # noqa: ANN001
    return k.phi(kernel(k.kernel1, x, y), kernel(k.kernel2, x, y))


@kernel.dispatch
def _(k: KernelProduct, x, y) -> jax.Array:  # noqa: ANN001
    return k.phi(kernel(k.kernel1, x, y), kernel(k.kernel2, x, y))


@kernel.dispatch
def _(k: KernelComposition, x, y) -> jax.Array:  # noqa: ANN001
    return k.phi.phi(kernel(k.kernel, x, y))


# --------------------------------------------------------------------------- #
# Matrices
# --------------------------------------------------------------------------- #


@plum.dispatch
def _kernel_matrix(
    k: Kernel,
    sigma: Orientation,
    X: jax.Array,
    Y,  # noqa: ANN001
    symmetrize: bool,
) -> jax.Array:
    msg = f"Kernel matrices of {type(k).__name__} are not implemented."
    raise NotImplementedError(msg)


@_kernel_matrix.dispatch
def _(
    k: PairwiseKernel,
    sigma: Orientation,
    X: jax.Array,
    Y,  # noqa: ANN001
    symmetrize: bool,
) -> jax.Array:
    K = init_pairwise_matrix(sigma, X, Y)
    return pairwise_matrix_(sigma, K, k, X, Y, symmetrize=symmetrize)


@_kernel_matrix.dispatch
def _(
    k: KernelAffinity,
    sigma: Orientation,
    X: jax.Array,
    Y,  # noqa: ANN001
    symmetrize: bool,
) -> jax.Array:
    return k.phi(_kernel_matrix(k.kernel, sigma, X, Y, symmetrize))


@_kernel_matrix.dispatch
def _(
    k: KernelSum | KernelProduct,
    sigma: Orientation,
    X: jax.Array,
    Y,  # noqa: ANN001
    symmetrize: bool,
) -> jax.Array:
    return k.phi(
        _kernel_matrix(k.kernel1, sigma, X, Y, symmetrize),
        _kernel_matrix(k.kernel2, sigma, X, Y, symmetrize),
    )


@_kernel_matrix.dispatch
def _(
    k: KernelComposition,
    sigma: Orientation,
    X: jax.Array,
    Y,  # noqa: ANN001
    symmetrize: bool,
) -> jax.Array:
    return k.phi.phi(_kernel_matrix(k.kernel, sigma, X, Y, symmetrize))


def kernel_matrix(
    sigma: OrientationLike,
    k: Kernel,
    X: ArrayLike,
    Y: ArrayLike | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Compute the matrix of ``k`` evaluated on all pairs of samples.

    Args:
        sigma: Orientation of ``X`` and ``Y``.
        k: Any kernel, possibly built with the kernel algebra.
        X: First feature matrix.
        Y: Optional second feature matrix.
        symmetrize: Whether the lower triangle of a single dataset matrix is
            mirrored from the upper one. Otherwise it is unspecified.
    """
    sigma = as_orientation(sigma)
    X = as_matrix(X, "X")
    Y = None if Y is None else as_matrix(Y, "Y")
    if Y is not None:
        check_pairwise_dimensions(sigma, init_pairwise_matrix(sigma, X, Y), X, Y)
    return _kernel_matrix(k, sigma, X, Y, bool(symmetrize))


def kernel_matrix_(
    sigma: OrientationLike,
    K: jax.Array,
    k: Kernel,
    X: jax.Array,
    Y: jax.Array | None = None,
    *,
    symmetrize: bool = True,
) -> jax.Array:
    """Write the kernel matrix of ``k`` into the destination ``K``.

    Without ``Y`` and with ``symmetrize=False`` only the upper triangle of ``K``
    is written.

    Raises:
        DimensionMismatch
            If ``K``, ``X`` and ``Y`` do not agree.
    """
    sigma = as_orientation(sigma)
    X = as_matrix(X, "X")
    Y = None if Y is None else as_matrix(Y, "Y")
    if isinstance(k, PairwiseKernel):
        return pairwise_matrix_(sigma, K, k, X, Y, symmetrize=symmetrize)

    check_pairwise_dimensions(sigma, K, X, Y)
    result = _kernel_matrix(k, sigma, X, Y, bool(symmetrize)).astype(K.dtype)
    if Y is None and not symmetrize:
        _warn(f"Lower triangle of the kernel matrix of {k} is left unset.")
        return jnp.where(jnp.triu(jnp.ones(K.shape, dtype=bool)), result, K)
    return result
