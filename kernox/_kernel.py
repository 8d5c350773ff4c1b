# _kernel.py

r"""Kernel base classes and pairwise leaf kernels.

A kernel :math:`\kappa(x, y)` is queried through a small capability interface:

- :meth:`Kernel.is_mercer` / :meth:`Kernel.is_negdef`: definiteness class
- :meth:`Kernel.attains_zero`, :meth:`Kernel.attains_positive`,
  :meth:`Kernel.attains_negative`: range of the kernel
- :meth:`Kernel.is_inner_product_form` / :meth:`Kernel.is_squared_distance_form`:
  decomposition tags used by the pairwise engine to skip the per-pair loop

A :class:`PairwiseKernel` is defined by a scalar function :math:`\phi` and
evaluates :math:`\kappa(x, y) = \sum_i \phi(x_i, y_i)`.

Kernels are immutable value objects: equality is structural and composite kernels
only hold references to the kernels they wrap.
"""

import abc
import math

import jax
import jax.numpy as jnp

from kernox._hyperparameter import HyperParameter, leftbounded
from kernox.typing import ScalarLike


class Kernel(abc.ABC):  # noqa: PLR0904
    """Abstract base class of all kernels.

    Subclasses describe their state through :meth:`_named_parameters`, which drives
    equality and the textual description.
    """

    ########################################################################
    # Capability queries
    ########################################################################

    def is_mercer(self) -> bool:
        return False

    def is_negdef(self) -> bool:
        return False

    def attains_zero(self) -> bool:
        return True

    def attains_positive(self) -> bool:
        return True

    def attains_negative(self) -> bool:
        return True

    def is_inner_product_form(self) -> bool:
        return False

    def is_squared_distance_form(self) -> bool:
        return False

    ########################################################################
    # Structure
    ########################################################################

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        """Hyperparameters and wrapped kernels, in constructor order."""
        return ()

    def _parameters(self) -> tuple:
        return tuple(p for _, p in self._named_parameters())

    def description_string(self) -> str:
        args = ",".join(
            p.description_string()
            if isinstance(p, Kernel)
            else f"{name}={p.value if isinstance(p, HyperParameter) else p}"
            for name, p in self._named_parameters()
        )
        return f"{self.__class__.__name__}({args})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return type(self) is type(other) and self._parameters() == other._parameters()

    __hash__ = None

    def __repr__(self) -> str:
        return self.description_string()

    def __call__(self, x: jax.Array, y: jax.Array) -> jax.Array:
        from kernox._kernel_matrix import kernel  # noqa: PLC0415

        return kernel(self, x, y)

    ########################################################################
    # Algebra
    ########################################################################

    def __add__(self, other: "Kernel | ScalarLike") -> "Kernel":
        from kernox._algebra import kadd  # noqa: PLC0415

        return kadd(self, other)

    def __radd__(self, other: ScalarLike) -> "Kernel":
        from kernox._algebra import kadd  # noqa: PLC0415

        return kadd(other, self)

    def __mul__(self, other: "Kernel | ScalarLike") -> "Kernel":
        from kernox._algebra import kmul  # noqa: PLC0415

        return kmul(self, other)

    def __rmul__(self, other: ScalarLike) -> "Kernel":
        from kernox._algebra import kmul  # noqa: PLC0415

        return kmul(other, self)

    def __pow__(self, other: ScalarLike) -> "Kernel":
        from kernox._algebra import kpow  # noqa: PLC0415

        return kpow(self, other)


class StandardKernel(Kernel):
    """Kernel that is not itself an algebraic operation on other kernels.

    The simplification rules of the kernel algebra treat these as leaves.
    """


class PairwiseKernel(StandardKernel):
    r"""Kernel of the form :math:`\kappa(x, y) = \sum_i \phi(x_i, y_i)`."""

    @abc.abstractmethod
    def phi(self, x: jax.Array, y: jax.Array) -> jax.Array:
        """Elementwise transfer function on scalars (broadcasts over arrays)."""


class ScalarProductKernel(PairwiseKernel):
    r"""Inner product :math:`\kappa(x, y) = x^\top y`."""

    def phi(self, x: jax.Array, y: jax.Array) -> jax.Array:
        return x * y

    def is_mercer(self) -> bool:
        return True

    def is_inner_product_form(self) -> bool:
        return True


class SquaredDistanceKernel(PairwiseKernel):
    r"""Squared Euclidean distance :math:`\kappa(x, y) = \|x - y\|^2`."""

    def phi(self, x: jax.Array, y: jax.Array) -> jax.Array:
        return (x - y) ** 2

    def is_negdef(self) -> bool:
        return True

    def attains_negative(self) -> bool:
        return False

    def is_squared_distance_form(self) -> bool:
        return True


class SineSquaredKernel(PairwiseKernel):
    r"""Sine squared kernel :math:`\kappa(x, y) = \sum_i \sin^2(p (x_i - y_i))`.

    Args:
        p: Frequency, must be strictly positive.
    """

    def __init__(self, p: ScalarLike = math.pi) -> None:
        self.p = HyperParameter(p, leftbounded(0.0, "open"))

    def phi(self, x: jax.Array, y: jax.Array) -> jax.Array:
        return jnp.sin(self.p.value * (x - y)) ** 2

    def is_negdef(self) -> bool:
        return True

    def attains_negative(self) -> bool:
        return False

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        return (("p", self.p),)


class ChiSquaredKernel(PairwiseKernel):
    r"""Chi squared kernel :math:`\kappa(x, y) = \sum_i (x_i - y_i)^2 / (x_i + y_i)`.

    Defined for non-negative inputs; terms with :math:`x_i + y_i = 0` contribute zero.
    """

    def phi(self, x: jax.Array, y: jax.Array) -> jax.Array:
        s = x + y
        denominator = jnp.where(s == 0, 1, s)
        return jnp.where(s == 0, 0, (x - y) ** 2 / denominator)

    def is_negdef(self) -> bool:
        return True

    def attains_negative(self) -> bool:
        return False
