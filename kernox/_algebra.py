# _algebra.py

r"""Algebra of kernels.

This module implements the closed operations on kernels:

- :class:`KernelAffinity`: represents :math:`a \kappa + c` for :math:`a > 0`,
  :math:`c \geq 0`
- :class:`KernelSum`: represents :math:`\kappa_1 + \kappa_2 + c` for
  :math:`c \geq 0`
- :class:`KernelProduct`: represents :math:`a \kappa_1 \kappa_2` for :math:`a > 0`

Composites are only built through the dispatched constructors :func:`kadd`,
:func:`kmul`, :func:`kpow`, :func:`kexp` and :func:`ktanh` (and the operators
``+``, ``*`` and ``**`` on kernels). These select the simplest equivalent
composite, e.g. ``(2 * k) * 3`` is a single :class:`KernelAffinity` with
:math:`a = 6` instead of two nested ones.
"""

import jax
import plum  # type: ignore  # noqa: PGH003

from kernox._composition import (
    ExponentiatedClass,
    KernelComposition,
    PolynomialClass,
    PowerClass,
    SigmoidClass,
)
from kernox._errors import InvalidClosure
from kernox._hyperparameter import HyperParameter, leftbounded
from kernox._kernel import Kernel, StandardKernel
from kernox.typing import FloatLike, IntLike, ScalarLike

# --------------------------------------------------------------------------- #
# Kernel operations
# --------------------------------------------------------------------------- #


def _check_kernel(kernel: object) -> Kernel:
    if not isinstance(kernel, Kernel):
        msg = f"Expected a kernel, got {type(kernel)}."
        raise TypeError(msg)
    return kernel


class KernelOperation(Kernel):
    """Kernel defined by an algebraic operation on other kernels."""


class KernelAffinity(KernelOperation):
    r"""Affine transformation :math:`a \kappa + c` of a kernel.

    The definiteness class of :math:`\kappa` is preserved.

    Args:
        a: Scale, must be strictly positive.
        c: Shift, must be non-negative.
        kernel: Wrapped kernel.
    """

    def __init__(
        self,
        a: ScalarLike | HyperParameter,
        c: ScalarLike | HyperParameter,
        kernel: Kernel,
    ) -> None:
        self.a = HyperParameter(a, leftbounded(0.0, "open"))
        self.c = HyperParameter(c, leftbounded(0.0, "closed"))
        self.kernel = _check_kernel(kernel)

    def phi(self, z: jax.Array) -> jax.Array:
        return self.a.value * z + self.c.value

    def is_mercer(self) -> bool:
        return self.kernel.is_mercer()

    def is_negdef(self) -> bool:
        return self.kernel.is_negdef()

    def attains_zero(self) -> bool:
        return self.kernel.attains_zero()

    def attains_positive(self) -> bool:
        return self.kernel.attains_positive()

    def attains_negative(self) -> bool:
        return self.kernel.attains_negative()

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        return (("a", self.a), ("c", self.c), ("kappa", self.kernel))


class KernelSum(KernelOperation):
    r"""Sum :math:`\kappa_1 + \kappa_2 + c` of two kernels.

    Raises:
        InvalidClosure
            Unless both kernels are Mercer or both are negative definite.
    """

    def __init__(
        self, c: ScalarLike | HyperParameter, kernel1: Kernel, kernel2: Kernel
    ) -> None:
        kernel1, kernel2 = _check_kernel(kernel1), _check_kernel(kernel2)
        if not (kernel1.is_mercer() and kernel2.is_mercer()) and not (
            kernel1.is_negdef() and kernel2.is_negdef()
        ):
            msg = (
                "All kernels must be Mercer or negative definite for closure under "
                f"addition, got {kernel1} and {kernel2}."
            )
            raise InvalidClosure(msg)
        self.c = HyperParameter(c, leftbounded(0.0, "closed"))
        self.kernel1 = kernel1
        self.kernel2 = kernel2

    def phi(self, z1: jax.Array, z2: jax.Array) -> jax.Array:
        return z1 + z2 + self.c.value

    def is_mercer(self) -> bool:
        return self.kernel1.is_mercer() and self.kernel2.is_mercer()

    def is_negdef(self) -> bool:
        return self.kernel1.is_negdef() and self.kernel2.is_negdef()

    def attains_zero(self) -> bool:
        # a child with negative values can cancel the other child and c
        if self.attains_negative():
            return True
        return (
            self.c.value == 0
            and self.kernel1.attains_zero()
            and self.kernel2.attains_zero()
        )

    def attains_positive(self) -> bool:
        return (
            self.c.value > 0
            or self.kernel1.attains_positive()
            or self.kernel2.attains_positive()
        )

    def attains_negative(self) -> bool:
        return self.kernel1.attains_negative() or self.kernel2.attains_negative()

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        return (("c", self.c), ("kappa1", self.kernel1), ("kappa2", self.kernel2))


class KernelProduct(KernelOperation):
    r"""Product :math:`a \kappa_1 \kappa_2` of two kernels.

    Raises:
        InvalidClosure
            Unless both kernels are Mercer.
    """

    def __init__(
        self, a: ScalarLike | HyperParameter, kernel1: Kernel, kernel2: Kernel
    ) -> None:
        kernel1, kernel2 = _check_kernel(kernel1), _check_kernel(kernel2)
        if not (kernel1.is_mercer() and kernel2.is_mercer()):
            msg = (
                "Kernels must be Mercer for closure under multiplication, "
                f"got {kernel1} and {kernel2}."
            )
            raise InvalidClosure(msg)
        self.a = HyperParameter(a, leftbounded(0.0, "open"))
        self.kernel1 = kernel1
        self.kernel2 = kernel2

    def phi(self, z1: jax.Array, z2: jax.Array) -> jax.Array:
        return self.a.value * z1 * z2

    def is_mercer(self) -> bool:
        return self.kernel1.is_mercer() and self.kernel2.is_mercer()

    def is_negdef(self) -> bool:
        return False

    def attains_zero(self) -> bool:
        return self.kernel1.attains_zero() or self.kernel2.attains_zero()

    def attains_positive(self) -> bool:
        k1, k2 = self.kernel1, self.kernel2
        return (k1.attains_positive() and k2.attains_positive()) or (
            k1.attains_negative() and k2.attains_negative()
        )

    def attains_negative(self) -> bool:
        k1, k2 = self.kernel1, self.kernel2
        return (k1.attains_positive() and k2.attains_negative()) or (
            k1.attains_negative() and k2.attains_positive()
        )

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        return (("a", self.a), ("kappa1", self.kernel1), ("kappa2", self.kernel2))


# --------------------------------------------------------------------------- #
# Addition
# --------------------------------------------------------------------------- #


@plum.dispatch
def kadd(a: Kernel, b: ScalarLike) -> Kernel:
    return KernelAffinity(1.0, b, a)


@kadd.dispatch
def _(a: ScalarLike, b: Kernel) -> Kernel:
    return kadd(b, a)


@kadd.dispatch
def _(a: KernelAffinity, b: ScalarLike) -> Kernel:
    return KernelAffinity(a.a.value, a.c.value + float(b), a.kernel)


@kadd.dispatch
def _(a: KernelSum, b: ScalarLike) -> Kernel:
    return KernelSum(a.c.value + float(b), a.kernel1, a.kernel2)


@kadd.dispatch
def _(a: Kernel, b: Kernel) -> Kernel:
    return KernelSum(0.0, a, b)


@kadd.dispatch
def _(a: KernelAffinity, b: KernelAffinity) -> Kernel:
    if a.a.value == 1 and b.a.value == 1:
        return KernelSum(a.c.value + b.c.value, a.kernel, b.kernel)
    return KernelSum(0.0, a, b)


@kadd.dispatch
def _(a: KernelAffinity, b: StandardKernel) -> Kernel:
    if a.a.value == 1:
        return KernelSum(a.c.value, a.kernel, b)
    return KernelSum(0.0, a, b)


@kadd.dispatch
def _(a: StandardKernel, b: KernelAffinity) -> Kernel:
    if b.a.value == 1:
        return KernelSum(b.c.value, a, b.kernel)
    return KernelSum(0.0, a, b)


# --------------------------------------------------------------------------- #
# Multiplication
# --------------------------------------------------------------------------- #


@plum.dispatch
def kmul(a: Kernel, b: ScalarLike) -> Kernel:
    return KernelAffinity(b, 0.0, a)


@kmul.dispatch
def _(a: ScalarLike, b: Kernel) -> Kernel:
    return kmul(b, a)


@kmul.dispatch
def _(a: KernelAffinity, b: ScalarLike) -> Kernel:
    b = float(b)
    return KernelAffinity(b * a.a.value, b * a.c.value, a.kernel)


@kmul.dispatch
def _(a: KernelProduct, b: ScalarLike) -> Kernel:
    return KernelProduct(float(b) * a.a.value, a.kernel1, a.kernel2)


@kmul.dispatch
def _(a: Kernel, b: Kernel) -> Kernel:
    return KernelProduct(1.0, a, b)


@kmul.dispatch
def _(a: KernelAffinity, b: KernelAffinity) -> Kernel:
    if a.c.value == 0 and b.c.value == 0:
        return KernelProduct(a.a.value * b.a.value, a.kernel, b.kernel)
    return KernelProduct(1.0, a, b)


@kmul.dispatch
def _(a: KernelAffinity, b: StandardKernel) -> Kernel:
    if a.c.value == 0:
        return KernelProduct(a.a.value, a.kernel, b)
    return KernelProduct(1.0, a, b)


@kmul.dispatch
def _(a: StandardKernel, b: KernelAffinity) -> Kernel:
    if b.c.value == 0:
        return KernelProduct(b.a.value, a, b.kernel)
    return KernelProduct(1.0, a, b)


# --------------------------------------------------------------------------- #
# Power, exp and tanh
# --------------------------------------------------------------------------- #


@plum.dispatch
def kpow(a: KernelAffinity, d: IntLike) -> KernelComposition:
    return KernelComposition(PolynomialClass(a.a.value, a.c.value, int(d)), a.kernel)


@kpow.dispatch
def _(a: KernelAffinity, gamma: FloatLike) -> KernelComposition:
    return KernelComposition(PowerClass(a.a.value, a.c.value, float(gamma)), a.kernel)


@kpow.dispatch
def _(a: Kernel, b: IntLike | FloatLike) -> KernelComposition:
    return kpow(KernelAffinity(1.0, 0.0, a), b)


@plum.dispatch
def kexp(a: KernelAffinity) -> KernelComposition:
    return KernelComposition(ExponentiatedClass(a.a.value, a.c.value), a.kernel)


@kexp.dispatch
def _(a: Kernel) -> KernelComposition:
    return kexp(KernelAffinity(1.0, 0.0, a))


@plum.dispatch
def ktanh(a: KernelAffinity) -> KernelComposition:
    return KernelComposition(SigmoidClass(a.a.value, a.c.value), a.kernel)


@ktanh.dispatch
def _(a: Kernel) -> KernelComposition:
    return ktanh(KernelAffinity(1.0, 0.0, a))


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #


def scale(kernel: Kernel, a: ScalarLike) -> Kernel:
    r""":math:`a \kappa`, collapsing into an existing affine transformation."""
    return kmul(kernel, a)


def shift(kernel: Kernel, c: ScalarLike) -> Kernel:
    r""":math:`\kappa + c`, collapsing into an existing affine transformation."""
    return kadd(kernel, c)


def add(a: Kernel, b: Kernel) -> Kernel:
    r""":math:`\kappa_1 + \kappa_2`.

    Raises:
        InvalidClosure
            Unless both kernels are Mercer or both are negative definite.
    """
    return kadd(a, b)


def mul(a: Kernel, b: Kernel) -> Kernel:
    r""":math:`\kappa_1 \kappa_2`.

    Raises:
        InvalidClosure
            Unless both kernels are Mercer.
    """
    return kmul(a, b)


def power(kernel: Kernel, exponent: IntLike | FloatLike) -> KernelComposition:
    """Integer powers give a polynomial, real powers a power composition."""
    return kpow(kernel, exponent)


exp = kexp
tanh = ktanh
