# _composition.py

r"""Scalar functions of a kernel.

A :class:`KernelComposition` applies a :class:`CompositionClass` :math:`\phi` to
the values of a kernel, :math:`\psi(x, y) = \phi(\kappa(x, y))`:

- :class:`PolynomialClass`: :math:`(a z + c)^d`
- :class:`PowerClass`: :math:`(a z + c)^\gamma`
- :class:`ExponentiatedClass`: :math:`\exp(a z + c)`
- :class:`SigmoidClass`: :math:`\tanh(a z + c)`

Each class states which kernels it may be applied to; anything else raises
:class:`InvalidClosure` at construction time.
"""

import abc

import jax
import jax.numpy as jnp

from kernox._errors import InvalidClosure, InvalidHyperParameter
from kernox._hyperparameter import Bound, HyperParameter, Interval, leftbounded
from kernox._kernel import Kernel, StandardKernel
from kernox.typing import ScalarLike


class CompositionClass(abc.ABC):
    """Scalar transfer function :math:`\\phi(z)` with hyperparameters ``a`` and ``c``."""

    def __init__(self, a: ScalarLike, c: ScalarLike) -> None:
        self.a = HyperParameter(a, leftbounded(0.0, "open"))
        self.c = HyperParameter(c, leftbounded(0.0, "closed"))

    @abc.abstractmethod
    def phi(self, z: jax.Array) -> jax.Array: ...

    @abc.abstractmethod
    def is_composable(self, kernel: Kernel) -> bool: ...

    def is_mercer(self) -> bool:
        return False

    def is_negdef(self) -> bool:
        return False

    def attains_zero(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return True

    def attains_positive(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return True

    def attains_negative(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return True

    def _named_parameters(self) -> tuple[tuple[str, HyperParameter], ...]:
        return (("a", self.a), ("c", self.c))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompositionClass):
            return NotImplemented
        return type(self) is type(other) and all(
            p == q
            for (_, p), (_, q) in zip(
                self._named_parameters(), other._named_parameters(), strict=True
            )
        )

    __hash__ = None

    def __repr__(self) -> str:
        args = ",".join(f"{name}={p.value}" for name, p in self._named_parameters())
        return f"{self.__class__.__name__}({args})"


class PolynomialClass(CompositionClass):
    r""":math:`\phi(z) = (a z + c)^d` for an integer degree :math:`d \geq 1`."""

    def __init__(self, a: ScalarLike, c: ScalarLike, d: ScalarLike) -> None:
        super().__init__(a, c)
        if float(d) != int(d):
            msg = f"Polynomial degree must be an integer, got {d}."
            raise InvalidHyperParameter(msg)
        self.d = HyperParameter(int(d), leftbounded(1, "closed"), fixed=True)

    def phi(self, z: jax.Array) -> jax.Array:
        return (self.a.value * z + self.c.value) ** int(self.d.value)

    def is_composable(self, kernel: Kernel) -> bool:
        return kernel.is_mercer()

    def is_mercer(self) -> bool:
        return True

    def attains_negative(self, kernel: Kernel) -> bool:
        return int(self.d.value) % 2 == 1 and kernel.attains_negative()

    def _named_parameters(self) -> tuple[tuple[str, HyperParameter], ...]:
        return (*super()._named_parameters(), ("d", self.d))


class PowerClass(CompositionClass):
    r""":math:`\phi(z) = (a z + c)^\gamma` for :math:`0 < \gamma \leq 1`."""

    def __init__(self, a: ScalarLike, c: ScalarLike, gamma: ScalarLike) -> None:
        super().__init__(a, c)
        self.gamma = HyperParameter(
            gamma, Interval(Bound(0.0, closed=False), Bound(1.0, closed=True))
        )

    def phi(self, z: jax.Array) -> jax.Array:
        return (self.a.value * z + self.c.value) ** self.gamma.value

    def is_composable(self, kernel: Kernel) -> bool:
        return kernel.is_negdef() and not kernel.attains_negative()

    def is_negdef(self) -> bool:
        return True

    def attains_zero(self, kernel: Kernel) -> bool:
        return self.c.value == 0 and kernel.attains_zero()

    def attains_negative(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return False

    def _named_parameters(self) -> tuple[tuple[str, HyperParameter], ...]:
        return (*super()._named_parameters(), ("gamma", self.gamma))


class ExponentiatedClass(CompositionClass):
    r""":math:`\phi(z) = \exp(a z + c)`."""

    def phi(self, z: jax.Array) -> jax.Array:
        return jnp.exp(self.a.value * z + self.c.value)

    def is_composable(self, kernel: Kernel) -> bool:
        return kernel.is_mercer()

    def is_mercer(self) -> bool:
        return True

    def attains_zero(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return False

    def attains_negative(self, kernel: Kernel) -> bool:  # noqa: ARG002
        return False


class SigmoidClass(CompositionClass):
    r""":math:`\phi(z) = \tanh(a z + c)`, not positive definite in general."""

    def phi(self, z: jax.Array) -> jax.Array:
        return jnp.tanh(self.a.value * z + self.c.value)

    def is_composable(self, kernel: Kernel) -> bool:
        return kernel.is_mercer()

    def attains_negative(self, kernel: Kernel) -> bool:
        return kernel.attains_negative()


class KernelComposition(StandardKernel):
    r"""Kernel :math:`\psi(x, y) = \phi(\kappa(x, y))`.

    Args:
        phi: Composition class applied to the kernel values.
        kernel: Wrapped kernel, shared by reference.

    Raises:
        InvalidClosure
            If ``phi`` cannot be applied to ``kernel``.
    """

    def __init__(self, phi: CompositionClass, kernel: Kernel) -> None:
        if not phi.is_composable(kernel):
            msg = f"{phi} cannot be composed with {kernel}."
            raise InvalidClosure(msg)
        self.phi = phi
        self.kernel = kernel

    def is_mercer(self) -> bool:
        return self.phi.is_mercer()

    def is_negdef(self) -> bool:
        return self.phi.is_negdef()

    def attains_zero(self) -> bool:
        return self.phi.attains_zero(self.kernel)

    def attains_positive(self) -> bool:
        return self.phi.attains_positive(self.kernel)

    def attains_negative(self) -> bool:
        return self.phi.attains_negative(self.kernel)

    def _named_parameters(self) -> tuple[tuple[str, object], ...]:
        return (("phi", self.phi), ("kernel", self.kernel))

    def description_string(self) -> str:
        return f"KernelComposition(phi={self.phi},kappa={self.kernel.description_string()})"
