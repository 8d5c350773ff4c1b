# _hyperparameter.py

r"""Scalar hyperparameters with interval constraints.

- :class:`Bound`: a single open or closed bound :math:`v`
- :class:`Interval`: a (possibly half-infinite) interval built from two bounds
- :class:`HyperParameter`: a validated real value living in an :class:`Interval`

Kernels own their hyperparameters exclusively; a value update keeps the same
:class:`HyperParameter` object.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from kernox._errors import InvalidHyperParameter
from kernox.typing import ScalarLike
from kernox.utils import as_scalar

BoundKind = Literal["open", "closed"]


@dataclass(frozen=True)
class Bound:
    value: float
    closed: bool

    def __str__(self) -> str:
        return f"{self.value}"


def _as_bound(value: ScalarLike, kind: BoundKind) -> Bound:
    if kind not in {"open", "closed"}:
        msg = f"Bound kind must be 'open' or 'closed', got {kind!r}."
        raise ValueError(msg)
    return Bound(float(value), kind == "closed")


@dataclass(frozen=True)
class Interval:
    """Interval ``(left, right)`` with either side optionally unbounded."""

    left: Bound | None = None
    right: Bound | None = None

    def __post_init__(self) -> None:
        if self.left is not None and self.right is not None:
            lo, hi = self.left.value, self.right.value
            if lo > hi or (lo == hi and not (self.left.closed and self.right.closed)):
                msg = f"Interval bounds {lo} and {hi} describe an empty interval."
                raise ValueError(msg)

    def contains(self, x: float) -> bool:
        if math.isnan(x):
            return False
        if self.left is not None:
            lo = self.left
            if x < lo.value or (x == lo.value and not lo.closed):
                return False
        if self.right is not None:
            hi = self.right
            if x > hi.value or (x == hi.value and not hi.closed):
                return False
        return True

    def __str__(self) -> str:
        lhs = "(-inf" if self.left is None else ("[" if self.left.closed else "(")
        if self.left is not None:
            lhs += str(self.left)
        rhs = "inf)" if self.right is None else str(self.right)
        if self.right is not None:
            rhs += "]" if self.right.closed else ")"
        return f"{lhs}, {rhs}"


def leftbounded(value: ScalarLike, kind: BoundKind) -> Interval:
    return Interval(left=_as_bound(value, kind))


def rightbounded(value: ScalarLike, kind: BoundKind) -> Interval:
    return Interval(right=_as_bound(value, kind))


def interval(left: Bound | None, right: Bound | None) -> Interval:
    return Interval(left=left, right=right)


def unbounded() -> Interval:
    return Interval()


class HyperParameter:
    r"""A real scalar constrained to an :class:`Interval`.

    Construction fails with :class:`InvalidHyperParameter` if ``value`` lies
    outside of ``interval``.

    Args:
        value: Initial value (or another :class:`HyperParameter` to copy from).
        interval: Admissible values.
        fixed: Whether :meth:`update` is forbidden.
    """

    def __init__(
        self,
        value: ScalarLike | HyperParameter,
        interval: Interval | None = None,
        *,
        fixed: bool = False,
    ) -> None:
        if isinstance(value, HyperParameter):
            fixed = fixed or value.isfixed
            value = value.value
        self.interval = unbounded() if interval is None else interval
        self.isfixed = fixed
        self.value = self._validate(value)

    def _validate(self, value: ScalarLike) -> float:
        value = as_scalar(value)
        if not self.interval.contains(value):
            msg = f"Value {value} must lie in the interval {self.interval}."
            raise InvalidHyperParameter(msg)
        return value

    def update(self, value: ScalarLike) -> None:
        """Set a new value in place after validating it."""
        if self.isfixed:
            msg = "Fixed hyperparameters cannot be updated."
            raise ValueError(msg)
        self.value = self._validate(value)

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HyperParameter):
            return self.value == other.value
        if isinstance(other, int | float):
            return self.value == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"HyperParameter({self.value}, {self.interval})"
