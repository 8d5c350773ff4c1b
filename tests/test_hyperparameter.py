# test_hyperparameter.py

import math

import jax.numpy as jnp
import numpy as np
import pytest

from kernox import (
    Bound,
    HyperParameter,
    Interval,
    InvalidHyperParameter,
    SineSquaredKernel,
    interval,
    leftbounded,
    rightbounded,
    unbounded,
)


@pytest.mark.parametrize(
    ("itv", "inside", "outside"),
    [
        (leftbounded(0.0, "open"), [1e-12, 1.0, 1e300], [0.0, -1.0]),
        (leftbounded(0.0, "closed"), [0.0, 2.0], [-1e-12]),
        (rightbounded(1.0, "open"), [-5.0, 0.999], [1.0, 2.0]),
        (interval(Bound(0.0, closed=False), Bound(1.0, closed=True)), [0.5, 1.0], [0.0, 1.5]),
        (unbounded(), [-1e10, 0.0, 1e10], [math.nan]),
    ],
    ids=["open_left", "closed_left", "open_right", "half_open", "unbounded"],
)
def test_interval_contains(
    itv: Interval, inside: list[float], outside: list[float]
) -> None:
    for x in inside:
        assert itv.contains(x)
    for x in outside:
        assert not itv.contains(x)


def test_empty_interval() -> None:
    with pytest.raises(ValueError, match="empty"):
        interval(Bound(1.0, closed=True), Bound(0.0, closed=True))
    with pytest.raises(ValueError, match="empty"):
        interval(Bound(1.0, closed=True), Bound(1.0, closed=False))
    assert interval(Bound(1.0, closed=True), Bound(1.0, closed=True)).contains(1.0)


def test_invalid_bound_kind() -> None:
    with pytest.raises(ValueError, match="open"):
        leftbounded(0.0, "half")


def test_interval_str() -> None:
    assert str(leftbounded(0.0, "open")) == "(0.0, inf)"
    assert str(rightbounded(1.0, "closed")) == "(-inf, 1.0]"


def test_hyperparameter_validation() -> None:
    p = HyperParameter(2.0, leftbounded(0.0, "open"))
    assert float(p) == 2.0
    assert p == 2.0
    with pytest.raises(InvalidHyperParameter):
        HyperParameter(0.0, leftbounded(0.0, "open"))
    with pytest.raises(InvalidHyperParameter):
        HyperParameter(math.nan)


def test_hyperparameter_from_arrays() -> None:
    p = HyperParameter(jnp.array(2.0), leftbounded(0.0, "open"))
    assert type(p.value) is float
    assert p == 2.0
    p.update(np.float32(0.5))
    assert p == 0.5
    with pytest.raises(ValueError, match="scalar"):
        HyperParameter(jnp.ones(2))
    with pytest.raises(ValueError, match="scalar"):
        p.update(jnp.ones((1, 1)))


def test_hyperparameter_update() -> None:
    p = HyperParameter(2.0, leftbounded(0.0, "open"))
    p.update(3)
    assert p.value == 3.0
    with pytest.raises(InvalidHyperParameter):
        p.update(-1.0)
    assert p.value == 3.0


def test_fixed_hyperparameter() -> None:
    p = HyperParameter(2, fixed=True)
    with pytest.raises(ValueError, match="Fixed"):
        p.update(3)
    assert HyperParameter(p).isfixed


def test_hyperparameter_equality() -> None:
    assert HyperParameter(1.0) == HyperParameter(1.0, leftbounded(0.0, "closed"))
    assert HyperParameter(1.0) != HyperParameter(2.0)
    assert HyperParameter(1.0) != "1.0"


def test_kernel_hyperparameter_update() -> None:
    k = SineSquaredKernel(1.0)
    p = k.p
    k.p.update(2.0)
    assert k.p is p
    assert k == SineSquaredKernel(2.0)
    with pytest.raises(InvalidHyperParameter):
        SineSquaredKernel(-1.0)
