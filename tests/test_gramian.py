# test_gramian.py

"""Tests for the matrix multiplication based inner product and distance paths."""

import jax
import jax.numpy as jnp
import pytest

import kernox
from kernox import DimensionMismatch, Orientation
from tests.test_kernox_cases._kernel_cases import (
    basic_shapes,
    cross_shapes,
    orient,
    sample_data,
)

jax.config.update("jax_enable_x64", True)


@pytest.fixture(
    params=[pytest.param(sigma, id=sigma.value) for sigma in Orientation],
)
def sigma(request: pytest.FixtureRequest) -> Orientation:
    return request.param


# ============================================================================
# Gramian
# ============================================================================
@pytest.mark.parametrize("shape", basic_shapes)
def test_gramian_matches_matmul(sigma: Orientation, shape: tuple[int, int]) -> None:
    X = sample_data(shape)
    G = kernox.gramian(sigma, orient(X, sigma))
    assert jnp.allclose(G, X @ X.T)


@pytest.mark.parametrize(("shape_x", "shape_y"), cross_shapes)
def test_gramian_two_datasets(
    sigma: Orientation, shape_x: tuple[int, int], shape_y: tuple[int, int]
) -> None:
    X, Y = sample_data(shape_x, 1), sample_data(shape_y, 2)
    G = kernox.gramian(sigma, orient(X, sigma), orient(Y, sigma))
    assert G.shape == (shape_x[0], shape_y[0])
    assert jnp.allclose(G, X @ Y.T)


def test_gramian_writes_upper_triangle_only(sigma: Orientation) -> None:
    X = sample_data((4, 3))
    destination = jnp.full((4, 4), -7.0)
    G = kernox.gramian_(sigma, destination, orient(X, sigma), symmetrize=False)
    expected = X @ X.T
    upper = jnp.triu(jnp.ones((4, 4), dtype=bool))
    assert jnp.allclose(G[upper], expected[upper])
    assert jnp.all(G[~upper] == -7.0)
    # the destination itself is never modified
    assert jnp.all(destination == -7.0)


def test_gramian_symmetrize_mirrors(sigma: Orientation) -> None:
    X = sample_data((5, 2))
    G = kernox.gramian_(sigma, jnp.zeros((5, 5)), orient(X, sigma), symmetrize=True)
    assert jnp.array_equal(G, G.T)


def test_gramian_dimension_mismatch() -> None:
    X = sample_data((5, 2))
    with pytest.raises(DimensionMismatch, match="square"):
        kernox.gramian_("row", jnp.zeros((3, 4)), X)
    with pytest.raises(DimensionMismatch, match="sample count of X"):
        kernox.gramian_("row", jnp.zeros((4, 4)), X)
    with pytest.raises(DimensionMismatch, match="Rows of G"):
        kernox.gramian_("row", jnp.zeros((4, 3)), X, sample_data((3, 2)))
    with pytest.raises(DimensionMismatch, match="Columns of G"):
        kernox.gramian_("row", jnp.zeros((5, 4)), X, sample_data((3, 2)))
    with pytest.raises(DimensionMismatch, match="Feature dimension"):
        kernox.gramian_("row", jnp.zeros((5, 3)), X, sample_data((3, 4)))


# ============================================================================
# Dot vectors
# ============================================================================
def test_dot_vectors(sigma: Orientation) -> None:
    X = sample_data((4, 3))
    xtx = kernox.dot_vectors(sigma, orient(X, sigma))
    assert xtx.shape == (4,)
    assert jnp.allclose(xtx, jnp.sum(X**2, axis=1))


def test_dot_vectors_dimension_mismatch() -> None:
    X = sample_data((4, 3))
    with pytest.raises(DimensionMismatch, match="xtx"):
        kernox.dot_vectors_("row", jnp.zeros(3), X)
    with pytest.raises(DimensionMismatch, match="dimension 1"):
        kernox.dot_vectors_("col", jnp.zeros(4), X)


# ============================================================================
# Squared distance
# ============================================================================
def test_squared_distance_identity() -> None:
    a = jnp.array([[1.0, 2.0], [3.0, -1.0], [0.0, 0.5]])
    b = jnp.array([[2.0, 0.0], [-1.0, 1.0]])
    G = a @ b.T
    D = kernox.squared_distance_(G, jnp.sum(a**2, axis=1), jnp.sum(b**2, axis=1))
    expected = jnp.sum((a[:, None, :] - b[None, :, :]) ** 2, axis=-1)
    assert jnp.array_equal(D, expected)


def test_squared_distance_upper_triangle() -> None:
    X = jnp.array([[1.0, 0.0], [0.0, 1.0], [2.0, 2.0]])
    G = jnp.triu(X @ X.T) + jnp.tril(jnp.full((3, 3), 9.0), -1)
    D = kernox.squared_distance_(G, jnp.sum(X**2, axis=1), symmetrize=False)
    assert jnp.array_equal(jnp.triu(D), jnp.array([[0.0, 2, 5], [0, 0, 5], [0, 0, 0]]))
    assert jnp.all(jnp.tril(D, -1)[jnp.tril_indices(3, -1)] == 9.0)

    D = kernox.squared_distance_(G, jnp.sum(X**2, axis=1), symmetrize=True)
    assert jnp.array_equal(D, D.T)


def test_squared_distance_dimension_mismatch() -> None:
    with pytest.raises(DimensionMismatch, match="square"):
        kernox.squared_distance_(jnp.zeros((3, 3)), jnp.zeros(4))
    with pytest.raises(DimensionMismatch, match="square"):
        kernox.squared_distance_(jnp.zeros((3, 4)), jnp.zeros(3))
    with pytest.raises(DimensionMismatch, match="rows of G"):
        kernox.squared_distance_(jnp.zeros((3, 4)), jnp.zeros(2), jnp.zeros(4))
    with pytest.raises(DimensionMismatch, match="columns of G"):
        kernox.squared_distance_(jnp.zeros((3, 4)), jnp.zeros(3), jnp.zeros(5))


def test_unit_vectors_example() -> None:
    X = jnp.array([[1.0, 0.0], [0.0, 1.0]])
    G = kernox.pairwise_matrix("row", kernox.ScalarProductKernel(), X)
    D = kernox.pairwise_matrix("row", kernox.SquaredDistanceKernel(), X)
    assert jnp.array_equal(G, jnp.array([[1.0, 0.0], [0.0, 1.0]]))
    assert jnp.array_equal(D, jnp.array([[0.0, 2.0], [2.0, 0.0]]))


def test_unsymmetrized_squared_distance_hides_gramian(sigma: Orientation) -> None:
    X = sample_data((4, 3))
    K = kernox.pairwise_matrix_(
        sigma,
        jnp.zeros((4, 4)),
        kernox.SquaredDistanceKernel(),
        orient(X, sigma),
        symmetrize=False,
    )
    assert jnp.all(jnp.tril(K, -1) == 0.0)
    expected = jnp.sum((X[:, None, :] - X[None, :, :]) ** 2, axis=-1)
    assert jnp.allclose(jnp.triu(K), jnp.triu(expected))


def test_squared_distance_of_arbitrary_matrix() -> None:
    G = jnp.array([[5.0, 4.0], [4.0, 1.0]])
    xtx = jnp.array([1.0, 2.0])
    D = kernox.squared_distance_(G, xtx, symmetrize=False)
    assert jnp.array_equal(D, jnp.array([[-8.0, -5.0], [4.0, 2.0]]))

    D = kernox.squared_distance_(G, xtx, xtx)
    assert jnp.array_equal(D, jnp.array([[-8.0, -5.0], [-5.0, 2.0]]))


def test_squared_distance_kernel_is_nonnegative(sigma: Orientation) -> None:
    row = jnp.array([0.1, 0.7, 0.3])
    X = jnp.stack([row, row, 3 * row, row])
    K = kernox.pairwise_matrix(sigma, kernox.SquaredDistanceKernel(), orient(X, sigma))
    assert jnp.all(K >= 0)
    assert jnp.all(jnp.diag(K) == 0)
    K = kernox.pairwise_matrix(
        sigma, kernox.SquaredDistanceKernel(), orient(X, sigma), orient(X, sigma)
    )
    assert jnp.all(K >= 0)
