# The following file follows the implementation of probnum.typing
from collections.abc import Iterable
from typing import Union

import jax
import jax.numpy as jnp

import kernox  # noqa: TCH001

########################################################################################
# API Types
########################################################################################

# Array Utilities
ShapeType = tuple[int, ...]
"""Type defining a shape of an object."""

# Scalars, Arrays and Matrices
ScalarType = jnp.ndarray
"""Type defining a scalar."""

MatrixType = jax.Array
"""Type defining a dense pairwise (kernel) matrix."""

########################################################################################
# Argument Types
########################################################################################

# Python Numbers
IntLike = int | jnp.integer
"""Object that can be converted to an integer."""

FloatLike = float | jnp.floating
"""Object that can be converted to a float."""

ScalarLike = int | float | jnp.number
"""Object that can be converted to a real scalar hyperparameter value.

Arguments of type :attr:`ScalarLike` are converted into :class:`float`\\ s by
:class:`kernox.HyperParameter` before further internal processing."""

ArrayLike = jax.Array | Iterable
"""Object that can be converted to an array.

Arguments of type :attr:`ArrayLike` should always be converted
into :class:`jax.Array`\\ s using the function :func:`jnp.asarray`
before further internal processing."""

OrientationLike = Union["kernox._orientation.Orientation", str]  # noqa: SLF001
"""Object that can be converted to an :class:`kernox.Orientation`.

Arguments of type :attr:`OrientationLike` should always be converted using
:func:`kernox.utils.as_orientation` before internal processing."""
