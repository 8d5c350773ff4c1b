# _orientation.py

r"""Sample orientation of a feature matrix.

A feature matrix holds :math:`N` feature vectors of dimension :math:`D`, either as
rows (:attr:`Orientation.ROW`, shape :math:`N \times D`) or as columns
(:attr:`Orientation.COL`, shape :math:`D \times N`). The orientation is always
passed explicitly and never inferred from the data; the pairwise engine only
ever talks to a matrix through the methods below.
"""

from enum import Enum

import jax


class Orientation(Enum):
    ROW = "row"
    COL = "col"

    @property
    def sample_axis(self) -> int:
        """Axis indexing the samples."""
        return 0 if self is Orientation.ROW else 1

    @property
    def feature_axis(self) -> int:
        """Axis indexing the features."""
        return 1 - self.sample_axis

    def n_samples(self, X: jax.Array) -> int:
        return X.shape[self.sample_axis]

    def n_features(self, X: jax.Array) -> int:
        return X.shape[self.feature_axis]

    def subvector(self, X: jax.Array, i: int) -> jax.Array:
        """Return the ``i``-th feature vector of ``X``."""
        return X[i, :] if self is Orientation.ROW else X[:, i]

    def as_rows(self, X: jax.Array) -> jax.Array:
        """View ``X`` with samples along the first axis."""
        return X if self is Orientation.ROW else X.swapaxes(-1, -2)
