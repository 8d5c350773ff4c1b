# __init__.py
r"""`kernox`: Pairwise kernel matrices and kernel algebra in JAX.

This package provides:

- Pairwise kernels: :class:`ScalarProductKernel`, :class:`SquaredDistanceKernel`,
    :class:`SineSquaredKernel`, :class:`ChiSquaredKernel`
- Kernel algebra: :class:`KernelAffinity`, :class:`KernelSum`,
    :class:`KernelProduct`, :class:`KernelComposition` with the composition
    classes :class:`PolynomialClass`, :class:`PowerClass`,
    :class:`ExponentiatedClass`, :class:`SigmoidClass`
- Pairwise matrices: :func:`pairwise`, :func:`pairwise_matrix`,
    :func:`kernel_matrix` and their destination variants ending in ``_``
- Matrix multiplication based fast paths: :func:`gramian`, :func:`dot_vectors`,
    :func:`squared_distance_`

Every matrix routine takes an explicit :class:`Orientation`, ``"row"`` when
samples are the rows of the feature matrix and ``"col"`` when they are its
columns.
"""

__version__ = "0.1.0"

from ._algebra import (
    KernelAffinity,
    KernelOperation,
    KernelProduct,
    KernelSum,
    add,
    exp,
    kadd,
    kexp,
    kmul,
    kpow,
    ktanh,
    mul,
    power,
    scale,
    shift,
    tanh,
)
from ._composition import (
    CompositionClass,
    ExponentiatedClass,
    KernelComposition,
    PolynomialClass,
    PowerClass,
    SigmoidClass,
)
from ._errors import (
    DimensionMismatch,
    InvalidClosure,
    InvalidHyperParameter,
    KernoxWarning,
)
from ._gramian import dot_vectors, dot_vectors_, gramian, gramian_, squared_distance_
from ._hyperparameter import (
    Bound,
    HyperParameter,
    Interval,
    interval,
    leftbounded,
    rightbounded,
    unbounded,
)
from ._kernel import (
    ChiSquaredKernel,
    Kernel,
    PairwiseKernel,
    ScalarProductKernel,
    SineSquaredKernel,
    SquaredDistanceKernel,
    StandardKernel,
)
from ._kernel_matrix import kernel, kernel_matrix, kernel_matrix_
from ._orientation import Orientation
from ._pairwise import (
    check_pairwise_dimensions,
    init_pairwise_matrix,
    pairwise,
    pairwise_matrix,
    pairwise_matrix_,
    unsafe_pairwise,
)
from .config import is_debug, set_debug
from .utils import allclose, as_orientation, copytri

# Explicitly declare public API
__all__ = [
    # Kernel Classes
    "ChiSquaredKernel",
    "Kernel",
    "KernelAffinity",
    "KernelComposition",
    "KernelOperation",
    "KernelProduct",
    "KernelSum",
    "PairwiseKernel",
    "ScalarProductKernel",
    "SineSquaredKernel",
    "SquaredDistanceKernel",
    "StandardKernel",
    # Composition Classes
    "CompositionClass",
    "ExponentiatedClass",
    "PolynomialClass",
    "PowerClass",
    "SigmoidClass",
    # Hyperparameters
    "Bound",
    "HyperParameter",
    "Interval",
    "interval",
    "leftbounded",
    "rightbounded",
    "unbounded",
    # Errors
    "DimensionMismatch",
    "InvalidClosure",
    "InvalidHyperParameter",
    "KernoxWarning",
    # Kernel Algebra
    "add",
    "exp",
    "kadd",
    "kexp",
    "kmul",
    "kpow",
    "ktanh",
    "mul",
    "power",
    "scale",
    "shift",
    "tanh",
    # Pairwise Matrices
    "Orientation",
    "as_orientation",
    "check_pairwise_dimensions",
    "init_pairwise_matrix",
    "kernel",
    "kernel_matrix",
    "kernel_matrix_",
    "pairwise",
    "pairwise_matrix",
    "pairwise_matrix_",
    "unsafe_pairwise",
    # Gramian
    "dot_vectors",
    "dot_vectors_",
    "gramian",
    "gramian_",
    "squared_distance_",
    # Utilities
    "allclose",
    "copytri",
    # Configuration
    "is_debug",
    "set_debug",
]
