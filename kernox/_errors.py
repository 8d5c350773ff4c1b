# _errors.py

"""Exceptions and warnings raised by kernox.

All errors are raised synchronously at call or construction time and are never
recovered internally.
"""


class DimensionMismatch(ValueError):
    """Raised when the shapes of two operands disagree."""


class InvalidClosure(ValueError):
    """Raised when a composite kernel would not be Mercer / negative definite."""


class InvalidHyperParameter(ValueError):
    """Raised when a hyperparameter value lies outside of its interval."""


class KernoxWarning(UserWarning):
    """Diagnostic warning category, only emitted in debug mode."""
