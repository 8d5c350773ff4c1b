# config.py

"""Global configuration for kernox diagnostics and debug behavior.

Usage:
- Toggle debug warnings (e.g., elementwise evaluation of a kernel):
    from kernox.config import set_debug
    set_debug(True)

- Or via environment variable:
    export KERNOX_DEBUG=1
"""

from __future__ import annotations

import os
import warnings

from kernox._errors import KernoxWarning

_DEBUG: bool = os.getenv("KERNOX_DEBUG", "0") not in {"0", "false", "False", ""}


def set_debug(value: bool) -> None:
    """Enable or disable debug mode (controls diagnostic warnings)."""
    global _DEBUG
    _DEBUG = bool(value)


def is_debug() -> bool:
    """Return whether debug mode is enabled."""
    return _DEBUG


def warn(msg: str, *, prefix: str = "Warning") -> None:
    """Conditionally emit a warning message if debug is enabled.

    Args:
        msg: Message to emit.
        prefix: Optional prefix for the message, defaults to 'Warning'.
    """
    if _DEBUG:
        warnings.warn(f"{prefix}: {msg}", KernoxWarning, stacklevel=3)
