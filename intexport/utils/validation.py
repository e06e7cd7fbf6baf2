"""Input validation utilities."""

from typing import Any, Tuple

import numpy as np

# C99 keywords plus the standard type names generated code relies on.
C_RESERVED = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "inline", "int", "long", "register", "restrict", "return", "short",
    "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while", "_Bool", "_Complex",
    "_Imaginary", "real_t",
})


def validate_times(times: np.ndarray) -> Tuple[bool, str]:
    """
    Validate grid time points.

    Returns:
        (is_valid, error_message) tuple
    """
    if times.ndim != 1:
        return False, f"grid times must be 1D, got shape {times.shape}"

    if len(times) < 2:
        return False, f"grid needs at least 2 time points, got {len(times)}"

    if not np.all(np.isfinite(times)):
        return False, "grid times contain NaN or infinite values"

    if np.any(np.diff(times) <= 0):
        return False, "grid times must be strictly increasing"

    return True, ""


def validate_step_count(num_steps: Any) -> Tuple[bool, str]:
    """
    Validate a requested total number of integration steps.

    Zero passes here; the caller reports it as a division by zero.

    Returns:
        (is_valid, error_message) tuple
    """
    if isinstance(num_steps, (bool, np.bool_)):
        return False, "number of steps must be an integer, got bool"

    if not isinstance(num_steps, (int, np.integer)):
        return False, f"number of steps must be an integer, got {type(num_steps).__name__}"

    if num_steps < 0:
        return False, f"number of steps must be non-negative, got {num_steps}"

    return True, ""


def validate_identifier(name: Any) -> Tuple[bool, str]:
    """
    Check that a symbol name can appear verbatim in generated C code.

    Returns:
        (is_valid, error_message) tuple
    """
    if not isinstance(name, str) or not name:
        return False, f"symbol name must be a non-empty string, got {name!r}"

    if not name.isidentifier() or not name.isascii():
        return False, f"{name!r} is not a valid C identifier"

    if name in C_RESERVED:
        return False, f"{name!r} is a reserved word in generated C code"

    return True, ""
