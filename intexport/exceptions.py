"""
intexport Exception Classes
===========================

Custom exceptions for integrator export configuration errors.

Every exception carries the matching :class:`~intexport.result.Status` so
callers that log outcomes can record the error kind without string matching.
"""

from .result import Status


class IntExportError(Exception):
    """Base exception for all intexport errors."""

    status = Status.INVALID_INPUT

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidOptionError(IntExportError):
    """
    Raised when an external function is bound over a generated model.

    A slot holding a generated expression of nonzero dimension is final.
    """

    status = Status.INVALID_OPTION

    def __init__(self, message: str = "Slot already holds a generated model") -> None:
        super().__init__(message)


class DivisionByZeroError(IntExportError):
    """
    Raised when a zero total step count is requested for grid derivation.
    """

    status = Status.DIVISION_BY_ZERO

    def __init__(self, message: str = "Number of integration steps must be positive") -> None:
        super().__init__(message)


class DimensionError(IntExportError):
    """
    Raised when matrix/vector dimensions are incompatible.
    """

    status = Status.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(f"Dimension mismatch: {message}")


class InvalidInputError(IntExportError):
    """
    Raised when input data is invalid.

    Examples: non-increasing grid times, empty symbol names, negative
    dimensions.
    """

    status = Status.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid input: {message}")


class UnboundModelError(IntExportError):
    """Raised when the right-hand side is queried before it was bound."""

    status = Status.UNBOUND_MODEL

    def __init__(self, message: str = "No right-hand side has been bound") -> None:
        super().__init__(message)
