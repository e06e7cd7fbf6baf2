"""
intexport Status Codes
======================

Outcome kinds reported by configuration operations.
"""

from enum import Enum


class Status(Enum):
    """
    Outcome of a configuration call.

    Attributes:
        SUCCESSFUL_RETURN: Operation applied
        INVALID_OPTION: Binding would override an already generated model
        DIVISION_BY_ZERO: Requested total step count is zero
        INVALID_INPUT: Malformed grid, name or dimension
        UNBOUND_MODEL: Right-hand side queried before it was bound
    """
    SUCCESSFUL_RETURN = "successful_return"
    INVALID_OPTION = "invalid_option"
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_INPUT = "invalid_input"
    UNBOUND_MODEL = "unbound_model"

    def __str__(self) -> str:
        return self.value

    @property
    def is_successful(self) -> bool:
        """True if the operation was applied."""
        return self == Status.SUCCESSFUL_RETURN
