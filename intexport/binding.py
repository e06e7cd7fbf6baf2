"""
Model Binding
=============

Binds a right-hand side (or an output function) either to a generated
expression or to externally supplied C functions.

A slot holds exactly one of:
- ``Generated(expression, derivative)``: code is generated from expression
  objects, names and dimension come from those objects.
- ``External(name, deriv_name, dim)``: the caller links in functions with
  the given names, nothing is generated.

Once a slot holds a generated expression of nonzero dimension it cannot be
switched to an external function.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union, runtime_checkable

from .exceptions import InvalidInputError, InvalidOptionError
from .utils.validation import validate_identifier


@runtime_checkable
class ModelExpression(Protocol):
    """Anything exposing a function name and an output dimension."""

    name: str
    dim: int


@dataclass(frozen=True)
class DifferentialEquation:
    """
    Named model expression.

    Stands in for the symbolic collaborator's expression objects when only
    the name and dimension matter.

    Args:
        name: Name of the generated C function
        dim: Output dimension
        expression: Opaque symbolic payload, never inspected here

    Example:
        >>> rhs = DifferentialEquation("rhs", 4)
        >>> diffs = DifferentialEquation("diffs_rhs", 4 * 6)
    """
    name: str
    dim: int
    expression: Any = None

    def __post_init__(self):
        valid, msg = validate_identifier(self.name)
        if not valid:
            raise InvalidInputError(msg)
        if int(self.dim) != self.dim or self.dim < 0:
            raise InvalidInputError(f"dimension must be a non-negative integer, got {self.dim}")

    def __repr__(self) -> str:
        return f"DifferentialEquation({self.name}, dim={self.dim})"


@dataclass(frozen=True)
class Generated:
    """Slot bound to generated code."""
    expression: ModelExpression
    derivative: ModelExpression

    def __post_init__(self):
        for label, obj in (("expression", self.expression), ("derivative", self.derivative)):
            if not isinstance(obj, ModelExpression):
                raise InvalidInputError(
                    f"{label} must expose 'name' and 'dim', got {type(obj).__name__}"
                )

    @property
    def name(self) -> str:
        return self.expression.name

    @property
    def deriv_name(self) -> str:
        return self.derivative.name

    @property
    def dim(self) -> int:
        return int(self.expression.dim)


@dataclass(frozen=True)
class External:
    """Slot bound to caller-supplied functions."""
    name: str
    deriv_name: str
    dim: int = 0

    def __post_init__(self):
        for value in (self.name, self.deriv_name):
            valid, msg = validate_identifier(value)
            if not valid:
                raise InvalidInputError(msg)
        if int(self.dim) != self.dim or self.dim < 0:
            raise InvalidInputError(f"dimension must be a non-negative integer, got {self.dim}")


Binding = Union[Generated, External]


def is_locked(binding: Optional[Binding]) -> bool:
    """True if ``binding`` is a generated model that may not be replaced."""
    return isinstance(binding, Generated) and binding.dim > 0


def check_rebind(current: Optional[Binding], slot: str) -> None:
    """
    Raise if an external function may not replace ``current``.

    Raises:
        InvalidOptionError: If ``current`` is generated with nonzero dimension
    """
    if is_locked(current):
        raise InvalidOptionError(
            f"{slot} is already defined by generated model "
            f"'{current.name}' (dim={current.dim}); "
            f"cannot bind an external function over it"
        )
