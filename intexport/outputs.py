"""
Output Functions
================

Auxiliary functions evaluated along the integration, each on its own grid.

Outputs are registered in order and addressed by index; they are never
removed during an export session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .binding import Binding, External, Generated, ModelExpression, check_rebind
from .exceptions import InvalidInputError
from .grid import Grid


@dataclass(frozen=True)
class OutputSpec:
    """
    One output function.

    Args:
        binding: Generated or External binding
        grid: Sampling grid of the output over one shooting interval,
            typically finer than the integration grid

    Example:
        >>> spec = OutputSpec.external("out0", "diffs_out0", 2, Grid.uniform(0, 1, 11))
        >>> spec.dim
        2
    """
    binding: Binding
    grid: Grid

    def __post_init__(self):
        if not isinstance(self.binding, (Generated, External)):
            raise InvalidInputError(
                f"output binding must be Generated or External, got {type(self.binding).__name__}"
            )
        if not isinstance(self.grid, Grid):
            raise InvalidInputError(f"output grid must be a Grid, got {type(self.grid).__name__}")

    @classmethod
    def generated(
        cls,
        expression: ModelExpression,
        derivative: ModelExpression,
        grid: Grid,
    ) -> "OutputSpec":
        """Output generated from an expression and its derivative."""
        return cls(Generated(expression, derivative), grid.copy())

    @classmethod
    def external(cls, name: str, deriv_name: str, dim: int, grid: Grid) -> "OutputSpec":
        """Output computed by caller-supplied functions."""
        return cls(External(name, deriv_name, dim), grid.copy())

    @property
    def name(self) -> str:
        return self.binding.name

    @property
    def deriv_name(self) -> str:
        return self.binding.deriv_name

    @property
    def dim(self) -> int:
        return self.binding.dim

    @property
    def is_generated(self) -> bool:
        return isinstance(self.binding, Generated)


class OutputRegistry:
    """Ordered, append-only collection of output functions."""

    def __init__(self) -> None:
        self._specs: List[OutputSpec] = []

    def register(self, spec: OutputSpec) -> int:
        """
        Append an output.

        Returns:
            Index of the new output
        """
        if not isinstance(spec, OutputSpec):
            raise InvalidInputError(f"expected an OutputSpec, got {type(spec).__name__}")
        self._specs.append(spec)
        return len(self._specs) - 1

    def rebind_external(self, index: int, name: str, deriv_name: str, dim: int) -> None:
        """
        Switch output ``index`` to external functions, keeping its grid.

        Raises:
            InvalidOptionError: If the output is generated with nonzero dimension
        """
        current = self[index]
        check_rebind(current.binding, f"output {index}")
        binding = External(name, deriv_name, dim)
        self._specs[index] = OutputSpec(binding, current.grid)

    def expressions(self) -> Tuple[Optional[ModelExpression], ...]:
        """
        Output expressions, one entry per registered output.

        Entry k belongs to output k and lines up with ``grids()[k]``;
        external outputs have no expression and yield ``None``.
        """
        return tuple(s.binding.expression if s.is_generated else None for s in self._specs)

    def derivative_expressions(self) -> Tuple[Optional[ModelExpression], ...]:
        """Derivative expressions, aligned like :meth:`expressions`."""
        return tuple(s.binding.derivative if s.is_generated else None for s in self._specs)

    def grids(self) -> Tuple[Grid, ...]:
        """Copies of all output grids, in registration order."""
        return tuple(s.grid.copy() for s in self._specs)

    def copy(self) -> "OutputRegistry":
        """Registry with its own list and grids; expressions are shared."""
        other = OutputRegistry()
        other._specs = [OutputSpec(s.binding, s.grid.copy()) for s in self._specs]
        return other

    def __getitem__(self, index: int) -> OutputSpec:
        if not 0 <= index < len(self._specs):
            raise IndexError(
                f"output index {index} out of range ({len(self._specs)} registered)"
            )
        return self._specs[index]

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[OutputSpec]:
        return iter(list(self._specs))

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._specs)
        return f"OutputRegistry([{names}])"
