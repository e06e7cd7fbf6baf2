"""
Integrator Export Session
=========================

Collects everything the code-emission backend needs to generate an embedded
integrator: the integration grid and per-interval step counts, the binding
of the right-hand side, the output functions and the export flags.

Typical use:

>>> from intexport import IntegratorExport, Grid, DifferentialEquation
>>> session = IntegratorExport(namespace="quad")
>>> session.set_grid(Grid([0.0, 1.0, 3.0, 4.0]), 8)
>>> session.get_num_steps()
array([2, 4, 2])
>>> session.set_model("rhs", "diffs_rhs")
>>> session.get_name_rhs()
'rhs'

A session is configured once and then read by a single emission pass; it is
not meant to be shared between concurrent generation requests.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from .binding import Binding, External, Generated, ModelExpression, check_rebind
from .config import ExportConfiguration, read_flag
from .exceptions import InvalidInputError, UnboundModelError
from .grid import Grid
from .locator import locate_interval
from .outputs import OutputRegistry, OutputSpec
from .steps import derive_integration_grid
from .symbols import DataStruct, ExportFunction, ExportType, ExportVariable, Namespace

logger = logging.getLogger(__name__)


class IntegratorExport:
    """
    Configuration of one exported integrator.

    Args:
        options: Caller options. Recognized keys:
            - 'verbose': log configuration steps at INFO level (default False)
            - 'sparse_derivatives': compressed-row derivative layout (default False)
        namespace: Prefix qualifying exported symbols, a C identifier or a
            :class:`Namespace`. Defaults to "export".

    Attributes:
        reset_integrator: Exported flag telling generated code to discard
            internal integrator state before the next call
        integrate: Entry point of the generated integrator
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        namespace: Union[str, Namespace] = "export",
    ) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self.namespace = namespace if isinstance(namespace, Namespace) else Namespace(namespace)
        self.verbose = read_flag(self.options, "verbose", False)

        self.reset_integrator = ExportVariable(
            "resetIntegrator", 1, 1, ExportType.INT, DataStruct.VARIABLES, call_by_value=True
        )
        self.integrate = ExportFunction("integrate")

        self._reset_state()

    def _reset_state(self) -> None:
        self.config = ExportConfiguration.from_options(self.options)
        self._grid: Optional[Grid] = None
        self._num_steps = np.zeros(0, dtype=np.int64)
        self._rhs: Optional[Binding] = None
        self._outputs = OutputRegistry()

    def _log(self, msg: str, *args) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, "[%s] " + msg, self.namespace, *args)

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    def set_grid(self, grid: Grid, num_steps: Optional[int] = None) -> None:
        """
        Configure the integration grid.

        With ``num_steps`` omitted, ``grid`` is used directly as a
        non-uniform integration grid. Otherwise ``grid`` is the shooting
        grid and the integration grid is derived so that about
        ``num_steps`` steps cover the whole horizon.

        Args:
            grid: Integration grid, or shooting grid when ``num_steps`` is given
            num_steps: Desired total number of integration steps

        Raises:
            DivisionByZeroError: If ``num_steps`` is zero
            InvalidInputError: If ``grid`` is not a Grid or ``num_steps`` is
                not a non-negative integer

        On error the session is left unchanged.
        """
        if num_steps is None:
            if not isinstance(grid, Grid):
                raise InvalidInputError(f"expected a Grid, got {type(grid).__name__}")
            self._grid = grid.copy()
            self._num_steps = np.zeros(0, dtype=np.int64)
            self.config = self.config.with_equidistant(False)
            self._log("explicit integration grid with %d intervals", grid.n_intervals)
            return

        new_grid, counts = derive_integration_grid(grid, num_steps)
        equidistant = len(counts) == 0

        self._grid = new_grid
        self._num_steps = counts
        self.config = self.config.with_equidistant(equidistant)

        if equidistant:
            self._log(
                "equidistant shooting grid: %d intervals, %d template points per interval",
                grid.n_intervals, new_grid.n_points,
            )
        else:
            self._log(
                "non-equidistant shooting grid: step size %.6g, %d steps in total",
                new_grid.horizon, int(counts.sum()),
            )

    def get_grid(self) -> Optional[Grid]:
        """Copy of the integration grid, ``None`` before configuration."""
        return None if self._grid is None else self._grid.copy()

    def get_num_steps(self) -> np.ndarray:
        """Copy of the per-interval step counts (empty when equidistant)."""
        return self._num_steps.copy()

    def is_equidistant(self) -> bool:
        """
        True if the shooting grid needs no per-interval step counts.

        This concerns the shooting grid only. After an explicit
        ``set_grid(grid)`` it is True while ``config.equidistant`` is False,
        since the integration grid itself is non-uniform.
        """
        return len(self._num_steps) == 0

    def get_integration_interval(self, time: float) -> int:
        """
        Integration interval owning a normalized time.

        See :func:`intexport.locator.locate_interval`.
        """
        if self._grid is None:
            raise InvalidInputError("integration grid has not been set")
        return locate_interval(self._grid, time)

    # ------------------------------------------------------------------
    # Right-hand side
    # ------------------------------------------------------------------

    def set_differential_equation(self, rhs: ModelExpression, diffs_rhs: ModelExpression) -> None:
        """
        Generate code for the right-hand side from expressions.

        Args:
            rhs: Right-hand side expression
            diffs_rhs: Its derivative (sensitivity) expression
        """
        binding = Generated(rhs, diffs_rhs)
        if isinstance(self._rhs, Generated):
            warnings.warn(
                f"Replacing generated right-hand side '{self._rhs.name}' with '{binding.name}'"
            )

        self._rhs = binding
        self.config = self.config.with_generated_rhs()
        self._log("generated right-hand side '%s' (dim=%d)", binding.name, binding.dim)

    def set_model(self, name_rhs: str, name_diffs_rhs: str) -> None:
        """
        Call external functions for the right-hand side and its derivative.

        Args:
            name_rhs: Name of the right-hand side function
            name_diffs_rhs: Name of the derivative function

        Raises:
            InvalidOptionError: If a generated right-hand side of nonzero
                dimension is already defined
            InvalidInputError: If a name is not a valid C identifier
        """
        check_rebind(self._rhs, "right-hand side")
        binding = External(name_rhs, name_diffs_rhs)

        self._rhs = binding
        self.config = self.config.with_external_rhs()
        self._log("external right-hand side '%s' / '%s'", name_rhs, name_diffs_rhs)

    def _bound_rhs(self) -> Binding:
        if self._rhs is None:
            raise UnboundModelError()
        return self._rhs

    @property
    def rhs_binding(self) -> Optional[Binding]:
        return self._rhs

    def get_name_rhs(self) -> str:
        return self._bound_rhs().name

    def get_name_diffs_rhs(self) -> str:
        return self._bound_rhs().deriv_name

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def add_output(self, spec: OutputSpec) -> int:
        """
        Register an output function.

        Returns:
            Index of the new output
        """
        index = self._outputs.register(spec)
        kind = "generated" if spec.is_generated else "external"
        self._log(
            "%s output %d '%s' (dim=%d) on %d-point grid",
            kind, index, spec.name, spec.dim, spec.grid.n_points,
        )
        return index

    def set_output_model(self, index: int, name: str, name_diffs: str, dim: int) -> None:
        """
        Bind output ``index`` to external functions.

        Raises:
            InvalidOptionError: If the output is generated with nonzero dimension
        """
        self._outputs.rebind_external(index, name, name_diffs, dim)
        self._log("external output %d '%s' / '%s'", index, name, name_diffs)

    @property
    def outputs(self) -> OutputRegistry:
        return self._outputs

    @property
    def n_outputs(self) -> int:
        return len(self._outputs)

    def get_output_expressions(self) -> Tuple[Optional[ModelExpression], ...]:
        """Expressions aligned with :meth:`get_output_grids`, ``None`` for external outputs."""
        return self._outputs.expressions()

    def get_output_grids(self) -> Tuple[Grid, ...]:
        return self._outputs.grids()

    def get_name_output(self, index: int) -> str:
        return self._outputs[index].name

    def get_dim_output(self, index: int) -> int:
        return self._outputs[index].dim

    def get_name_diffs_output(self, index: int) -> str:
        return self._outputs[index].deriv_name

    # ------------------------------------------------------------------
    # Exported symbols
    # ------------------------------------------------------------------

    @property
    def reset_symbol(self) -> str:
        """Qualified name of the reset flag in generated code."""
        return self.reset_integrator.full_name(self.namespace)

    @property
    def integrate_symbol(self) -> str:
        """Qualified name of the integrator entry point."""
        return self.integrate.full_name(self.namespace)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop grid, bindings and outputs."""
        self._reset_state()

    def copy(self) -> "IntegratorExport":
        """
        Independent copy of this session.

        Configuration, grid, step counts and the output list are copied;
        model expression objects are shared.
        """
        other = IntegratorExport(self.options, self.namespace)
        other.verbose = self.verbose
        other.config = self.config
        other._grid = None if self._grid is None else self._grid.copy()
        other._num_steps = self._num_steps.copy()
        other._rhs = self._rhs
        other._outputs = self._outputs.copy()
        return other

    def __copy__(self) -> "IntegratorExport":
        return self.copy()

    def __deepcopy__(self, memo) -> "IntegratorExport":
        return self.copy()

    def assign(self, other: "IntegratorExport") -> "IntegratorExport":
        """
        Replace this session's state with a copy of ``other``.

        Returns:
            self
        """
        if other is self:
            return self
        if not isinstance(other, IntegratorExport):
            raise InvalidInputError(f"cannot assign from {type(other).__name__}")

        replacement = other.copy()
        self.clear()
        self.__dict__.update(replacement.__dict__)
        return self

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Return a formatted summary of the export configuration."""
        if self._grid is None:
            grid_line = "unset"
        else:
            grid_line = (
                f"{self._grid.n_intervals} intervals on "
                f"[{self._grid.first_time:.6g}, {self._grid.last_time:.6g}]"
            )
        steps_line = "equidistant" if self.is_equidistant() else str(self._num_steps.tolist())
        if self._rhs is None:
            rhs_line = "unbound"
        else:
            kind = "generated" if isinstance(self._rhs, Generated) else "external"
            rhs_line = f"{self._rhs.name} / {self._rhs.deriv_name} ({kind})"

        lines = [
            "=" * 50,
            "Integrator Export Summary",
            "=" * 50,
            f"Namespace:        {self.namespace}",
            f"Grid:             {grid_line}",
            f"Step counts:      {steps_line}",
            f"Right-hand side:  {rhs_line}",
            f"Outputs:          {len(self._outputs)}",
            "-" * 50,
            f"Inline RHS:       {self.config.export_rhs_inline}",
            f"Equidistant:      {self.config.equidistant}",
            f"Sparse derivs:    {self.config.sparse_derivatives}",
            f"Reset symbol:     {self.reset_symbol}",
            "=" * 50,
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"IntegratorExport(namespace={self.namespace.prefix!r}, "
            f"grid={self._grid!r}, outputs={len(self._outputs)})"
        )
