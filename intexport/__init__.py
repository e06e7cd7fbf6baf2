"""
intexport: Embedded Integrator Export Configuration
===================================================

intexport prepares everything a code generator needs to emit a fixed-step
integrator for a real-time optimal control loop: the integration grid,
per-interval step counts for non-uniform shooting grids, the binding of the
right-hand side to generated or external functions, and the output
functions evaluated along the integration.

Quick Start
-----------
>>> import intexport
>>> session = intexport.IntegratorExport(namespace="quad")
>>> shooting = intexport.Grid.uniform(0.0, 2.0, 6)      # 5 intervals
>>> session.set_grid(shooting, 23)
>>> session.is_equidistant(), session.get_grid().n_points
(True, 6)

Non-uniform shooting grids get one step count per interval:

>>> session.set_grid(intexport.Grid([0.0, 1.0, 3.0, 4.0]), 8)
>>> session.get_num_steps()
array([2, 4, 2])

Externally supplied model functions:

>>> session.set_model("rhs", "diffs_rhs")
>>> session.config.export_rhs_inline
False
"""

__version__ = "0.1.0"
__author__ = "intexport Contributors"

from .grid import Grid
from .steps import derive_integration_grid, equidistant_step_count, step_counts
from .locator import locate_interval, locate_intervals
from .binding import DifferentialEquation, External, Generated, ModelExpression
from .outputs import OutputRegistry, OutputSpec
from .config import ExportConfiguration
from .layout import DerivativeLayout
from .symbols import DataStruct, ExportFunction, ExportType, ExportVariable, Namespace
from .export import IntegratorExport
from .result import Status
from .exceptions import (
    IntExportError,
    InvalidOptionError,
    DivisionByZeroError,
    DimensionError,
    InvalidInputError,
    UnboundModelError,
)

__all__ = [
    # Version
    "__version__",

    # Grids and step counts
    "Grid",
    "derive_integration_grid",
    "equidistant_step_count",
    "step_counts",
    "locate_interval",
    "locate_intervals",

    # Model binding
    "ModelExpression",
    "DifferentialEquation",
    "Generated",
    "External",
    "OutputSpec",
    "OutputRegistry",

    # Configuration
    "ExportConfiguration",
    "DerivativeLayout",
    "Namespace",
    "ExportVariable",
    "ExportFunction",
    "ExportType",
    "DataStruct",

    # Session
    "IntegratorExport",

    # Results
    "Status",

    # Exceptions
    "IntExportError",
    "InvalidOptionError",
    "DivisionByZeroError",
    "DimensionError",
    "InvalidInputError",
    "UnboundModelError",
]


def info() -> str:
    """Return information about the intexport installation."""
    import platform

    import numpy
    import scipy

    lines = [
        f"intexport version: {__version__}",
        f"Python version: {platform.python_version()}",
        f"Platform: {platform.platform()}",
        f"NumPy version: {numpy.__version__}",
        f"SciPy version: {scipy.__version__}",
    ]
    return "\n".join(lines)
