"""
Integration Step Counts
=======================

Derives the integration grid and per-interval step counts from an outer
optimal-control (shooting) grid and a desired total number of steps.

Two cases:
- Equidistant shooting grid: every interval reuses one fixed template grid,
  no per-interval counts are needed.
- Non-equidistant shooting grid: the template is a single step of size
  ``h = T / num_steps`` and each interval gets its own step count.

Counts are rounded up with a ``10 * EPS`` guard so that lengths which are an
exact multiple of ``h`` do not gain an extra step from round-off.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .exceptions import DivisionByZeroError, InvalidInputError
from .grid import Grid
from .utils.validation import validate_step_count

EPS = np.finfo(np.float64).eps
ROUNDING_GUARD = 10.0 * EPS


def _check_inputs(ocp_grid: Grid, num_steps: int) -> None:
    if not isinstance(ocp_grid, Grid):
        raise InvalidInputError(
            f"expected a Grid, got {type(ocp_grid).__name__}"
        )

    valid, msg = validate_step_count(num_steps)
    if not valid:
        raise InvalidInputError(msg)

    if num_steps == 0:
        raise DivisionByZeroError(
            "Cannot derive an integration grid from 0 integration steps"
        )

    # Grid guarantees this, kept for duck-typed subclasses.
    if ocp_grid.n_intervals == 0:
        raise InvalidInputError("shooting grid has no intervals")


def equidistant_step_count(num_steps: int, n_intervals: int) -> int:
    """
    Number of template grid points for one equidistant shooting interval.

    This is the applied step count ``ceil(num_steps / n_intervals)`` plus the
    boundary evaluation point.

    Example:
        >>> equidistant_step_count(23, 5)
        6
    """
    if n_intervals <= 0:
        raise InvalidInputError(f"number of intervals must be positive, got {n_intervals}")
    if num_steps == 0:
        raise DivisionByZeroError()
    return int(np.ceil(num_steps / n_intervals - ROUNDING_GUARD)) + 1


def step_counts(ocp_grid: Grid, num_steps: int) -> np.ndarray:
    """
    Per-interval integration step counts.

    Args:
        ocp_grid: Shooting grid with N intervals
        num_steps: Desired total number of integration steps

    Returns:
        Integer array (N,) with ``ceil(length_i / h - 10*EPS)``, at least 1

    Example:
        >>> step_counts(Grid([0.0, 1.0, 3.0, 4.0]), 8)
        array([2, 4, 2])
    """
    _check_inputs(ocp_grid, num_steps)

    h = ocp_grid.horizon / float(num_steps)
    counts = np.ceil(ocp_grid.interval_lengths() / h - ROUNDING_GUARD).astype(np.int64)

    # An interval far shorter than h still needs one step.
    return np.maximum(counts, 1)


def derive_integration_grid(ocp_grid: Grid, num_steps: int) -> Tuple[Grid, np.ndarray]:
    """
    Integration grid and step-count vector for a shooting grid.

    Args:
        ocp_grid: Shooting grid with N intervals
        num_steps: Desired total number of integration steps

    Returns:
        (grid, counts) where ``counts`` is empty for an equidistant shooting
        grid and has length N otherwise

    Raises:
        DivisionByZeroError: If ``num_steps`` is zero
        InvalidInputError: If ``num_steps`` is negative or not an integer
    """
    _check_inputs(ocp_grid, num_steps)

    n = ocp_grid.n_intervals
    T = ocp_grid.horizon

    if ocp_grid.is_equidistant:
        n_points = equidistant_step_count(num_steps, n)
        return Grid.uniform(0.0, T / n, n_points), np.zeros(0, dtype=np.int64)

    # One reusable step of size h; the per-interval counts carry the rest.
    h = T / float(num_steps)
    return Grid.uniform(0.0, h, 2), step_counts(ocp_grid, num_steps)
