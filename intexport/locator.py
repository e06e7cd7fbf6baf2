"""Continuous time to shooting interval lookup."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .grid import Grid


def locate_interval(grid: Grid, time: float) -> int:
    """
    Index of the interval owning ``time``.

    ``time`` is expected in the grid's normalized frame, i.e. already
    divided by the grid horizon. A time equal to an interior boundary
    belongs to the earlier interval; times past the end map to the last
    interval. Times before the start are not checked and return 0.

    Args:
        grid: Grid with N intervals
        time: Normalized query time

    Returns:
        Interval index in ``[0, N-1]``

    Example:
        >>> grid = Grid([0.0, 1.0, 3.0, 4.0])
        >>> locate_interval(grid, 0.25), locate_interval(grid, 0.5)
        (0, 1)
    """
    scale = 1.0 / (grid.last_time - grid.first_time)
    last = grid.n_intervals - 1

    index = 0
    while index < last and time > scale * grid.time(index + 1):
        index += 1
    return index


def locate_intervals(grid: Grid, times: Iterable[float]) -> np.ndarray:
    """Vector version of :func:`locate_interval`."""
    return np.array([locate_interval(grid, t) for t in times], dtype=np.int64)
