"""
Time Grids
==========

Ordered time points partitioning a horizon into shooting or integration
intervals.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from .exceptions import InvalidInputError
from .utils.validation import validate_times

# Relative tolerance used to decide whether all interval lengths agree.
EQUIDISTANT_RTOL = 1e-10


class Grid:
    """
    Strictly increasing sequence of time points.

    A grid with ``n_points`` points has ``n_intervals = n_points - 1``
    intervals; at least one interval is required.

    Args:
        times: Time points, 1D array-like of length >= 2

    Example:
        >>> grid = Grid([0.0, 1.0, 3.0, 4.0])
        >>> grid.n_intervals
        3
        >>> grid.is_equidistant
        False
        >>> Grid.uniform(0.0, 2.0, 5).is_equidistant
        True
    """

    __slots__ = ("_times",)

    def __init__(self, times: Union[np.ndarray, list, tuple]) -> None:
        try:
            arr = np.array(times, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"grid times are not numeric: {e}") from e

        valid, msg = validate_times(arr)
        if not valid:
            raise InvalidInputError(msg)

        arr.setflags(write=False)
        self._times = arr

    @classmethod
    def uniform(cls, t_first: float, t_last: float, n_points: int) -> "Grid":
        """
        Create an equidistant grid.

        Args:
            t_first: First time point
            t_last: Last time point (must exceed ``t_first``)
            n_points: Number of points including both ends (>= 2)
        """
        if int(n_points) != n_points or n_points < 2:
            raise InvalidInputError(f"uniform grid needs at least 2 points, got {n_points}")
        return cls(np.linspace(t_first, t_last, int(n_points)))

    @property
    def times(self) -> np.ndarray:
        """Read-only view of the time points."""
        return self._times

    @property
    def n_points(self) -> int:
        """Number of time points."""
        return len(self._times)

    @property
    def n_intervals(self) -> int:
        """Number of intervals."""
        return len(self._times) - 1

    @property
    def first_time(self) -> float:
        return float(self._times[0])

    @property
    def last_time(self) -> float:
        return float(self._times[-1])

    @property
    def horizon(self) -> float:
        """Length of the covered time span."""
        return self.last_time - self.first_time

    def time(self, index: int) -> float:
        """Time point at ``index`` (0 <= index <= n_intervals)."""
        if not 0 <= index < len(self._times):
            raise IndexError(
                f"grid index {index} out of range for {len(self._times)} points"
            )
        return float(self._times[index])

    def interval_lengths(self) -> np.ndarray:
        """Durations of all intervals."""
        return np.diff(self._times)

    @property
    def is_equidistant(self) -> bool:
        """True if all intervals have the same duration."""
        lengths = self.interval_lengths()
        return bool(np.allclose(lengths, lengths[0], rtol=EQUIDISTANT_RTOL, atol=0.0))

    def copy(self) -> "Grid":
        """Independent copy of this grid."""
        return Grid(self._times.copy())

    def __len__(self) -> int:
        return len(self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self._times, other._times))

    def __hash__(self) -> int:
        return hash(self._times.tobytes())

    def __repr__(self) -> str:
        return (
            f"Grid(n_intervals={self.n_intervals}, "
            f"t=[{self.first_time:.6g}, {self.last_time:.6g}], "
            f"equidistant={self.is_equidistant})"
        )
