"""
Tests for continuous time to interval lookup.
"""

import pytest
import numpy as np
from hypothesis import given, settings, strategies as st

from intexport import Grid, locate_interval, locate_intervals


class TestLocateInterval:
    """Test the linear interval scan."""

    def test_interior_times(self, nonuniform_grid):
        """Normalized times inside each interval."""
        # Boundaries at 0.25 and 0.75 after normalization by T = 4.
        assert locate_interval(nonuniform_grid, 0.1) == 0
        assert locate_interval(nonuniform_grid, 0.5) == 1
        assert locate_interval(nonuniform_grid, 0.9) == 2

    def test_endpoints(self, nonuniform_grid):
        """First time maps to 0, last time to N-1."""
        assert locate_interval(nonuniform_grid, 0.0) == 0
        assert locate_interval(nonuniform_grid, 1.0) == nonuniform_grid.n_intervals - 1

    def test_boundary_belongs_to_earlier_interval(self, nonuniform_grid):
        """A query on a boundary selects the interval ending there."""
        assert locate_interval(nonuniform_grid, 0.25) == 0
        assert locate_interval(nonuniform_grid, 0.75) == 1
        assert locate_interval(nonuniform_grid, np.nextafter(0.25, 1.0)) == 1

    def test_clamps_past_end(self, nonuniform_grid):
        """Times beyond the horizon map to the last interval."""
        assert locate_interval(nonuniform_grid, 5.0) == 2

    def test_before_start_not_validated(self, nonuniform_grid):
        """Times before the start fall into the first interval."""
        assert locate_interval(nonuniform_grid, -1.0) == 0

    def test_single_interval(self):
        """With one interval every query maps to 0."""
        grid = Grid([0.0, 2.0])
        assert locate_interval(grid, 0.0) == 0
        assert locate_interval(grid, 10.0) == 0

    def test_vectorized(self, uniform_grid):
        """locate_intervals maps each query."""
        idx = locate_intervals(uniform_grid, [0.0, 0.3, 0.5, 1.0])
        np.testing.assert_array_equal(idx, [0, 1, 2, 4])


@st.composite
def grids(draw):
    lengths = draw(st.lists(st.floats(min_value=0.1, max_value=10.0), min_size=1, max_size=12))
    return Grid(np.concatenate([[0.0], np.cumsum(lengths)]))


class TestLocateIntervalProperties:
    """Property tests over random grids."""

    @pytest.mark.property
    @settings(max_examples=100, deadline=None)
    @given(
        grid=grids(),
        t1=st.floats(min_value=-0.5, max_value=1.5),
        t2=st.floats(min_value=-0.5, max_value=1.5),
    )
    def test_monotone(self, grid, t1, t2):
        """Later queries never map to earlier intervals."""
        lo, hi = sorted((t1, t2))
        assert locate_interval(grid, lo) <= locate_interval(grid, hi)

    @pytest.mark.property
    @settings(max_examples=100, deadline=None)
    @given(grid=grids())
    def test_endpoints(self, grid):
        """First time maps to 0 and last time to N-1."""
        assert locate_interval(grid, 0.0) == 0
        assert locate_interval(grid, 1.0) == grid.n_intervals - 1

    @pytest.mark.property
    @settings(max_examples=100, deadline=None)
    @given(grid=grids(), t=st.floats(min_value=-0.5, max_value=1.5))
    def test_in_range(self, grid, t):
        """Result is always a valid interval index."""
        assert 0 <= locate_interval(grid, t) < grid.n_intervals
