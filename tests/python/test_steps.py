"""
Tests for integration grid and step-count derivation.

Tests covering:
1. Equidistant shooting grids (template grid, no step counts)
2. Non-equidistant shooting grids (per-interval step counts)
3. Round-off guard
4. Invalid step counts
"""

import pytest
import numpy as np
from hypothesis import given, settings, strategies as st

from intexport import (
    DivisionByZeroError,
    Grid,
    InvalidInputError,
    derive_integration_grid,
    equidistant_step_count,
    step_counts,
)


class TestEquidistant:
    """Equidistant shooting grids."""

    def test_template_points(self, uniform_grid):
        """5 intervals, 23 steps: 6 template points, no step counts."""
        grid, counts = derive_integration_grid(uniform_grid, 23)

        assert grid.n_points == 6
        assert grid.first_time == 0.0
        assert grid.last_time == pytest.approx(0.4)
        assert grid.is_equidistant
        assert len(counts) == 0

    def test_step_count_formula(self):
        """ceil(num_steps / N) + 1."""
        assert equidistant_step_count(23, 5) == 6
        assert equidistant_step_count(25, 5) == 6
        assert equidistant_step_count(1, 5) == 2

    def test_exact_multiple_not_rounded_up(self):
        """20 steps over 10 intervals gives 2 steps, not 3."""
        grid, counts = derive_integration_grid(Grid.uniform(0.0, 1.0, 11), 20)
        assert grid.n_points == 3
        assert len(counts) == 0


class TestNonEquidistant:
    """Non-equidistant shooting grids."""

    def test_step_counts(self, nonuniform_grid):
        """Lengths [1, 2, 1], 8 steps: h = 0.5, counts [2, 4, 2]."""
        grid, counts = derive_integration_grid(nonuniform_grid, 8)

        np.testing.assert_array_equal(counts, [2, 4, 2])
        assert counts.sum() == 8
        assert grid == Grid([0.0, 0.5])

    def test_round_off_guard(self):
        """Lengths that are multiples of h up to round-off keep their count."""
        ocp = Grid([0.0, 0.3, 0.7, 1.0])
        np.testing.assert_array_equal(step_counts(ocp, 10), [3, 4, 3])

    def test_partial_step_rounds_up(self):
        """Intervals not divisible by h get an extra step."""
        ocp = Grid([0.0, 1.0, 2.5, 4.0])
        counts = step_counts(ocp, 4)  # h = 1
        np.testing.assert_array_equal(counts, [1, 2, 2])

    def test_tiny_interval_gets_one_step(self):
        """Every interval receives at least one step."""
        ocp = Grid([0.0, 1e-18, 1.0])
        assert step_counts(ocp, 1)[0] == 1

    def test_counts_are_integers(self, nonuniform_grid):
        """Step counts are an integer vector."""
        counts = step_counts(nonuniform_grid, 8)
        assert np.issubdtype(counts.dtype, np.integer)

    @pytest.mark.property
    @settings(max_examples=100, deadline=None)
    @given(
        lengths=st.lists(st.floats(min_value=0.1, max_value=10.0), min_size=1, max_size=12),
        num_steps=st.integers(min_value=1, max_value=1000),
    )
    def test_counts_cover_requested_steps(self, lengths, num_steps):
        """Counts never undershoot the request and overshoot by at most one per interval."""
        ocp = Grid(np.concatenate([[0.0], np.cumsum(lengths)]))
        counts = step_counts(ocp, num_steps)

        assert len(counts) == ocp.n_intervals
        assert np.all(counts >= 1)
        assert num_steps <= counts.sum() <= num_steps + ocp.n_intervals


class TestInvalidSteps:
    """Invalid step counts."""

    def test_zero_steps(self, nonuniform_grid, uniform_grid):
        """Zero steps is a division by zero."""
        with pytest.raises(DivisionByZeroError):
            derive_integration_grid(nonuniform_grid, 0)
        with pytest.raises(DivisionByZeroError):
            derive_integration_grid(uniform_grid, 0)
        with pytest.raises(DivisionByZeroError):
            step_counts(nonuniform_grid, 0)

    @pytest.mark.parametrize("num_steps", [-1, 2.5, True, "8"])
    def test_bad_step_type(self, nonuniform_grid, num_steps):
        """Negative or non-integer counts are invalid input."""
        with pytest.raises(InvalidInputError):
            derive_integration_grid(nonuniform_grid, num_steps)

    def test_numpy_integer_accepted(self, nonuniform_grid):
        """numpy integers are valid step counts."""
        _, counts = derive_integration_grid(nonuniform_grid, np.int64(8))
        np.testing.assert_array_equal(counts, [2, 4, 2])

    def test_not_a_grid(self):
        """The shooting grid must be a Grid."""
        with pytest.raises(InvalidInputError, match="expected a Grid"):
            derive_integration_grid([0.0, 1.0], 4)
