"""
pytest configuration and fixtures for intexport tests.
"""

import pytest
import numpy as np

from intexport import DifferentialEquation, Grid, IntegratorExport


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def nonuniform_grid():
    """
    Shooting grid with interval lengths [1, 2, 1].

    With 8 integration steps: h = 0.5, step counts [2, 4, 2].
    """
    return Grid([0.0, 1.0, 3.0, 4.0])


@pytest.fixture
def uniform_grid():
    """
    Equidistant shooting grid with 5 intervals on [0, 2].

    With 23 integration steps: ceil(23/5) + 1 = 6 template points.
    """
    return Grid.uniform(0.0, 2.0, 6)


@pytest.fixture
def rhs():
    """Generated right-hand side and its derivative for a 4-state model."""
    return (
        DifferentialEquation("rhs", 4),
        DifferentialEquation("diffs_rhs", 4 * (4 + 2)),
    )


@pytest.fixture
def session():
    """Fresh export session."""
    return IntegratorExport(namespace="quad")


@pytest.fixture
def configured_session(nonuniform_grid, rhs):
    """Session with a derived grid, a generated RHS and one output."""
    from intexport import OutputSpec

    s = IntegratorExport(namespace="quad")
    s.set_grid(nonuniform_grid, 8)
    s.set_differential_equation(*rhs)
    s.add_output(
        OutputSpec.generated(
            DifferentialEquation("out0", 2),
            DifferentialEquation("diffs_out0", 12),
            Grid(np.linspace(0.0, 1.0, 11)),
        )
    )
    return s


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "property: marks hypothesis property tests")
