"""Test optimization of small graphs with the SciPy solver."""

import numpy as np
import pytest

from graphfuse import HashGraph, HuberLoss, Position2DStamped, ScipySolver, SolverSettings, Time
from graphfuse.core.constraints import (
    AbsolutePosition2DStampedConstraint,
    RelativePosition2DStampedConstraint,
)


def position(seconds, values=(0.0, 0.0)):
    return Position2DStamped(Time.from_seconds(seconds), values=list(values))


@pytest.fixture
def chain():
    """Anchored chain of three positions one meter apart."""
    positions = [position(t) for t in (1.0, 2.0, 3.0)]
    graph = HashGraph()
    for p in positions:
        graph.add_variable(p)

    graph.add_constraint(AbsolutePosition2DStampedConstraint(positions[0], [0.0, 0.0], np.eye(2) * 0.01))
    graph.add_constraint(RelativePosition2DStampedConstraint(positions[0], positions[1], [1.0, 0.0], np.eye(2)))
    graph.add_constraint(RelativePosition2DStampedConstraint(positions[1], positions[2], [1.0, 0.0], np.eye(2)))
    return graph, positions


class TestScipySolver:
    """Test solving graphs in place."""

    def test_chain(self, chain):
        """Relative deltas stack up from the anchored first position."""
        graph, positions = chain
        result = ScipySolver().solve(graph)

        assert result.success
        assert result.final_cost < 1e-10
        assert result.final_cost <= result.initial_cost
        np.testing.assert_allclose(positions[0].data, [0.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(positions[1].data, [1.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(positions[2].data, [2.0, 0.0], atol=1e-6)
        assert len(result.residuals) == 3

    def test_held_variable_unchanged(self, chain):
        """Variables on hold keep their values."""
        graph, positions = chain
        positions[1].data[:] = [5.0, 5.0]
        graph.hold_variable(positions[1].uuid)

        result = ScipySolver().solve(graph)

        assert result.success
        np.testing.assert_array_equal(positions[1].data, [5.0, 5.0])
        np.testing.assert_allclose(positions[2].data, [6.0, 5.0], atol=1e-6)

    def test_huber_rejects_outlier(self):
        """A robust loss limits the pull of a gross outlier."""
        p = position(1.0)
        graph = HashGraph()
        graph.add_variable(p)
        for x in (1.0, 1.0, 10.0):
            graph.add_constraint(
                AbsolutePosition2DStampedConstraint(p, [x, 0.0], np.eye(2), loss=HuberLoss(0.5))
            )

        result = ScipySolver(SolverSettings(max_iterations=200)).solve(graph)

        assert result.success
        # inliers pull with r, the outlier with delta: 2 * 0.25 == 0.5
        assert p.x == pytest.approx(1.25, abs=1e-4)
        assert p.y == pytest.approx(0.0, abs=1e-6)

    def test_missing_endpoint(self):
        """Constraints on unknown variables cannot be solved."""
        a = position(1.0)
        b = position(2.0)
        graph = HashGraph()
        graph.add_variable(a)
        graph.add_constraint(RelativePosition2DStampedConstraint(a, b, [1.0, 0.0], np.eye(2)))

        with pytest.raises(ValueError):
            ScipySolver().solve(graph)

    def test_nothing_to_optimize(self, chain):
        graph, positions = chain
        for p in positions:
            graph.hold_variable(p.uuid)

        result = ScipySolver().solve(graph)

        assert result.success
        assert result.convergence_reason == "Nothing to optimize"
        np.testing.assert_array_equal(positions[2].data, [0.0, 0.0])

    def test_empty_graph(self):
        result = ScipySolver().solve(HashGraph())
        assert result.success
        assert result.final_cost == 0.0

    def test_settings_validation(self):
        with pytest.raises(ValueError):
            SolverSettings(method="newton")
        with pytest.raises(ValueError):
            SolverSettings(max_iterations=0)
