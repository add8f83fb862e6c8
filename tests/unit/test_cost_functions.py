"""Tests for cost objects."""

import numpy as np
import pytest

from graphfuse.core.math.covariance import sqrt_information, validate_covariance
from graphfuse.core.math.jacobians import block_jacobians
from graphfuse.core.optimization.cost_function import (
    CostFunction,
    MarginalCostFunction,
    NormalDeltaCostFunction,
    NormalPriorCostFunction,
)


class ProductCost(CostFunction):
    """Cost without analytic Jacobians: r = [x0 * y0, x1^2]."""

    def __init__(self):
        super().__init__(2, [2, 1])

    def residual(self, parameters):
        x, y = parameters
        return np.array([x[0] * y[0], x[1] ** 2])


class TestCovariance:
    """Test covariance helpers."""

    def test_sqrt_information_diagonal(self):
        """Diagonal covariances give inverse standard deviations."""
        A = sqrt_information(np.diag([4.0, 0.25]))
        np.testing.assert_allclose(A, np.diag([0.5, 2.0]))

    def test_sqrt_information_full(self):
        """A^T A is the information matrix."""
        covariance = np.array([[2.0, 0.5], [0.5, 1.0]])
        A = sqrt_information(covariance)

        np.testing.assert_allclose(A.T @ A, np.linalg.inv(covariance), atol=1e-12)
        assert A[1, 0] == 0.0

    def test_validate_covariance_scalar(self):
        """A 1x1 covariance may be given as a scalar."""
        np.testing.assert_array_equal(validate_covariance(2.0, 1), [[2.0]])


class TestNormalPrior:
    """Test the prior cost object."""

    def test_residual(self):
        """r = A (x - mean)."""
        cost = NormalPriorCostFunction(np.diag([0.5, 1.0]), [1.0, 1.0])
        residual, jacobians = cost.evaluate([np.array([3.0, 2.0])], compute_jacobians=True)

        np.testing.assert_allclose(residual, [1.0, 1.0])
        np.testing.assert_allclose(jacobians[0], np.diag([0.5, 1.0]))
        assert cost.num_residuals == 2
        assert cost.parameter_block_sizes == (2,)

    def test_jacobians_not_requested(self):
        """Jacobians are None unless requested."""
        cost = NormalPriorCostFunction(np.eye(1), [0.0])
        _, jacobians = cost.evaluate([np.array([1.0])])
        assert jacobians is None

    def test_parameter_checks(self):
        """Wrong block count or size is rejected."""
        cost = NormalPriorCostFunction(np.eye(2), [0.0, 0.0])
        with pytest.raises(ValueError):
            cost.evaluate([np.zeros(2), np.zeros(2)])
        with pytest.raises(ValueError):
            cost.evaluate([np.zeros(3)])


class TestNormalDelta:
    """Test the relative cost object."""

    def test_residual_and_jacobians(self):
        """Analytic Jacobians match finite differences."""
        A = sqrt_information(np.array([[1.0, 0.2], [0.2, 0.5]]))
        cost = NormalDeltaCostFunction(A, [1.0, -1.0])
        parameters = [np.array([0.3, 0.4]), np.array([1.5, -0.2])]

        residual, jacobians = cost.evaluate(parameters, compute_jacobians=True)
        np.testing.assert_allclose(residual, A @ ((parameters[1] - parameters[0]) - [1.0, -1.0]))

        numeric = block_jacobians(cost.residual, parameters)
        for analytic, expected in zip(jacobians, numeric):
            np.testing.assert_allclose(analytic, expected, atol=1e-6)

    def test_callable(self):
        """Calling the object returns the residual only."""
        cost = NormalDeltaCostFunction(np.eye(1), [1.0])
        np.testing.assert_allclose(cost(np.array([0.0]), np.array([3.0])), [2.0])


class TestMarginal:
    """Test the marginal cost object."""

    def test_residual_and_jacobians(self):
        """r = sum A_i (x_i - xbar_i) + b."""
        A = [np.array([[1.0, 2.0]]), np.array([[3.0]])]
        cost = MarginalCostFunction(A, [0.5], [np.array([1.0, 1.0]), np.array([2.0])])

        residual, jacobians = cost.evaluate(
            [np.array([2.0, 1.0]), np.array([3.0])], compute_jacobians=True
        )
        np.testing.assert_allclose(residual, [1.0 + 3.0 + 0.5])
        np.testing.assert_allclose(jacobians[0], A[0])
        np.testing.assert_allclose(jacobians[1], A[1])

    def test_angular_blocks_wrap(self):
        """Angular components of a block are wrapped."""
        cost = MarginalCostFunction([np.eye(1)], [0.0], [np.array([np.pi - 0.1])], [(0,)])
        np.testing.assert_allclose(cost(np.array([-np.pi + 0.1])), [0.2], atol=1e-12)


class TestNumericJacobians:
    """Test the finite-difference default."""

    def test_default_jacobians(self):
        """Kinds without analytic Jacobians fall back to finite differences."""
        cost = ProductCost()
        residual, jacobians = cost.evaluate(
            [np.array([2.0, 3.0]), np.array([4.0])], compute_jacobians=True
        )

        np.testing.assert_allclose(residual, [8.0, 9.0])
        np.testing.assert_allclose(jacobians[0], [[4.0, 0.0], [0.0, 6.0]], atol=1e-6)
        np.testing.assert_allclose(jacobians[1], [[2.0], [0.0]], atol=1e-6)
