"""Cost objects handed to the optimizer by constraints.

A cost object maps the current values of the constraint's variables (one
parameter block per endpoint, in endpoint order) to a residual vector, and
optionally to one Jacobian per parameter block. Cost objects hold their own
copies of the arrays they are built from.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..math.angles import wrap_indices
from ..math.jacobians import block_jacobians


class CostFunction(ABC):
    """Base class for residual functors consumed by the solver."""

    def __init__(self, num_residuals: int, parameter_block_sizes: Sequence[int]):
        self.num_residuals = int(num_residuals)
        self.parameter_block_sizes = tuple(int(size) for size in parameter_block_sizes)

    @abstractmethod
    def residual(self, parameters: Sequence[np.ndarray]) -> np.ndarray:
        """Compute residual given one array per parameter block."""
        pass

    def jacobians(self, parameters: Sequence[np.ndarray]) -> List[np.ndarray]:
        """Compute one Jacobian per parameter block using finite differences."""
        return block_jacobians(self.residual, parameters)

    def evaluate(
        self,
        parameters: Sequence[np.ndarray],
        compute_jacobians: bool = False
    ) -> Tuple[np.ndarray, Optional[List[np.ndarray]]]:
        """Evaluate residuals and, if requested, Jacobians.

        Args:
            parameters: Values of each parameter block, in endpoint order
            compute_jacobians: Whether to compute Jacobians

        Returns:
            Tuple of (residual, jacobians or None)
        """
        blocks = self._check_parameters(parameters)
        residual = np.asarray(self.residual(blocks), dtype=float).reshape(-1)
        if not compute_jacobians:
            return residual, None
        return residual, self.jacobians(blocks)

    def __call__(self, *parameters: np.ndarray) -> np.ndarray:
        residual, _ = self.evaluate(parameters)
        return residual

    def _check_parameters(self, parameters: Sequence[np.ndarray]) -> List[np.ndarray]:
        if len(parameters) != len(self.parameter_block_sizes):
            raise ValueError(
                f"Expected {len(self.parameter_block_sizes)} parameter blocks, got {len(parameters)}"
            )
        blocks = []
        for block, size in zip(parameters, self.parameter_block_sizes):
            block = np.atleast_1d(np.asarray(block, dtype=float))
            if len(block) != size:
                raise ValueError(f"Parameter block size {len(block)} != expected size {size}")
            blocks.append(block)
        return blocks


class NormalPriorCostFunction(CostFunction):
    """Residual of a Gaussian prior on one variable.

    r = A (x - mean), where A is the square root information matrix.
    Angular components of the difference are wrapped to [-pi, pi).
    """

    def __init__(
        self,
        sqrt_information: np.ndarray,
        mean: np.ndarray,
        angular_indices: Sequence[int] = ()
    ):
        A = np.array(sqrt_information, dtype=float)
        mean = np.array(mean, dtype=float).reshape(-1)
        assert A.ndim == 2 and A.shape[1] == len(mean), "sqrt information must match the mean size"
        super().__init__(A.shape[0], [len(mean)])
        self.A = A
        self.mean = mean
        self.angular_indices = tuple(angular_indices)

    def residual(self, parameters: Sequence[np.ndarray]) -> np.ndarray:
        delta = wrap_indices(parameters[0] - self.mean, self.angular_indices)
        return self.A @ delta

    def jacobians(self, parameters: Sequence[np.ndarray]) -> List[np.ndarray]:
        return [self.A.copy()]


class NormalDeltaCostFunction(CostFunction):
    """Residual of a measured difference between two variables of one kind.

    r = A ((x2 - x1) - delta), with angular components wrapped.
    """

    def __init__(
        self,
        sqrt_information: np.ndarray,
        delta: np.ndarray,
        angular_indices: Sequence[int] = ()
    ):
        A = np.array(sqrt_information, dtype=float)
        delta = np.array(delta, dtype=float).reshape(-1)
        assert A.ndim == 2 and A.shape[1] == len(delta), "sqrt information must match the delta size"
        super().__init__(A.shape[0], [len(delta), len(delta)])
        self.A = A
        self.delta = delta
        self.angular_indices = tuple(angular_indices)

    def residual(self, parameters: Sequence[np.ndarray]) -> np.ndarray:
        x1, x2 = parameters
        error = wrap_indices((x2 - x1) - self.delta, self.angular_indices)
        return self.A @ error

    def jacobians(self, parameters: Sequence[np.ndarray]) -> List[np.ndarray]:
        return [-self.A, self.A.copy()]


class MarginalCostFunction(CostFunction):
    """Linearized residual left behind by marginalization.

    r = sum_i A_i (x_i - xbar_i) + b
    """

    def __init__(
        self,
        A: Sequence[np.ndarray],
        b: np.ndarray,
        linearization_points: Sequence[np.ndarray],
        angular_indices: Optional[Sequence[Sequence[int]]] = None
    ):
        b = np.array(b, dtype=float).reshape(-1)
        A = [np.array(block, dtype=float) for block in A]
        points = [np.array(point, dtype=float).reshape(-1) for point in linearization_points]
        assert len(A) == len(points), "one A block per linearization point"
        for block, point in zip(A, points):
            assert block.shape == (len(b), len(point)), "A block shape mismatch"

        super().__init__(len(b), [len(point) for point in points])
        self.A = A
        self.b = b
        self.linearization_points = points
        self.angular_indices = [tuple(idx) for idx in (angular_indices or [()] * len(A))]

    def residual(self, parameters: Sequence[np.ndarray]) -> np.ndarray:
        residual = self.b.copy()
        for A_i, x_i, xbar_i, angular in zip(
            self.A, parameters, self.linearization_points, self.angular_indices
        ):
            residual += A_i @ wrap_indices(x_i - xbar_i, angular)
        return residual

    def jacobians(self, parameters: Sequence[np.ndarray]) -> List[np.ndarray]:
        return [block.copy() for block in self.A]
