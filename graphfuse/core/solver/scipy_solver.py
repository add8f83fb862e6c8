"""SciPy-based nonlinear least squares solver over a graph.

The solver asks every constraint for a cost object and a loss object, packs
the buffers of all variables not on hold into one parameter vector, and writes
the solution back into those buffers in place. Cost and loss objects are
released before ``solve`` returns, so the graph's constraints outlive them.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.optimize import least_squares

from ..graph.graph import Graph
from ..identity.uuid import UUID
from ..math.robust import LossFunction
from ..models.constraint import Constraint
from ..models.variable import Variable
from ..optimization.cost_function import CostFunction
from .settings import SolveResult, SolverSettings

logger = logging.getLogger(__name__)

_EPS = 1e-12


@dataclass
class ResidualBlock:
    """Cost and loss objects of one constraint, alive for one solve."""

    constraint: Constraint
    cost: CostFunction
    loss: Optional[LossFunction]
    variables: List[Variable]

    def parameters(self) -> List[np.ndarray]:
        return [variable.data for variable in self.variables]


class ScipySolver:
    """Optimizer integration built on scipy.optimize.least_squares."""

    def __init__(self, settings: Optional[SolverSettings] = None):
        """Initialize solver.

        Args:
            settings: Solver settings
        """
        self.settings = settings or SolverSettings()
        self.cost_history: List[float] = []

    def solve(self, graph: Graph) -> SolveResult:
        """Optimize the variables of a graph in place.

        Args:
            graph: Graph whose constraint endpoints all resolve

        Returns:
            Solve result
        """
        start_time = time.time()
        self.cost_history = []

        blocks = self._build_blocks(graph)
        free_variables = [
            variable for variable in graph.variables()
            if not graph.is_variable_on_hold(variable.uuid)
        ]
        offsets = self._build_offsets(free_variables)
        n_params = sum(variable.size for variable in free_variables)

        if n_params == 0 or not blocks:
            initial_cost = self._cost(blocks)
            return SolveResult(
                success=True,
                initial_cost=initial_cost,
                final_cost=initial_cost,
                convergence_reason="Nothing to optimize",
                computation_time=time.time() - start_time
            )

        x0 = np.concatenate([variable.data.copy() for variable in free_variables])
        initial_cost = self._cost(blocks)

        def residual_function(x: np.ndarray) -> np.ndarray:
            self._unpack(x, free_variables)
            residuals = self._residuals(blocks)
            self.cost_history.append(0.5 * float(residuals @ residuals))
            return residuals

        def jacobian_function(x: np.ndarray) -> np.ndarray:
            self._unpack(x, free_variables)
            return self._jacobian(blocks, offsets, n_params)

        logger.debug(
            f"Solving {len(blocks)} constraints over {len(free_variables)} variables "
            f"({n_params} parameters)"
        )

        try:
            result = least_squares(
                fun=residual_function,
                x0=x0,
                jac=jacobian_function,
                method=self.settings.method,
                ftol=self.settings.function_tolerance,
                xtol=self.settings.parameter_tolerance,
                gtol=self.settings.gradient_tolerance,
                max_nfev=self.settings.max_iterations * (len(x0) + 1),
                verbose=self.settings.verbose,
            )
        except (ValueError, np.linalg.LinAlgError) as e:
            self._unpack(x0, free_variables)
            logger.error(f"Solver failed: {e}")
            return SolveResult(
                success=False,
                initial_cost=initial_cost,
                final_cost=initial_cost,
                convergence_reason=f"Solver error: {e}",
                computation_time=time.time() - start_time
            )

        self._unpack(result.x, free_variables)
        final_cost = self._cost(blocks)
        residual_norms = {
            str(block.constraint.uuid): float(np.linalg.norm(block.cost.evaluate(block.parameters())[0]))
            for block in blocks
        }

        logger.info(
            f"Solve finished after {result.nfev} evaluations: "
            f"cost {initial_cost:.6g} -> {final_cost:.6g}"
        )

        return SolveResult(
            success=bool(result.success),
            iterations=int(result.nfev),
            initial_cost=initial_cost,
            final_cost=final_cost,
            convergence_reason=self._parse_termination_reason(result),
            residuals=residual_norms,
            computation_time=time.time() - start_time
        )

    def _build_blocks(self, graph: Graph) -> List[ResidualBlock]:
        blocks = []
        missing: List[UUID] = []
        for constraint in graph.constraints():
            variables = []
            for variable_uuid in constraint.variables:
                if graph.variable_exists(variable_uuid):
                    variables.append(graph.get_variable(variable_uuid))
                else:
                    missing.append(variable_uuid)
            if missing:
                continue
            cost = constraint.cost_function()
            assert isinstance(cost, CostFunction), f"{constraint.type()} returned an invalid cost object"
            assert list(cost.parameter_block_sizes) == [v.size for v in variables], (
                f"{constraint.type()} cost object does not match its variables"
            )
            blocks.append(ResidualBlock(constraint, cost, constraint.loss_function(), variables))

        if missing:
            raise ValueError(
                f"Graph has constraints on {len(set(missing))} unknown variable(s), "
                f"e.g. {missing[0]}"
            )
        return blocks

    @staticmethod
    def _build_offsets(free_variables: List[Variable]) -> Dict[UUID, int]:
        offsets = {}
        offset = 0
        for variable in free_variables:
            offsets[variable.uuid] = offset
            offset += variable.size
        return offsets

    @staticmethod
    def _unpack(x: np.ndarray, free_variables: List[Variable]) -> None:
        offset = 0
        for variable in free_variables:
            variable.data[:] = x[offset:offset + variable.size]
            offset += variable.size

    @staticmethod
    def _loss_correction(block: ResidualBlock, residual: np.ndarray) -> Tuple[float, np.ndarray]:
        """Residual scale and Jacobian correction implementing the block's loss.

        The block residual r is replaced by g(s) r with g(s) = sqrt(rho(s) / s),
        so its squared norm equals rho(s). The Jacobian of the scaled residual
        is (g I + 2 g'(s) r r^T) J.
        """
        size = len(residual)
        if block.loss is None:
            return 1.0, np.eye(size)
        s = float(residual @ residual)
        rho, rho_prime, _ = block.loss.evaluate(s)
        rho, rho_prime = float(rho), float(rho_prime)
        if s < _EPS:
            g = np.sqrt(rho_prime)
            return g, g * np.eye(size)
        g = np.sqrt(rho / s)
        g_prime = (rho_prime * s - rho) / (2.0 * s**2 * g)
        return g, g * np.eye(size) + 2.0 * g_prime * np.outer(residual, residual)

    def _residuals(self, blocks: List[ResidualBlock]) -> np.ndarray:
        residuals = []
        for block in blocks:
            residual, _ = block.cost.evaluate(block.parameters())
            scale, _ = self._loss_correction(block, residual)
            residuals.append(scale * residual)
        return np.concatenate(residuals)

    def _jacobian(
        self,
        blocks: List[ResidualBlock],
        offsets: Dict[UUID, int],
        n_params: int
    ) -> np.ndarray:
        rows = []
        for block in blocks:
            residual, jacobians = block.cost.evaluate(block.parameters(), compute_jacobians=True)
            _, correction = self._loss_correction(block, residual)

            row = np.zeros((block.cost.num_residuals, n_params))
            for variable, jacobian in zip(block.variables, jacobians):
                if variable.uuid in offsets:  # held variables have no columns
                    offset = offsets[variable.uuid]
                    row[:, offset:offset + variable.size] += correction @ jacobian
            rows.append(row)
        return np.vstack(rows)

    def _cost(self, blocks: List[ResidualBlock]) -> float:
        """Total cost 0.5 * sum(rho(||r||^2)) at the current variable values."""
        cost = 0.0
        for block in blocks:
            residual, _ = block.cost.evaluate(block.parameters())
            s = float(residual @ residual)
            if block.loss is not None:
                s = float(block.loss.evaluate(s)[0])
            cost += 0.5 * s
        return cost

    def _parse_termination_reason(self, result) -> str:
        """Parse SciPy termination reason into human-readable string."""
        if result.success:
            return f"Converged: {result.message}"
        return f"Failed: {result.message}"
