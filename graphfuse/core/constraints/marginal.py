"""Linear constraint produced when variables are marginalized out."""

import copy
from typing import Optional, Sequence

import numpy as np

from ..identity.uuid import UUIDGenerator
from ..math.robust import LossFunction
from ..models.constraint import Constraint, format_array
from ..models.variable import Variable
from ..optimization.cost_function import MarginalCostFunction


class MarginalConstraint(Constraint):
    """Linearized prior over any number of variables.

    The cost is r = sum_i A_i (x_i - xbar_i) + b, where xbar_i is the value of
    variable i when the constraint was created.
    """

    TYPE_NAME = "graphfuse.constraints.MarginalConstraint"

    def __init__(
        self,
        variables: Sequence[Variable],
        A: Sequence[np.ndarray],
        b,
        loss: Optional[LossFunction] = None,
        uuid_generator: Optional[UUIDGenerator] = None
    ):
        """Initialize marginal constraint.

        Args:
            variables: Involved variables, in the order of the A blocks
            A: One (len(b) x size_i) matrix per variable
            b: Constant residual term
            loss: Optional robust loss applied to this constraint
            uuid_generator: Random source for the constraint identifier
        """
        variables = list(variables)
        for variable in variables:
            if not isinstance(variable, Variable):
                raise TypeError(
                    f"MarginalConstraint needs Variable instances, got {type(variable).__name__}"
                )
        super().__init__([variable.uuid for variable in variables], uuid_generator)

        b = np.array(b, dtype=float).reshape(-1)
        A = [np.atleast_2d(np.array(block, dtype=float)) for block in A]
        if len(A) != len(variables):
            raise ValueError(f"Got {len(A)} A blocks for {len(variables)} variables")
        for block, variable in zip(A, variables):
            if block.shape != (len(b), variable.size):
                raise ValueError(
                    f"A block shape {block.shape} != expected ({len(b)}, {variable.size})"
                )

        self.A = A
        self.b = b
        self.linearization_points = [variable.data.copy() for variable in variables]
        self.angular_indices = [
            tuple(getattr(variable, "ANGULAR_INDICES", ())) for variable in variables
        ]
        self.loss = loss

    def cost_function(self) -> MarginalCostFunction:
        return MarginalCostFunction(self.A, self.b, self.linearization_points, self.angular_indices)

    def loss_function(self) -> Optional[LossFunction]:
        return copy.deepcopy(self.loss)

    def describe(self) -> list:
        lines = super().describe()
        for i, (block, point) in enumerate(zip(self.A, self.linearization_points)):
            lines.append(f"  A[{i}]: {format_array(block)}")
            lines.append(f"  x_bar[{i}]: {format_array(point)}")
        lines.append(f"  b: {format_array(self.b)}")
        return lines
