"""Absolute (prior) constraints on a single variable."""

import copy
from typing import ClassVar, Optional

import numpy as np

from ..identity.uuid import UUIDGenerator
from ..math.covariance import sqrt_information, validate_covariance
from ..math.robust import LossFunction
from ..models.constraint import Constraint, format_array
from ..optimization.cost_function import NormalPriorCostFunction
from ..variables import (
    AccelerationAngular2DStamped,
    AccelerationLinear2DStamped,
    Orientation2DStamped,
    Position2DStamped,
    Position3DStamped,
    VelocityAngular2DStamped,
    VelocityLinear2DStamped,
)
from .base import VariableRef, endpoint_uuid


class AbsoluteConstraint(Constraint):
    """Gaussian prior on the full state of one variable.

    Subclasses bind ``VARIABLE_TYPE`` to a concrete variable kind.
    """

    VARIABLE_TYPE: ClassVar[Optional[type]] = None

    def __init__(
        self,
        variable: VariableRef,
        mean,
        covariance,
        loss: Optional[LossFunction] = None,
        uuid_generator: Optional[UUIDGenerator] = None
    ):
        """Initialize absolute constraint.

        Args:
            variable: Constrained variable, or its identifier
            mean: Measured value of the variable
            covariance: Measurement covariance
            loss: Optional robust loss applied to this constraint
            uuid_generator: Random source for the constraint identifier
        """
        if self.VARIABLE_TYPE is None:
            raise TypeError(f"{type(self).__name__} is not bound to a variable type")
        super().__init__([endpoint_uuid(variable, self.VARIABLE_TYPE)], uuid_generator)

        size = self.VARIABLE_TYPE.SIZE
        mean = np.array(mean, dtype=float).reshape(-1)
        if len(mean) != size:
            raise ValueError(f"{type(self).__name__}: mean size {len(mean)} != expected size {size}")

        self.mean = mean
        self.covariance = validate_covariance(covariance, size)
        self.sqrt_information = sqrt_information(self.covariance)
        self.loss = loss

    def cost_function(self) -> NormalPriorCostFunction:
        return NormalPriorCostFunction(
            self.sqrt_information, self.mean, self.VARIABLE_TYPE.ANGULAR_INDICES
        )

    def loss_function(self) -> Optional[LossFunction]:
        return copy.deepcopy(self.loss)

    def describe(self) -> list:
        lines = super().describe()
        lines.append(f"  mean: {format_array(self.mean)}")
        lines.append(f"  covariance: {format_array(self.covariance)}")
        if self.loss is not None:
            lines.append(f"  loss: {self.loss!r}")
        return lines


class AbsoluteAccelerationAngular2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsoluteAccelerationAngular2DStampedConstraint"
    VARIABLE_TYPE = AccelerationAngular2DStamped


class AbsoluteAccelerationLinear2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsoluteAccelerationLinear2DStampedConstraint"
    VARIABLE_TYPE = AccelerationLinear2DStamped


class AbsoluteOrientation2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsoluteOrientation2DStampedConstraint"
    VARIABLE_TYPE = Orientation2DStamped


class AbsolutePosition2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsolutePosition2DStampedConstraint"
    VARIABLE_TYPE = Position2DStamped


class AbsolutePosition3DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsolutePosition3DStampedConstraint"
    VARIABLE_TYPE = Position3DStamped


class AbsoluteVelocityAngular2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsoluteVelocityAngular2DStampedConstraint"
    VARIABLE_TYPE = VelocityAngular2DStamped


class AbsoluteVelocityLinear2DStampedConstraint(AbsoluteConstraint):
    TYPE_NAME = "graphfuse.constraints.AbsoluteVelocityLinear2DStampedConstraint"
    VARIABLE_TYPE = VelocityLinear2DStamped
