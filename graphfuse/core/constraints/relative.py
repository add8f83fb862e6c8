"""Relative constraints between two variables of the same kind."""

import copy
from typing import ClassVar, Optional

import numpy as np

from ..identity.uuid import UUIDGenerator
from ..math.covariance import sqrt_information, validate_covariance
from ..math.robust import LossFunction
from ..models.constraint import Constraint, format_array
from ..optimization.cost_function import NormalDeltaCostFunction
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


class RelativeConstraint(Constraint):
    """Measured change (x2 - x1) between two variables, with Gaussian noise.

    Subclasses bind ``VARIABLE_TYPE`` to a concrete variable kind.
    """

    VARIABLE_TYPE: ClassVar[Optional[type]] = None

    def __init__(
        self,
        variable1: VariableRef,
        variable2: VariableRef,
        delta,
        covariance,
        loss: Optional[LossFunction] = None,
        uuid_generator: Optional[UUIDGenerator] = None
    ):
        """Initialize relative constraint.

        Args:
            variable1: First variable (the "from" endpoint), or its identifier
            variable2: Second variable (the "to" endpoint), or its identifier
            delta: Measured difference variable2 - variable1
            covariance: Measurement covariance
            loss: Optional robust loss applied to this constraint
            uuid_generator: Random source for the constraint identifier
        """
        if self.VARIABLE_TYPE is None:
            raise TypeError(f"{type(self).__name__} is not bound to a variable type")
        super().__init__(
            [
                endpoint_uuid(variable1, self.VARIABLE_TYPE),
                endpoint_uuid(variable2, self.VARIABLE_TYPE),
            ],
            uuid_generator,
        )

        size = self.VARIABLE_TYPE.SIZE
        delta = np.array(delta, dtype=float).reshape(-1)
        if len(delta) != size:
            raise ValueError(f"{type(self).__name__}: delta size {len(delta)} != expected size {size}")

        self.delta = delta
        self.covariance = validate_covariance(covariance, size)
        self.sqrt_information = sqrt_information(self.covariance)
        self.loss = loss

    def cost_function(self) -> NormalDeltaCostFunction:
        return NormalDeltaCostFunction(
            self.sqrt_information, self.delta, self.VARIABLE_TYPE.ANGULAR_INDICES
        )

    def loss_function(self) -> Optional[LossFunction]:
        return copy.deepcopy(self.loss)

    def describe(self) -> list:
        lines = super().describe()
        lines.append(f"  delta: {format_array(self.delta)}")
        lines.append(f"  covariance: {format_array(self.covariance)}")
        if self.loss is not None:
            lines.append(f"  loss: {self.loss!r}")
        return lines


class RelativeAccelerationAngular2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativeAccelerationAngular2DStampedConstraint"
    VARIABLE_TYPE = AccelerationAngular2DStamped


class RelativeAccelerationLinear2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativeAccelerationLinear2DStampedConstraint"
    VARIABLE_TYPE = AccelerationLinear2DStamped


class RelativeOrientation2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativeOrientation2DStampedConstraint"
    VARIABLE_TYPE = Orientation2DStamped


class RelativePosition2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativePosition2DStampedConstraint"
    VARIABLE_TYPE = Position2DStamped


class RelativePosition3DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativePosition3DStampedConstraint"
    VARIABLE_TYPE = Position3DStamped


class RelativeVelocityAngular2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativeVelocityAngular2DStampedConstraint"
    VARIABLE_TYPE = VelocityAngular2DStamped


class RelativeVelocityLinear2DStampedConstraint(RelativeConstraint):
    TYPE_NAME = "graphfuse.constraints.RelativeVelocityLinear2DStampedConstraint"
    VARIABLE_TYPE = VelocityLinear2DStamped
