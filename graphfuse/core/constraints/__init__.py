"""Concrete constraint kinds."""

from .absolute import (
    AbsoluteConstraint,
    AbsoluteAccelerationAngular2DStampedConstraint,
    AbsoluteAccelerationLinear2DStampedConstraint,
    AbsoluteOrientation2DStampedConstraint,
    AbsolutePosition2DStampedConstraint,
    AbsolutePosition3DStampedConstraint,
    AbsoluteVelocityAngular2DStampedConstraint,
    AbsoluteVelocityLinear2DStampedConstraint,
)
from .relative import (
    RelativeConstraint,
    RelativeAccelerationAngular2DStampedConstraint,
    RelativeAccelerationLinear2DStampedConstraint,
    RelativeOrientation2DStampedConstraint,
    RelativePosition2DStampedConstraint,
    RelativePosition3DStampedConstraint,
    RelativeVelocityAngular2DStampedConstraint,
    RelativeVelocityLinear2DStampedConstraint,
)
from .marginal import MarginalConstraint

__all__ = [
    "AbsoluteConstraint",
    "AbsoluteAccelerationAngular2DStampedConstraint",
    "AbsoluteAccelerationLinear2DStampedConstraint",
    "AbsoluteOrientation2DStampedConstraint",
    "AbsolutePosition2DStampedConstraint",
    "AbsolutePosition3DStampedConstraint",
    "AbsoluteVelocityAngular2DStampedConstraint",
    "AbsoluteVelocityLinear2DStampedConstraint",
    "RelativeConstraint",
    "RelativeAccelerationAngular2DStampedConstraint",
    "RelativeAccelerationLinear2DStampedConstraint",
    "RelativeOrientation2DStampedConstraint",
    "RelativePosition2DStampedConstraint",
    "RelativePosition3DStampedConstraint",
    "RelativeVelocityAngular2DStampedConstraint",
    "RelativeVelocityLinear2DStampedConstraint",
    "MarginalConstraint",
]
