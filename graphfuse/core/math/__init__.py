"""Math primitives for graphfuse."""

from .angles import wrap_angle, angular_difference, wrap_indices
from .robust import (
    LossFunction,
    TrivialLoss,
    HuberLoss,
    CauchyLoss,
    create_loss,
)
from .jacobians import finite_difference_jacobian, block_jacobians, check_jacobian

__all__ = [
    "wrap_angle",
    "angular_difference",
    "wrap_indices",
    "LossFunction",
    "TrivialLoss",
    "HuberLoss",
    "CauchyLoss",
    "create_loss",
    "finite_difference_jacobian",
    "block_jacobians",
    "check_jacobian",
]
