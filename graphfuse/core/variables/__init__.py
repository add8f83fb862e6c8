"""Concrete stamped variable kinds."""

from .acceleration import AccelerationAngular2DStamped, AccelerationLinear2DStamped
from .orientation import Orientation2DStamped
from .position import Position2DStamped, Position3DStamped
from .velocity import VelocityAngular2DStamped, VelocityLinear2DStamped

__all__ = [
    "AccelerationAngular2DStamped",
    "AccelerationLinear2DStamped",
    "Orientation2DStamped",
    "Position2DStamped",
    "Position3DStamped",
    "VelocityAngular2DStamped",
    "VelocityLinear2DStamped",
]
