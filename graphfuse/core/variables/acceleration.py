"""Stamped acceleration variables."""

from ..models.stamped import StampedVariable
from ..models.variable import component


class AccelerationAngular2DStamped(StampedVariable):
    """2D angular acceleration of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.AccelerationAngular2DStamped"
    SIZE = 1

    YAW = 0

    yaw = component(YAW, "Angular acceleration about the z axis")


class AccelerationLinear2DStamped(StampedVariable):
    """2D linear acceleration of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.AccelerationLinear2DStamped"
    SIZE = 2

    X = 0
    Y = 1

    x = component(X, "Acceleration along the x axis")
    y = component(Y, "Acceleration along the y axis")
