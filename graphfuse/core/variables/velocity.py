"""Stamped velocity variables."""

from ..models.stamped import StampedVariable
from ..models.variable import component


class VelocityAngular2DStamped(StampedVariable):
    """2D angular velocity of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.VelocityAngular2DStamped"
    SIZE = 1

    YAW = 0

    yaw = component(YAW, "Angular velocity about the z axis")


class VelocityLinear2DStamped(StampedVariable):
    """2D linear velocity of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.VelocityLinear2DStamped"
    SIZE = 2

    X = 0
    Y = 1

    x = component(X, "Velocity along the x axis")
    y = component(Y, "Velocity along the y axis")
