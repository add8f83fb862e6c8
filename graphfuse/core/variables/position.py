"""Stamped position variables."""

from ..models.stamped import StampedVariable
from ..models.variable import component


class Position2DStamped(StampedVariable):
    """2D position of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.Position2DStamped"
    SIZE = 2

    X = 0
    Y = 1

    x = component(X)
    y = component(Y)


class Position3DStamped(StampedVariable):
    """3D position of a device at a specific time."""

    TYPE_NAME = "graphfuse.variables.Position3DStamped"
    SIZE = 3

    X = 0
    Y = 1
    Z = 2

    x = component(X)
    y = component(Y)
    z = component(Z)
