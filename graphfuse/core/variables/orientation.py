"""Stamped orientation variables."""

from ..math.angles import wrap_angle
from ..models.stamped import StampedVariable
from ..models.variable import component


class Orientation2DStamped(StampedVariable):
    """2D heading of a device at a specific time.

    The yaw is an angle: differences involving it are wrapped to [-pi, pi).
    """

    TYPE_NAME = "graphfuse.variables.Orientation2DStamped"
    SIZE = 1
    ANGULAR_INDICES = (0,)

    YAW = 0

    yaw = component(YAW, "Heading about the z axis, in radians")

    def normalized_yaw(self) -> float:
        return float(wrap_angle(self.yaw))
