"""Stamped trait: identity tied to a timestamp and an originating device."""

from typing import Optional, Sequence

from ..identity.uuid import NIL, UUID, generate_deterministic
from ..time import Time, TimeLike, as_time
from .variable import FixedSizeVariable


class Stamped:
    """Mixin exposing an immutable timestamp and device id.

    Used together with a Variable kind; the identifier of such a variable is
    a deterministic function of (type name, stamp, device id) only.
    """

    def __init__(self, stamp: TimeLike, device_id: Optional[UUID] = None):
        if device_id is None:
            device_id = NIL
        if not isinstance(device_id, UUID):
            raise TypeError(f"device_id must be a UUID, got {type(device_id).__name__}")
        self._stamp = as_time(stamp)
        self._device_id = device_id

    @property
    def stamp(self) -> Time:
        return self._stamp

    @property
    def device_id(self) -> UUID:
        return self._device_id

    def stamped_uuid(self, type_name: str) -> UUID:
        return generate_deterministic(type_name, self._stamp, self._device_id)


class StampedVariable(FixedSizeVariable, Stamped):
    """Fixed-size variable whose identity comes from its stamp and device."""

    def __init__(
        self,
        stamp: TimeLike,
        device_id: Optional[UUID] = None,
        values: Optional[Sequence[float]] = None,
    ):
        Stamped.__init__(self, stamp, device_id)
        FixedSizeVariable.__init__(self, uuid=self.stamped_uuid(self.type()), values=values)

    def describe(self) -> list:
        lines = super().describe()
        lines[2:2] = [
            f"  stamp: {self.stamp}",
            f"  device_id: {self.device_id}",
        ]
        return lines
