"""Variable abstraction: fixed-size numeric state with an identity."""

import copy
import io
import logging
import sys
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Sequence, TextIO, Tuple

import numpy as np

from ..identity.uuid import UUID, UUIDGenerator, generate_random
from .registry import variable_registry

logger = logging.getLogger(__name__)


class Variable(ABC):
    """Base class for all variables.

    A variable owns a contiguous float64 buffer the optimizer reads and writes
    in place. The buffer is never resized and the identifier never changes
    after construction.
    """

    TYPE_NAME: ClassVar[Optional[str]] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        type_name = cls.__dict__.get("TYPE_NAME")
        if type_name is not None:
            variable_registry.register(type_name, cls)

    @property
    @abstractmethod
    def uuid(self) -> UUID:
        """Identifier of this variable."""
        pass

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """Mutable state buffer."""
        pass

    @property
    def size(self) -> int:
        return len(self.data)

    def type(self) -> str:
        """Stable type name of this variable kind."""
        if self.TYPE_NAME is None:
            raise NotImplementedError(f"{type(self).__name__} does not declare TYPE_NAME")
        return self.TYPE_NAME

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        return self.data[index]

    def __setitem__(self, index, value) -> None:
        self.data[index] = value

    def clone(self) -> "Variable":
        """Deep copy with the same identity and an independent buffer."""
        return copy.deepcopy(self)

    def describe(self) -> list:
        """Lines printed by print(); subclasses may extend."""
        return [
            f"{self.type()}:",
            f"  uuid: {self.uuid}",
            f"  size: {self.size}",
            f"  data: {self._format_data()}",
        ]

    def _format_data(self) -> str:
        return "[" + ", ".join(f"{value:.9g}" for value in self.data) + "]"

    def print(self, stream: TextIO = sys.stdout) -> None:
        """Write a human-readable description to the stream."""
        try:
            stream.write("\n".join(self.describe()) + "\n")
        except Exception as e:
            logger.warning(f"Failed to print variable {self.uuid}: {e}")

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.print(buffer)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uuid={self.uuid})"


def component(index: int, doc: Optional[str] = None) -> property:
    """Named read/write accessor for one scalar of the state buffer."""

    def getter(self) -> float:
        return float(self.data[index])

    def setter(self, value: float) -> None:
        self.data[index] = value

    return property(getter, setter, doc=doc or f"State component {index}")


class FixedSizeVariable(Variable):
    """Variable whose dimension is fixed by the class.

    Subclasses set ``SIZE`` and may list ``ANGULAR_INDICES`` for components
    that wrap around. Without the Stamped trait, the identifier is random.
    """

    SIZE: ClassVar[int] = 0
    ANGULAR_INDICES: ClassVar[Tuple[int, ...]] = ()

    def __init__(
        self,
        uuid: Optional[UUID] = None,
        values: Optional[Sequence[float]] = None,
        uuid_generator: Optional[UUIDGenerator] = None,
    ):
        if self.SIZE <= 0:
            raise TypeError(f"{type(self).__name__} must declare a positive SIZE")

        self._uuid = uuid if uuid is not None else generate_random(uuid_generator)
        self._data = np.zeros(self.SIZE, dtype=np.float64)

        if values is not None:
            values = np.asarray(values, dtype=np.float64).reshape(-1)
            if len(values) != self.SIZE:
                raise ValueError(
                    f"{type(self).__name__}: value size {len(values)} != expected size {self.SIZE}"
                )
            self._data[:] = values

    @property
    def uuid(self) -> UUID:
        return self._uuid

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def size(self) -> int:
        return self.SIZE
