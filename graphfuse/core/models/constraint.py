"""Constraint abstraction.

A constraint holds an ordered, immutable list of variable identifiers and
builds the cost object (and optional loss object) the optimizer uses for it.
It never holds the variables themselves; the graph resolves identifiers.

Cost and loss objects returned by a constraint belong to the caller. The graph
integration must keep the constraint alive for as long as any of them is in
use by a solve.
"""

import copy
import io
import logging
import sys
from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Optional, TextIO, Tuple

import numpy as np

from ..identity.uuid import UUID, UUIDGenerator, generate_random
from ..math.robust import LossFunction
from ..optimization.cost_function import CostFunction
from .registry import constraint_registry

logger = logging.getLogger(__name__)


class Constraint(ABC):
    """Base class for all constraints."""

    TYPE_NAME: ClassVar[Optional[str]] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        type_name = cls.__dict__.get("TYPE_NAME")
        if type_name is not None:
            constraint_registry.register(type_name, cls)

    def __init__(
        self,
        variables: Iterable[UUID],
        uuid_generator: Optional[UUIDGenerator] = None
    ):
        """Initialize constraint.

        Args:
            variables: Ordered identifiers of the involved variables
            uuid_generator: Random source for the constraint identifier
        """
        variables = tuple(variables)
        if not variables:
            raise ValueError(f"{type(self).__name__} requires at least one variable")
        for variable_uuid in variables:
            if not isinstance(variable_uuid, UUID):
                raise TypeError(
                    f"{type(self).__name__}: variable identifiers must be UUIDs, "
                    f"got {type(variable_uuid).__name__}"
                )

        self._uuid = generate_random(uuid_generator)
        self._variables = variables

    @property
    def uuid(self) -> UUID:
        return self._uuid

    @property
    def variables(self) -> Tuple[UUID, ...]:
        """Ordered identifiers of the involved variables."""
        return self._variables

    def type(self) -> str:
        """Stable type name of this constraint kind."""
        if self.TYPE_NAME is None:
            raise NotImplementedError(f"{type(self).__name__} does not declare TYPE_NAME")
        return self.TYPE_NAME

    @abstractmethod
    def cost_function(self) -> CostFunction:
        """Create a new cost object for the optimizer."""
        pass

    def loss_function(self) -> Optional[LossFunction]:
        """Create a new loss object, or None for a plain quadratic penalty."""
        return None

    def clone(self) -> "Constraint":
        """Deep copy preserving identifier, endpoints and behaviour."""
        return copy.deepcopy(self)

    def describe(self) -> list:
        """Lines printed by print(); subclasses may extend."""
        lines = [
            f"{self.type()}:",
            f"  uuid: {self.uuid}",
            "  variables:",
        ]
        lines.extend(f"    - {variable_uuid}" for variable_uuid in self.variables)
        return lines

    def print(self, stream: TextIO = sys.stdout) -> None:
        """Write a human-readable description to the stream."""
        try:
            stream.write("\n".join(self.describe()) + "\n")
        except Exception as e:
            logger.warning(f"Failed to print constraint {self.uuid}: {e}")

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.print(buffer)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uuid={self.uuid}, variables={len(self.variables)})"


def format_array(values: np.ndarray) -> str:
    """Deterministic one-line rendering of a vector or matrix."""
    values = np.asarray(values, dtype=float)
    if values.ndim == 1:
        return "[" + ", ".join(f"{value:.9g}" for value in values) + "]"
    return "[" + "; ".join(format_array(row) for row in values) + "]"
