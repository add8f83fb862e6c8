"""Graph composition contract.

Any container that stores variables and constraints for the optimizer must
follow these rules:

- adding a variable whose identifier is already present is a no-op; state is
  never duplicated.
- adding a constraint never checks that its endpoints resolve. Constraints
  may arrive before their variables (for example when loading in arbitrary
  order); resolution happens when the graph is optimized.
- a constraint must stay in the graph while cost objects built from it are in
  use by a solve.
"""

import io
import logging
import sys
from abc import ABC, abstractmethod
from typing import Iterator, List, TextIO

from ..identity.uuid import UUID
from ..models.constraint import Constraint
from ..models.variable import Variable

logger = logging.getLogger(__name__)


class Graph(ABC):
    """Interface for containers of variables and constraints."""

    @abstractmethod
    def add_variable(self, variable: Variable) -> bool:
        """Add a variable.

        Returns:
            True if added, False if a variable with the same identifier exists
        """
        pass

    @abstractmethod
    def add_constraint(self, constraint: Constraint) -> bool:
        """Add a constraint without checking that its variables exist.

        Returns:
            True if added, False if a constraint with the same identifier exists
        """
        pass

    @abstractmethod
    def remove_variable(self, variable_uuid: UUID) -> None:
        pass

    @abstractmethod
    def remove_constraint(self, constraint_uuid: UUID) -> None:
        pass

    @abstractmethod
    def variable_exists(self, variable_uuid: UUID) -> bool:
        pass

    @abstractmethod
    def constraint_exists(self, constraint_uuid: UUID) -> bool:
        pass

    @abstractmethod
    def get_variable(self, variable_uuid: UUID) -> Variable:
        pass

    @abstractmethod
    def get_constraint(self, constraint_uuid: UUID) -> Constraint:
        pass

    @abstractmethod
    def variables(self) -> Iterator[Variable]:
        pass

    @abstractmethod
    def constraints(self) -> Iterator[Constraint]:
        pass

    @abstractmethod
    def connected_constraints(self, variable_uuid: UUID) -> List[Constraint]:
        """Constraints that reference the given variable."""
        pass

    @abstractmethod
    def hold_variable(self, variable_uuid: UUID, hold: bool = True) -> None:
        """Keep a variable constant during optimization."""
        pass

    @abstractmethod
    def is_variable_on_hold(self, variable_uuid: UUID) -> bool:
        pass

    @abstractmethod
    def clone(self) -> "Graph":
        """Deep copy of the graph and everything in it."""
        pass

    def print(self, stream: TextIO = sys.stdout) -> None:
        """Write every constraint and variable to the stream.

        Best effort: write failures are logged and the rest is skipped.
        """
        try:
            stream.write(f"{type(self).__name__}\n")
            stream.write("  constraints:\n")
            for constraint in self.constraints():
                constraint.print(stream)
            stream.write("  variables:\n")
            for variable in self.variables():
                variable.print(stream)
        except Exception as e:
            logger.warning(f"Failed to print {type(self).__name__}: {e}")

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.print(buffer)
        return buffer.getvalue()
