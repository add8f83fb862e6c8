"""Dictionary-backed graph container."""

import copy
import logging
from typing import Any, Dict, Iterator, List, Set

from ..identity.uuid import UUID
from ..models.constraint import Constraint
from ..models.stamped import Stamped
from ..models.variable import Variable
from ..time import TimeLike, as_time
from .graph import Graph

logger = logging.getLogger(__name__)


class HashGraph(Graph):
    """Graph that indexes variables and constraints by identifier.

    Insertion order is kept and used as the parameter ordering by the solver.
    """

    def __init__(self):
        """Initialize empty graph."""
        self._variables: Dict[UUID, Variable] = {}
        self._constraints: Dict[UUID, Constraint] = {}
        self._constraints_by_variable: Dict[UUID, Set[UUID]] = {}
        self._held: Set[UUID] = set()

    def add_variable(self, variable: Variable) -> bool:
        if not isinstance(variable, Variable):
            raise TypeError(f"Expected a Variable, got {type(variable).__name__}")
        if variable.uuid in self._variables:
            logger.debug(f"Variable {variable.uuid} already in graph, skipping")
            return False

        self._variables[variable.uuid] = variable
        logger.debug(f"Added {variable.type()} {variable.uuid}")
        return True

    def add_constraint(self, constraint: Constraint) -> bool:
        if not isinstance(constraint, Constraint):
            raise TypeError(f"Expected a Constraint, got {type(constraint).__name__}")
        if constraint.uuid in self._constraints:
            logger.debug(f"Constraint {constraint.uuid} already in graph, skipping")
            return False

        self._constraints[constraint.uuid] = constraint
        for variable_uuid in constraint.variables:
            self._constraints_by_variable.setdefault(variable_uuid, set()).add(constraint.uuid)
        logger.debug(f"Added {constraint.type()} {constraint.uuid}")
        return True

    def remove_variable(self, variable_uuid: UUID) -> None:
        """Remove a variable that no constraint references any more."""
        if variable_uuid not in self._variables:
            raise ValueError(f"Variable {variable_uuid} not found")
        if self._constraints_by_variable.get(variable_uuid):
            raise ValueError(
                f"Variable {variable_uuid} is still used by "
                f"{len(self._constraints_by_variable[variable_uuid])} constraint(s)"
            )

        del self._variables[variable_uuid]
        self._constraints_by_variable.pop(variable_uuid, None)
        self._held.discard(variable_uuid)

    def remove_constraint(self, constraint_uuid: UUID) -> None:
        if constraint_uuid not in self._constraints:
            raise ValueError(f"Constraint {constraint_uuid} not found")

        constraint = self._constraints.pop(constraint_uuid)
        for variable_uuid in constraint.variables:
            users = self._constraints_by_variable.get(variable_uuid)
            if users is not None:
                users.discard(constraint_uuid)
                if not users:
                    del self._constraints_by_variable[variable_uuid]

    def variable_exists(self, variable_uuid: UUID) -> bool:
        return variable_uuid in self._variables

    def constraint_exists(self, constraint_uuid: UUID) -> bool:
        return constraint_uuid in self._constraints

    def get_variable(self, variable_uuid: UUID) -> Variable:
        """Get variable by ID."""
        if variable_uuid not in self._variables:
            raise ValueError(f"Variable {variable_uuid} not found")
        return self._variables[variable_uuid]

    def get_constraint(self, constraint_uuid: UUID) -> Constraint:
        """Get constraint by ID."""
        if constraint_uuid not in self._constraints:
            raise ValueError(f"Constraint {constraint_uuid} not found")
        return self._constraints[constraint_uuid]

    def variables(self) -> Iterator[Variable]:
        return iter(list(self._variables.values()))

    def constraints(self) -> Iterator[Constraint]:
        return iter(list(self._constraints.values()))

    def connected_constraints(self, variable_uuid: UUID) -> List[Constraint]:
        return [
            constraint
            for constraint_uuid, constraint in self._constraints.items()
            if constraint_uuid in self._constraints_by_variable.get(variable_uuid, ())
        ]

    def hold_variable(self, variable_uuid: UUID, hold: bool = True) -> None:
        if variable_uuid not in self._variables:
            raise ValueError(f"Variable {variable_uuid} not found")
        if hold:
            self._held.add(variable_uuid)
        else:
            self._held.discard(variable_uuid)

    def is_variable_on_hold(self, variable_uuid: UUID) -> bool:
        return variable_uuid in self._held

    def missing_variables(self) -> List[UUID]:
        """Constraint endpoints that do not resolve to a variable in the graph."""
        missing = []
        for constraint in self._constraints.values():
            for variable_uuid in constraint.variables:
                if variable_uuid not in self._variables and variable_uuid not in missing:
                    missing.append(variable_uuid)
        return missing

    def evict_before(self, stamp: TimeLike) -> List[UUID]:
        """Remove stamped variables older than stamp, with all their constraints.

        Args:
            stamp: Oldest time to keep

        Returns:
            Identifiers of the removed variables
        """
        cutoff = as_time(stamp)
        expired = [
            variable.uuid
            for variable in self._variables.values()
            if isinstance(variable, Stamped) and variable.stamp < cutoff
        ]

        removed_constraints = 0
        for variable_uuid in expired:
            for constraint_uuid in list(self._constraints_by_variable.get(variable_uuid, ())):
                self.remove_constraint(constraint_uuid)
                removed_constraints += 1
            self.remove_variable(variable_uuid)

        if expired:
            logger.info(
                f"Evicted {len(expired)} variables and {removed_constraints} constraints "
                f"older than {cutoff}"
            )
        return expired

    def clone(self) -> "HashGraph":
        return copy.deepcopy(self)

    def summary(self) -> Dict[str, Any]:
        """Get summary information about the graph."""
        variable_type_counts: Dict[str, int] = {}
        total_size = 0
        for variable in self._variables.values():
            variable_type_counts[variable.type()] = variable_type_counts.get(variable.type(), 0) + 1
            total_size += variable.size

        constraint_type_counts: Dict[str, int] = {}
        for constraint in self._constraints.values():
            constraint_type_counts[constraint.type()] = constraint_type_counts.get(constraint.type(), 0) + 1

        return {
            "variables": {
                "total": len(self._variables),
                "held": len(self._held),
                "total_parameters": total_size,
                "by_type": variable_type_counts,
            },
            "constraints": {
                "total": len(self._constraints),
                "by_type": constraint_type_counts,
            },
        }
