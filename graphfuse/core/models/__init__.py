"""Variable and constraint abstractions."""

from .variable import Variable, FixedSizeVariable, component
from .stamped import Stamped, StampedVariable
from .constraint import Constraint
from .registry import (
    variable_type,
    constraint_type,
    list_variable_types,
    list_constraint_types,
)

__all__ = [
    "Variable",
    "FixedSizeVariable",
    "component",
    "Stamped",
    "StampedVariable",
    "Constraint",
    "variable_type",
    "constraint_type",
    "list_variable_types",
    "list_constraint_types",
]
