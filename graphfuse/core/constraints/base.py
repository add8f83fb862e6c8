"""Helpers shared by the Gaussian constraint kinds."""

from typing import Optional, Union

from ..identity.uuid import UUID
from ..models.variable import Variable

VariableRef = Union[Variable, UUID]


def endpoint_uuid(variable: VariableRef, expected_type: Optional[type]) -> UUID:
    """Identifier of a constraint endpoint given as a variable or a UUID.

    Variables are checked against the kind the constraint is defined for.
    """
    if isinstance(variable, UUID):
        return variable
    if isinstance(variable, Variable):
        if expected_type is not None and not isinstance(variable, expected_type):
            raise TypeError(
                f"Expected a {expected_type.__name__} variable, got {type(variable).__name__}"
            )
        return variable.uuid
    raise TypeError(f"Expected a Variable or UUID, got {type(variable).__name__}")
