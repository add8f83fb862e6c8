"""Registry of variable and constraint kinds by type name.

Concrete kinds register themselves when their class is defined (see
``__init_subclass__`` on the base classes). Serialization or plugin-loading
collaborators use the registry to map a stored type name back to a class.
"""

import logging
from typing import Dict, List, Type

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Name -> class mapping that refuses conflicting registrations."""

    def __init__(self, kind: str):
        self.kind = kind
        self._types: Dict[str, type] = {}

    def register(self, type_name: str, cls: type) -> None:
        existing = self._types.get(type_name)
        if existing is not None and existing is not cls:
            same_definition = (
                existing.__module__ == cls.__module__
                and existing.__qualname__ == cls.__qualname__
            )
            if not same_definition:
                raise ValueError(
                    f"{self.kind} type name '{type_name}' is already registered "
                    f"by {existing.__module__}.{existing.__qualname__}"
                )
            logger.debug("Re-registering %s type %s", self.kind, type_name)
        self._types[type_name] = cls

    def get(self, type_name: str) -> type:
        if type_name not in self._types:
            raise ValueError(f"Unknown {self.kind} type: {type_name}")
        return self._types[type_name]

    def names(self) -> List[str]:
        return sorted(self._types)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._types


variable_registry = TypeRegistry("variable")
constraint_registry = TypeRegistry("constraint")


def variable_type(type_name: str) -> Type:
    """Get a variable class by its type name."""
    return variable_registry.get(type_name)


def constraint_type(type_name: str) -> Type:
    """Get a constraint class by its type name."""
    return constraint_registry.get(type_name)


def list_variable_types() -> List[str]:
    return variable_registry.names()


def list_constraint_types() -> List[str]:
    return constraint_registry.names()
