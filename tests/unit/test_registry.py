"""Tests for the type-name registry."""

import pytest

from graphfuse.core.constraints import MarginalConstraint
from graphfuse.core.models.registry import (
    TypeRegistry,
    constraint_type,
    list_constraint_types,
    list_variable_types,
    variable_type,
)
from graphfuse.core.models.stamped import StampedVariable
from graphfuse.core.variables import Orientation2DStamped, Position2DStamped


class TestRegistry:
    """Test lookup of kinds by type name."""

    def test_variable_lookup(self):
        assert variable_type("graphfuse.variables.Position2DStamped") is Position2DStamped
        assert variable_type(Orientation2DStamped.TYPE_NAME) is Orientation2DStamped

    def test_constraint_lookup(self):
        assert constraint_type("graphfuse.constraints.MarginalConstraint") is MarginalConstraint

    def test_unknown_names(self):
        with pytest.raises(ValueError):
            variable_type("graphfuse.variables.Missing")
        with pytest.raises(ValueError):
            constraint_type("graphfuse.constraints.Missing")

    def test_listing(self):
        """All built-in kinds are listed, sorted."""
        variables = [name for name in list_variable_types() if name.startswith("graphfuse.")]
        constraints = [name for name in list_constraint_types() if name.startswith("graphfuse.")]

        assert len(variables) == 7
        assert len(constraints) == 15
        assert variables == sorted(variables)

    def test_abstract_bases_not_registered(self):
        """Classes without a TYPE_NAME are not registered."""
        assert all("StampedVariable" != name.rsplit(".", 1)[-1] for name in list_variable_types())

    def test_conflicting_name_rejected(self):
        """A second class cannot claim an existing type name."""
        with pytest.raises(ValueError):
            class Impostor(StampedVariable):
                TYPE_NAME = "graphfuse.variables.Position2DStamped"
                SIZE = 2

        assert variable_type("graphfuse.variables.Position2DStamped") is Position2DStamped

    def test_reregistering_same_class(self):
        """Registering the same class twice is allowed."""
        registry = TypeRegistry("test")
        registry.register("a", Position2DStamped)
        registry.register("a", Position2DStamped)

        assert registry.get("a") is Position2DStamped
        assert "a" in registry
        assert registry.names() == ["a"]
