"""Graph containers."""

from .graph import Graph
from .hash_graph import HashGraph

__all__ = ["Graph", "HashGraph"]
