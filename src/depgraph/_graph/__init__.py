"""Graph module providing dependency graph abstractions.

This module contains:
- DependencyGraph[T]: A generic, mutable directed acyclic graph
- topological_sort / topological_dependents: Postorder orderings
- check_for_cycle: The traversal behind cycle-rejecting edge insertion
"""

from ._algorithms import check_for_cycle, topological_dependents, topological_sort
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "check_for_cycle", "topological_dependents", "topological_sort"]
