"""Exceptions raised by dependency graph operations."""

from collections.abc import Hashable, Sequence


class CircularDependencyError(Exception):
    """Raised when an edge closes a cycle in a DependencyGraph.

    The offending edge is left in the graph. Callers that need the graph to
    stay acyclic must remove or rebuild the affected node themselves.

    Attributes:
        node: The node the cycle check started from (the new edge's source).
        cycle: The path that was found, starting and ending with ``node``.

    """

    def __init__(self, node: Hashable, cycle: Sequence[Hashable] = ()) -> None:
        self.node = node
        self.cycle = tuple(cycle)
        if self.cycle:
            path = " -> ".join(str(n) for n in self.cycle)
            super().__init__(f"Circular dependency detected: {path}")
        else:
            super().__init__(f"Circular dependency detected at '{node}'")
