"""Mutable dependency graph with cycle-checked edge insertion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depgraph._errors import CircularDependencyError
from depgraph._linked_list import LinkedList

from ._algorithms import check_for_cycle, topological_dependents, topological_sort

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, KeysView

logger = logging.getLogger(__name__)


class DependencyGraph[T]:
    """A directed acyclic graph of dependencies between nodes.

    It is generic over the node type T, which only needs to be hashable.

    An edge ``a -> b`` records ``b`` as a dependent of ``a``. Queries return
    nodes in an order where ``a`` comes before ``b``.

    Each node maps to an insertion-ordered set of its direct dependents, so
    node iteration, dependent iteration and serialization all follow the
    order in which things were added.

    The graph is not thread-safe. Callers mutating it from several threads
    must synchronize externally.

    Example:
        >>> graph = DependencyGraph[str]()
        >>> graph.add_dependency("a", "b")
        >>> graph.add_dependency("b", "c")
        >>> str(graph.get_topological_sort())
        'a b c'

    """

    __slots__ = ("_relationships",)

    def __init__(self) -> None:
        self._relationships: dict[T, dict[T, None]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]]) -> DependencyGraph[T]:
        """Build a graph by adding each ``(from, to)`` edge in order.

        Raises:
            CircularDependencyError: If an edge closes a cycle.

        """
        graph = cls()
        for from_node, to_node in edges:
            graph.add_dependency(from_node, to_node)
        return graph

    @classmethod
    def generate(cls, text: str) -> DependencyGraph[str]:
        """Build a string graph from its ``from->to`` line representation."""
        from depgraph._serialize import parse_edges  # noqa: PLC0415

        return cls.from_edges(parse_edges(text))

    def add(self, node: T) -> None:
        """Add a node. Does nothing if the node is already present."""
        if node not in self._relationships:
            self._relationships[node] = {}
            logger.debug("Added node %r", node)

    def contains(self, node: T) -> bool:
        """Return True if the node is in the graph."""
        return node in self._relationships

    def remove(self, node: T) -> None:
        """Remove a node and its own dependent set. Does nothing if absent.

        Other nodes that list ``node`` as a dependent keep that reference.
        """
        if self._relationships.pop(node, None) is not None:
            logger.debug("Removed node %r", node)

    def size(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._relationships)

    def add_dependency(self, from_node: T, to_node: T) -> None:
        """Record ``to_node`` as a dependent of ``from_node``.

        Missing endpoints are added first. The edge is inserted before the
        cycle check runs and is not taken back out if the check fails.

        Raises:
            CircularDependencyError: If ``from_node`` is reachable from
                ``to_node`` (including the self-loop case).

        """
        self.add(from_node)
        self.add(to_node)
        self._relationships[from_node][to_node] = None
        logger.debug("Added dependency %r -> %r", from_node, to_node)

        try:
            check_for_cycle(self._direct_dependents, from_node)
        except CircularDependencyError:
            logger.debug("Edge %r -> %r closes a cycle, leaving it in place", from_node, to_node)
            raise

    def has_dependents(self, node: T) -> bool:
        """Return True if the node exists and has at least one direct dependent."""
        return bool(self._relationships.get(node))

    def get_adjacent_nodes(self, node: T) -> KeysView[T] | None:
        """Return a live view of the direct dependents, or None if the node is absent."""
        dependents = self._relationships.get(node)
        if dependents is None:
            return None
        return dependents.keys()

    def get_dependents(self, node: T, *, shallow: bool = False) -> tuple[T, ...] | LinkedList[T]:
        """Get the dependents of a node.

        Args:
            node: The node to query.
            shallow: Only return the direct dependents.

        Returns:
            With ``shallow``, a tuple of the direct dependents. Otherwise a
            LinkedList of every transitive dependent in topological order,
            not including ``node`` itself. Both are empty when the node is
            not in the graph.

        """
        if shallow:
            return tuple(self._direct_dependents(node))
        if node not in self._relationships:
            return LinkedList()
        dependents = topological_dependents(self._direct_dependents, node)
        # The start node is always the head after a postorder traversal.
        dependents.remove_first()
        return dependents

    def get_topological_sort(self) -> LinkedList[T]:
        """Return every node so that each comes before all nodes it reaches."""
        return topological_sort(self.get_nodes(), self._direct_dependents)

    def get_nodes(self) -> Iterator[T]:
        """Iterate over the nodes in insertion order."""
        return iter(self._relationships)

    def edges(self) -> Iterator[tuple[T, T]]:
        """Iterate over ``(from, to)`` pairs in node, then dependent order."""
        for from_node, dependents in self._relationships.items():
            for to_node in dependents:
                yield from_node, to_node

    def roots(self) -> list[T]:
        """Get nodes that are not a dependent of any other node.

        Returns:
            Root nodes in insertion order.

        """
        referenced = {to_node for _, to_node in self.edges()}
        return [node for node in self._relationships if node not in referenced]

    def _direct_dependents(self, node: T) -> KeysView[T]:
        dependents = self._relationships.get(node)
        if dependents is None:
            return {}.keys()
        return dependents.keys()

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._relationships)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._relationships

    def __iter__(self) -> Iterator[T]:
        return iter(self._relationships)

    def __str__(self) -> str:
        """Return the ``from->to`` line representation of every edge."""
        from depgraph._serialize import format_graph  # noqa: PLC0415

        return format_graph(self)

    def __repr__(self) -> str:
        return f"<DependencyGraph nodes={len(self)} edges={sum(1 for _ in self.edges())}>"
