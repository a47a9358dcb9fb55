"""Graph query functions for CLI commands.

This module provides pure functions for querying a dependency graph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator

    from depgraph._graph import DependencyGraph


@dataclass(frozen=True, slots=True)
class GraphSummary:
    """Counts describing a whole graph."""

    node_count: int
    edge_count: int
    root_count: int


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    node: Hashable
    direct_dependents: int
    transitive_dependents: int


@dataclass(slots=True)
class TreeNode:
    """A node in a dependents tree for rendering."""

    node: Hashable
    children: list[TreeNode]


def summarize(graph: DependencyGraph) -> GraphSummary:
    """Count the nodes, edges and roots of a graph."""
    return GraphSummary(
        node_count=graph.size(),
        edge_count=sum(1 for _ in graph.edges()),
        root_count=len(graph.roots()),
    )


def list_nodes(graph: DependencyGraph, *, roots_only: bool = False) -> list[NodeInfo]:
    """List nodes with their dependent counts.

    Args:
        graph: The graph to analyze.
        roots_only: If True, only return nodes no other node depends on.

    Returns:
        List of NodeInfo in node order.

    """
    nodes = graph.roots() if roots_only else list(graph.get_nodes())
    return [
        NodeInfo(
            node=node,
            direct_dependents=len(graph.get_dependents(node, shallow=True)),
            transitive_dependents=len(graph.get_dependents(node)),
        )
        for node in nodes
    ]


def get_dependents_tree(
    graph: DependencyGraph,
    node: Hashable,
    *,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a tree of the dependents of ``node`` for visualization.

    A node reachable along several paths is only expanded the first time
    it is met. The walk uses an explicit stack rather than recursion.

    Args:
        graph: The graph containing the node.
        node: The root of the tree.
        max_depth: Maximum depth to traverse (None for unlimited).

    Returns:
        TreeNode representing the dependents tree.

    Raises:
        KeyError: If the node is not in the graph.

    """
    if node not in graph:
        msg = f"Node not found: {node}"
        raise KeyError(msg)

    def expand(current: Hashable, depth: int) -> Iterator[Hashable]:
        if max_depth is not None and depth >= max_depth:
            return iter(())
        return iter(graph.get_dependents(current, shallow=True))

    root = TreeNode(node=node, children=[])
    visited = {node}
    stack = [(root, 0, expand(node, 0))]
    while stack:
        parent, depth, dependents = stack[-1]
        for dependent in dependents:
            if dependent not in visited:
                visited.add(dependent)
                child = TreeNode(node=dependent, children=[])
                parent.children.append(child)
                stack.append((child, depth + 1, expand(dependent, depth + 1)))
                break
        else:
            stack.pop()

    return root


def get_forest(graph: DependencyGraph, *, max_depth: int | None = None) -> list[TreeNode]:
    """Build one dependents tree per root node."""
    return [get_dependents_tree(graph, root, max_depth=max_depth) for root in graph.roots()]
