"""Line-oriented text format for dependency graphs.

Each direct edge is written as ``<from>-><to>`` followed by a newline.
Nodes without edges are not represented, so isolated nodes do not survive
a round trip. Node names containing ``->`` or a newline are not supported.
"""

import logging
from collections.abc import Hashable

from ._graph import DependencyGraph

logger = logging.getLogger(__name__)

ARROW = "->"


def format_graph[T: Hashable](graph: DependencyGraph[T]) -> str:
    """Render every edge of ``graph`` as a ``from->to`` line.

    Returns:
        The joined lines, or an empty string if the graph has no edges.

    Example:
        >>> graph = DependencyGraph.from_edges([("a", "b"), ("a", "c")])
        >>> format_graph(graph)
        'a->b\\na->c\\n'

    """
    return "".join(f"{from_node}{ARROW}{to_node}\n" for from_node, to_node in graph.edges())


def parse_edges(text: str) -> list[tuple[str, str]]:
    r"""Split ``from->to`` lines into edge pairs.

    Each line is split at its first arrow. Lines may end in ``\n`` or
    ``\r\n``, and the last line does not need a line ending. Lines without
    an arrow are skipped.
    """
    edges: list[tuple[str, str]] = []
    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.removesuffix("\r")
        from_node, arrow, to_node = line.partition(ARROW)
        if not arrow:
            if line:
                logger.warning("Skipping line %d without '%s': %r", lineno, ARROW, line)
            continue
        edges.append((from_node, to_node))
    return edges


def generate(text: str) -> DependencyGraph[str]:
    """Build a graph from its ``from->to`` line representation.

    Edges are added in the order they appear.

    Raises:
        CircularDependencyError: If the edges contain a cycle.

    """
    edges = parse_edges(text)
    logger.debug("Parsed %d edge(s)", len(edges))
    return DependencyGraph.from_edges(edges)
