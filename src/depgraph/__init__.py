"""Dependency graphs with cycle-checked edges and topological ordering."""

__all__ = [
    "ARROW",
    "CircularDependencyError",
    "DependencyGraph",
    "GraphFileError",
    "LinkedList",
    "export_to_toml",
    "format_graph",
    "generate",
    "load_graph",
    "save_graph",
]

from ._errors import CircularDependencyError
from ._graph import DependencyGraph
from ._io import GraphFileError, export_to_toml, load_graph, save_graph
from ._linked_list import LinkedList
from ._serialize import ARROW, format_graph, generate
