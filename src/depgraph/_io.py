import logging
import tomllib
from collections.abc import Hashable
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._graph import DependencyGraph
from ._serialize import format_graph, generate

logger = logging.getLogger(__name__)

TOML_SUFFIX = ".toml"


class GraphFileError(Exception):
    """Raised when a graph file cannot be interpreted."""


class EdgeEntry(BaseModel):
    """One ``[[edges]]`` table of a TOML graph document."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    from_node: str = Field(alias="from")
    to_node: str = Field(alias="to")


class GraphDocument(BaseModel):
    """TOML representation of a graph.

    Unlike the ``from->to`` text format it lists every node, so isolated
    nodes survive a round trip.
    """

    model_config = ConfigDict(extra="forbid")

    nodes: list[str] = Field(default_factory=list)
    edges: list[EdgeEntry] = Field(default_factory=list)


def graph_to_toml_data[T: Hashable](graph: DependencyGraph[T]) -> dict[str, Any]:
    """Convert a graph to a TOML-ready dictionary. Nodes are written with ``str()``."""
    document = GraphDocument(
        nodes=[str(node) for node in graph.get_nodes()],
        edges=[EdgeEntry(from_node=str(a), to_node=str(b)) for a, b in graph.edges()],
    )
    return document.model_dump(by_alias=True)


def graph_from_toml_data(data: dict[str, Any]) -> DependencyGraph[str]:
    """Build a graph from a parsed TOML graph document.

    Nodes are added first, in the order listed, then edges in order.

    Raises:
        GraphFileError: If the document does not match the expected layout.
        CircularDependencyError: If the edges contain a cycle.

    """
    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph document: {e}"
        raise GraphFileError(msg) from e

    graph = DependencyGraph[str]()
    for node in document.nodes:
        graph.add(node)
    for edge in document.edges:
        graph.add_dependency(edge.from_node, edge.to_node)
    return graph


def export_to_toml[T: Hashable](graph: DependencyGraph[T], output_path: Path | str) -> None:
    """Write ``graph`` to a TOML file.

    Args:
        graph: The graph to export.
        output_path: Path to the output TOML file.

    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(graph_to_toml_data(graph), f)

    logger.debug(f"Exported graph to {output_path}")


def load_graph(input_path: Path | str) -> DependencyGraph[str]:
    """Load a graph from a file.

    Files ending in ``.toml`` are read as TOML graph documents. Anything
    else is read as ``from->to`` lines.

    Raises:
        GraphFileError: If the file is not valid UTF-8, or a TOML file is not
            valid TOML or not a graph document.
        CircularDependencyError: If the edges contain a cycle.

    """
    input_path = Path(input_path)

    if input_path.suffix == TOML_SUFFIX:
        with input_path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                msg = f"Invalid TOML in {input_path}: {e}"
                raise GraphFileError(msg) from e
            except UnicodeDecodeError as e:
                msg = f"{input_path} is not valid UTF-8: {e}"
                raise GraphFileError(msg) from e
        graph = graph_from_toml_data(data)
    else:
        try:
            text = input_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            msg = f"{input_path} is not valid UTF-8: {e}"
            raise GraphFileError(msg) from e
        graph = generate(text)

    logger.debug(f"Loaded graph with {len(graph)} nodes from {input_path}")
    return graph


def save_graph[T: Hashable](graph: DependencyGraph[T], output_path: Path | str) -> None:
    """Write a graph to a file, choosing the format from the suffix like load_graph."""
    output_path = Path(output_path)
    if output_path.suffix == TOML_SUFFIX:
        export_to_toml(graph, output_path)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_graph(graph), encoding="utf-8")
    logger.debug(f"Saved graph to {output_path}")
