import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depgraph._errors import CircularDependencyError
from depgraph._graph import DependencyGraph
from depgraph._io import GraphFileError, load_graph, save_graph

from .config import ConfigError, DepgraphConfig, get_config
from .graph_query import get_dependents_tree, get_forest, list_nodes, summarize
from .graph_render import render_node_table, render_order, render_summary, render_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphOption = Annotated[
    Path | None,
    typer.Option("-g", "--graph", help="Path to graph file (.toml or from->to lines)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Depgraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _get_config() -> DepgraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_graph(graph: Path | None, config: DepgraphConfig) -> DependencyGraph[str]:
    """Load the graph named on the command line, falling back to [tool.depgraph].graph."""
    effective_graph = graph if graph is not None else config.graph

    if effective_graph is None:
        err_console.print("[red]Error: Graph file required. Use -g/--graph or configure \\[tool.depgraph].graph[/red]")
        raise typer.Exit(code=1)

    if not effective_graph.is_file():
        err_console.print(f"[red]Error: Graph file not found: {escape(str(effective_graph))}[/red]")
        raise typer.Exit(code=1)

    logger.debug(f"Loading graph from {effective_graph}")
    try:
        return load_graph(effective_graph)
    except CircularDependencyError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command("sort")
def sort_command(graph: GraphOption = None) -> None:
    """Print every node in topological order, one per line."""
    dependency_graph = _load_graph(graph, _get_config())
    render_order(dependency_graph.get_topological_sort(), out_console)


@app.command()
def deps(
    node: Annotated[str, typer.Argument(help="Node whose dependents to print")],
    graph: GraphOption = None,
    *,
    shallow: Annotated[
        bool,
        typer.Option("--shallow", help="Only print direct dependents"),
    ] = False,
) -> None:
    """Print the dependents of a node.

    Transitive dependents are printed in topological order.
    """
    dependency_graph = _load_graph(graph, _get_config())

    if node not in dependency_graph:
        err_console.print(f"[red]Error: Node not found: {escape(node)}[/red]")
        raise typer.Exit(code=1)

    render_order(dependency_graph.get_dependents(node, shallow=shallow), out_console)


@app.command()
def nodes(
    graph: GraphOption = None,
    *,
    roots: Annotated[
        bool,
        typer.Option("--roots", help="Only list nodes nothing depends on"),
    ] = False,
) -> None:
    """List nodes with their dependent counts."""
    dependency_graph = _load_graph(graph, _get_config())
    render_node_table(list_nodes(dependency_graph, roots_only=roots), out_console)


@app.command()
def tree(
    node: Annotated[
        str | None,
        typer.Argument(help="Root node of the tree (defaults to every root)"),
    ] = None,
    graph: GraphOption = None,
    *,
    depth: Annotated[
        int | None,
        typer.Option("--depth", help="Maximum depth to display"),
    ] = None,
) -> None:
    """Show the dependents of a node as a tree."""
    dependency_graph = _load_graph(graph, _get_config())

    if node is None:
        for root_tree in get_forest(dependency_graph, max_depth=depth):
            render_tree(root_tree, out_console)
        return

    try:
        dependents_tree = get_dependents_tree(dependency_graph, node, max_depth=depth)
    except KeyError as e:
        err_console.print(f"[red]Error: Node not found: {escape(node)}[/red]")
        raise typer.Exit(code=1) from e

    render_tree(dependents_tree, out_console)


@app.command()
def check(graph: GraphOption = None) -> None:
    """Check that a graph file loads and contains no circular dependency."""
    err_console.print()
    dependency_graph = _load_graph(graph, _get_config())

    render_summary(summarize(dependency_graph), err_console)
    err_console.print()
    err_console.print("[green]✓ Graph is acyclic[/green]")
    err_console.print()


@app.command()
def convert(
    graph: GraphOption = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output file (.toml or from->to lines)"),
    ] = None,
) -> None:
    """Write a graph to another file, choosing the format from its suffix.

    The from->to line format only records edges, so nodes without any
    dependency are dropped when converting to it.
    """
    config = _get_config()
    dependency_graph = _load_graph(graph, config)

    effective_output = output if output is not None else config.output
    if effective_output is None:
        err_console.print("[red]Error: Output file required. Use -o/--output or configure \\[tool.depgraph].output[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Writing graph to:[/cyan] {escape(str(effective_output))}")
    save_graph(dependency_graph, effective_output)
    err_console.print("[green]✓ Conversion complete[/green]")


def main() -> None:
    app()
