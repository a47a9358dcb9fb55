"""Rich rendering utilities for graph query commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console

    from .graph_query import GraphSummary, NodeInfo, TreeNode


def render_order(nodes: Iterable[object], console: Console) -> None:
    """Print nodes one per line, in the given order.

    Args:
        nodes: Nodes to print.
        console: Rich Console to output to.

    """
    for node in nodes:
        console.print(escape(str(node)), highlight=False)


def render_summary(summary: GraphSummary, console: Console) -> None:
    """Render graph counts as a single line."""
    console.print(
        f"[cyan]Nodes:[/cyan] {summary.node_count}  "
        f"[cyan]Edges:[/cyan] {summary.edge_count}  "
        f"[cyan]Roots:[/cyan] {summary.root_count}",
    )


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("Direct", justify="right")
    table.add_column("Transitive", justify="right")

    for info in nodes:
        node_str = escape(str(info.node))
        # Truncate long names
        if len(node_str) > 60:
            node_str = node_str[:57] + "..."

        table.add_row(node_str, str(info.direct_dependents), str(info.transitive_dependents))

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a dependents tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(str(tree_node.node))}[/bold]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    pending = [(parent, children)]
    while pending:
        rich_parent, nodes = pending.pop()
        for child in nodes:
            child_tree = rich_parent.add(escape(str(child.node)))
            pending.append((child_tree, child.children))
