"""Tests for graph query functions used by the CLI."""

import pytest

from depgraph import DependencyGraph
from depgraph._cli.graph_query import (
    GraphSummary,
    NodeInfo,
    TreeNode,
    get_dependents_tree,
    get_forest,
    list_nodes,
    summarize,
)

# --- Fixtures ---


@pytest.fixture
def build_graph() -> DependencyGraph[str]:
    """A small build graph: app -> lib -> core, app -> core, tests -> app."""
    graph = DependencyGraph.from_edges(
        [("tests", "app"), ("app", "lib"), ("lib", "core"), ("app", "core")],
    )
    graph.add("docs")
    return graph


class TestSummarize:
    def test_counts(self, build_graph: DependencyGraph[str]) -> None:
        assert summarize(build_graph) == GraphSummary(node_count=5, edge_count=4, root_count=2)

    def test_empty_graph(self) -> None:
        assert summarize(DependencyGraph()) == GraphSummary(node_count=0, edge_count=0, root_count=0)


class TestListNodes:
    def test_all_nodes_in_order(self, build_graph: DependencyGraph[str]) -> None:
        result = list_nodes(build_graph)
        assert [info.node for info in result] == ["tests", "app", "lib", "core", "docs"]

    def test_dependent_counts(self, build_graph: DependencyGraph[str]) -> None:
        result = {info.node: info for info in list_nodes(build_graph)}
        assert result["tests"] == NodeInfo(node="tests", direct_dependents=1, transitive_dependents=3)
        assert result["app"] == NodeInfo(node="app", direct_dependents=2, transitive_dependents=2)
        assert result["core"] == NodeInfo(node="core", direct_dependents=0, transitive_dependents=0)

    def test_roots_only(self, build_graph: DependencyGraph[str]) -> None:
        result = list_nodes(build_graph, roots_only=True)
        assert [info.node for info in result] == ["tests", "docs"]


class TestGetDependentsTree:
    def test_tree(self, build_graph: DependencyGraph[str]) -> None:
        tree = get_dependents_tree(build_graph, "app")
        assert tree == TreeNode(
            node="app",
            children=[
                TreeNode(node="lib", children=[TreeNode(node="core", children=[])]),
            ],
        )

    def test_shared_dependent_expanded_once(self, build_graph: DependencyGraph[str]) -> None:
        tree = get_dependents_tree(build_graph, "app")
        # core is reached through lib first, so it is not repeated under app
        assert [child.node for child in tree.children] == ["lib"]

    def test_max_depth(self, build_graph: DependencyGraph[str]) -> None:
        tree = get_dependents_tree(build_graph, "tests", max_depth=1)
        assert tree == TreeNode(node="tests", children=[TreeNode(node="app", children=[])])

    def test_leaf(self, build_graph: DependencyGraph[str]) -> None:
        assert get_dependents_tree(build_graph, "core") == TreeNode(node="core", children=[])

    def test_missing_node_raises(self, build_graph: DependencyGraph[str]) -> None:
        with pytest.raises(KeyError, match="Node not found"):
            get_dependents_tree(build_graph, "missing")

    def test_deep_chain_does_not_recurse(self) -> None:
        length = 3000
        graph = DependencyGraph.from_edges([(i, i + 1) for i in range(length)])

        tree = get_dependents_tree(graph, 0)

        depth = 0
        while tree.children:
            (tree,) = tree.children
            depth += 1
        assert depth == length
        assert tree.node == length

    def test_shared_dependent_listed_under_first_parent(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        tree = get_dependents_tree(graph, "a")
        assert tree == TreeNode(
            node="a",
            children=[
                TreeNode(node="b", children=[TreeNode(node="d", children=[])]),
                TreeNode(node="c", children=[]),
            ],
        )


class TestGetForest:
    def test_one_tree_per_root(self, build_graph: DependencyGraph[str]) -> None:
        forest = get_forest(build_graph)
        assert [tree.node for tree in forest] == ["tests", "docs"]
        assert forest[1].children == []
