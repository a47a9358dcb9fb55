"""Tests for loading and saving graph files."""

import tomllib
from pathlib import Path

import pytest

from depgraph import CircularDependencyError, DependencyGraph, GraphFileError, export_to_toml, load_graph, save_graph
from depgraph._io import graph_from_toml_data, graph_to_toml_data


@pytest.fixture
def graph() -> DependencyGraph[str]:
    graph = DependencyGraph.from_edges([("app", "lib"), ("lib", "core"), ("app", "core")])
    graph.add("docs")
    return graph


class TestTomlData:
    def test_graph_to_toml_data(self, graph: DependencyGraph[str]) -> None:
        data = graph_to_toml_data(graph)
        assert data == {
            "nodes": ["app", "lib", "core", "docs"],
            "edges": [
                {"from": "app", "to": "lib"},
                {"from": "app", "to": "core"},
                {"from": "lib", "to": "core"},
            ],
        }

    def test_non_string_nodes_written_with_str(self) -> None:
        data = graph_to_toml_data(DependencyGraph.from_edges([(1, 2)]))
        assert data == {"nodes": ["1", "2"], "edges": [{"from": "1", "to": "2"}]}

    def test_graph_from_toml_data(self) -> None:
        graph = graph_from_toml_data(
            {"nodes": ["x", "y", "z"], "edges": [{"from": "x", "to": "y"}]},
        )
        assert list(graph.get_nodes()) == ["x", "y", "z"]
        assert list(graph.edges()) == [("x", "y")]

    def test_nodes_are_optional(self) -> None:
        graph = graph_from_toml_data({"edges": [{"from": "x", "to": "y"}]})
        assert list(graph.get_nodes()) == ["x", "y"]

    def test_empty_document(self) -> None:
        assert graph_from_toml_data({}).size() == 0

    def test_missing_edge_key_raises(self) -> None:
        with pytest.raises(GraphFileError, match="Invalid graph document"):
            graph_from_toml_data({"edges": [{"from": "x"}]})

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(GraphFileError):
            graph_from_toml_data({"vertices": ["x"]})

    def test_cycle_raises(self) -> None:
        with pytest.raises(CircularDependencyError):
            graph_from_toml_data({"edges": [{"from": "x", "to": "y"}, {"from": "y", "to": "x"}]})


class TestExportToToml:
    def test_writes_toml(self, tmp_path: Path, graph: DependencyGraph[str]) -> None:
        output = tmp_path / "graph.toml"
        export_to_toml(graph, output)

        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data["nodes"] == ["app", "lib", "core", "docs"]
        assert data["edges"][0] == {"from": "app", "to": "lib"}

    def test_creates_parent_directories(self, tmp_path: Path, graph: DependencyGraph[str]) -> None:
        output = tmp_path / "nested" / "dir" / "graph.toml"
        export_to_toml(graph, output)
        assert output.is_file()


class TestLoadAndSave:
    def test_text_round_trip(self, tmp_path: Path, graph: DependencyGraph[str]) -> None:
        path = tmp_path / "graph.txt"
        save_graph(graph, path)

        assert path.read_text(encoding="utf-8") == "app->lib\napp->core\nlib->core\n"
        loaded = load_graph(path)
        assert list(loaded.edges()) == list(graph.edges())
        # The text format only records edges
        assert "docs" not in loaded

    def test_toml_round_trip_keeps_isolated_nodes(self, tmp_path: Path, graph: DependencyGraph[str]) -> None:
        path = tmp_path / "graph.toml"
        save_graph(graph, path)

        loaded = load_graph(path)
        assert list(loaded.get_nodes()) == list(graph.get_nodes())
        assert list(loaded.edges()) == list(graph.edges())

    def test_load_accepts_string_path(self, tmp_path: Path) -> None:
        path = tmp_path / "deps"
        path.write_text("a->b\n", encoding="utf-8")
        assert list(load_graph(str(path)).edges()) == [("a", "b")]

    def test_load_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.toml"
        path.write_text("nodes = [", encoding="utf-8")
        with pytest.raises(GraphFileError, match="Invalid TOML"):
            load_graph(path)

    def test_load_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.txt"
        path.write_bytes(b"a->\xff\n")
        with pytest.raises(GraphFileError, match="not valid UTF-8"):
            load_graph(path)

    def test_load_invalid_utf8_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.toml"
        path.write_bytes(b"nodes = [\"\xff\"]\n")
        with pytest.raises(GraphFileError, match="not valid UTF-8"):
            load_graph(path)

    def test_load_cyclic_text(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.txt"
        path.write_text("a->b\nb->c\nc->a\n", encoding="utf-8")
        with pytest.raises(CircularDependencyError):
            load_graph(path)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "missing.txt")
