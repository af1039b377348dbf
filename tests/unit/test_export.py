"""Unit tests for the export module."""

import json

import pytest

from flowsketch import FlowchartExporter, FlowchartInputError, parse_dsl
from flowsketch.models import FlowDirection, LayoutOptions


@pytest.fixture
def exporter():
    return FlowchartExporter()


class TestFlowchartExporter:
    """Tests for FlowchartExporter."""

    def test_save_and_load_json(self, exporter, login_graph, tmp_path):
        """JSON files load back to an equal graph."""
        path = tmp_path / "graph.json"
        exporter.save_json(login_graph, str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["nodes"]) == len(login_graph.nodes)
        assert exporter.load_json(str(path)) == login_graph

    def test_compact_json(self, login_graph, tmp_path):
        """indent=None writes a single line."""
        path = tmp_path / "graph.json"
        FlowchartExporter(indent=None).save_json(login_graph, str(path))
        assert path.read_text(encoding="utf-8").count("\n") == 1

    def test_non_ascii_labels(self, exporter, tmp_path):
        """Labels are written as UTF-8 text."""
        path = tmp_path / "graph.json"
        exporter.save_json(parse_dsl("[Größe] -> {結果?}"), str(path))
        assert "Größe" in path.read_text(encoding="utf-8")

    def test_save_and_load_dsl(self, exporter, pipeline_input, tmp_path):
        """DSL files parse back to the same structure."""
        graph = parse_dsl(pipeline_input)
        path = tmp_path / "graph.flow"
        exporter.save_dsl(graph, str(path))
        loaded = exporter.load_dsl(str(path))
        assert [n.label for n in loaded.nodes] == [n.label for n in graph.nodes]
        assert len(loaded.edges) == len(graph.edges)
        assert loaded.options.direction == FlowDirection.LR

    def test_load_dsl_with_defaults(self, exporter, tmp_path):
        """Default options pass through to the parser."""
        path = tmp_path / "graph.flow"
        path.write_text("[A]", encoding="utf-8")
        graph = exporter.load_dsl(str(path), options=LayoutOptions(padding=0))
        assert graph.options.padding == 0

    def test_load_invalid_json(self, exporter, tmp_path):
        """JSON that is not a graph is rejected."""
        path = tmp_path / "bad.json"
        path.write_text('{"nodes": [{"id": 1}]}', encoding="utf-8")
        with pytest.raises(FlowchartInputError):
            exporter.load_json(str(path))

    def test_load_missing_file(self, exporter, tmp_path):
        with pytest.raises(OSError):
            exporter.load_dsl(str(tmp_path / "missing.flow"))
