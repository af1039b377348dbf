"""
Tests for the tracer module.

These tests verify the debug trace captured while parsing.
"""

import doctest

import flowsketch
from flowsketch.parser import parse_dsl
from flowsketch.tracer import (
    CHAIN_RESET,
    DIRECTIVE_APPLIED,
    DIRECTIVE_IGNORED,
    EDGE_CREATED,
    NODE_CREATED,
    NODE_REUSED,
    PENDING_DISCARDED,
    ParseTrace,
    PipelineStage,
    TokenDecision,
)


class TestTokenDecision:
    """Tests for TokenDecision dataclass."""

    def test_str_with_detail(self):
        decision = TokenDecision(3, "arrow", "arrow_pending", "x")
        assert str(decision) == "#3 arrow: arrow_pending (x)"

    def test_str_without_detail(self):
        decision = TokenDecision(0, "newline", "chain_reset")
        assert str(decision) == "#0 newline: chain_reset"


class TestPipelineStage:
    """Tests for PipelineStage dataclass."""

    def test_str_truncates_long_values(self):
        """Long values are cut at 100 characters."""
        stage = PipelineStage(name="scan", data={"kinds": "x" * 300})
        result = str(stage)
        assert "=== Stage: scan ===" in result
        assert "x" * 100 + "..." in result
        assert "x" * 101 not in result


class TestParseTrace:
    """Tests for ParseTrace collected by parse_dsl."""

    def test_stages(self):
        """Scan and build stages are recorded."""
        trace = ParseTrace()
        parse_dsl("[A] -> [B]", trace=trace)
        assert [s.name for s in trace.stages] == ["scan", "build"]
        assert trace.get_stage("scan").data["tokens"] == 3
        assert trace.get_stage("build").data["edges"] == 1
        assert trace.get_stage("layout") is None
        assert trace.input_text == "[A] -> [B]"

    def test_node_and_edge_decisions(self):
        """Node creation, reuse and edges are recorded."""
        trace = ParseTrace()
        parse_dsl("[A] -> [B]\n[B] -> [A]", trace=trace)
        assert len(trace.get_decisions_by_action(NODE_CREATED)) == 2
        assert len(trace.get_decisions_by_action(NODE_REUSED)) == 2
        assert len(trace.get_decisions_by_action(EDGE_CREATED)) == 2
        assert len(trace.get_decisions_by_action(CHAIN_RESET)) == 1

    def test_directive_decisions(self):
        """Applied and ignored directives are told apart."""
        trace = ParseTrace()
        parse_dsl("@direction LR\n@direction XY\n@spacing big\n@theme x", trace=trace)
        assert [d.detail for d in trace.get_decisions_by_action(DIRECTIVE_APPLIED)] == ["LR"]
        ignored = trace.get_decisions_by_action(DIRECTIVE_IGNORED)
        assert [d.detail for d in ignored] == [
            "direction='XY'",
            "spacing='big'",
            "theme='x'",
        ]

    def test_dangling_connections(self):
        """Dropped pending state shows up at newline and end of input."""
        trace = ParseTrace()
        parse_dsl('[A] ->\n[B] -> "x"', trace=trace)
        discarded = trace.get_decisions_by_action(PENDING_DISCARDED)
        assert [d.index for d in discarded] == [2, -1]

    def test_summary_and_dump(self, tmp_path):
        """Summary counts decisions; dump lists them and writes to file."""
        trace = ParseTrace()
        parse_dsl("[A] -> [B]", trace=trace)
        summary = trace.summary()
        assert "PARSE TRACE SUMMARY" in summary
        assert "node_created: 2" in summary
        dump = trace.dump()
        assert "DECISIONS:" in dump
        assert "=== Stage: build ===" in dump

        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        assert path.read_text(encoding="utf-8") == dump

    def test_no_trace_by_default(self):
        """Parsing without a trace works the same."""
        assert len(parse_dsl("[A] -> [B]").edges) == 1


class TestPackageExamples:
    """The usage examples in the package docstring stay accurate."""

    def test_package_docstring_examples(self):
        result = doctest.testmod(flowsketch)
        assert result.attempted > 0
        assert result.failed == 0
