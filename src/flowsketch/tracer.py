"""
Debug tracing infrastructure for flowsketch.

This module provides data structures for capturing a trace of the parse
pipeline. Because the parser never reports errors, a trace is the way to find
out why a diagram came out the way it did: which directives were ignored,
which arrows were left dangling, which node tokens resolved to existing nodes.

Usage:
    >>> trace = ParseTrace()
    >>> graph = parse_dsl("[A] -> [B] ->", trace=trace)
    >>> print(trace.summary())
    >>> trace.dump_to_file("parse_trace.txt")

The trace captures:
- Pipeline stages (scan, build) with summary data
- One decision record per token handled by the builder
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Builder actions recorded in TokenDecision.action
NODE_CREATED = "node_created"
NODE_REUSED = "node_reused"
EDGE_CREATED = "edge_created"
ARROW_PENDING = "arrow_pending"
LABEL_PENDING = "label_pending"
DIRECTIVE_APPLIED = "directive_applied"
DIRECTIVE_IGNORED = "directive_ignored"
CHAIN_RESET = "chain_reset"
PENDING_DISCARDED = "pending_discarded"


@dataclass
class TokenDecision:
    """
    Record of what the builder did with a single token.

    Attributes:
        index: Position of the token in the token list (-1 for end of input)
        token: String form of the token
        action: What happened (e.g., "node_created", "directive_ignored")
        detail: Free-form detail (ids, rejected values)
    """

    index: int
    token: str
    action: str
    detail: str = ""

    def __str__(self) -> str:
        text = f"#{self.index} {self.token}: {self.action}"
        if self.detail:
            text += f" ({self.detail})"
        return text


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage ("scan" or "build")
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class ParseTrace:
    """
    Complete trace of a parse operation.

    Attributes:
        stages: List of pipeline stages with their data
        decisions: One record per builder decision, in token order
        input_text: The original input text
    """

    stages: List[PipelineStage] = field(default_factory=list)
    decisions: List[TokenDecision] = field(default_factory=list)
    input_text: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """Add a pipeline stage snapshot."""
        self.stages.append(PipelineStage(name, data.copy()))

    def add_decision(
        self, index: int, token: str, action: str, detail: str = ""
    ) -> None:
        """Record a builder decision."""
        self.decisions.append(TokenDecision(index, token, action, detail))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_decisions_by_action(self, action: str) -> List[TokenDecision]:
        """Get all decisions with the given action."""
        return [d for d in self.decisions if d.action == action]

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "PARSE TRACE SUMMARY",
            "=" * 60,
            "",
            f"Input: {repr(self.input_text[:100])}"
            f"{'...' if len(self.input_text) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}")

        lines.extend(["", f"Total decisions: {len(self.decisions)}", ""])

        action_counts: Dict[str, int] = {}
        for d in self.decisions:
            action_counts[d.action] = action_counts.get(d.action, 0) + 1

        lines.append("Decisions by action:")
        for action, count in sorted(action_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {action}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("DECISIONS:")
        lines.append("-" * 40)
        for d in self.decisions:
            lines.append(str(d))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
