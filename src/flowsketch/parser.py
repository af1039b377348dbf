"""
Parser module for the flowchart DSL.

Builds a FlowchartGraph from the scanner's token list in a single
left-to-right pass. The builder never raises: directives it does not
understand are ignored, and a connection left incomplete at the end of a line
or of the input is dropped.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .ids import IdFactory, generate_id
from .models import (
    EdgeStyle,
    FlowchartGraph,
    FlowDirection,
    GraphEdge,
    GraphNode,
    LayoutOptions,
    NodeShape,
    StrokeStyle,
)
from .scanner import Token, TokenKind, tokenize
from .tracer import (
    ARROW_PENDING,
    CHAIN_RESET,
    DIRECTIVE_APPLIED,
    DIRECTIVE_IGNORED,
    EDGE_CREATED,
    LABEL_PENDING,
    NODE_CREATED,
    NODE_REUSED,
    PENDING_DISCARDED,
    ParseTrace,
)

logger = logging.getLogger(__name__)

# Leading integer, the way a permissive parseInt reads "120px" as 120.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

_DIRECTIONS = {d.value: d for d in FlowDirection}


def parse_int(value: str) -> Optional[int]:
    """Parse the leading integer of a string, or return None if there is none."""
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


@dataclass
class BuilderState:
    """
    Transient state threaded through one build pass.

    Attributes:
        nodes: Dedup map of (shape, label) -> node, in first-seen order.
        edges: Edges emitted so far.
        options: Layout options being merged from directives.
        last_node: Last node seen on the current line, if any.
        pending_label: Label waiting for the next node-triggered edge.
        pending_dashed: Dashed flag of the most recent arrow on the line.
        pending_arrow: True once an arrow follows the last node.
    """

    nodes: Dict[Tuple[NodeShape, str], GraphNode] = field(default_factory=dict)
    edges: List[GraphEdge] = field(default_factory=list)
    options: LayoutOptions = field(default_factory=LayoutOptions)
    last_node: Optional[GraphNode] = None
    pending_label: Optional[str] = None
    pending_dashed: bool = False
    pending_arrow: bool = False

    @property
    def has_pending(self) -> bool:
        return self.pending_arrow or self.pending_label is not None

    def reset_chain(self) -> None:
        self.last_node = None
        self.pending_label = None
        self.pending_dashed = False
        self.pending_arrow = False


class GraphBuilder:
    """
    Builds a FlowchartGraph from a token sequence.

    Each call to build() starts from fresh state, so one builder can be
    reused and two builds never share node identities.

    Example:
        >>> builder = GraphBuilder(id_factory=SequentialIdFactory())
        >>> graph = builder.build(tokenize("[A] -> [B]"))
        >>> [n.label for n in graph.nodes]
        ['A', 'B']
    """

    def __init__(
        self,
        id_factory: Optional[IdFactory] = None,
        options: Optional[LayoutOptions] = None,
        trace: Optional[ParseTrace] = None,
    ):
        """
        Initialize the graph builder.

        Args:
            id_factory: Source of fresh ids for nodes and edges
                        (default: random 10-character ids)
            options: Default layout options, overridden by directives
            trace: Optional trace that receives one decision per token
        """
        self.id_factory = id_factory or generate_id
        self.options = options or LayoutOptions()
        self.trace = trace

    def build(self, tokens: List[Token]) -> FlowchartGraph:
        """
        Fold the token list into a graph.

        Args:
            tokens: Tokens in source order

        Returns:
            FlowchartGraph with deduplicated nodes, edges and merged options
        """
        state = BuilderState(options=self.options.copy())

        for index, token in enumerate(tokens):
            if token.kind == TokenKind.NEWLINE:
                self._handle_newline(state, index, token)
            elif token.kind == TokenKind.DIRECTIVE:
                self._handle_directive(state, index, token)
            elif token.kind == TokenKind.NODE:
                self._handle_node(state, index, token)
            elif token.kind == TokenKind.ARROW:
                state.pending_dashed = token.dashed
                state.pending_arrow = True
                self._record(index, token, ARROW_PENDING)
            elif token.kind == TokenKind.LABEL:
                state.pending_label = token.value
                self._record(index, token, LABEL_PENDING, repr(token.value))

        if state.has_pending:
            logger.debug("Discarding dangling connection at end of input")
            self._record(-1, "end", PENDING_DISCARDED)

        graph = FlowchartGraph(
            nodes=list(state.nodes.values()),
            edges=state.edges,
            options=state.options,
        )
        if self.trace is not None:
            self.trace.add_stage(
                "build",
                {
                    "nodes": len(graph.nodes),
                    "edges": len(graph.edges),
                    "direction": graph.options.direction.value,
                    "node_spacing": graph.options.node_spacing,
                },
            )
        return graph

    def _handle_newline(self, state: BuilderState, index: int, token: Token) -> None:
        if state.has_pending:
            logger.debug("Discarding dangling connection at token %d", index)
            self._record(index, token, PENDING_DISCARDED)
        elif state.last_node is not None:
            self._record(index, token, CHAIN_RESET)
        state.reset_chain()

    def _handle_directive(
        self, state: BuilderState, index: int, token: Token
    ) -> None:
        name = token.directive_name
        value = token.directive_value

        if name == "direction":
            direction = _DIRECTIONS.get(value.upper())
            if direction is not None:
                state.options.direction = direction
                self._record(index, token, DIRECTIVE_APPLIED, direction.value)
                return
        elif name == "spacing":
            spacing = parse_int(value)
            if spacing is not None:
                state.options.node_spacing = spacing
                self._record(index, token, DIRECTIVE_APPLIED, str(spacing))
                return

        logger.debug("Ignoring directive @%s %r", name, value)
        self._record(index, token, DIRECTIVE_IGNORED, f"{name}={value!r}")

    def _handle_node(self, state: BuilderState, index: int, token: Token) -> None:
        node = self._get_or_create_node(state, index, token)

        if state.last_node is not None:
            style = None
            if state.pending_dashed:
                style = EdgeStyle(stroke_style=StrokeStyle.DASHED)
            edge = GraphEdge(
                id=self.id_factory(),
                source=state.last_node.id,
                target=node.id,
                label=state.pending_label or None,
                style=style,
            )
            state.edges.append(edge)
            self._record(
                index, token, EDGE_CREATED, f"{edge.source} -> {edge.target}"
            )
            state.pending_label = None
            state.pending_dashed = False

        state.pending_arrow = False
        state.last_node = node

    def _get_or_create_node(
        self, state: BuilderState, index: int, token: Token
    ) -> GraphNode:
        key = (token.shape, token.value)
        node = state.nodes.get(key)
        if node is None:
            node = GraphNode(id=self.id_factory(), shape=token.shape, label=token.value)
            state.nodes[key] = node
            self._record(index, token, NODE_CREATED, node.id)
        else:
            self._record(index, token, NODE_REUSED, node.id)
        return node

    def _record(self, index: int, token, action: str, detail: str = "") -> None:
        if self.trace is not None:
            self.trace.add_decision(index, str(token), action, detail)


def parse_dsl(
    text: str,
    id_factory: Optional[IdFactory] = None,
    options: Optional[LayoutOptions] = None,
    trace: Optional[ParseTrace] = None,
) -> FlowchartGraph:
    """
    Parse flowchart DSL text into a FlowchartGraph.

    Never raises for any string input; unrecognized syntax is skipped.

    Args:
        text: DSL source text
        id_factory: Source of fresh ids (default: random ids)
        options: Default layout options, overridden by directives
        trace: Optional ParseTrace to fill with scan/build details

    Returns:
        FlowchartGraph
    """
    tokens = tokenize(text)
    if trace is not None:
        trace.input_text = text
        trace.add_stage(
            "scan", {"tokens": len(tokens), "kinds": [t.kind.value for t in tokens]}
        )
    builder = GraphBuilder(id_factory=id_factory, options=options, trace=trace)
    return builder.build(tokens)
