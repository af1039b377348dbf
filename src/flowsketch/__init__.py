"""
flowsketch - Flowchart DSL front end

Parses a compact flowchart notation into a graph model for a layout stage.

Example:
    >>> from flowsketch import parse_dsl
    >>> graph = parse_dsl('''
    ...     (Start) -> [Enter Credentials] -> {Valid?}
    ...     {Valid?} -> "yes" -> [Dashboard]
    ... ''')
    >>> len(graph.nodes), len(graph.edges)
    (4, 3)

Debug Mode Example:
    >>> from flowsketch import ParseTrace
    >>> trace = ParseTrace()
    >>> graph = parse_dsl("@direction XY\\n[A] ->", trace=trace)
    >>> [d.action for d in trace.decisions if d.action.endswith(("ignored", "discarded"))]
    ['directive_ignored', 'pending_discarded']
"""

from .export import FlowchartExporter
from .graph import GraphView
from .ids import SequentialIdFactory, generate_id
from .models import (
    DEFAULT_LAYOUT_OPTIONS,
    ArrowheadType,
    EdgeStyle,
    FillStyle,
    FlowchartGraph,
    FlowDirection,
    GraphEdge,
    GraphNode,
    LayoutAlgorithm,
    LayoutOptions,
    NodeShape,
    NodeStyle,
    StrokeStyle,
)
from .parser import BuilderState, GraphBuilder, parse_dsl
from .scanner import Scanner, Token, TokenKind, tokenize
from .serializer import (
    FlowchartInputError,
    graph_from_dict,
    graph_from_input,
    graph_to_dict,
    to_dsl,
)
from .tracer import ParseTrace, PipelineStage, TokenDecision

__version__ = "0.1.0"

__all__ = [
    # Main API
    "parse_dsl",
    # Scanner
    "Scanner",
    "Token",
    "TokenKind",
    "tokenize",
    # Builder
    "GraphBuilder",
    "BuilderState",
    # Model
    "FlowchartGraph",
    "GraphNode",
    "GraphEdge",
    "LayoutOptions",
    "DEFAULT_LAYOUT_OPTIONS",
    "NodeShape",
    "NodeStyle",
    "EdgeStyle",
    "StrokeStyle",
    "FillStyle",
    "ArrowheadType",
    "FlowDirection",
    "LayoutAlgorithm",
    # Ids
    "generate_id",
    "SequentialIdFactory",
    # Serialization / export
    "to_dsl",
    "graph_to_dict",
    "graph_from_dict",
    "graph_from_input",
    "FlowchartInputError",
    "FlowchartExporter",
    # Queries
    "GraphView",
    # Debug/Tracing
    "ParseTrace",
    "PipelineStage",
    "TokenDecision",
]
