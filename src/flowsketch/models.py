"""
Data models for the flowchart graph.

This module contains the enums and dataclasses produced by the parser and
handed to a downstream layout stage. The model is deliberately plain: nodes,
edges and a record of layout options.

Classes:
    NodeShape: Shape kind of a node (rectangle, diamond, ellipse, database).
    GraphNode: A deduplicated node in the flowchart.
    GraphEdge: A directed connection between two nodes.
    LayoutOptions: Layout configuration merged from defaults and directives.
    FlowchartGraph: The aggregate returned by a parse call.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


class NodeShape(str, Enum):
    """Shape kind of a node; determines its rendered form downstream."""

    RECTANGLE = "rectangle"
    DIAMOND = "diamond"
    ELLIPSE = "ellipse"
    DATABASE = "database"


class FlowDirection(str, Enum):
    """Direction in which ranks flow."""

    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"


class LayoutAlgorithm(str, Enum):
    LAYERED = "layered"
    TREE = "tree"
    FORCE = "force"


class StrokeStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


class FillStyle(str, Enum):
    SOLID = "solid"
    HACHURE = "hachure"
    CROSS_HATCH = "cross-hatch"


class ArrowheadType(str, Enum):
    ARROW = "arrow"
    BAR = "bar"
    DOT = "dot"
    TRIANGLE = "triangle"


@dataclass
class NodeStyle:
    """Optional style overrides for a node. Unset fields use renderer defaults."""

    background_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_style: Optional[StrokeStyle] = None
    fill_style: Optional[FillStyle] = None
    opacity: Optional[float] = None
    font_size: Optional[int] = None
    font_family: Optional[int] = None
    roughness: Optional[float] = None


@dataclass
class EdgeStyle:
    """Optional style overrides for an edge. The parser only sets stroke_style."""

    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_style: Optional[StrokeStyle] = None
    start_arrowhead: Optional[ArrowheadType] = None
    end_arrowhead: Optional[ArrowheadType] = None
    roughness: Optional[float] = None


@dataclass
class GraphNode:
    """
    A node in the flowchart graph.

    Two node tokens with the same shape and the same trimmed label resolve to
    one GraphNode for the lifetime of a parse call.

    Attributes:
        id: Opaque unique identifier.
        shape: Shape kind of the node.
        label: Trimmed label text.
        style: Optional style overrides.
    """

    id: str
    shape: NodeShape
    label: str
    style: Optional[NodeStyle] = None

    @property
    def key(self):
        """Deduplication key: (shape, label)."""
        return (self.shape, self.label)


@dataclass
class GraphEdge:
    """
    A directed connection between two nodes.

    Attributes:
        id: Opaque unique identifier.
        source: Id of the source node.
        target: Id of the target node.
        label: Optional text shown on the connection.
        style: Optional style override (dashed connections set stroke_style).
    """

    id: str
    source: str
    target: str
    label: Optional[str] = None
    style: Optional[EdgeStyle] = None

    @property
    def dashed(self) -> bool:
        return self.style is not None and self.style.stroke_style == StrokeStyle.DASHED


@dataclass
class LayoutOptions:
    """
    Layout configuration consumed by the layout stage.

    Attributes:
        algorithm: Layout algorithm name.
        direction: Flow direction of ranks.
        node_spacing: Space between nodes within a rank.
        rank_spacing: Space between ranks.
        padding: Padding around the diagram.
    """

    algorithm: LayoutAlgorithm = LayoutAlgorithm.LAYERED
    direction: FlowDirection = FlowDirection.TB
    node_spacing: int = 50
    rank_spacing: int = 80
    padding: int = 50

    def copy(self) -> "LayoutOptions":
        return replace(self)


DEFAULT_LAYOUT_OPTIONS = LayoutOptions()


@dataclass
class FlowchartGraph:
    """
    Complete flowchart graph representation.

    Owned by the parse call that produced it; nothing is shared between calls.

    Attributes:
        nodes: Deduplicated nodes in first-seen order.
        edges: Edges in order of appearance of their arrows.
        options: Resolved layout options.
    """

    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    options: LayoutOptions = field(default_factory=LayoutOptions)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Get a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def find_node(
        self, label: str, shape: Optional[NodeShape] = None
    ) -> Optional[GraphNode]:
        """Get the first node with the given label (and shape, if given)."""
        for node in self.nodes:
            if node.label == label and (shape is None or node.shape == shape):
                return node
        return None

    def edges_from(self, node_id: str) -> List[GraphEdge]:
        """Get all edges leaving a node."""
        return [edge for edge in self.edges if edge.source == node_id]

    def edges_to(self, node_id: str) -> List[GraphEdge]:
        """Get all edges entering a node."""
        return [edge for edge in self.edges if edge.target == node_id]
