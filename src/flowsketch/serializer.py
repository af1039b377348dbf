"""
Conversion between FlowchartGraph and other representations.

- to_dsl: canonical DSL text that parses back to an isomorphic graph
- graph_to_dict / graph_from_dict: JSON-ready dictionaries
- graph_from_input: programmatic input with caller-chosen node ids

Dictionary forms are validated with the pydantic schemas in flowsketch.schema.
"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from .ids import IdFactory, generate_id
from .models import (
    DEFAULT_LAYOUT_OPTIONS,
    EdgeStyle,
    FlowchartGraph,
    GraphEdge,
    GraphNode,
    LayoutOptions,
    NodeShape,
    NodeStyle,
)
from .schema import (
    EdgeSchema,
    EdgeStyleSchema,
    FlowchartInputSchema,
    GraphSchema,
    LayoutOptionsSchema,
    NodeSchema,
    NodeStyleSchema,
)


class FlowchartInputError(ValueError):
    """Raised when programmatic graph input is malformed."""

    pass


_DELIMITERS = {
    NodeShape.RECTANGLE: ("[", "]"),
    NodeShape.DIAMOND: ("{", "}"),
    NodeShape.ELLIPSE: ("(", ")"),
    NodeShape.DATABASE: ("[[", "]]"),
}


def format_node(node: GraphNode) -> str:
    """Format a node in DSL notation, e.g. "{Valid?}"."""
    opener, closer = _DELIMITERS[node.shape]
    label = node.label
    # "[[x]]" would scan as a database node
    if node.shape == NodeShape.RECTANGLE and label.startswith("["):
        label = " " + label
    # "[[a]]]" would close at the first "]]"
    if node.shape == NodeShape.DATABASE and label.endswith("]"):
        label = label + " "
    return f"{opener}{label}{closer}"


def quote_label(label: str) -> str:
    """Quote an edge label, escaping backslashes and double quotes."""
    escaped = label.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_dsl(graph: FlowchartGraph) -> str:
    """
    Serialize a graph to canonical DSL text.

    Directives that differ from the defaults come first, then one line per
    edge, then nodes that take part in no edge.

    Args:
        graph: Graph to serialize

    Returns:
        DSL text ending with a newline (empty string for an empty graph
        with default options)
    """
    lines: List[str] = []

    if graph.options.direction != DEFAULT_LAYOUT_OPTIONS.direction:
        lines.append(f"@direction {graph.options.direction.value}")
    if graph.options.node_spacing != DEFAULT_LAYOUT_OPTIONS.node_spacing:
        lines.append(f"@spacing {graph.options.node_spacing}")

    nodes_by_id = {node.id: node for node in graph.nodes}
    connected: Set[str] = set()

    for edge in graph.edges:
        source = nodes_by_id[edge.source]
        target = nodes_by_id[edge.target]
        arrow = "-->" if edge.dashed else "->"
        parts = [format_node(source), arrow]
        if edge.label:
            parts.extend([quote_label(edge.label), arrow])
        parts.append(format_node(target))
        lines.append(" ".join(parts))
        connected.add(source.id)
        connected.add(target.id)

    for node in graph.nodes:
        if node.id not in connected:
            lines.append(format_node(node))

    return "\n".join(lines) + "\n" if lines else ""


def _input_error(what: str, error: ValidationError) -> FlowchartInputError:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    )
    return FlowchartInputError(f"Invalid {what}: {details}")


def _style_to_schema(schema_cls, style):
    if style is None:
        return None
    values = {key: value for key, value in asdict(style).items() if value is not None}
    return schema_cls(**values) if values else None


def _style_from_schema(cls, schema):
    if schema is None:
        return None
    values = schema.model_dump(exclude_none=True)
    return cls(**values) if values else None


def _options_from_schema(schema: LayoutOptionsSchema) -> LayoutOptions:
    return LayoutOptions(**schema.model_dump())


def options_from_dict(data: Optional[Dict[str, Any]]) -> LayoutOptions:
    """Build LayoutOptions from a partial dict; missing keys use defaults."""
    if data is None:
        return LayoutOptions()
    try:
        schema = LayoutOptionsSchema.model_validate(data)
    except ValidationError as e:
        raise _input_error("layout options", e) from None
    return _options_from_schema(schema)


def graph_to_dict(graph: FlowchartGraph) -> Dict[str, Any]:
    """
    Convert a graph to a JSON-ready dictionary.

    Keys follow the camelCase schema used by the layout stage; unset optional
    fields are omitted.
    """
    schema = GraphSchema(
        nodes=[
            NodeSchema(
                id=node.id,
                shape=node.shape,
                label=node.label,
                style=_style_to_schema(NodeStyleSchema, node.style),
            )
            for node in graph.nodes
        ],
        edges=[
            EdgeSchema(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                label=edge.label,
                style=_style_to_schema(EdgeStyleSchema, edge.style),
            )
            for edge in graph.edges
        ],
        options=LayoutOptionsSchema(**asdict(graph.options)),
    )
    return schema.model_dump(by_alias=True, exclude_none=True, mode="json")


def graph_from_dict(data: Dict[str, Any]) -> FlowchartGraph:
    """
    Rebuild a graph from graph_to_dict output, keeping its ids.

    Raises:
        FlowchartInputError: If the data does not match the graph schema or
                             an edge refers to a node id that is not present
    """
    try:
        schema = GraphSchema.model_validate(data)
    except ValidationError as e:
        raise _input_error("graph data", e) from None

    graph = FlowchartGraph(options=_options_from_schema(schema.options))
    for item in schema.nodes:
        graph.nodes.append(
            GraphNode(
                id=item.id,
                shape=item.shape,
                label=item.label,
                style=_style_from_schema(NodeStyle, item.style),
            )
        )

    node_ids = {node.id for node in graph.nodes}
    for item in schema.edges:
        for ref in (item.source, item.target):
            if ref not in node_ids:
                raise FlowchartInputError(
                    f"Edge {item.id!r} refers to unknown node {ref!r}"
                )
        graph.edges.append(
            GraphEdge(
                id=item.id,
                source=item.source,
                target=item.target,
                label=item.label,
                style=_style_from_schema(EdgeStyle, item.style),
            )
        )
    return graph


def graph_from_input(
    data: Dict[str, Any], id_factory: Optional[IdFactory] = None
) -> FlowchartGraph:
    """
    Build a graph from programmatic input.

    Input format:
        {
            "nodes": [{"id": "a", "type": "rectangle", "label": "A"}, ...],
            "edges": [{"from": "a", "to": "b", "label": "yes"}, ...],
            "options": {"direction": "LR"}
        }

    Input node ids are only references between nodes and edges; the graph
    gets fresh ids from id_factory.

    Raises:
        FlowchartInputError: If the input does not match the schema, a node
                             id repeats, or an edge refers to an unknown node
    """
    id_factory = id_factory or generate_id
    try:
        schema = FlowchartInputSchema.model_validate(data)
    except ValidationError as e:
        raise _input_error("flowchart input", e) from None

    graph = FlowchartGraph(options=_options_from_schema(schema.options))
    id_map: Dict[str, str] = {}

    for item in schema.nodes:
        if item.id in id_map:
            raise FlowchartInputError(f"Duplicate node id: {item.id!r}")
        node = GraphNode(
            id=id_factory(),
            shape=item.shape,
            label=item.label,
            style=_style_from_schema(NodeStyle, item.style),
        )
        id_map[item.id] = node.id
        graph.nodes.append(node)

    for item in schema.edges:
        for ref in (item.source, item.target):
            if ref not in id_map:
                raise FlowchartInputError(f"Edge refers to unknown node {ref!r}")
        graph.edges.append(
            GraphEdge(
                id=id_factory(),
                source=id_map[item.source],
                target=id_map[item.target],
                label=item.label,
                style=_style_from_schema(EdgeStyle, item.style),
            )
        )

    return graph
