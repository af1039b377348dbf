"""
Pydantic schemas for the JSON forms of a flowchart graph.

Keys are camelCase on the wire and snake_case in Python; both spellings are
accepted on input. Two node/edge shapes exist:

- NodeSchema / EdgeSchema: graph_to_dict output, keyed by graph ids
- InputNodeSchema / InputEdgeSchema: programmatic input, where ids are
  caller-chosen references and edges use "from"/"to"
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from .models import (
    ArrowheadType,
    FillStyle,
    FlowDirection,
    LayoutAlgorithm,
    NodeShape,
    StrokeStyle,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NodeStyleSchema(CamelModel):
    background_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_style: Optional[StrokeStyle] = None
    fill_style: Optional[FillStyle] = None
    opacity: Optional[float] = None
    font_size: Optional[int] = None
    font_family: Optional[int] = None
    roughness: Optional[float] = None


class EdgeStyleSchema(CamelModel):
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_style: Optional[StrokeStyle] = None
    start_arrowhead: Optional[ArrowheadType] = None
    end_arrowhead: Optional[ArrowheadType] = None
    roughness: Optional[float] = None


class LayoutOptionsSchema(CamelModel):
    """Layout options; every key is optional and defaults match LayoutOptions."""

    algorithm: LayoutAlgorithm = LayoutAlgorithm.LAYERED
    direction: FlowDirection = FlowDirection.TB
    node_spacing: StrictInt = 50
    rank_spacing: StrictInt = 80
    padding: StrictInt = 50

    @field_validator("direction", mode="before")
    @classmethod
    def upper_direction(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class NodeSchema(CamelModel):
    id: str
    shape: NodeShape = Field(alias="type")
    label: str
    style: Optional[NodeStyleSchema] = None


class EdgeSchema(CamelModel):
    id: str
    source: str
    target: str
    label: Optional[str] = None
    style: Optional[EdgeStyleSchema] = None


class GraphSchema(CamelModel):
    nodes: List[NodeSchema] = Field(default_factory=list)
    edges: List[EdgeSchema] = Field(default_factory=list)
    options: LayoutOptionsSchema = Field(default_factory=LayoutOptionsSchema)


class InputNodeSchema(CamelModel):
    id: str
    shape: NodeShape = Field(alias="type")
    label: str
    style: Optional[NodeStyleSchema] = None


class InputEdgeSchema(CamelModel):
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    label: Optional[str] = None
    style: Optional[EdgeStyleSchema] = None


class FlowchartInputSchema(CamelModel):
    nodes: List[InputNodeSchema] = Field(default_factory=list)
    edges: List[InputEdgeSchema] = Field(default_factory=list)
    options: LayoutOptionsSchema = Field(default_factory=LayoutOptionsSchema)
