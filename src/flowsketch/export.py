"""
File import/export for flowchart graphs.

This module handles saving parsed graphs for the layout stage and loading
them back:
- JSON files (.json) - graph_to_dict schema
- DSL files (.flow) - canonical DSL text
"""

import json
from pathlib import Path
from typing import Optional

from .ids import IdFactory
from .models import FlowchartGraph, LayoutOptions
from .parser import parse_dsl
from .serializer import graph_from_dict, graph_to_dict, to_dsl


class FlowchartExporter:
    """
    Saves and loads flowchart graphs.

    Attributes:
        indent: JSON indentation (None for compact output).
    """

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def save_json(self, graph: FlowchartGraph, filename: str) -> None:
        """
        Save a graph as JSON.

        Args:
            graph: The graph to save.
            filename: Output filename (should end in .json).
        """
        text = json.dumps(graph_to_dict(graph), indent=self.indent, ensure_ascii=False)
        Path(filename).write_text(text + "\n", encoding="utf-8")

    def save_dsl(self, graph: FlowchartGraph, filename: str) -> None:
        """Save a graph as canonical DSL text."""
        Path(filename).write_text(to_dsl(graph), encoding="utf-8")

    def load_json(self, filename: str) -> FlowchartGraph:
        """
        Load a graph saved with save_json.

        Raises:
            FlowchartInputError: If the file content is not a valid graph.
        """
        data = json.loads(Path(filename).read_text(encoding="utf-8"))
        return graph_from_dict(data)

    def load_dsl(
        self,
        filename: str,
        id_factory: Optional[IdFactory] = None,
        options: Optional[LayoutOptions] = None,
    ) -> FlowchartGraph:
        """Parse a DSL file."""
        text = Path(filename).read_text(encoding="utf-8")
        return parse_dsl(text, id_factory=id_factory, options=options)
