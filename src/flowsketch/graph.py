"""
Graph queries over a parsed flowchart.

Uses networkx for:
- Graph representation (a MultiDiGraph keyed by edge id, so parallel
  connections between the same two nodes are kept)
- Cycle detection
- Topological sorting / longest path

GraphView never mutates the FlowchartGraph it wraps.
"""

from typing import List

import networkx as nx

from .models import FlowchartGraph


class GraphView:
    """
    Read-only structural view of a FlowchartGraph.

    Nodes are referred to by id throughout.

    Example:
        >>> view = GraphView(parse_dsl("[A] -> [B] -> [A]"))
        >>> view.has_cycle()
        True
    """

    def __init__(self, graph: FlowchartGraph):
        self.graph = graph
        self._positions = {n.id: i for i, n in enumerate(graph.nodes)}
        self._nx = nx.MultiDiGraph()
        for node in graph.nodes:
            self._nx.add_node(node.id, shape=node.shape, label=node.label)
        for edge in graph.edges:
            self._nx.add_edge(
                edge.source, edge.target, key=edge.id, label=edge.label
            )

    def to_networkx(self) -> nx.MultiDiGraph:
        """Return a copy of the underlying networkx graph."""
        return self._nx.copy()

    def get_successors(self, node_id: str) -> List[str]:
        """Get all nodes that this node points to."""
        if node_id not in self._nx:
            return []
        return list(self._nx.successors(node_id))

    def get_predecessors(self, node_id: str) -> List[str]:
        """Get all nodes that point to this node."""
        if node_id not in self._nx:
            return []
        return list(self._nx.predecessors(node_id))

    def get_roots(self) -> List[str]:
        """Get nodes with no incoming edges, in node order."""
        return [n.id for n in self.graph.nodes if self._nx.in_degree(n.id) == 0]

    def get_leaves(self) -> List[str]:
        """Get nodes with no outgoing edges, in node order."""
        return [n.id for n in self.graph.nodes if self._nx.out_degree(n.id) == 0]

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self._nx)

    def find_feedback_edges(self) -> List[str]:
        """
        Find edges that close a cycle (DFS back edges).

        DFS starts from roots in node order, then from any node not yet
        visited. Self-loops are always feedback edges.

        Returns:
            Edge ids in discovery order
        """
        visited = set()
        on_stack = set()
        feedback: List[str] = []

        starts = self.get_roots() + [n.id for n in self.graph.nodes]
        for start in starts:
            if start in visited:
                continue
            visited.add(start)
            on_stack.add(start)
            stack = [(start, iter(self._nx.out_edges(start, keys=True)))]

            while stack:
                node, edges = stack[-1]
                advanced = False
                for _, target, key in edges:
                    if target in on_stack:
                        feedback.append(key)
                    elif target not in visited:
                        visited.add(target)
                        on_stack.add(target)
                        stack.append(
                            (target, iter(self._nx.out_edges(target, keys=True)))
                        )
                        advanced = True
                        break
                if not advanced:
                    on_stack.discard(node)
                    stack.pop()

        return feedback

    def topological_sort(self) -> List[str]:
        """
        Return node ids in topological order.

        Falls back to node (first-seen) order if the graph has a cycle.
        """
        try:
            return list(nx.lexicographical_topological_sort(self._nx, key=self._order))
        except nx.NetworkXUnfeasible:
            return [n.id for n in self.graph.nodes]

    def get_longest_path_length(self) -> int:
        """
        Number of edges on the longest path, ignoring feedback edges.
        """
        if not self.graph.nodes:
            return 0
        working = self._nx.copy()
        feedback = set(self.find_feedback_edges())
        working.remove_edges_from(
            [(u, v, k) for u, v, k in self._nx.edges(keys=True) if k in feedback]
        )
        return nx.dag_longest_path_length(working)

    def _order(self, node_id: str) -> int:
        return self._positions[node_id]
