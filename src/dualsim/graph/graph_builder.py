from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from dualsim.errors import GraphContractError
from dualsim.graph.graph_store import LabeledGraph
from dualsim.graph.graph_view import EdgeLabel, Label, Vertex


class GraphBuilder:
    """
    Accumulates vertices and edges, then freezes them into a LabeledGraph.
    """

    def __init__(self) -> None:
        self._labels: List[Label] = []
        self._adjacency: List[Set[Vertex]] = []
        self._edge_labels: Dict[Tuple[Vertex, Vertex], EdgeLabel] = {}

    def add_vertex(self, label: Label) -> Vertex:
        if label is None:
            raise GraphContractError("vertex label must not be None")
        self._labels.append(label)
        self._adjacency.append(set())
        return len(self._labels) - 1

    def add_vertices(self, labels: Iterable[Label]) -> List[Vertex]:
        return [self.add_vertex(label) for label in labels]

    def add_edge(
        self,
        source: Vertex,
        target: Vertex,
        label: Optional[EdgeLabel] = None,
    ) -> None:
        n = len(self._labels)
        for v in (source, target):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v < n:
                raise GraphContractError(f"vertex {v!r} is out of range [0, {n})")

        self._adjacency[source].add(target)
        if label is not None:
            self._edge_labels[(source, target)] = label

    def add_edges(
        self,
        edges: Iterable[Tuple[Vertex, Vertex, Optional[EdgeLabel]]],
    ) -> None:
        for source, target, label in edges:
            self.add_edge(source, target, label)

    def build(self) -> LabeledGraph:
        return LabeledGraph.from_adjacency(
            self._labels,
            self._adjacency,
            self._edge_labels,
        )
