from __future__ import annotations

import logging
from typing import (
    AbstractSet,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

import networkx as nx

from dualsim.errors import GraphContractError
from dualsim.graph.graph_view import EdgeLabel, GraphView, Label, Vertex

_EMPTY: FrozenSet[Vertex] = frozenset()


class LabeledGraph(GraphView):
    """
    Immutable labeled digraph backed by networkx.

    Vertex labels live on the node attribute ``label`` and edge labels on
    the edge attribute ``label``. Adjacency and the label index are frozen
    at construction so reads are cheap and safe to share across threads.
    """

    def __init__(self, graph: nx.DiGraph) -> None:
        self._graph = graph
        self._size = graph.number_of_nodes()
        self._validate()

        self._labels: List[Label] = [
            graph.nodes[v]["label"] for v in range(self._size)
        ]
        self._children: List[FrozenSet[Vertex]] = [
            frozenset(graph.successors(v)) for v in range(self._size)
        ]
        self._edge_labels: Dict[Tuple[Vertex, Vertex], EdgeLabel] = {
            (src, dst): data["label"]
            for src, dst, data in graph.edges(data=True)
            if data.get("label") is not None
        }

        index: Dict[Label, set] = {}
        for v, label in enumerate(self._labels):
            index.setdefault(label, set()).add(v)
        self._label_index: Dict[Label, FrozenSet[Vertex]] = {
            label: frozenset(vs) for label, vs in index.items()
        }

    # -------------------- Construction --------------------

    @classmethod
    def from_adjacency(
        cls,
        labels: Sequence[Label],
        adjacency: Sequence[Iterable[Vertex]],
        edge_labels: Optional[Mapping[Tuple[Vertex, Vertex], EdgeLabel]] = None,
    ) -> "LabeledGraph":
        """
        Build a graph from per-vertex labels, per-vertex child lists and an
        optional (src, dst) -> label mapping.
        """

        if len(labels) != len(adjacency):
            raise GraphContractError(
                f"got {len(labels)} labels for {len(adjacency)} adjacency entries"
            )

        n = len(labels)
        graph = nx.DiGraph()
        for v, label in enumerate(labels):
            graph.add_node(v, label=label)

        for src, targets in enumerate(adjacency):
            for dst in targets:
                _check_vertex(dst, n, f"child of vertex {src}")
                graph.add_edge(src, dst)

        for (src, dst), elabel in (edge_labels or {}).items():
            _check_vertex(src, n, "edge label source")
            _check_vertex(dst, n, "edge label target")
            if not graph.has_edge(src, dst):
                logging.getLogger("dualsim.graph").warning(
                    "ignoring label %r on non-edge (%s, %s)", elabel, src, dst
                )
                continue
            graph.edges[src, dst]["label"] = elabel

        return cls(graph)

    @classmethod
    def from_networkx(
        cls,
        graph: nx.DiGraph,
        *,
        label_attr: str = "label",
        edge_label_attr: str = "label",
    ) -> "LabeledGraph":
        """
        Copy a networkx digraph whose nodes are 0..n-1 into a LabeledGraph.
        """

        if not graph.is_directed():
            raise GraphContractError("graph must be directed")

        copy = nx.DiGraph()
        for v, data in graph.nodes(data=True):
            if label_attr not in data:
                raise GraphContractError(
                    f"vertex {v!r} has no {label_attr!r} attribute"
                )
            copy.add_node(v, label=data[label_attr])
        for src, dst, data in graph.edges(data=True):
            copy.add_edge(src, dst, label=data.get(edge_label_attr))

        return cls(copy)

    def _validate(self) -> None:
        expected = set(range(self._size))
        for v in self._graph.nodes:
            if v not in expected or isinstance(v, bool):
                raise GraphContractError(
                    f"vertex ids must be 0..{self._size - 1}, got {v!r}"
                )
            if self._graph.nodes[v].get("label") is None:
                raise GraphContractError(f"vertex {v} has no label")

    # -------------------- GraphView --------------------

    def size(self) -> int:
        return self._size

    def label(self, v: Vertex) -> Label:
        return self._labels[v]

    def children(self, v: Vertex) -> AbstractSet[Vertex]:
        return self._children[v]

    def edge_label(self, src: Vertex, dst: Vertex) -> Optional[EdgeLabel]:
        return self._edge_labels.get((src, dst))

    def vertices_with_label(self, label: Label) -> AbstractSet[Vertex]:
        return self._label_index.get(label, _EMPTY)

    # -------------------- Analytics --------------------

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def labels(self) -> List[Label]:
        return list(self._labels)

    def to_networkx(self) -> nx.DiGraph:
        return self._graph.copy()

    def __repr__(self) -> str:
        return f"LabeledGraph(vertices={self._size}, edges={self.edge_count()})"


def _check_vertex(v: Vertex, n: int, role: str) -> None:
    if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v < n:
        raise GraphContractError(f"{role} {v!r} is out of range [0, {n})")
