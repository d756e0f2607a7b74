from __future__ import annotations

from typing import List, Set

from dualsim.graph.graph_view import GraphView, Vertex


def feasible_mates(query: GraphView, data: GraphView) -> List[Set[Vertex]]:
    """
    Initial candidate array phi0: each query vertex u maps to every data
    vertex carrying u's label. No structure is checked here and empty
    entries are returned as-is.
    """

    return [
        set(data.vertices_with_label(query.label(u)))
        for u in query.vertices()
    ]
