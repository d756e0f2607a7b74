from __future__ import annotations

from typing import List, Sequence, Set, Tuple

from dualsim.graph.graph_view import GraphView, Vertex
from dualsim.matching.refiner import labels_conflict

Violation = Tuple[Vertex, Vertex, Vertex]


def violations(
    query: GraphView,
    data: GraphView,
    phi: Sequence[Set[Vertex]],
) -> List[Violation]:
    """
    List every (u, u_c, v) where v in phi[u] has no child in phi[u_c]
    reachable over an edge compatible with query edge (u, u_c).
    """

    found: List[Violation] = []
    for u in query.vertices():
        for u_c in sorted(query.children(u)):
            query_label = query.edge_label(u, u_c)
            for v in sorted(phi[u]):
                if not any(
                    v_c in phi[u_c]
                    and not labels_conflict(query_label, data.edge_label(v, v_c))
                    for v_c in data.children(v)
                ):
                    found.append((u, u_c, v))
    return found


def is_dual_simulation(
    query: GraphView,
    data: GraphView,
    phi: Sequence[Set[Vertex]],
) -> bool:
    """
    True when phi covers every query vertex with a non-empty, label-correct
    candidate set and has no structural violations.
    """

    if len(phi) != query.size():
        return False
    for u in query.vertices():
        if not phi[u]:
            return False
        if any(data.label(v) != query.label(u) for v in phi[u]):
            return False
    return not violations(query, data, phi)
