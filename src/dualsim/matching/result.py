from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set, Union

from dualsim.graph.graph_view import Vertex


@dataclass
class RefinementStats:
    """
    Bookkeeping for one refinement run.

    cardinalities[0] is the total candidate count before the first pass;
    cardinalities[i] is the total after pass i.
    """

    passes: int = 0
    changing_passes: int = 0
    cardinalities: List[int] = field(default_factory=list)


@dataclass
class Success:
    """
    Converged candidate array: phi[u] is the set of data vertices that
    simulate query vertex u.
    """

    phi: List[Set[Vertex]]
    stats: RefinementStats = field(default_factory=RefinementStats)

    @property
    def matched(self) -> bool:
        return True


@dataclass
class NoMatch:
    """
    Some query vertex has no data vertex able to simulate it.

    query_vertex is the vertex whose candidate set emptied.
    """

    reason: str
    stage: str
    query_vertex: Optional[Vertex] = None
    stats: RefinementStats = field(default_factory=RefinementStats)

    @property
    def matched(self) -> bool:
        return False


MatchResult = Union[Success, NoMatch]
