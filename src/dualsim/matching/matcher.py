from __future__ import annotations

import logging
import time
from typing import List, Optional, Set

from dualsim.config.settings import SimulationConfig
from dualsim.evaluation.metrics import refinement_summary
from dualsim.graph.graph_view import GraphView, Vertex
from dualsim.matching.feasible import feasible_mates
from dualsim.matching.refiner import PassObserver, SimulationRefiner
from dualsim.matching.result import MatchResult, NoMatch, RefinementStats


class DualSimMatcher:
    """
    Dual graph simulation pattern matcher for vertex- and edge-labeled
    graphs.

    Maps each query vertex u to the set of data vertices {v} that carry
    u's label and whose children simulate u's children over compatible
    edges.
    """

    def __init__(
        self,
        data: GraphView,
        query: GraphView,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        self.data = data
        self.query = query
        self.config = config or SimulationConfig()

    def feasible_mates(self) -> List[Set[Vertex]]:
        return feasible_mates(self.query, self.data)

    def mappings(self, observer: Optional[PassObserver] = None) -> MatchResult:
        logger = logging.getLogger("dualsim.match")
        t0 = time.perf_counter()

        phi = self.feasible_mates()
        for u, candidates in enumerate(phi):
            if not candidates:
                logger.info(
                    "no match: query vertex %s label %r absent from data graph",
                    u,
                    self.query.label(u),
                )
                return NoMatch(
                    reason=f"no data vertex has the label of query vertex {u}",
                    stage="initialization",
                    query_vertex=u,
                    stats=RefinementStats(cardinalities=[sum(map(len, phi))]),
                )

        refiner = SimulationRefiner(self.query, self.data, self.config)
        result = refiner.refine(phi, observer=observer)

        elapsed = time.perf_counter() - t0
        if result.matched:
            summary = refinement_summary(
                result.stats.cardinalities[0], result.phi
            )
            logger.info(
                "match: query=%s data=%s passes=%s candidates %s -> %s (reduction %.2f) in %.3fs",
                self.query.size(),
                self.data.size(),
                result.stats.passes,
                summary["initial_total"],
                summary["final_total"],
                summary["reduction"],
                elapsed,
            )
        else:
            logger.info(
                "no match after %s passes in %.3fs: %s",
                result.stats.passes,
                elapsed,
                result.reason,
            )
        return result


def match(
    query: GraphView,
    data: GraphView,
    config: Optional[SimulationConfig] = None,
) -> MatchResult:
    """
    Compute the dual simulation of ``query`` in ``data``.
    """
    return DualSimMatcher(data, query, config).mappings()
