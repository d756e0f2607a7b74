from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple, FrozenSet

from dualsim.config.settings import SimulationConfig
from dualsim.errors import (
    GraphContractError,
    RefinementBudgetExceeded,
    RefinementDiverged,
)
from dualsim.graph.graph_view import EdgeLabel, GraphView, Vertex
from dualsim.matching.result import MatchResult, NoMatch, RefinementStats, Success
from dualsim.matching.set_algebra import intersect

PassObserver = Callable[[int, Tuple[FrozenSet[Vertex], ...]], None]


class SimulationRefiner:
    """
    Shrinks a candidate array to the largest dual simulation it contains.

    For every query edge (u, u_c) and every v in phi[u], v survives only
    if some child v_c of v lies in phi[u_c] over a compatible edge; phi[u_c]
    is then narrowed to the children that witnessed a surviving v. Passes
    repeat until one changes nothing, or stop early with NoMatch as soon as
    any candidate set empties.

    The refiner mutates the array it is given and never touches either
    graph.
    """

    def __init__(
        self,
        query: GraphView,
        data: GraphView,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        self.query = query
        self.data = data
        self.config = config or SimulationConfig()
        self._query_children: List[List[Vertex]] = [
            sorted(query.children(u)) for u in query.vertices()
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def refine(
        self,
        phi: List[Set[Vertex]],
        observer: Optional[PassObserver] = None,
    ) -> MatchResult:
        """
        Run refinement passes over phi in place.

        observer, when given, receives the pass number (1-based) and a
        frozen snapshot of phi after each completed pass.

        Raises RefinementDiverged when a pass prunes candidates but leaves
        phi unchanged, which only a query self-loop under plain replacement
        can cause.
        """

        if len(phi) != self.query.size():
            raise GraphContractError(
                f"candidate array has {len(phi)} entries for "
                f"{self.query.size()} query vertices"
            )

        logger = logging.getLogger("dualsim.refine")
        max_passes = self.config.max_passes
        stats = RefinementStats(cardinalities=[_total(phi)])

        changed = True
        while changed:
            if max_passes is not None and stats.passes >= max_passes:
                raise RefinementBudgetExceeded(max_passes)

            changed, no_match = self._refine_pass(phi)
            stats.passes += 1
            if changed:
                stats.changing_passes += 1

            if no_match is not None:
                no_match.stats = stats
                logger.debug(
                    "pass %d: no match (%s)", stats.passes, no_match.reason
                )
                return no_match

            stats.cardinalities.append(_total(phi))
            logger.debug(
                "pass %d: changed=%s total=%d",
                stats.passes,
                changed,
                stats.cardinalities[-1],
            )

            if observer is not None:
                observer(stats.passes, tuple(frozenset(s) for s in phi))

            # Entries never grow across a pass, so an equal total means an
            # identical phi. A pass that pruned and still reproduced its input
            # will do so forever, and the phi it keeps is not a simulation.
            if changed and stats.cardinalities[-1] == stats.cardinalities[-2]:
                logger.warning(
                    "pass %d pruned candidates but reproduced its input",
                    stats.passes,
                )
                raise RefinementDiverged(stats.passes)

        return Success(phi=phi, stats=stats)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refine_pass(
        self,
        phi: List[Set[Vertex]],
    ) -> Tuple[bool, Optional[NoMatch]]:
        changed = False

        for u in self.query.vertices():
            for u_c in self._query_children[u]:
                query_label = self.query.edge_label(u, u_c)
                retained: Set[Vertex] = set()
                new_candidates: Set[Vertex] = set()

                for v in phi[u]:
                    local = self._local_match(v, phi[u_c], query_label)
                    if local:
                        retained.add(v)
                        new_candidates |= local

                if len(retained) < len(phi[u]):
                    changed = True
                    phi[u] = retained
                    if not retained:
                        return changed, NoMatch(
                            reason=(
                                f"no candidate of query vertex {u} has a "
                                f"child matching query vertex {u_c}"
                            ),
                            stage="refinement",
                            query_vertex=u,
                        )

                if not new_candidates:
                    return changed, NoMatch(
                        reason=f"no parent witness left for query vertex {u_c}",
                        stage="refinement",
                        query_vertex=u_c,
                    )

                if len(new_candidates) < len(phi[u_c]):
                    changed = True

                if self.config.self_loops and u_c == u:
                    phi[u_c] = intersect(phi[u_c], new_candidates)
                else:
                    phi[u_c] = new_candidates

        return changed, None

    def _local_match(
        self,
        v: Vertex,
        targets: Set[Vertex],
        query_label: Optional[EdgeLabel],
    ) -> Set[Vertex]:
        """
        Children of v inside targets, minus those reached over an edge whose
        label conflicts with query_label.
        """

        local = intersect(self.data.children(v), targets)
        if query_label is None:
            return local
        return {
            v_c
            for v_c in local
            if not labels_conflict(query_label, self.data.edge_label(v, v_c))
        }


def labels_conflict(a: Optional[EdgeLabel], b: Optional[EdgeLabel]) -> bool:
    """
    Two edge labels conflict only when both are present and differ.
    """
    return a is not None and b is not None and a != b


def _total(phi: Sequence[Set[Vertex]]) -> int:
    return sum(len(s) for s in phi)
