from __future__ import annotations

import logging
from contextlib import suppress
from typing import List, Tuple

import numpy as np
import pytest

from dualsim.config.settings import SimulationConfig
from dualsim.errors import RefinementBudgetExceeded, RefinementDiverged
from dualsim.graph.graph_builder import GraphBuilder
from dualsim.graph.graph_store import LabeledGraph
from dualsim.matching.feasible import feasible_mates
from dualsim.matching.matcher import DualSimMatcher
from dualsim.matching.refiner import SimulationRefiner
from dualsim.matching.result import NoMatch, Success
from dualsim.matching.verify import is_dual_simulation


def _random_builder(
    rng: np.random.Generator,
    n: int,
    *,
    edge_prob: float,
    n_labels: int = 3,
    self_loops: bool = True,
) -> GraphBuilder:
    builder = GraphBuilder()
    builder.add_vertices(int(x) for x in rng.integers(0, n_labels, size=n))
    for src in range(n):
        for dst in range(n):
            if src == dst and not self_loops:
                continue
            if rng.random() < edge_prob:
                label = [None, "p", "q"][int(rng.integers(0, 3))]
                builder.add_edge(src, dst, label)
    return builder


def _random_graph(rng: np.random.Generator, n: int, **kwargs) -> LabeledGraph:
    return _random_builder(rng, n, **kwargs).build()


def _random_graph_with_copy_of(
    rng: np.random.Generator,
    n: int,
    query: LabeledGraph,
    **kwargs,
) -> LabeledGraph:
    """
    Random data graph with an exact copy of ``query`` appended, so the copy
    always simulates the query and every refinement keeps a witness.
    """

    builder = _random_builder(rng, n, **kwargs)
    copy = builder.add_vertices(query.label(u) for u in query.vertices())
    for u in query.vertices():
        for u_c in query.children(u):
            builder.add_edge(copy[u], copy[u_c], query.edge_label(u, u_c))
    return builder.build()


def _chain_with_decoy(k: int) -> Tuple[LabeledGraph, LabeledGraph]:
    """
    Query path u0 -> ... -> u_{k-1} with label i on u_i. The data graph holds
    a full copy of the path plus a decoy copy missing its last vertex, so
    refinement strips one decoy vertex per pass, back to front.
    """

    query = GraphBuilder()
    query.add_vertices(range(k))
    for i in range(k - 1):
        query.add_edge(i, i + 1)

    data = GraphBuilder()
    data.add_vertices(range(k))
    data.add_vertices(range(k - 1))
    for i in range(k - 1):
        data.add_edge(i, i + 1)
    for i in range(k - 2):
        data.add_edge(k + i, k + i + 1)

    return query.build(), data.build()


def _self_loop_query() -> LabeledGraph:
    return LabeledGraph.from_adjacency(labels=["x"], adjacency=[{0}])


def _has_self_loop(query: LabeledGraph) -> bool:
    return any(u in query.children(u) for u in query.vertices())


SEEDS = list(range(12))
POLICIES = [False, True]


@pytest.mark.parametrize("seed", SEEDS)
def test_candidates_only_shrink_between_passes(seed):
    rng = np.random.default_rng(seed)
    data = _random_graph(rng, 14, edge_prob=0.2)
    query = _random_graph(rng, 4, edge_prob=0.35)

    snapshots: List[Tuple[frozenset, ...]] = []
    phi0 = feasible_mates(query, data)
    snapshots.append(tuple(frozenset(s) for s in phi0))

    with suppress(RefinementDiverged):
        SimulationRefiner(query, data).refine(
            phi0, observer=lambda _, phi: snapshots.append(phi)
        )

    for before, after in zip(snapshots, snapshots[1:]):
        assert all(new <= old for new, old in zip(after, before))


@pytest.mark.parametrize("self_loops", POLICIES)
@pytest.mark.parametrize("seed", SEEDS)
def test_successful_result_is_sound(seed, self_loops):
    rng = np.random.default_rng(seed)
    query = _random_graph(rng, 3, edge_prob=0.4, n_labels=2)
    data = _random_graph_with_copy_of(rng, 16, query, edge_prob=0.25, n_labels=2)
    config = SimulationConfig(self_loops=self_loops)

    try:
        result = DualSimMatcher(data, query, config).mappings()
    except RefinementDiverged:
        # only plain replacement on a query self-loop can stall
        assert not self_loops
        assert _has_self_loop(query)
        return

    assert isinstance(result, Success)
    assert is_dual_simulation(query, data, result.phi)


@pytest.mark.parametrize("seed", SEEDS)
def test_unconstrained_random_queries_are_sound_or_no_match(seed):
    rng = np.random.default_rng(seed)
    data = _random_graph(rng, 16, edge_prob=0.25, n_labels=2)
    query = _random_graph(rng, 3, edge_prob=0.4, n_labels=2, self_loops=False)

    result = DualSimMatcher(data, query).mappings()

    if isinstance(result, Success):
        assert is_dual_simulation(query, data, result.phi)
    else:
        assert result.query_vertex is not None


@pytest.mark.parametrize("self_loops", POLICIES)
@pytest.mark.parametrize("seed", SEEDS)
def test_refining_a_fixpoint_changes_nothing(seed, self_loops):
    rng = np.random.default_rng(seed)
    query = _random_graph(rng, 3, edge_prob=0.35, n_labels=2)
    data = _random_graph_with_copy_of(rng, 16, query, edge_prob=0.3, n_labels=2)

    # intersection never stalls, and with a copy of the query planted in
    # the data graph it always converges to a non-empty simulation
    converged = DualSimMatcher(data, query, SimulationConfig(self_loops=True)).mappings()
    assert isinstance(converged, Success)

    phi = [set(s) for s in converged.phi]
    again = SimulationRefiner(
        query, data, SimulationConfig(self_loops=self_loops)
    ).refine(phi)

    assert isinstance(again, Success)
    assert again.phi == converged.phi
    assert again.stats.passes == 1
    assert again.stats.changing_passes == 0


def test_default_policy_is_idempotent_on_its_own_result():
    query, data = _chain_with_decoy(5)

    first = DualSimMatcher(data, query).mappings()
    second = SimulationRefiner(query, data).refine([set(s) for s in first.phi])

    assert second.phi == first.phi
    assert second.stats.changing_passes == 0


def test_scaling_bound_on_one_element_per_pass_chain():
    k = 6
    query, data = _chain_with_decoy(k)
    phi0 = feasible_mates(query, data)
    initial_total = sum(len(s) for s in phi0)

    result = SimulationRefiner(query, data).refine(phi0)

    assert isinstance(result, Success)
    assert result.phi == [{i} for i in range(k)]
    assert initial_total == 2 * k - 1
    assert result.stats.changing_passes == k - 1
    assert result.stats.changing_passes <= initial_total
    assert result.stats.passes == k
    assert result.stats.cardinalities == list(range(2 * k - 1, k - 1, -1)) + [k]


def test_pass_budget_aborts_slow_convergence():
    query, data = _chain_with_decoy(6)

    with pytest.raises(RefinementBudgetExceeded):
        DualSimMatcher(data, query, SimulationConfig(max_passes=2)).mappings()

    result = DualSimMatcher(data, query, SimulationConfig(max_passes=6)).mappings()
    assert result.matched


def test_unsatisfiable_pruning_reaches_no_match():
    # a -> b -> c with c childless cannot host a query vertex that is its
    # own child, under either self-loop policy
    data = LabeledGraph.from_adjacency(labels=["x"] * 3, adjacency=[{1}, {2}, set()])
    query = _self_loop_query()

    for self_loops in (False, True):
        result = DualSimMatcher(data, query, SimulationConfig(self_loops=self_loops)).mappings()
        assert isinstance(result, NoMatch)
        assert result.query_vertex == 0


def test_self_loop_disabled_replaces_candidates_outright():
    data = LabeledGraph.from_adjacency(labels=["x"] * 3, adjacency=[{1}, {2}, set()])
    query = _self_loop_query()

    snapshots = []
    SimulationRefiner(query, data).refine(
        feasible_mates(query, data),
        observer=lambda _, phi: snapshots.append(phi),
    )

    # vertex 2 is pruned for lacking a child, then re-enters as the child
    # of vertex 1 when phi[0] is replaced by the new candidates
    assert snapshots[0] == (frozenset({1, 2}),)


def test_self_loop_enabled_intersects_candidates():
    data = LabeledGraph.from_adjacency(labels=["x"] * 3, adjacency=[{1}, {2}, set()])
    query = _self_loop_query()

    snapshots = []
    SimulationRefiner(query, data, SimulationConfig(self_loops=True)).refine(
        feasible_mates(query, data),
        observer=lambda _, phi: snapshots.append(phi),
    )

    # intersect({0, 1}, {1, 2})
    assert snapshots[0] == (frozenset({1}),)




def test_replacement_on_self_loop_cycle_raises_instead_of_unsound_match(caplog):
    # 0 -> {1, 2}, 1 -> {0}, 2 childless: vertex 2 is pruned every pass and
    # re-added as a child of vertex 0 when phi[0] is replaced
    data = LabeledGraph.from_adjacency(labels=["x"] * 3, adjacency=[{1, 2}, {0}, set()])
    query = _self_loop_query()

    with caplog.at_level(logging.WARNING, logger="dualsim.refine"):
        with pytest.raises(RefinementDiverged) as excinfo:
            DualSimMatcher(data, query).mappings()

    assert excinfo.value.pass_index == 1
    assert isinstance(excinfo.value, RuntimeError)
    assert any("reproduced its input" in r.getMessage() for r in caplog.records)


def test_intersection_on_self_loop_cycle_converges_soundly():
    data = LabeledGraph.from_adjacency(labels=["x"] * 3, adjacency=[{1, 2}, {0}, set()])
    query = _self_loop_query()

    intersected = DualSimMatcher(data, query, SimulationConfig(self_loops=True)).mappings()

    assert isinstance(intersected, Success)
    assert intersected.phi == [{0, 1}]
    assert is_dual_simulation(query, data, intersected.phi)

    # the intersected result is also a fixpoint of plain replacement
    again = SimulationRefiner(query, data).refine([{0, 1}])
    assert again.phi == [{0, 1}]
    assert again.stats.changing_passes == 0
