from __future__ import annotations

from typing import Dict, Sequence, Set

import numpy as np

from dualsim.graph.graph_view import Vertex


def candidate_sizes(phi: Sequence[Set[Vertex]]) -> np.ndarray:
    """
    Size of each candidate set, indexed by query vertex.
    """
    return np.fromiter((len(s) for s in phi), dtype=np.int64, count=len(phi))


def refinement_summary(
    initial_total: int,
    final: Sequence[Set[Vertex]],
) -> Dict[str, float]:
    """
    Summarize how far refinement narrowed a candidate array, given the
    total candidate count before refinement.

    reduction is the fraction of initial candidates that were pruned;
    it is 0.0 when there were no candidates to begin with.
    """

    after = candidate_sizes(final)
    final_total = int(after.sum())

    if initial_total == 0:
        reduction = 0.0
    else:
        reduction = 1.0 - final_total / initial_total

    return {
        "initial_total": int(initial_total),
        "final_total": final_total,
        "mean_size": float(np.mean(after)) if after.size else 0.0,
        "max_size": int(after.max()) if after.size else 0,
        "reduction": float(reduction),
    }
