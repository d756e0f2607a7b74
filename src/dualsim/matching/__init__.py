"""
Matching subsystem for dualsim.

feasible_mates builds the label-only candidate array; SimulationRefiner
narrows it to a fixpoint; DualSimMatcher and match() run both.
"""

from dualsim.matching.set_algebra import intersect
from dualsim.matching.feasible import feasible_mates
from dualsim.matching.result import MatchResult, NoMatch, RefinementStats, Success
from dualsim.matching.refiner import SimulationRefiner
from dualsim.matching.matcher import DualSimMatcher, match
from dualsim.matching.verify import is_dual_simulation, violations

__all__ = [
    "intersect",
    "feasible_mates",
    "MatchResult",
    "NoMatch",
    "RefinementStats",
    "Success",
    "SimulationRefiner",
    "DualSimMatcher",
    "match",
    "is_dual_simulation",
    "violations",
]
