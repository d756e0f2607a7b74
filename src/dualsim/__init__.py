"""
dualsim
=======

Dual graph simulation pattern matching for vertex- and edge-labeled
directed graphs.

Given a query graph Q and a data graph G, dualsim maps every query
vertex to the set of data vertices that carry its label and whose
children, over compatible edges, simulate its children.

Public API:
- LabeledGraph, GraphBuilder
- feasible_mates, match, DualSimMatcher
- Success, NoMatch
- SimulationConfig
"""

from dualsim.config.settings import SimulationConfig, load_config
from dualsim.errors import (
    ConfigError,
    DualSimError,
    GraphContractError,
    RefinementBudgetExceeded,
    RefinementDiverged,
)
from dualsim.graph.graph_builder import GraphBuilder
from dualsim.graph.graph_store import LabeledGraph
from dualsim.graph.graph_view import GraphView
from dualsim.loaders.graph_loader import load_graph_from_files, load_graph_from_tables
from dualsim.matching.feasible import feasible_mates
from dualsim.matching.matcher import DualSimMatcher, match
from dualsim.matching.refiner import SimulationRefiner
from dualsim.matching.result import MatchResult, NoMatch, RefinementStats, Success
from dualsim.matching.verify import is_dual_simulation

__all__ = [
    "SimulationConfig",
    "load_config",
    "ConfigError",
    "DualSimError",
    "GraphContractError",
    "RefinementBudgetExceeded",
    "RefinementDiverged",
    "GraphBuilder",
    "LabeledGraph",
    "GraphView",
    "load_graph_from_files",
    "load_graph_from_tables",
    "feasible_mates",
    "DualSimMatcher",
    "match",
    "SimulationRefiner",
    "MatchResult",
    "NoMatch",
    "RefinementStats",
    "Success",
    "is_dual_simulation",
]

__version__ = "0.1.0"
