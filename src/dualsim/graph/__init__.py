"""
Graph subsystem for dualsim.

Defines the read-only GraphView contract the matcher consumes and a
networkx-backed implementation with builders for constructing it.
"""

from dualsim.graph.graph_view import GraphView, Vertex, Label, EdgeLabel
from dualsim.graph.graph_store import LabeledGraph
from dualsim.graph.graph_builder import GraphBuilder

__all__ = [
    "GraphView",
    "Vertex",
    "Label",
    "EdgeLabel",
    "LabeledGraph",
    "GraphBuilder",
]
