from __future__ import annotations

import pytest

from dualsim.graph.graph_store import LabeledGraph


@pytest.fixture()
def data_graph() -> LabeledGraph:
    return LabeledGraph.from_adjacency(
        labels=[2, 1, 2, 1, 1],
        adjacency=[{1, 2}, {2, 3}, {3}, {4}, set()],
        edge_labels={
            (0, 1): "likes",
            (0, 2): "knows",
            (1, 2): "foaf",
            (1, 3): "likes",
            (2, 3): "knows",
            # (3, 1) is not an edge; its label is dropped
            (3, 1): "likes",
        },
    )


@pytest.fixture()
def query_graph() -> LabeledGraph:
    return LabeledGraph.from_adjacency(
        labels=[1, 2, 1, 1],
        adjacency=[{1, 2}, {2}, {3}, set()],
        edge_labels={
            (0, 1): "foaf",
            (0, 2): "likes",
            (1, 2): "knows",
            (2, 3): "likes",
        },
    )
