from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Hashable, List, Set, Tuple, Union

import pandas as pd

from dualsim.errors import GraphContractError
from dualsim.graph.graph_store import LabeledGraph


def load_graph_from_tables(
    vertices: pd.DataFrame,
    edges: pd.DataFrame,
) -> LabeledGraph:
    """
    Build a LabeledGraph from a vertex table (id, label) and an edge table
    (source, target[, label]).

    Vertex ids must cover 0..n-1 exactly once and every vertex needs a
    label. Missing edge labels are treated as absent.
    """

    _require_columns(vertices, ("id", "label"), "vertices")
    _require_columns(edges, ("source", "target"), "edges")

    n = len(vertices)
    labels: List[Hashable] = [None] * n
    for vid, label in zip(vertices["id"], vertices["label"]):
        vid = int(vid)
        if not 0 <= vid < n:
            raise GraphContractError(f"vertex id {vid} is out of range [0, {n})")
        if labels[vid] is not None:
            raise GraphContractError(f"vertex id {vid} appears more than once")
        if pd.isna(label):
            raise GraphContractError(f"vertex {vid} has a missing label")
        labels[vid] = label

    adjacency: List[Set[int]] = [set() for _ in range(n)]
    edge_labels: Dict[Tuple[int, int], Hashable] = {}
    has_label = "label" in edges.columns
    for row in edges.itertuples(index=False):
        src, dst = int(row.source), int(row.target)
        if not 0 <= src < n:
            raise GraphContractError(f"edge source {src} is out of range [0, {n})")
        adjacency[src].add(dst)
        if has_label and not pd.isna(row.label):
            edge_labels[(src, dst)] = row.label

    return LabeledGraph.from_adjacency(labels, adjacency, edge_labels)


def load_graph_from_files(
    vertices_path: Union[str, Path],
    edges_path: Union[str, Path],
) -> LabeledGraph:
    """
    Load vertex and edge tables from parquet or csv files.
    """

    logger = logging.getLogger("dualsim.load_graph")
    t0 = time.perf_counter()
    vertices = _read_table(Path(vertices_path))
    edges = _read_table(Path(edges_path))
    graph = load_graph_from_tables(vertices, edges)
    logger.info(
        "loaded vertices=%s edges=%s from %s in %.3fs",
        graph.size(),
        graph.edge_count(),
        Path(vertices_path).parent,
        time.perf_counter() - t0,
    )
    return graph


def _read_table(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"unsupported table format: {path}")


def _require_columns(df: pd.DataFrame, columns: Tuple[str, ...], name: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise GraphContractError(f"{name} table is missing columns {missing}")
