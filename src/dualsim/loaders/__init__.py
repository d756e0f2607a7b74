from dualsim.loaders.graph_loader import load_graph_from_files, load_graph_from_tables

__all__ = [
    "load_graph_from_files",
    "load_graph_from_tables",
]
