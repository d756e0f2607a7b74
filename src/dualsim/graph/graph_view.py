from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Hashable, Optional

Vertex = int
Label = Hashable
EdgeLabel = Hashable


class GraphView(ABC):
    """
    Read-only view over an immutable vertex- and edge-labeled graph.

    Vertices are the integers 0..size()-1. The matcher only ever reads
    through this interface; implementations must not change between
    calls made during a match.
    """

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def label(self, v: Vertex) -> Label:
        raise NotImplementedError

    @abstractmethod
    def children(self, v: Vertex) -> AbstractSet[Vertex]:
        raise NotImplementedError

    @abstractmethod
    def edge_label(self, src: Vertex, dst: Vertex) -> Optional[EdgeLabel]:
        """
        Label of edge (src, dst), or None when the edge is unlabeled
        or absent.
        """
        raise NotImplementedError

    @abstractmethod
    def vertices_with_label(self, label: Label) -> AbstractSet[Vertex]:
        raise NotImplementedError

    def vertices(self) -> range:
        return range(self.size())
