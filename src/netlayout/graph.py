"""
Flat node arena for layout graphs.

Nodes live in a single list and refer to each other only by id, so there
are no ownership cycles between nodes and edges. Neighbor lookups go
through an id -> index map.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Sequence

from .types import CategoryLike, Edge, EdgeCategory, Node
from .validation import (
    InvalidEdgeError,
    InvalidNodeError,
    validate_edge_endpoints,
    validate_node_ids,
)


class Graph:
    """
    Arena of nodes with reciprocal edge construction.

    Example:
        graph = Graph()
        a = graph.add_node(x=0.0, y=0.0)
        b = graph.add_node(x=10.0, y=0.0)
        graph.connect(a.id, b.id, strength=0.8, category=EdgeCategory.manager)

        engine = LayoutEngine()
        engine.run(graph, world_radius=5.0)
    """

    def __init__(self, nodes: Optional[Sequence[Node]] = None) -> None:
        self._nodes: list[Node] = []
        self._index: dict[int, int] = {}
        if nodes:
            self._index = validate_node_ids(nodes)
            self._nodes = list(nodes)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_edges(
        cls,
        n: int,
        pairs: Iterable[tuple[int, int]],
        strength: float = 1.0,
        category: CategoryLike = EdgeCategory.colleague,
    ) -> Graph:
        """Build a graph of ``n`` nodes (ids 0..n-1) with reciprocal edges."""
        graph = cls()
        for _ in range(n):
            graph.add_node()
        for a, b in pairs:
            graph.connect(a, b, strength=strength, category=category)
        return graph

    def add_node(self, id: Optional[int] = None, **attrs: Any) -> Node:
        """
        Add a node to the arena.

        Args:
            id: Node id. Defaults to one past the largest id in use.
            **attrs: Node attributes (x, y, fixed, or custom properties)

        Raises:
            InvalidNodeError: If the id is already in use
        """
        if id is None:
            id = max(self._index, default=-1) + 1
        if id in self._index:
            raise InvalidNodeError(f"Duplicate node id {id}")

        node = Node(id, **attrs)
        self._index[id] = len(self._nodes)
        self._nodes.append(node)
        return node

    def connect(
        self,
        a: int,
        b: int,
        strength: float = 1.0,
        category: CategoryLike = EdgeCategory.colleague,
    ) -> tuple[Edge, Edge]:
        """
        Add a symmetric relationship as a reciprocal pair of edges.

        Returns:
            (edge a -> b, edge b -> a)

        Raises:
            InvalidNodeError: If either id is unknown
            InvalidEdgeError: If a == b
        """
        if a == b:
            raise InvalidEdgeError(f"Cannot connect node {a} to itself")
        node_a = self.node(a)
        node_b = self.node(b)
        forward = node_a.add_edge(b, strength, category)
        backward = forward.reversed()
        node_b.edges.append(backward)
        return forward, backward

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes in arena order."""
        return self._nodes

    def node(self, id: int) -> Node:
        return self._nodes[self.index_of(id)]

    def index_of(self, id: int) -> int:
        try:
            return self._index[id]
        except KeyError:
            raise InvalidNodeError(f"Unknown node id {id}") from None

    def neighbors(self, id: int) -> list[int]:
        return [edge.target for edge in self.node(id).edges]

    def undirected_edges(self) -> Iterator[Edge]:
        """Yield each relationship once (edges with source < target)."""
        for node in self._nodes:
            for edge in node.edges:
                if edge.source < edge.target:
                    yield edge

    @property
    def edge_count(self) -> int:
        """Number of undirected relationships."""
        return sum(1 for _ in self.undirected_edges())

    def validate(self) -> Graph:
        """
        Validate ids and edge endpoints.

        Raises:
            InvalidNodeError: If ids are missing or duplicated
            InvalidEdgeError: If an edge references an unknown node
        """
        self._index = validate_node_ids(self._nodes)
        validate_edge_endpoints(self._nodes, self._index, strict=True)
        return self

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __contains__(self, id: object) -> bool:
        return id in self._index

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={self.edge_count})"


__all__ = ["Graph"]
