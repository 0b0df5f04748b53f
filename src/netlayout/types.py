"""
Common types for the network layout engine.

This module provides the data model shared by the graph arena and the
layout engine:
- Node: Graph vertex with position, velocity and its own outgoing edges
- Edge: Directed reference pair between two node ids
- EdgeCategory: Relationship classification (inert to the layout math)
- LayoutState: Lifecycle of a layout run
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

import math
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Optional, TypedDict, Union

from .validation import InvalidEdgeError, InvalidNodeError, validate_strength

if TYPE_CHECKING:
    import numpy as np


class EdgeCategory(str, Enum):
    """Relationship category carried by an edge."""

    colleague = "colleague"
    direct_report = "direct_report"
    manager = "manager"
    frequent_contact = "frequent_contact"


CategoryLike = Union[EdgeCategory, str]


class LayoutState(IntEnum):
    """
    Lifecycle of a layout run.

    - idle: No run data (initial state)
    - running: A run is active and accepting iterations
    - converged: Terminal; max velocity dropped below the threshold
    - max_iterations_reached: Terminal; the iteration cap was hit
    """

    idle = 0
    running = 1
    converged = 2
    max_iterations_reached = 3

    @property
    def is_complete(self) -> bool:
        return self in (LayoutState.converged, LayoutState.max_iterations_reached)


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: A run has been started
    - tick: Positions were published to presentation
    - end: The run reached a terminal state
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    iteration: int
    max_velocity: float
    state: LayoutState
    positions: "np.ndarray"


class Edge:
    """
    Directed edge between two nodes, referenced by id.

    Attributes:
        source: Id of the node owning this edge
        target: Id of the node this edge points at
        strength: Relationship strength in [0, 1]
        category: Relationship category (EdgeCategory or free-form string)
    """

    __slots__ = ("source", "target", "strength", "category")

    def __init__(
        self,
        source: int,
        target: int,
        strength: float = 1.0,
        category: CategoryLike = EdgeCategory.colleague,
    ) -> None:
        if source is None:
            raise InvalidEdgeError("Edge source cannot be None")
        if target is None:
            raise InvalidEdgeError("Edge target cannot be None")

        self.source: int = source
        self.target: int = target
        self.strength: float = validate_strength(strength)
        self.category: CategoryLike = category

    def reversed(self) -> Edge:
        """Return the reciprocal edge with the same strength and category."""
        return Edge(self.target, self.source, self.strength, self.category)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return (
            self.source == other.source
            and self.target == other.target
            and self.strength == other.strength
            and self.category == other.category
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.strength, self.category))

    def __repr__(self) -> str:
        category = getattr(self.category, "value", self.category)
        return f"Edge({self.source} -> {self.target}, strength={self.strength:.2f}, {category})"


class Node:
    """
    Graph node with position, velocity and outgoing edges.

    Attributes:
        id: Unique, stable identity (used for tie-breaking, never for math)
        x: X coordinate
        y: Y coordinate
        vx: X velocity (force accumulator, carried between iterations)
        vy: Y velocity
        edges: Outgoing edges owned by this node
        fixed: Nonzero pins the node in place
    """

    def __init__(self, id: Optional[int] = None, **kwargs: Any) -> None:
        """Initialize node with optional properties."""
        self.id: Optional[int] = id
        self.x: float = float(kwargs.get("x", 0.0))
        self.y: float = float(kwargs.get("y", 0.0))
        self.vx: float = float(kwargs.get("vx", 0.0))
        self.vy: float = float(kwargs.get("vy", 0.0))
        self.fixed: int = kwargs.get("fixed", 0)
        self.edges: list[Edge] = list(kwargs.get("edges") or [])

        # Copy any additional custom properties (state, awareness, ...).
        # Settable properties such as position go through their setters;
        # computed ones such as speed cannot be supplied.
        for key, value in kwargs.items():
            attr = getattr(type(self), key, None)
            if isinstance(attr, property):
                if attr.fset is None:
                    raise InvalidNodeError(f"Node attribute '{key}' is computed and cannot be set")
                setattr(self, key, value)
            elif not hasattr(self, key):
                setattr(self, key, value)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[float, float]) -> None:
        self.x, self.y = float(value[0]), float(value[1])

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    @velocity.setter
    def velocity(self, value: tuple[float, float]) -> None:
        self.vx, self.vy = float(value[0]), float(value[1])

    @property
    def speed(self) -> float:
        """Magnitude of the current velocity."""
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)

    @property
    def degree(self) -> int:
        return len(self.edges)

    def add_edge(
        self,
        target: Union[Node, int],
        strength: float = 1.0,
        category: CategoryLike = EdgeCategory.colleague,
    ) -> Edge:
        """
        Append a single directed edge from this node to ``target``.

        Symmetric relationships need the reciprocal edge on the target as
        well; see Graph.connect().
        """
        if self.id is None:
            raise InvalidEdgeError("Cannot add an edge to a node without an id")
        target_id = target.id if isinstance(target, Node) else target
        edge = Edge(self.id, target_id, strength, category)  # type: ignore[arg-type]
        self.edges.append(edge)
        return edge

    def __repr__(self) -> str:
        return f"Node(id={self.id}, x={self.x:.2f}, y={self.y:.2f})"


__all__ = [
    "EdgeCategory",
    "CategoryLike",
    "LayoutState",
    "EventType",
    "Event",
    "Edge",
    "Node",
]
