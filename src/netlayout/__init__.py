"""
netlayout: Force-directed layout for relationship networks.

This package positions the nodes of a relationship graph with the
Fruchterman-Reingold algorithm, iterating until the layout settles or a
safety iteration cap is reached.

Components:
- types: Node, Edge and lifecycle enums
- graph: Flat node arena with reciprocal edge construction
- force: The LayoutEngine and its per-run state
- circular: Initial circular placement
- metrics: Layout quality diagnostics
"""

__version__ = "0.1.0"

# Circular placement
from .circular import place_on_circle

# Base classes for building layouts
from .base import BaseLayout, IterativeLayout

# Force-directed engine
from .force import LayoutEngine, LayoutRun

# Node arena
from .graph import Graph

# Metrics for layout quality evaluation
from .metrics import (
    edge_crossings,
    edge_length_uniformity,
    edge_length_variance,
    edge_lengths,
    kinetic_energy,
    layout_quality_summary,
    min_node_distance,
)

# Shared types
from .types import (
    CategoryLike,
    Edge,
    EdgeCategory,
    Event,
    EventType,
    LayoutState,
    Node,
)

# Validation utilities
from .validation import (
    InvalidEdgeError,
    InvalidNodeError,
    InvalidParameterError,
    LayoutWarning,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "Edge",
    "EdgeCategory",
    "CategoryLike",
    "LayoutState",
    "EventType",
    "Event",
    # Arena
    "Graph",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    # Force-directed engine
    "LayoutEngine",
    "LayoutRun",
    # Placement
    "place_on_circle",
    # Metrics
    "edge_lengths",
    "edge_length_variance",
    "edge_length_uniformity",
    "edge_crossings",
    "min_node_distance",
    "kinetic_energy",
    "layout_quality_summary",
    # Validation
    "ValidationError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidParameterError",
    "LayoutWarning",
]
