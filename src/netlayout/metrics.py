"""
Layout quality metrics.

Provides quantitative measures of a finished (or in-progress) layout:
- Edge lengths, variance and uniformity
- Edge crossings: Number of intersecting edges
- Minimum node distance: Closest pair of nodes
- Kinetic energy: How much motion is left in the system

Each undirected relationship is counted once (edges with source < target),
matching how the layout engine applies attraction.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from .types import Node


def _undirected_edges(nodes: Sequence[Node]) -> list[tuple[Node, Node]]:
    """Resolve each source < target edge to its (source, target) nodes."""
    by_id = {node.id: node for node in nodes}
    pairs = []
    for node in nodes:
        for edge in node.edges:
            if edge.source < edge.target and edge.target in by_id:
                pairs.append((node, by_id[edge.target]))
    return pairs


def edge_lengths(nodes: Sequence[Node]) -> list[float]:
    """Get list of edge lengths, one per undirected relationship."""
    return [
        math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2) for a, b in _undirected_edges(nodes)
    ]


def edge_length_variance(nodes: Sequence[Node]) -> float:
    """
    Compute the variance of edge lengths.

    Lower variance indicates more uniform edge lengths.

    Returns:
        Variance of edge lengths (0.0 for graphs without edges)
    """
    lengths = edge_lengths(nodes)
    if not lengths:
        return 0.0
    return float(np.var(lengths))


def edge_length_uniformity(nodes: Sequence[Node]) -> float:
    """
    Compute edge length uniformity (0-1, higher is better).

    Returns:
        1 - (std_dev / mean), clamped to [0, 1]
    """
    lengths = edge_lengths(nodes)
    if not lengths:
        return 1.0

    mean = float(np.mean(lengths))
    if mean == 0:
        return 0.0

    std_dev = float(np.std(lengths))
    return max(0.0, min(1.0, 1.0 - std_dev / mean))


def edge_crossings(nodes: Sequence[Node]) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints).

    Time Complexity: O(m^2) where m = number of edges
    """
    pairs = _undirected_edges(nodes)
    crossings = 0

    for i in range(len(pairs)):
        a1, b1 = pairs[i]
        for j in range(i + 1, len(pairs)):
            a2, b2 = pairs[j]
            # Skip if edges share an endpoint
            if a1 is a2 or a1 is b2 or b1 is a2 or b1 is b2:
                continue
            if _segments_intersect(a1.position, b1.position, a2.position, b2.position):
                crossings += 1

    return crossings


def _segments_intersect(
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    p4: tuple[float, float],
) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: tuple[float, float], b: tuple[float, float], c: tuple[float, float]) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


def min_node_distance(nodes: Sequence[Node]) -> float:
    """
    Smallest distance between any two nodes.

    Returns:
        Minimum pairwise distance, or inf for fewer than two nodes
    """
    if len(nodes) < 2:
        return math.inf

    pos = np.array([(node.x, node.y) for node in nodes], dtype=np.float64)
    diff = pos[:, np.newaxis, :] - pos[np.newaxis, :, :]
    dist = np.sqrt((diff**2).sum(axis=-1))
    np.fill_diagonal(dist, np.inf)
    return float(dist.min())


def kinetic_energy(nodes: Sequence[Node]) -> float:
    """Sum of 0.5 * |v|^2 over all nodes (unit mass)."""
    if not nodes:
        return 0.0
    vel = np.array([(node.vx, node.vy) for node in nodes], dtype=np.float64)
    return float(0.5 * (vel**2).sum())


def layout_quality_summary(nodes: Sequence[Node]) -> dict[str, Any]:
    """
    Compute a summary of layout quality metrics.

    Returns:
        Dictionary with all metrics:
        - edge_count: Number of undirected relationships
        - edge_crossings: Number of edge crossings
        - edge_length_variance: Variance of edge lengths
        - edge_length_uniformity: Uniformity score (0-1)
        - min_node_distance: Closest pair distance
        - kinetic_energy: Remaining motion
    """
    return {
        "edge_count": len(_undirected_edges(nodes)),
        "edge_crossings": edge_crossings(nodes),
        "edge_length_variance": edge_length_variance(nodes),
        "edge_length_uniformity": edge_length_uniformity(nodes),
        "min_node_distance": min_node_distance(nodes),
        "kinetic_energy": kinetic_energy(nodes),
    }


__all__ = [
    "edge_lengths",
    "edge_length_variance",
    "edge_length_uniformity",
    "edge_crossings",
    "min_node_distance",
    "kinetic_energy",
    "layout_quality_summary",
]
