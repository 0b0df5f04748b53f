"""
Input validation utilities for the layout engine.

Provides centralized validation functions for nodes, edges, the world
radius and engine parameters. Raises descriptive exceptions on invalid
input.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node is malformed or its id is not unique."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references invalid nodes."""

    pass


class InvalidParameterError(ValidationError):
    """Raised when an engine parameter is out of range."""

    pass


class LayoutWarning(UserWarning):
    """Warning issued when a layout cannot start on the given input."""

    pass


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a parameter is a finite, strictly positive number.

    Raises:
        InvalidParameterError: If value <= 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """Validate that a parameter is finite and >= 0."""
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value}")
    return value


def validate_open_unit_interval(name: str, value: float) -> float:
    """
    Validate that a parameter lies strictly between 0 and 1.

    Raises:
        InvalidParameterError: If value not in (0, 1)
    """
    value = float(value)
    if not 0.0 < value < 1.0:
        raise InvalidParameterError(f"{name} must be in (0, 1), got {value}")
    return value


def validate_strength(strength: float) -> float:
    """
    Validate a relationship strength is in [0, 1].

    Raises:
        InvalidEdgeError: If strength not in [0, 1]
    """
    strength = float(strength)
    if not 0.0 <= strength <= 1.0:
        raise InvalidEdgeError(f"Edge strength must be in [0, 1], got {strength}")
    return strength


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is a positive integer.

    Raises:
        InvalidParameterError: If iterations is not an integer (bools
            included) or is < 1
    """
    if isinstance(iterations, bool) or not isinstance(iterations, numbers.Integral):
        raise InvalidParameterError(f"iterations must be an integer, got {iterations!r}")
    if iterations < 1:
        raise InvalidParameterError(f"iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_world_radius(radius: float) -> float:
    """
    Validate the world radius used to derive the optimal distance.

    Raises:
        InvalidParameterError: If radius is not a finite positive number
    """
    return validate_positive("world_radius", radius)


def validate_node_ids(nodes: Sequence[Any]) -> dict[int, int]:
    """
    Validate node ids are present and unique.

    Args:
        nodes: Sequence of Node objects

    Returns:
        Mapping of node id to position in ``nodes``

    Raises:
        InvalidNodeError: If an id is missing or duplicated
    """
    index: dict[int, int] = {}
    for i, node in enumerate(nodes):
        node_id = getattr(node, "id", None)
        if node_id is None:
            raise InvalidNodeError(f"Node at position {i} has no id")
        if node_id in index:
            raise InvalidNodeError(
                f"Duplicate node id {node_id} at positions {index[node_id]} and {i}"
            )
        index[node_id] = i
    return index


def validate_edge_endpoints(
    nodes: Sequence[Any],
    index: dict[int, int],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every edge is owned by its source and targets a known node.

    One-directional edges are accepted; only dangling references are issues.

    Args:
        nodes: Sequence of Node objects
        index: Mapping of node id to arena position (see validate_node_ids)
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (node_id, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and invalid edges found
    """
    issues: list[tuple[int, str]] = []

    for node in nodes:
        for edge in node.edges:
            if edge.source != node.id:
                issues.append(
                    (node.id, f"Node {node.id}: edge source {edge.source} is not the owning node")
                )
            if edge.target not in index:
                issues.append((node.id, f"Node {node.id}: edge target {edge.target} does not exist"))

    if strict and issues:
        msg = "Invalid edges:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


__all__ = [
    "ValidationError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidParameterError",
    "LayoutWarning",
    "validate_positive",
    "validate_non_negative",
    "validate_open_unit_interval",
    "validate_strength",
    "validate_iterations",
    "validate_world_radius",
    "validate_node_ids",
    "validate_edge_endpoints",
]
