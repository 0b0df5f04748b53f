"""
Circular initial placement.

Places nodes evenly distributed on a circle of the world radius, which is
the usual starting arrangement handed to the layout engine.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence, Union

from .types import Node
from .validation import validate_positive


def place_on_circle(
    nodes: Sequence[Node],
    radius: float,
    center: tuple[float, float] = (0.0, 0.0),
    start_angle: float = 0.0,
    sort_by: Optional[Union[str, Callable[[Node], Any]]] = None,
) -> None:
    """
    Position nodes evenly around a circle, in place.

    Fixed nodes keep their position but still occupy their slot, so the
    spacing of the other nodes does not depend on which nodes are pinned.

    Args:
        nodes: Nodes to place
        radius: Circle radius
        center: Circle center as (x, y)
        start_angle: Angle of the first slot in radians
        sort_by: Slot ordering. Options:
            - None: Keep original order
            - 'degree': Highest degree first
            - callable: Custom function taking a Node and returning a sort key

    Raises:
        InvalidParameterError: If radius is not positive
    """
    radius = validate_positive("radius", radius)
    n = len(nodes)
    if n == 0:
        return

    order = list(range(n))
    if sort_by == "degree":
        order.sort(key=lambda i: -nodes[i].degree)
    elif callable(sort_by):
        sort_fn = sort_by
        order.sort(key=lambda i: sort_fn(nodes[i]))

    cx, cy = center
    angle_step = 2 * math.pi / n

    for slot, node_idx in enumerate(order):
        node = nodes[node_idx]
        if node.fixed:
            continue
        angle = start_angle + slot * angle_step
        node.x = cx + radius * math.cos(angle)
        node.y = cy + radius * math.sin(angle)


__all__ = ["place_on_circle"]
