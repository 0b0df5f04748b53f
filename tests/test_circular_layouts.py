"""
Tests for circular initial placement.
"""

import math

import pytest

from netlayout import Graph, InvalidParameterError, LayoutEngine, Node, place_on_circle

# =============================================================================
# Test Fixtures
# =============================================================================


def create_simple_graph():
    """Create a 5-node ring."""
    return Graph.from_edges(5, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)])


def create_star_graph():
    """Create a star graph with center at 0."""
    return Graph.from_edges(6, [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5)])


def angle_of(node, cx=0.0, cy=0.0):
    return math.atan2(node.y - cy, node.x - cx)


# =============================================================================
# Circular Placement Tests
# =============================================================================


class TestPlaceOnCircle:
    """Tests for place_on_circle."""

    def test_nodes_on_circle(self):
        """All nodes end up at the requested radius."""
        graph = create_simple_graph()
        place_on_circle(graph.nodes, radius=5.0, center=(400, 300))

        for node in graph:
            dist = math.sqrt((node.x - 400) ** 2 + (node.y - 300) ** 2)
            assert dist == pytest.approx(5.0)

    def test_even_spacing(self):
        """Nodes are evenly spaced."""
        nodes = [Node(i) for i in range(4)]
        place_on_circle(nodes, radius=10.0)

        angles = sorted(angle_of(node) for node in nodes)
        expected_diff = 2 * math.pi / 4

        for i in range(len(angles)):
            diff = angles[(i + 1) % len(angles)] - angles[i]
            if diff < 0:
                diff += 2 * math.pi
            assert abs(diff - expected_diff) < 1e-9

    def test_start_angle(self):
        """The first slot sits at start_angle."""
        nodes = [Node(0), Node(1)]
        place_on_circle(nodes, radius=2.0, start_angle=math.pi / 2)

        assert nodes[0].x == pytest.approx(0.0, abs=1e-12)
        assert nodes[0].y == pytest.approx(2.0)
        assert nodes[1].y == pytest.approx(-2.0)

    def test_sort_by_degree(self):
        """The highest-degree node takes the first slot."""
        graph = create_star_graph()
        nodes = list(reversed(graph.nodes))
        place_on_circle(nodes, radius=1.0, sort_by="degree")

        hub = graph.node(0)
        assert hub.position == pytest.approx((1.0, 0.0))

    def test_custom_sort_function(self):
        """A callable sort key orders the slots."""
        nodes = [Node(i, priority=i) for i in range(5)]
        place_on_circle(nodes, radius=1.0, sort_by=lambda n: -n.priority)

        assert nodes[4].position == pytest.approx((1.0, 0.0))

    def test_fixed_nodes_keep_position(self):
        """Fixed nodes are not moved but keep their slot."""
        nodes = [Node(0, x=7.0, y=7.0, fixed=1), Node(1), Node(2), Node(3)]
        place_on_circle(nodes, radius=1.0)

        assert nodes[0].position == (7.0, 7.0)
        assert nodes[1].position == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_single_node(self):
        """A single node sits at angle zero."""
        nodes = [Node(0)]
        place_on_circle(nodes, radius=3.0)
        assert nodes[0].position == pytest.approx((3.0, 0.0))

    def test_empty(self):
        """Empty input is a no-op."""
        place_on_circle([], radius=3.0)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_invalid_radius(self, radius):
        """Radius must be positive."""
        with pytest.raises(InvalidParameterError, match="radius"):
            place_on_circle([Node(0)], radius=radius)

    def test_seeds_layout(self):
        """A circle-seeded graph lays out without coincident nodes."""
        graph = create_simple_graph()
        place_on_circle(graph.nodes, radius=5.0)

        engine = LayoutEngine().run(graph, world_radius=5.0)

        assert engine.is_complete
        assert engine.positions().shape == (5, 2)
