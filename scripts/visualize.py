#!/usr/bin/env python3
"""
Visualization script for the network layout engine.

Renders the final layout of a few sample networks, plus a strip of
intermediate frames captured from tick events, into ./build/

Usage:
    uv run python scripts/visualize.py
"""

from pathlib import Path

import matplotlib.pyplot as plt

from netlayout import EdgeCategory, Graph, LayoutEngine, place_on_circle

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"

WORLD_RADIUS = 5.0

CATEGORY_COLORS = {
    EdgeCategory.colleague: "gray",
    EdgeCategory.direct_report: "darkorange",
    EdgeCategory.manager: "firebrick",
    EdgeCategory.frequent_contact: "seagreen",
}


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def draw_graph(graph, positions, title="Network Layout", ax=None):
    """Draw a graph at the given (n, 2) positions on an axis."""
    index = {node.id: i for i, node in enumerate(graph)}

    # Draw edges, each relationship once
    for edge in graph.undirected_edges():
        a = positions[index[edge.source]]
        b = positions[index[edge.target]]
        ax.plot(
            [a[0], b[0]],
            [a[1], b[1]],
            color=CATEGORY_COLORS.get(edge.category, "gray"),
            alpha=0.3 + 0.7 * edge.strength,
            linewidth=1,
        )

    ax.scatter(
        positions[:, 0],
        positions[:, 1],
        s=100,
        c="steelblue",
        zorder=5,
        edgecolors="white",
        linewidth=1,
    )

    for node, (x, y) in zip(graph, positions):
        ax.annotate(str(node.id), (x, y), ha="center", va="center", fontsize=8, color="white")

    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_aspect("equal")
    ax.axis("off")


def create_team_graph():
    """A manager with two teams and a few cross-team contacts."""
    graph = Graph()
    for _ in range(11):
        graph.add_node()

    for lead in (1, 2):
        graph.connect(0, lead, strength=0.9, category=EdgeCategory.manager)
    for member in (3, 4, 5, 6):
        graph.connect(1, member, strength=0.7, category=EdgeCategory.direct_report)
    for member in (7, 8, 9, 10):
        graph.connect(2, member, strength=0.7, category=EdgeCategory.direct_report)
    for a, b in [(3, 4), (4, 5), (7, 8), (9, 10)]:
        graph.connect(a, b, strength=0.5, category=EdgeCategory.colleague)
    for a, b in [(5, 8), (6, 10)]:
        graph.connect(a, b, strength=0.3, category=EdgeCategory.frequent_contact)
    return graph


def create_ladder_graph():
    """Two concentric rings joined by spokes."""
    pairs = [(i, (i + 1) % 6) for i in range(6)]
    pairs += [(i, i + 6) for i in range(6)]
    pairs += [(6 + i, 6 + (i + 1) % 6) for i in range(6)]
    return Graph.from_edges(12, pairs)


def save_layout(graph, name, filename):
    """Lay out a graph and save the final frame."""
    place_on_circle(graph.nodes, WORLD_RADIUS)
    engine = LayoutEngine(animate=False).run(graph, WORLD_RADIUS)

    fig, ax = plt.subplots(figsize=(8, 8))
    title = f"{name} ({engine.completion_reason.name}, {engine.iteration} iterations)"
    draw_graph(graph, engine.positions(), title, ax=ax)
    plt.tight_layout()

    filepath = BUILD_DIR / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


def save_frames(graph, name, filename, frames=6):
    """Save evenly spaced frames published by tick events."""
    place_on_circle(graph.nodes, WORLD_RADIUS)
    captured = []

    engine = LayoutEngine(animate=True)
    engine.on("tick", lambda e: captured.append((e["iteration"], e["positions"])))
    engine.run(graph, WORLD_RADIUS)

    stride = max(1, len(captured) // (frames - 1))
    picked = captured[::stride][: frames - 1] + [captured[-1]]

    fig, axes = plt.subplots(1, len(picked), figsize=(4 * len(picked), 4))
    for ax, (iteration, positions) in zip(axes, picked):
        draw_graph(graph, positions, f"iteration {iteration}", ax=ax)

    fig.suptitle(name, fontsize=14, fontweight="bold")
    plt.tight_layout()

    filepath = BUILD_DIR / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


def generate_all():
    """Generate all visualization images."""
    ensure_build_dir()

    print("Generating final layouts...")
    save_layout(create_team_graph(), "Teams", "teams.png")
    save_layout(create_ladder_graph(), "Ladder", "ladder.png")

    print("Generating animation frames...")
    save_frames(create_team_graph(), "Teams (animated)", "teams_frames.png")

    print()
    print(f"All images saved to: {BUILD_DIR.absolute()}")


if __name__ == "__main__":
    generate_all()
