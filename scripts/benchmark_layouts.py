#!/usr/bin/env python3
"""
Benchmark the layout engine on generated networks.

Times batch runs (whole budget in one tick) and animated runs (a few
iterations per tick) and checks that both drive modes end in the same
positions.

Usage:
    uv run python scripts/benchmark_layouts.py [--sizes N,...] [--families NAME,...]

Examples:
    uv run python scripts/benchmark_layouts.py
    uv run python scripts/benchmark_layouts.py --sizes 50,100 --families ring,random
    uv run python scripts/benchmark_layouts.py --output results.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from typing import Any, Callable

import numpy as np

from netlayout import Graph, LayoutEngine, place_on_circle

WORLD_RADIUS = 5.0


def ring_graph(n: int) -> Graph:
    return Graph.from_edges(n, [(i, (i + 1) % n) for i in range(n)] if n > 2 else [])


def star_graph(n: int) -> Graph:
    return Graph.from_edges(n, [(0, i) for i in range(1, n)])


def random_graph(n: int, edge_prob: float = 0.1, seed: int = 42) -> Graph:
    rng = random.Random(seed)
    pairs = [(i, j) for i in range(n) for j in range(i + 1, n) if rng.random() < edge_prob]
    return Graph.from_edges(n, pairs)


FAMILIES: dict[str, Callable[[int], Graph]] = {
    "ring": ring_graph,
    "star": star_graph,
    "random": random_graph,
}


def benchmark_layout(make_graph: Callable[[int], Graph], n: int, animate: bool) -> dict[str, Any]:
    """
    Benchmark a single run.

    Returns:
        Dict with timing, outcome and final positions
    """
    # Fresh graph so positions don't carry over between runs
    graph = make_graph(n)
    place_on_circle(graph.nodes, WORLD_RADIUS)

    engine = LayoutEngine(animate=animate, random_seed=0)
    ticks = 0

    start = time.perf_counter()
    engine.start(graph, WORLD_RADIUS)
    while not engine.tick():
        ticks += 1
    elapsed = time.perf_counter() - start

    return {
        "time_seconds": elapsed,
        "num_nodes": n,
        "num_edges": graph.edge_count,
        "iterations": engine.iteration,
        "ticks": ticks + 1,
        "reason": engine.completion_reason.name,
        "positions": engine.positions(),
    }


def run_benchmarks(sizes: list[int], families: list[str]) -> list[dict]:
    """Run benchmarks for every family and size."""
    results = []

    print(f"\nBenchmarking {len(families)} families at sizes {sizes}")
    print("=" * 80)
    print(
        f"{'Graph':<16s}{'Edges':>8s}{'Iters':>8s}{'Batch s':>10s}"
        f"{'Anim s':>10s}{'Ticks':>8s}{'Parity':>8s}  Reason"
    )
    print("-" * 80)

    for family in families:
        make_graph = FAMILIES[family]
        for n in sizes:
            batch = benchmark_layout(make_graph, n, animate=False)
            animated = benchmark_layout(make_graph, n, animate=True)
            parity = bool(np.array_equal(batch["positions"], animated["positions"]))

            name = f"{family}_{n}"
            print(
                f"{name:<16s}{batch['num_edges']:>8d}{batch['iterations']:>8d}"
                f"{batch['time_seconds']:>10.4f}{animated['time_seconds']:>10.4f}"
                f"{animated['ticks']:>8d}{'ok' if parity else 'DIFF':>8s}  {batch['reason']}"
            )

            results.append(
                {
                    "graph": name,
                    "num_nodes": n,
                    "num_edges": batch["num_edges"],
                    "iterations": batch["iterations"],
                    "reason": batch["reason"],
                    "batch_seconds": batch["time_seconds"],
                    "animated_seconds": animated["time_seconds"],
                    "animated_ticks": animated["ticks"],
                    "parity": parity,
                }
            )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark the network layout engine")
    parser.add_argument("--sizes", default="10,25,50,100", help="Comma-separated node counts")
    parser.add_argument(
        "--families",
        default=",".join(FAMILIES),
        help=f"Comma-separated graph families ({', '.join(FAMILIES)})",
    )
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",")]
    families = []
    for name in args.families.split(","):
        if name in FAMILIES:
            families.append(name)
        else:
            print(f"Warning: Unknown family '{name}', skipping")

    results = run_benchmarks(sizes, families)

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
