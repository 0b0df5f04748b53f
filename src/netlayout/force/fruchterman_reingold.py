"""
Fruchterman-Reingold force-directed layout engine.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The engine simulates a physical system where:
- All node pairs within a cutoff radius repel each other (k^2 / d)
- Connected node pairs attract each other (d^2 / k)
- Velocity carries over between iterations and is damped after every
  position update, so the system loses energy and settles
"""

from __future__ import annotations

import logging
import math
import random
import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence, Union

import numpy as np

from ..base import EventCallback, IterativeLayout
from ..graph import Graph
from ..types import EventType, LayoutState, Node
from ..validation import (
    LayoutWarning,
    validate_edge_endpoints,
    validate_iterations,
    validate_node_ids,
    validate_non_negative,
    validate_open_unit_interval,
    validate_positive,
    validate_world_radius,
)

if TYPE_CHECKING:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

# Squared distance below which two nodes are treated as coincident.
EPSILON_SQ = 1e-4

NodesLike = Union[Graph, Sequence[Node]]


def _random_direction(rng: random.Random) -> tuple[float, float]:
    """Unit vector at a uniformly drawn angle."""
    angle = rng.random() * 2.0 * math.pi
    return (math.cos(angle), math.sin(angle))


@dataclass
class LayoutRun:
    """
    Transient state of one layout invocation.

    Attributes:
        nodes: Borrowed node collection, in arena order
        index: Node id -> arena position
        k: Optimal distance derived at start
        cutoff_sq: Squared repulsion cutoff radius
        iteration: Completed iterations
        max_velocity: Largest speed seen in the last completed iteration
        state: running, converged or max_iterations_reached
        rng: Jitter source, seeded from the engine's random_seed at start
    """

    nodes: list[Node]
    index: dict[int, int]
    k: float
    cutoff_sq: float
    iteration: int = 0
    max_velocity: float = 0.0
    state: LayoutState = LayoutState.running
    rng: random.Random = field(default_factory=random.Random)

    @property
    def is_complete(self) -> bool:
        """Whether the current run reached a terminal state."""
        return self.state.is_complete

    @property
    def node_count(self) -> int:
        return len(self.nodes)


class LayoutEngine(IterativeLayout):
    """
    Fruchterman-Reingold layout engine with velocity damping.

    The engine borrows a node collection for the duration of a run and
    mutates node positions and velocities in place. A run is advanced
    either one iteration at a time (step), one external tick at a time
    (tick), or back-to-back until completion (kick/run).

    Example:
        graph = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3)])
        place_on_circle(graph.nodes, radius=5.0)

        engine = LayoutEngine(animate=False)
        engine.run(graph, world_radius=5.0)

        print(engine.completion_reason, engine.iteration)
        for node in graph:
            print(f"Node {node.id}: ({node.x}, {node.y})")
    """

    def __init__(
        self,
        *,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        max_iterations: int = 300,
        attraction_strength: float = 1.0,
        repulsion_strength: float = 10.0,
        repulsion_cutoff: float = 3.0,
        damping: float = 0.85,
        base_optimal_distance: float = 3.0,
        auto_scale: bool = True,
        convergence_threshold: float = 0.01,
        time_step: float = 0.02,
        animate: bool = True,
        iterations_per_tick: int = 5,
        jitter_distance: float = 0.1,
        random_seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the layout engine.

        Args:
            on_start: Callback for start event
            on_tick: Callback for tick event (positions published)
            on_end: Callback for end event (run reached a terminal state)
            max_iterations: Iteration cap per run
            attraction_strength: Scale of the d^2 / k attraction
            repulsion_strength: Scale of the k^2 / d repulsion
            repulsion_cutoff: Repulsion cutoff radius as a multiple of k
            damping: Velocity multiplier applied after each update, in (0, 1)
            base_optimal_distance: Base spacing constant
            auto_scale: Scale the spacing by world area / node count
            convergence_threshold: Max speed at which the layout counts as settled
            time_step: Integration time step
            animate: Animated drive mode (False = batch)
            iterations_per_tick: Iterations per tick() in animated mode
            jitter_distance: Separation synthesized for coincident nodes
            random_seed: Random seed for reproducible jitter
        """
        super().__init__(
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            max_iterations=max_iterations,
        )

        self._attraction_strength: float = validate_non_negative(
            "attraction_strength", attraction_strength
        )
        self._repulsion_strength: float = validate_non_negative(
            "repulsion_strength", repulsion_strength
        )
        self._repulsion_cutoff: float = validate_positive("repulsion_cutoff", repulsion_cutoff)
        self._damping: float = validate_open_unit_interval("damping", damping)
        self._base_optimal_distance: float = validate_positive(
            "base_optimal_distance", base_optimal_distance
        )
        self._auto_scale: bool = bool(auto_scale)
        self._convergence_threshold: float = validate_non_negative(
            "convergence_threshold", convergence_threshold
        )
        self._time_step: float = validate_positive("time_step", time_step)
        self._animate: bool = bool(animate)
        self._iterations_per_tick: int = validate_iterations(iterations_per_tick)
        self._jitter_distance: float = validate_positive("jitter_distance", jitter_distance)
        self._random_seed: Optional[int] = random_seed

        self._run: Optional[LayoutRun] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def attraction_strength(self) -> float:
        """Get attraction strength multiplier."""
        return self._attraction_strength

    @attraction_strength.setter
    def attraction_strength(self, value: float) -> None:
        """Set attraction strength multiplier (must be >= 0)."""
        self._attraction_strength = validate_non_negative("attraction_strength", value)

    @property
    def repulsion_strength(self) -> float:
        """Get repulsion strength multiplier."""
        return self._repulsion_strength

    @repulsion_strength.setter
    def repulsion_strength(self, value: float) -> None:
        """Set repulsion strength multiplier (must be >= 0)."""
        self._repulsion_strength = validate_non_negative("repulsion_strength", value)

    @property
    def repulsion_cutoff(self) -> float:
        """Get repulsion cutoff as a multiple of k (applies from the next start)."""
        return self._repulsion_cutoff

    @repulsion_cutoff.setter
    def repulsion_cutoff(self, value: float) -> None:
        """Set repulsion cutoff multiple (must be positive)."""
        self._repulsion_cutoff = validate_positive("repulsion_cutoff", value)

    @property
    def damping(self) -> float:
        """Get velocity damping factor."""
        return self._damping

    @damping.setter
    def damping(self, value: float) -> None:
        """Set velocity damping factor (must be in (0, 1))."""
        self._damping = validate_open_unit_interval("damping", value)

    @property
    def base_optimal_distance(self) -> float:
        """Get base spacing constant."""
        return self._base_optimal_distance

    @base_optimal_distance.setter
    def base_optimal_distance(self, value: float) -> None:
        """Set base spacing constant (must be positive)."""
        self._base_optimal_distance = validate_positive("base_optimal_distance", value)

    @property
    def auto_scale(self) -> bool:
        """Get whether k scales with world area and node count."""
        return self._auto_scale

    @auto_scale.setter
    def auto_scale(self, value: bool) -> None:
        """Set whether k scales with world area and node count."""
        self._auto_scale = bool(value)

    @property
    def convergence_threshold(self) -> float:
        """Get max speed below which the layout counts as settled."""
        return self._convergence_threshold

    @convergence_threshold.setter
    def convergence_threshold(self, value: float) -> None:
        """Set convergence threshold (must be >= 0)."""
        self._convergence_threshold = validate_non_negative("convergence_threshold", value)

    @property
    def time_step(self) -> float:
        """Get integration time step."""
        return self._time_step

    @time_step.setter
    def time_step(self, value: float) -> None:
        """Set integration time step (must be positive)."""
        self._time_step = validate_positive("time_step", value)

    @property
    def animate(self) -> bool:
        """Get drive mode (True = animated, False = batch)."""
        return self._animate

    @animate.setter
    def animate(self, value: bool) -> None:
        """Set drive mode (True = animated, False = batch)."""
        self._animate = bool(value)

    @property
    def iterations_per_tick(self) -> int:
        """Get iterations performed per tick() in animated mode."""
        return self._iterations_per_tick

    @iterations_per_tick.setter
    def iterations_per_tick(self, value: int) -> None:
        """Set iterations per tick (must be >= 1)."""
        self._iterations_per_tick = validate_iterations(value)

    @property
    def jitter_distance(self) -> float:
        """Get separation synthesized for coincident nodes."""
        return self._jitter_distance

    @jitter_distance.setter
    def jitter_distance(self, value: float) -> None:
        """Set jitter distance (must be positive)."""
        self._jitter_distance = validate_positive("jitter_distance", value)

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible jitter."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed for reproducible jitter (applies from the next start)."""
        self._random_seed = value

    # -------------------------------------------------------------------------
    # Run state queries
    # -------------------------------------------------------------------------

    @property
    def run_state(self) -> Optional[LayoutRun]:
        """Get the current LayoutRun (None while idle)."""
        return self._run

    @property
    def state(self) -> LayoutState:
        """Get lifecycle state (idle when no run exists)."""
        if self._run is None:
            return LayoutState.idle
        return self._run.state

    @property
    def is_running(self) -> bool:
        """Whether a run is active and accepting iterations."""
        return self.state is LayoutState.running

    @property
    def is_complete(self) -> bool:
        """Whether the current run reached a terminal state."""
        return self.state.is_complete

    @property
    def completion_reason(self) -> Optional[LayoutState]:
        """Terminal state of the run, or None while idle or running."""
        state = self.state
        return state if state.is_complete else None

    @property
    def iteration(self) -> int:
        """Get completed iterations of the current run."""
        return self._run.iteration if self._run is not None else 0

    @property
    def max_velocity(self) -> float:
        """Get largest speed seen in the last completed iteration."""
        return self._run.max_velocity if self._run is not None else 0.0

    @property
    def optimal_distance(self) -> Optional[float]:
        """Get k for the current run (None while idle)."""
        return self._run.k if self._run is not None else None

    def compute_optimal_distance(self, node_count: int, world_radius: float) -> float:
        """
        Derive the optimal distance k for a node count and world radius.

        With auto_scale, k = base * sqrt(pi * r^2 / n) so that larger graphs
        spread proportionally over the same area.
        """
        if not self._auto_scale:
            return self._base_optimal_distance
        area = math.pi * world_radius * world_radius
        return self._base_optimal_distance * math.sqrt(area / max(1, node_count))

    def positions(self) -> np.ndarray:
        """Read-only (n, 2) snapshot of node positions in arena order."""
        if self._run is None:
            snapshot = np.empty((0, 2), dtype=np.float64)
        else:
            snapshot = np.array(
                [(node.x, node.y) for node in self._run.nodes], dtype=np.float64
            ).reshape(-1, 2)
        snapshot.setflags(write=False)
        return snapshot

    def node_ids(self) -> list[int]:
        """Node ids matching the rows of positions()."""
        if self._run is None:
            return []
        return [node.id for node in self._run.nodes]  # type: ignore[misc]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self, nodes: Optional[NodesLike], world_radius: float) -> Self:
        """
        Start a new run over ``nodes``.

        An absent or empty node collection is not an error: a LayoutWarning
        is emitted, any previous run is discarded and the engine stays idle.
        Calling start() on a running engine replaces the run. Node positions
        and velocities are not touched.

        Args:
            nodes: Graph or sequence of Node objects with initial positions
            world_radius: Logical extent of the initial placement

        Returns:
            self (for chaining)

        Raises:
            InvalidParameterError: If world_radius is not positive
            InvalidNodeError: If node ids are missing or duplicated
            InvalidEdgeError: If an edge references an unknown node
        """
        node_list: list[Node] = []
        if nodes is not None:
            node_list = nodes.nodes if isinstance(nodes, Graph) else list(nodes)

        if not node_list:
            warnings.warn("LayoutEngine: no nodes passed in", LayoutWarning, stacklevel=2)
            self._run = None
            return self

        radius = validate_world_radius(world_radius)
        index = validate_node_ids(node_list)
        validate_edge_endpoints(node_list, index, strict=True)

        k = self.compute_optimal_distance(len(node_list), radius)
        cutoff = self._repulsion_cutoff * k
        self._run = LayoutRun(
            nodes=node_list,
            index=index,
            k=k,
            cutoff_sq=cutoff * cutoff,
            rng=random.Random(self._random_seed),
        )

        logger.debug("Layout started: %d nodes, k=%.4f, cutoff=%.4f", len(node_list), k, cutoff)
        self.trigger({"type": EventType.start, "iteration": 0, "state": LayoutState.running})
        return self

    def step(self) -> bool:
        """
        Perform one iteration: repulsion, attraction, then integration.

        Further calls after completion are no-ops.

        Returns:
            True if there is nothing left to iterate (complete or idle).
        """
        if self._iterate():
            self._announce_end()
        return self._run is None or self._run.is_complete

    def tick(self) -> bool:
        """
        Advance the run by one external tick and publish positions.

        Animated mode performs up to iterations_per_tick iterations; batch
        mode runs to completion. Positions are published once, through the
        tick event, after the iterations.

        Returns:
            True if the run is complete.
        """
        run = self._run
        if run is None or run.is_complete:
            return self.is_complete

        budget = self._iterations_per_tick if self._animate else self._max_iterations
        finished = False
        for _ in range(budget):
            if self._iterate():
                finished = True
                break

        self._publish()
        if finished:
            self._announce_end()
        return run.is_complete

    def run(self, nodes: Optional[NodesLike], world_radius: float) -> Self:
        """
        Start a run and tick it until completion.

        Returns:
            self (for chaining)
        """
        self.start(nodes, world_radius)
        while self._run is not None and not self._run.is_complete:
            self.tick()
        return self

    # -------------------------------------------------------------------------
    # Iteration phases
    # -------------------------------------------------------------------------

    def compute_repulsive_forces(self) -> None:
        """Accumulate k^2 / d repulsion for every pair inside the cutoff."""
        run = self._run
        if run is None:
            return

        nodes = run.nodes
        n = len(nodes)
        scale = self._repulsion_strength * run.k * run.k
        cutoff_sq = run.cutoff_sq

        for i in range(n):
            node_i = nodes[i]
            for j in range(i + 1, n):
                node_j = nodes[j]
                dx = node_i.x - node_j.x
                dy = node_i.y - node_j.y
                dist_sq = dx * dx + dy * dy

                if dist_sq > cutoff_sq:
                    continue

                if dist_sq < EPSILON_SQ:
                    ux, uy = _random_direction(run.rng)
                    dist = self._jitter_distance
                else:
                    dist = math.sqrt(dist_sq)
                    ux = dx / dist
                    uy = dy / dist

                force = scale / dist
                fx = ux * force
                fy = uy * force

                node_i.vx += fx
                node_i.vy += fy
                node_j.vx -= fx
                node_j.vy -= fy

    def compute_attractive_forces(self) -> None:
        """
        Accumulate d^2 / k attraction once per undirected relationship.

        Edges with source >= target are skipped; a symmetric relationship is
        expected to be stored as a reciprocal edge pair.
        """
        run = self._run
        if run is None:
            return

        nodes = run.nodes
        index = run.index
        scale = self._attraction_strength / run.k

        for source in nodes:
            for edge in source.edges:
                if edge.source >= edge.target:
                    continue

                target = nodes[index[edge.target]]
                dx = target.x - source.x
                dy = target.y - source.y
                dist_sq = dx * dx + dy * dy
                if dist_sq < EPSILON_SQ:
                    continue

                dist = math.sqrt(dist_sq)
                force = scale * dist_sq
                fx = (dx / dist) * force
                fy = (dy / dist) * force

                source.vx += fx
                source.vy += fy
                target.vx -= fx
                target.vy -= fy

    def integrate(self) -> None:
        """Move every free node by velocity * time_step, then damp velocity."""
        run = self._run
        if run is None:
            return

        dt = self._time_step
        damping = self._damping
        max_velocity = 0.0

        for node in run.nodes:
            if node.fixed:
                node.vx = 0.0
                node.vy = 0.0
                continue

            speed = math.sqrt(node.vx * node.vx + node.vy * node.vy)
            if speed > max_velocity:
                max_velocity = speed

            node.x += node.vx * dt
            node.y += node.vy * dt
            node.vx *= damping
            node.vy *= damping

        run.max_velocity = max_velocity

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _iterate(self) -> bool:
        """One iteration without events. Returns True if it completed the run."""
        run = self._run
        if run is None or run.is_complete:
            return False

        self.compute_repulsive_forces()
        self.compute_attractive_forces()
        self.integrate()
        run.iteration += 1

        if run.max_velocity < self._convergence_threshold:
            run.state = LayoutState.converged
        elif run.iteration >= self._max_iterations:
            run.state = LayoutState.max_iterations_reached
        else:
            return False

        if run.state is LayoutState.converged:
            logger.debug(
                "Layout converged after %d iterations (max velocity %.6f)",
                run.iteration,
                run.max_velocity,
            )
        else:
            logger.info(
                "Layout stopped at iteration cap %d (max velocity %.6f)",
                run.iteration,
                run.max_velocity,
            )
        return True

    def _publish(self) -> None:
        assert self._run is not None
        self.trigger(
            {
                "type": EventType.tick,
                "iteration": self._run.iteration,
                "max_velocity": self._run.max_velocity,
                "state": self._run.state,
                "positions": self.positions(),
            }
        )

    def _announce_end(self) -> None:
        assert self._run is not None
        self.trigger(
            {
                "type": EventType.end,
                "iteration": self._run.iteration,
                "max_velocity": self._run.max_velocity,
                "state": self._run.state,
                "positions": self.positions(),
            }
        )


__all__ = ["LayoutEngine", "LayoutRun", "EPSILON_SQ"]
