"""
Force-directed layout engines.

This module provides:
- LayoutEngine: Fruchterman-Reingold with repulsion cutoff, coincident-node
  jitter, velocity damping and convergence detection
- LayoutRun: Transient state of a single run
"""

from .fruchterman_reingold import LayoutEngine, LayoutRun

__all__ = [
    "LayoutEngine",
    "LayoutRun",
]
