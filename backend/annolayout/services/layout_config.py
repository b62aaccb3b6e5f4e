"""Tuning constants for the auto-layout engine."""

from dataclasses import dataclass
from enum import Enum


class Edge(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass(frozen=True)
class LayoutConfig:
    """Resolver parameters.  Fixed for the lifetime of the process."""
    min_distance: float = 10          # reserved, not consulted by the search
    max_iterations: int = 50
    step_size: int = 5                # px between candidates along an edge
    margin_from_bounds: float = 15    # keep-out band inside the container
    max_edge_offset: int = 100        # furthest fan-out from the ideal point
    # Informational only: the search orders edges by distance to the anchor.
    preferred_directions: tuple[Edge, ...] = (Edge.RIGHT, Edge.BOTTOM, Edge.TOP, Edge.LEFT)
    # Margin of the one-shot default placement for a brand-new annotation.
    default_placement_margin: float = 10


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
