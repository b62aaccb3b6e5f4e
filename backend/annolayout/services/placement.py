"""Candidate generation, validation and nearest-edge placement search.

A comment box is always parked along one of the four container edges.  For
each edge the candidates start at the point where the box is centered on the
leader anchor and fan out in ``step_size`` increments, so candidates closer
to the anchor are always tried first.  Edges are tried nearest-first, which
keeps leader lines short.

Nothing here raises: when no candidate is valid the search hands back the
annotation's current position (or, for new annotations, the default one).
"""

import logging
import uuid

from annolayout.models.annotation import (
    DEFAULT_BOX_HEIGHT,
    DEFAULT_BOX_WIDTH,
    Annotation,
)
from annolayout.services.collision import annotation_bounds
from annolayout.services.geometry import Bounds, Position, overlap_area
from annolayout.services.layout_config import DEFAULT_LAYOUT_CONFIG, Edge, LayoutConfig

logger = logging.getLogger("annolayout.placement")

def _clamp_along_edge(anchor: float, box_size: float, container_size: float, margin: float) -> float:
    """Center the box on *anchor*, kept inside ``[margin, container - box - margin]``.

    When the box is too large for the range the lower bound wins.
    """
    return max(margin, min(anchor - box_size / 2, container_size - box_size - margin))


def generate_edge_positions(
    annotation: Annotation,
    edge: Edge,
    container: Bounds,
    leader_x: float,
    leader_y: float,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[Position]:
    """Ordered candidate positions for *annotation* along *edge*.

    The ideal (anchor-centered) position comes first, then for every offset
    ``step, 2*step, ... <= max_edge_offset`` the ``-offset`` candidate and the
    ``+offset`` candidate, each only if it stays inside the margins.
    """
    bounds = annotation_bounds(annotation)
    margin = config.margin_from_bounds

    if edge in (Edge.TOP, Edge.BOTTOM):
        # Slide along x, y pinned to the edge
        fixed = margin if edge == Edge.TOP else container.height - bounds.height - margin
        ideal = _clamp_along_edge(leader_x, bounds.width, container.width, margin)
        upper = container.width - bounds.width - margin

        def make(v: float) -> Position:
            return Position(v, fixed)
    else:
        # Slide along y, x pinned to the edge
        fixed = margin if edge == Edge.LEFT else container.width - bounds.width - margin
        ideal = _clamp_along_edge(leader_y, bounds.height, container.height, margin)
        upper = container.height - bounds.height - margin

        def make(v: float) -> Position:
            return Position(fixed, v)

    positions = [make(ideal)]
    for offset in range(config.step_size, config.max_edge_offset + 1, config.step_size):
        lower_v = ideal - offset
        upper_v = ideal + offset
        if lower_v >= margin:
            positions.append(make(lower_v))
        if upper_v <= upper:
            positions.append(make(upper_v))
    return positions


def is_valid_position(
    position: Position,
    annotation: Annotation,
    others: list[Annotation],
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> bool:
    """True if the box at *position* respects the margins and overlaps no other box."""
    test = annotation_bounds(annotation).moved_to(position)
    margin = config.margin_from_bounds

    if (
        test.left < margin
        or test.top < margin
        or test.right > container.width - margin
        or test.bottom > container.height - margin
    ):
        return False

    for other in others:
        if other.id == annotation.id:
            continue
        if overlap_area(test, annotation_bounds(other)) > 0:
            return False
    return True


def edges_by_proximity(leader_x: float, leader_y: float, container: Bounds) -> list[Edge]:
    """Container edges sorted by distance from the leader anchor, nearest first.

    The sort is stable, so ties keep the top, right, bottom, left order.
    """
    distances = [
        (Edge.TOP, leader_y),
        (Edge.RIGHT, container.width - leader_x),
        (Edge.BOTTOM, container.height - leader_y),
        (Edge.LEFT, leader_x),
    ]
    return [edge for edge, _ in sorted(distances, key=lambda item: item[1])]


def _search_edges(
    annotation: Annotation,
    others: list[Annotation],
    container: Bounds,
    leader_x: float,
    leader_y: float,
    config: LayoutConfig,
) -> Position | None:
    for edge in edges_by_proximity(leader_x, leader_y, container):
        for candidate in generate_edge_positions(annotation, edge, container, leader_x, leader_y, config):
            if is_valid_position(candidate, annotation, others, container, config):
                return candidate
    return None


def find_nearest_valid_position(
    annotation: Annotation,
    others: list[Annotation],
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> Position:
    """First valid candidate on the edge nearest the leader anchor.

    Annotations without a leader anchor use their own top-left corner as the
    anchor.  If no edge has a valid candidate the current position is returned
    unchanged.
    """
    bounds = annotation_bounds(annotation)
    leader_x = annotation.leader_x or bounds.x
    leader_y = annotation.leader_y or bounds.y

    found = _search_edges(annotation, others, container, leader_x, leader_y, config)
    if found is not None:
        return found

    logger.debug("No valid position for annotation %s; keeping (%s, %s)",
                 annotation.id, bounds.x, bounds.y)
    return Position(bounds.x, bounds.y)


def default_comment_position(
    leader_x: float,
    leader_y: float,
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    width: float = DEFAULT_BOX_WIDTH,
    height: float = DEFAULT_BOX_HEIGHT,
) -> Position:
    """One-shot placement of a new comment box against the nearest edge.

    Ties between edges resolve in top, bottom, left, right order.
    """
    margin = config.default_placement_margin
    to_top = leader_y
    to_bottom = container.height - leader_y
    to_left = leader_x
    to_right = container.width - leader_x
    nearest = min(to_top, to_bottom, to_left, to_right)

    if nearest == to_top or nearest == to_bottom:
        x = _clamp_along_edge(leader_x, width, container.width, margin)
        y = margin if nearest == to_top else container.height - height - margin
    else:
        x = margin if nearest == to_left else container.width - width - margin
        y = _clamp_along_edge(leader_y, height, container.height, margin)
    return Position(x, y)


def find_non_overlapping_position(
    leader_x: float,
    leader_y: float,
    annotations: list[Annotation],
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    width: float = DEFAULT_BOX_WIDTH,
    height: float = DEFAULT_BOX_HEIGHT,
) -> Position:
    """Position for a brand-new comment box anchored at ``(leader_x, leader_y)``.

    The default position is returned as-is when it overlaps none of the
    already placed annotations; only otherwise does the full edge search run.
    Falls back to the default position when the search finds nothing.
    """
    placed = [a for a in annotations if a.is_placed]
    default = default_comment_position(leader_x, leader_y, container, config, width, height)
    new_box = Annotation(
        # Fresh id so the self-exclusion in is_valid_position skips no real box
        id=f"new-{uuid.uuid4().hex}",
        x=default.x,
        y=default.y,
        width=width,
        height=height,
        leader_x=leader_x,
        leader_y=leader_y,
    )

    new_bounds = annotation_bounds(new_box)
    if not any(overlap_area(new_bounds, annotation_bounds(a)) > 0 for a in placed):
        return default

    found = _search_edges(new_box, placed, container, leader_x, leader_y, config)
    if found is not None:
        return found

    logger.debug("No free position for new annotation at (%s, %s); using default",
                 leader_x, leader_y)
    return default


def constrain_position(
    annotation: Annotation,
    delta_x: float,
    delta_y: float,
    container: Bounds,
) -> Position:
    """Apply a drag delta to *annotation* and keep the whole box on the page."""
    bounds = annotation_bounds(annotation)
    new_x = bounds.x + delta_x
    new_y = bounds.y + delta_y
    return Position(
        max(0, min(new_x, container.width - bounds.width)),
        max(0, min(new_y, container.height - bounds.height)),
    )
