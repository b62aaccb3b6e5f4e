"""Geometry primitives shared by the layout engine and the renderers.

Everything here is pure: axis-aligned boxes, overlap area, distance and the
leader-line / box intersection used to draw the connecting line of a comment.
The page preview renderer and the leader-line API route both call
``line_box_intersection`` so that edit preview and final render always agree
on the endpoint.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Top-left corner of a box, or any 2D point."""
    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle. Containers always have x = y = 0."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Position:
        return Position(self.x + self.width / 2, self.y + self.height / 2)

    def moved_to(self, position: Position) -> "Bounds":
        """Return the same-sized box with its top-left corner at *position*."""
        return Bounds(position.x, position.y, self.width, self.height)


def overlap_area(a: Bounds, b: Bounds) -> float:
    """Area of the intersection of *a* and *b*.

    Touching or disjoint boxes give 0; the result is never negative.
    """
    x_overlap = min(a.right, b.right) - max(a.left, b.left)
    y_overlap = min(a.bottom, b.bottom) - max(a.top, b.top)
    return max(0, x_overlap) * max(0, y_overlap)


def distance(p: Position, q: Position) -> float:
    """Euclidean distance between two points."""
    return math.hypot(q.x - p.x, q.y - p.y)


def line_box_intersection(
    leader_x: float,
    leader_y: float,
    box_x: float,
    box_y: float,
    box_width: float,
    box_height: float,
) -> Position:
    """Point where the line from the leader anchor to the box center enters the box.

    The ray runs from the anchor towards the box center.  Each of the four
    edges is intersected parametrically (``P = anchor + t * (center - anchor)``);
    hits with ``t > 0`` that fall on the finite edge segment are kept and the
    one with the smallest ``t`` wins.

    Falls back to the box center when the anchor lies on or inside the box
    (this covers the zero-length ray) or when no edge is hit.
    """
    box = Bounds(box_x, box_y, box_width, box_height)
    center = box.center

    if box.left <= leader_x <= box.right and box.top <= leader_y <= box.bottom:
        return center

    dx = center.x - leader_x
    dy = center.y - leader_y

    # (t, x, y) for every edge crossing in front of the anchor
    hits: list[tuple[float, float, float]] = []

    if dy != 0:
        for edge_y in (box.top, box.bottom):
            t = (edge_y - leader_y) / dy
            x = leader_x + t * dx
            if t > 0 and box.left <= x <= box.right:
                hits.append((t, x, edge_y))

    if dx != 0:
        for edge_x in (box.left, box.right):
            t = (edge_x - leader_x) / dx
            y = leader_y + t * dy
            if t > 0 and box.top <= y <= box.bottom:
                hits.append((t, edge_x, y))

    if not hits:
        return center

    # min() keeps the first of equal t values (top before bottom before left)
    _, x, y = min(hits, key=lambda hit: hit[0])
    return Position(x, y)
