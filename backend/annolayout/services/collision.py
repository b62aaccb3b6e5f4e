"""Pairwise collision detection between comment boxes.

Detection is a plain O(n²) scan over all unordered pairs.  Per-page counts
are in the tens, so there is no spatial index; very large pages are a known
scaling limit of this module.
"""

from dataclasses import dataclass, field

from annolayout.models.annotation import DEFAULT_BOX_HEIGHT, DEFAULT_BOX_WIDTH, Annotation
from annolayout.services.geometry import Bounds, overlap_area


@dataclass(frozen=True)
class OverlapInfo:
    """Two colliding annotations and the area they share."""
    annotation1: Annotation
    annotation2: Annotation
    overlap_area: float


@dataclass
class CollisionResult:
    has_collision: bool
    overlaps: list[OverlapInfo] = field(default_factory=list)
    total_overlap_area: float = 0.0


def annotation_bounds(annotation: Annotation) -> Bounds:
    """Box of *annotation*, substituting defaults for unset position / size."""
    return Bounds(
        x=annotation.x or 0,
        y=annotation.y or 0,
        width=annotation.width or DEFAULT_BOX_WIDTH,
        height=annotation.height or DEFAULT_BOX_HEIGHT,
    )


def detect_collisions(annotations: list[Annotation]) -> CollisionResult:
    """Find every overlapping pair ``(i, j)`` with ``i < j``.

    Overlaps are returned in scan order; callers that want the worst pair
    first sort by ``overlap_area`` themselves.
    """
    overlaps: list[OverlapInfo] = []
    total = 0.0

    bounds = [annotation_bounds(a) for a in annotations]
    for i in range(len(annotations)):
        for j in range(i + 1, len(annotations)):
            area = overlap_area(bounds[i], bounds[j])
            if area > 0:
                overlaps.append(OverlapInfo(annotations[i], annotations[j], area))
                total += area

    return CollisionResult(
        has_collision=bool(overlaps),
        overlaps=overlaps,
        total_overlap_area=total,
    )


def has_collision(annotations: list[Annotation]) -> bool:
    """Fast predicate: does any pair in *annotations* overlap?"""
    if len(annotations) < 2:
        return False
    return detect_collisions(annotations).has_collision
