"""Iterative greedy resolver for overlapping comment boxes.

Each iteration:
  1. detect collisions on the working copy (none left -> done);
  2. take the pair with the largest overlap area;
  3. search the nearest valid position for both members, each against every
     other working annotation;
  4. move only the member with the smaller displacement (ties move the first).

The loop is bounded by ``LayoutConfig.max_iterations``.  Running out of
iterations is not an error: the caller gets whatever partial improvement was
reached and can re-run collision detection to find out.  The greedy policy
gives no optimality guarantee.
"""

import logging
from dataclasses import dataclass, replace

from annolayout.models.annotation import Annotation
from annolayout.services.collision import CollisionResult, detect_collisions, has_collision
from annolayout.services.geometry import Bounds, Position, distance
from annolayout.services.layout_config import DEFAULT_LAYOUT_CONFIG, Edge, LayoutConfig
from annolayout.services.placement import (
    constrain_position,
    find_nearest_valid_position,
    find_non_overlapping_position,
    generate_edge_positions,
    is_valid_position,
)

logger = logging.getLogger("annolayout.resolver")


@dataclass(frozen=True)
class AdjustmentResult:
    """Final state of one input annotation after a resolution pass."""
    annotation: Annotation
    new_position: Position
    moved: bool


@dataclass
class LayoutReport:
    results: list[AdjustmentResult]
    iterations: int
    remaining: CollisionResult


def _current_position(annotation: Annotation) -> Position:
    return Position(annotation.x or 0, annotation.y or 0)


def _index_of(working: list[Annotation], annotation_id: str) -> int:
    return next(i for i, a in enumerate(working) if a.id == annotation_id)


def run_layout(
    annotations: list[Annotation],
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutReport:
    """Resolve overlaps and report results, iteration count and what is left."""
    working = list(annotations)
    iterations = 0

    while iterations < config.max_iterations:
        collisions = detect_collisions(working)
        if not collisions.has_collision:
            break

        worst = max(collisions.overlaps, key=lambda o: o.overlap_area)
        first, second = worst.annotation1, worst.annotation2

        new_first = find_nearest_valid_position(
            first, [a for a in working if a.id != first.id], container, config,
        )
        new_second = find_nearest_valid_position(
            second, [a for a in working if a.id != second.id], container, config,
        )
        move_first = (
            distance(_current_position(first), new_first)
            <= distance(_current_position(second), new_second)
        )
        target, position = (first, new_first) if move_first else (second, new_second)

        working[_index_of(working, target.id)] = replace(target, x=position.x, y=position.y)
        iterations += 1
        logger.debug(
            "Iteration %d: overlap %s/%s area=%.1f, moved %s to (%.1f, %.1f)",
            iterations, first.id, second.id, worst.overlap_area,
            target.id, position.x, position.y,
        )

    remaining = detect_collisions(working)
    if remaining.has_collision:
        logger.info(
            "Layout stopped after %d iterations with %d overlaps left (area=%.1f)",
            iterations, len(remaining.overlaps), remaining.total_overlap_area,
        )
    else:
        logger.info("Layout converged after %d iterations", iterations)

    results = [
        AdjustmentResult(
            annotation=adjusted,
            new_position=_current_position(adjusted),
            moved=original.x != adjusted.x or original.y != adjusted.y,
        )
        for original, adjusted in zip(annotations, working)
    ]
    return LayoutReport(results=results, iterations=iterations, remaining=remaining)


def adjust_annotations_layout(
    annotations: list[Annotation],
    container: Bounds,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[AdjustmentResult]:
    """One result per input annotation, in input order."""
    return run_layout(annotations, container, config).results


class AutoLayoutService:
    """All layout operations bound to one ``LayoutConfig``."""

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> None:
        self._config = config

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def detect_collisions(self, annotations: list[Annotation]) -> CollisionResult:
        return detect_collisions(annotations)

    def check_collisions(self, annotations: list[Annotation]) -> bool:
        return has_collision(annotations)

    def generate_edge_positions(
        self,
        annotation: Annotation,
        edge: Edge,
        container: Bounds,
        leader_x: float,
        leader_y: float,
    ) -> list[Position]:
        return generate_edge_positions(annotation, edge, container, leader_x, leader_y, self._config)

    def is_valid_position(
        self,
        position: Position,
        annotation: Annotation,
        others: list[Annotation],
        container: Bounds,
    ) -> bool:
        return is_valid_position(position, annotation, others, container, self._config)

    def find_nearest_valid_position(
        self, annotation: Annotation, others: list[Annotation], container: Bounds,
    ) -> Position:
        return find_nearest_valid_position(annotation, others, container, self._config)

    def find_non_overlapping_position(
        self,
        leader_x: float,
        leader_y: float,
        annotations: list[Annotation],
        container: Bounds,
    ) -> Position:
        return find_non_overlapping_position(leader_x, leader_y, annotations, container, self._config)

    def constrain_position(
        self, annotation: Annotation, delta_x: float, delta_y: float, container: Bounds,
    ) -> Position:
        return constrain_position(annotation, delta_x, delta_y, container)

    def adjust(self, annotations: list[Annotation], container: Bounds) -> LayoutReport:
        return run_layout(annotations, container, self._config)

    def adjust_annotations_layout(
        self, annotations: list[Annotation], container: Bounds,
    ) -> list[AdjustmentResult]:
        return adjust_annotations_layout(annotations, container, self._config)
