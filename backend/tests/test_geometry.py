"""Unit tests for the geometry primitives."""

import math

import pytest

from annolayout.services.geometry import (
    Bounds,
    Position,
    distance,
    line_box_intersection,
    overlap_area,
)


class TestBounds:
    def test_edges_and_center(self) -> None:
        box = Bounds(100, 50, 150, 40)
        assert (box.left, box.top, box.right, box.bottom) == (100, 50, 250, 90)
        assert box.center == Position(175, 70)

    def test_moved_to_keeps_size(self) -> None:
        assert Bounds(1, 2, 30, 40).moved_to(Position(5, 6)) == Bounds(5, 6, 30, 40)


class TestOverlapArea:
    def test_partial_overlap(self) -> None:
        a = Bounds(0, 0, 150, 40)
        b = Bounds(50, 0, 150, 40)
        assert overlap_area(a, b) == 100 * 40

    def test_disjoint(self) -> None:
        assert overlap_area(Bounds(0, 0, 10, 10), Bounds(20, 0, 10, 10)) == 0

    def test_touching_edges_have_no_area(self) -> None:
        assert overlap_area(Bounds(0, 0, 10, 10), Bounds(10, 0, 10, 10)) == 0
        assert overlap_area(Bounds(0, 0, 10, 10), Bounds(0, 10, 10, 10)) == 0

    def test_disjoint_on_one_axis_only(self) -> None:
        # x ranges overlap, y ranges do not
        assert overlap_area(Bounds(0, 0, 100, 10), Bounds(50, 50, 100, 10)) == 0

    def test_containment(self) -> None:
        assert overlap_area(Bounds(0, 0, 100, 100), Bounds(10, 10, 20, 30)) == 600

    @pytest.mark.parametrize(
        "a, b",
        [
            (Bounds(0, 0, 150, 40), Bounds(50, 0, 150, 40)),
            (Bounds(-20, 5, 30, 30), Bounds(0, 0, 10, 10)),
            (Bounds(0, 0, 10, 10), Bounds(500, 500, 10, 10)),
            (Bounds(3.5, 2.25, 7.5, 1.5), Bounds(4, 2, 2, 2)),
        ],
    )
    def test_symmetric_and_non_negative(self, a: Bounds, b: Bounds) -> None:
        assert overlap_area(a, b) == overlap_area(b, a)
        assert overlap_area(a, b) >= 0


class TestDistance:
    def test_pythagorean(self) -> None:
        assert distance(Position(0, 0), Position(3, 4)) == 5

    def test_zero(self) -> None:
        assert distance(Position(7, 7), Position(7, 7)) == 0


class TestLineBoxIntersection:
    def test_anchor_left_of_box_hits_left_edge(self) -> None:
        # Box center (150, 120); anchor level with it on the left
        point = line_box_intersection(0, 120, 100, 100, 100, 40)
        assert point == Position(100, 120)

    def test_anchor_above_box_hits_top_edge(self) -> None:
        point = line_box_intersection(150, 0, 100, 100, 100, 40)
        assert point == Position(150, 100)

    def test_anchor_below_right_hits_nearest_edge(self) -> None:
        # Ray from (400, 300) to center (150, 120)
        point = line_box_intersection(400, 300, 100, 100, 100, 40)
        assert point.y == pytest.approx(140)
        assert 100 <= point.x <= 200

    def test_anchor_right_of_box_hits_right_edge(self) -> None:
        point = line_box_intersection(600, 120, 100, 100, 100, 40)
        assert point == Position(200, 120)

    def test_anchor_at_corner_returns_center(self) -> None:
        point = line_box_intersection(100, 100, 100, 100, 150, 40)
        assert point == Position(175, 120)
        assert not math.isnan(point.x) and not math.isnan(point.y)

    def test_anchor_at_center_returns_center(self) -> None:
        assert line_box_intersection(175, 120, 100, 100, 150, 40) == Position(175, 120)

    def test_anchor_inside_returns_center(self) -> None:
        assert line_box_intersection(110, 110, 100, 100, 150, 40) == Position(175, 120)

    def test_deterministic_for_identical_input(self) -> None:
        args = (12.5, 480.0, 300.0, 200.0, 150.0, 40.0)
        assert line_box_intersection(*args) == line_box_intersection(*args)
