"""Unit tests for candidate generation, validation and placement search."""

from annolayout.models.annotation import Annotation
from annolayout.services.collision import annotation_bounds
from annolayout.services.geometry import Bounds, Position, overlap_area
from annolayout.services.layout_config import Edge, LayoutConfig
from annolayout.services.placement import (
    constrain_position,
    default_comment_position,
    edges_by_proximity,
    find_nearest_valid_position,
    find_non_overlapping_position,
    generate_edge_positions,
    is_valid_position,
)

PAGE = Bounds(0, 0, 800, 600)


def _box(id: str, x: float, y: float, width: float = 150, height: float = 40, **kwargs) -> Annotation:
    return Annotation(id=id, x=x, y=y, width=width, height=height, **kwargs)


class TestGenerateEdgePositions:
    def test_top_edge_ideal_first_then_fan_out(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.TOP, PAGE, 400, 300)
        assert positions[0] == Position(325, 15)
        assert positions[1:5] == [
            Position(320, 15), Position(330, 15),
            Position(315, 15), Position(325 + 10, 15),
        ]
        # ideal + 20 steps on each side
        assert len(positions) == 41
        assert positions[-1] == Position(425, 15)

    def test_ordered_by_distance_from_ideal(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.LEFT, PAGE, 300, 300)
        offsets = [abs(p.y - positions[0].y) for p in positions]
        assert offsets == sorted(offsets)

    def test_right_edge(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.RIGHT, PAGE, 400, 300)
        assert positions[0] == Position(635, 280)
        assert all(p.x == 635 for p in positions)

    def test_bottom_edge(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.BOTTOM, PAGE, 400, 300)
        assert positions[0] == Position(325, 545)
        assert all(p.y == 545 for p in positions)

    def test_left_edge(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.LEFT, PAGE, 400, 300)
        assert positions[0] == Position(15, 280)
        assert all(p.x == 15 for p in positions)

    def test_ideal_clamped_at_corner(self) -> None:
        positions = generate_edge_positions(_box("a", 0, 0), Edge.TOP, PAGE, 0, 0)
        assert positions[0] == Position(15, 15)
        # Nothing fits to the left of the margin
        assert all(p.x >= 15 for p in positions)
        assert len(positions) == 21

    def test_candidates_stay_inside_margins(self) -> None:
        for edge in Edge:
            for p in generate_edge_positions(_box("a", 0, 0), edge, PAGE, 790, 590):
                assert 15 <= p.x <= 800 - 150 - 15
                assert 15 <= p.y <= 600 - 40 - 15

    def test_box_larger_than_container(self) -> None:
        tiny = Bounds(0, 0, 100, 100)
        positions = generate_edge_positions(_box("a", 0, 0), Edge.TOP, tiny, 50, 50)
        assert positions == [Position(15, 15)]

    def test_custom_step(self) -> None:
        config = LayoutConfig(step_size=50, max_edge_offset=100)
        positions = generate_edge_positions(_box("a", 0, 0), Edge.TOP, PAGE, 400, 300, config)
        assert [p.x for p in positions] == [325, 275, 375, 225, 425]


class TestIsValidPosition:
    def test_free_space(self) -> None:
        assert is_valid_position(Position(100, 100), _box("a", 0, 0), [], PAGE) is True

    def test_margin_violations(self) -> None:
        ann = _box("a", 0, 0)
        assert is_valid_position(Position(14, 100), ann, [], PAGE) is False
        assert is_valid_position(Position(100, 14), ann, [], PAGE) is False
        assert is_valid_position(Position(636, 100), ann, [], PAGE) is False
        assert is_valid_position(Position(100, 546), ann, [], PAGE) is False

    def test_exactly_on_margin_is_valid(self) -> None:
        ann = _box("a", 0, 0)
        assert is_valid_position(Position(15, 15), ann, [], PAGE) is True
        assert is_valid_position(Position(635, 545), ann, [], PAGE) is True

    def test_overlap_rejected(self) -> None:
        other = _box("b", 120, 110)
        assert is_valid_position(Position(100, 100), _box("a", 0, 0), [other], PAGE) is False

    def test_touching_accepted(self) -> None:
        other = _box("b", 250, 100)
        assert is_valid_position(Position(100, 100), _box("a", 0, 0), [other], PAGE) is True

    def test_self_excluded_by_id(self) -> None:
        ann = _box("a", 100, 100)
        assert is_valid_position(Position(100, 100), ann, [ann], PAGE) is True


class TestEdgesByProximity:
    def test_nearest_first(self) -> None:
        assert edges_by_proximity(790, 300, PAGE)[0] == Edge.RIGHT
        assert edges_by_proximity(400, 590, PAGE)[0] == Edge.BOTTOM
        assert edges_by_proximity(5, 300, PAGE)[0] == Edge.LEFT

    def test_ties_keep_declaration_order(self) -> None:
        # right and left are both 400 away
        assert edges_by_proximity(400, 10, PAGE) == [Edge.TOP, Edge.RIGHT, Edge.LEFT, Edge.BOTTOM]


class TestFindNearestValidPosition:
    def test_outside_bounds_moves_inside(self) -> None:
        ann = _box("a", -50, 100)
        position = find_nearest_valid_position(ann, [], PAGE)
        assert position.x >= 15
        assert position == Position(15, 80)

    def test_nearest_edge_used_when_free(self) -> None:
        ann = _box("a", 300, 300, leader_x=400, leader_y=10)
        assert find_nearest_valid_position(ann, [], PAGE) == Position(325, 15)

    def test_blocked_edge_falls_through_to_next(self) -> None:
        ann = _box("a", 300, 300, leader_x=400, leader_y=10)
        blocker = _box("b", 325, 15)
        assert find_nearest_valid_position(ann, [blocker], PAGE) == Position(635, 15)

    def test_no_room_keeps_current_position(self) -> None:
        tiny = Bounds(0, 0, 100, 100)
        ann = _box("a", 5, 5)
        assert find_nearest_valid_position(ann, [], tiny) == Position(5, 5)

    def test_no_room_unplaced_returns_origin(self) -> None:
        tiny = Bounds(0, 0, 100, 100)
        assert find_nearest_valid_position(Annotation(id="a"), [], tiny) == Position(0, 0)

    def test_result_is_valid(self) -> None:
        others = [_box(f"o{i}", 15 + 160 * i, 15) for i in range(4)]
        others += [_box(f"p{i}", 15, 60 + 45 * i) for i in range(5)]
        for leader_x, leader_y in [(0, 0), (400, 0), (10, 300), (790, 590), (400, 300)]:
            ann = _box("a", 300, 300, leader_x=leader_x, leader_y=leader_y)
            position = find_nearest_valid_position(ann, others, PAGE)
            if position != Position(300, 300):
                assert is_valid_position(position, ann, others, PAGE)


class TestDefaultCommentPosition:
    def test_top(self) -> None:
        assert default_comment_position(400, 10, PAGE) == Position(325, 10)

    def test_bottom(self) -> None:
        assert default_comment_position(400, 590, PAGE) == Position(325, 550)

    def test_left(self) -> None:
        assert default_comment_position(5, 300, PAGE) == Position(10, 280)

    def test_right(self) -> None:
        assert default_comment_position(790, 300, PAGE) == Position(640, 280)

    def test_clamped_near_corner(self) -> None:
        assert default_comment_position(0, 0, PAGE) == Position(10, 10)


class TestFindNonOverlappingPosition:
    def test_empty_page_uses_default(self) -> None:
        assert find_non_overlapping_position(400, 10, [], PAGE) == Position(325, 10)

    def test_unplaced_annotations_ignored(self) -> None:
        unplaced = Annotation(id="b", x=None, y=None)
        assert find_non_overlapping_position(400, 10, [unplaced], PAGE) == Position(325, 10)

    def test_blocked_default_searches_edges(self) -> None:
        blocker = _box("b", 325, 10)
        position = find_non_overlapping_position(400, 10, [blocker], PAGE)
        assert position == Position(635, 15)
        new_box = Bounds(position.x, position.y, 150, 40)
        assert overlap_area(new_box, annotation_bounds(blocker)) == 0

    def test_any_existing_id_is_an_obstacle(self) -> None:
        # Ids a caller might pick for a scratch box must not be skipped
        for blocker_id in ("__new__", "new", ""):
            blocker = _box(blocker_id, 325, 15)
            other = _box("c", 0, 300)
            position = find_non_overlapping_position(400, 10, [blocker, other], PAGE)
            assert position == Position(635, 15)
            new_box = Bounds(position.x, position.y, 150, 40)
            assert overlap_area(new_box, annotation_bounds(blocker)) == 0

    def test_no_free_spot_returns_default(self) -> None:
        small = Bounds(0, 0, 200, 100)
        blocker = _box("b", 0, 0, width=200, height=100)
        assert find_non_overlapping_position(100, 10, [blocker], small) == Position(25, 10)


class TestConstrainPosition:
    def test_within_page(self) -> None:
        ann = _box("a", 100, 100)
        assert constrain_position(ann, 20, -30, PAGE) == Position(120, 70)

    def test_clamped_right_and_bottom(self) -> None:
        ann = _box("a", 700, 550)
        assert constrain_position(ann, 100, 100, PAGE) == Position(650, 560)

    def test_clamped_left_and_top(self) -> None:
        ann = _box("a", 10, 10)
        assert constrain_position(ann, -1000, -1000, PAGE) == Position(0, 0)

    def test_default_size_when_unset(self) -> None:
        ann = Annotation(id="a", x=0, y=0)
        assert constrain_position(ann, 5000, 5000, PAGE) == Position(650, 560)
