"""Placement of waypoint and object reports: merging, linking and smoothing."""

import pytest

from topomap.constants import BLOCKED, UNKNOWN
from topomap.errors import InvalidDirectionError, OutOfRangeError
from topomap.placement import PlacementEngine
from topomap.store import WaypointStore
from topomap.types import Direction, GraphConfig

OPEN = (False, False, False, False)


def _engine(threshold: float = 0.25, smooth: bool = False) -> PlacementEngine:
    return PlacementEngine(
        WaypointStore(),
        GraphConfig(dedup_distance_threshold=threshold, smooth_positions=smooth),
    )


def _assert_reciprocal(store: WaypointStore) -> None:
    for waypoint in store:
        for direction, neighbor_id in waypoint.neighbors():
            assert store.get(neighbor_id).links[direction.opposite] == waypoint.id


def test_first_waypoint_is_not_linked():
    engine = _engine()
    first = engine.place_waypoint(0.0, 0.0, (True, False, True, False), origin_id=42, direction=Direction.EAST)

    assert first == 0
    assert engine.store.get(first).links == [BLOCKED, UNKNOWN, BLOCKED, UNKNOWN]


def test_new_waypoint_is_linked_from_origin():
    engine = _engine()
    start = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.NORTH)
    north = engine.place_waypoint(0.0, 1.0, (False, True, False, True), start, Direction.NORTH)

    assert north == 1
    assert engine.store.get(start).north == north
    assert engine.store.get(north).south == start
    assert engine.store.get(north).east == BLOCKED
    _assert_reciprocal(engine.store)


def test_repeated_report_merges_into_same_waypoint():
    engine = _engine(threshold=0.25)
    start = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.NORTH)
    north = engine.place_waypoint(0.0, 1.0, OPEN, start, Direction.NORTH)

    again = engine.place_waypoint(0.1, 1.05, (True, True, True, True), north, Direction.WEST)

    assert again == north
    assert len(engine.store) == 2
    # Merging neither reseeds nor relinks the existing waypoint.
    assert engine.store.get(north).links == [UNKNOWN, UNKNOWN, start, UNKNOWN]
    assert engine.store.get(north).west == UNKNOWN


def test_reports_further_apart_than_threshold_are_distinct():
    engine = _engine(threshold=0.25)
    a = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
    b = engine.place_waypoint(0.3, 0.0, OPEN, a, Direction.EAST)
    assert a != b
    assert len(engine.store) == 2


def test_returning_to_a_known_waypoint_does_not_link():
    engine = _engine()
    a = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
    b = engine.place_waypoint(1.0, 0.0, OPEN, a, Direction.EAST)
    c = engine.place_waypoint(1.0, 1.0, OPEN, b, Direction.NORTH)
    d = engine.place_waypoint(0.0, 1.0, OPEN, c, Direction.WEST)

    assert engine.place_waypoint(0.0, 0.02, OPEN, d, Direction.SOUTH) == a
    assert engine.store.get(d).south == UNKNOWN
    assert engine.store.get(a).north == UNKNOWN
    _assert_reciprocal(engine.store)


def test_invalid_direction_does_not_create_waypoint():
    engine = _engine()
    start = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
    with pytest.raises(InvalidDirectionError):
        engine.place_waypoint(1.0, 0.0, OPEN, start, 9)
    assert len(engine.store) == 1


def test_invalid_origin_does_not_create_waypoint():
    engine = _engine()
    engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
    with pytest.raises(OutOfRangeError):
        engine.place_waypoint(1.0, 0.0, OPEN, 3, Direction.EAST)
    assert len(engine.store) == 1


def test_smoothing_blends_merged_position():
    engine = _engine(threshold=0.5, smooth=True)
    a = engine.place_waypoint(1.0, 2.0, OPEN, 0, Direction.EAST)
    engine.place_waypoint(1.2, 1.9, OPEN, a, Direction.EAST)

    waypoint = engine.store.get(a)
    assert waypoint.x == pytest.approx(0.3 * 1.0 + 0.7 * 1.2)
    assert waypoint.y == pytest.approx(0.3 * 2.0 + 0.7 * 1.9)


def test_without_smoothing_position_is_kept():
    engine = _engine(threshold=0.5, smooth=False)
    a = engine.place_waypoint(1.0, 2.0, OPEN, 0, Direction.EAST)
    engine.place_waypoint(1.2, 1.9, OPEN, a, Direction.EAST)

    waypoint = engine.store.get(a)
    assert (waypoint.x, waypoint.y) == (1.0, 2.0)


def test_config_change_applies_to_next_placement():
    engine = _engine(threshold=0.5, smooth=False)
    a = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
    engine.config = GraphConfig(dedup_distance_threshold=0.05, smooth_positions=False)
    b = engine.place_waypoint(0.1, 0.0, OPEN, a, Direction.EAST)
    assert b != a


class TestPlaceObject:
    def test_object_waypoint_is_blocked_except_towards_origin(self):
        engine = _engine()
        origin = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
        obj = engine.place_object(origin, 0.0, 1.0, Direction.NORTH)

        waypoint = engine.store.get(obj)
        assert waypoint.has_object
        assert waypoint.links == [BLOCKED, BLOCKED, origin, BLOCKED]
        assert engine.store.get(origin).north == obj
        assert not engine.store.has_unexplored_direction(obj)

    def test_object_reports_close_together_reuse_one_waypoint(self):
        engine = _engine(threshold=0.3)
        west = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
        south = engine.place_waypoint(1.0, -1.0, OPEN, west, Direction.SOUTH)

        first = engine.place_object(west, 1.0, 0.0, Direction.EAST)
        second = engine.place_object(south, 1.1, 0.05, Direction.NORTH)

        assert first == second
        objects = [w for w in engine.store if w.has_object]
        assert len(objects) == 1
        assert engine.store.get(west).east == first
        assert engine.store.get(south).north == first
        assert engine.store.get(first).west == west
        assert engine.store.get(first).south == south
        _assert_reciprocal(engine.store)

    def test_object_reused_from_same_direction_keeps_first_origin_explored(self):
        engine = _engine(threshold=0.3)
        a = engine.place_waypoint(0.0, 0.0, (True, False, True, True), 0, Direction.EAST)
        b = engine.place_waypoint(0.0, 1.0, (False, False, True, True), a, Direction.NORTH)

        first = engine.place_object(a, 1.0, 0.5, Direction.EAST)
        second = engine.place_object(b, 1.05, 0.5, Direction.EAST)

        assert first == second
        assert engine.store.get(first).west == b
        assert engine.store.get(b).east == first
        assert engine.store.get(a).east == BLOCKED
        assert not engine.store.has_unexplored_direction(a)
        _assert_reciprocal(engine.store)

    def test_object_next_to_navigation_waypoint_gets_its_own_waypoint(self):
        engine = _engine(threshold=0.3)
        origin = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
        obj = engine.place_object(origin, 0.1, 0.0, Direction.EAST)

        assert obj != origin
        assert engine.store.get(obj).has_object
        assert not engine.store.get(origin).has_object
        assert engine.store.get(origin).east == obj

    def test_object_reuse_smooths_position(self):
        engine = _engine(threshold=0.5, smooth=True)
        origin = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
        obj = engine.place_object(origin, 2.0, 0.0, Direction.EAST)
        engine.place_object(origin, 2.2, 0.1, Direction.EAST)

        waypoint = engine.store.get(obj)
        assert waypoint.x == pytest.approx(0.3 * 2.0 + 0.7 * 2.2)
        assert waypoint.y == pytest.approx(0.7 * 0.1)

    def test_invalid_direction_does_not_create_object(self):
        engine = _engine()
        origin = engine.place_waypoint(0.0, 0.0, OPEN, 0, Direction.EAST)
        with pytest.raises(InvalidDirectionError):
            engine.place_object(origin, 1.0, 0.0, "up")
        assert len(engine.store) == 1

    def test_invalid_origin_raises(self):
        engine = _engine()
        with pytest.raises(OutOfRangeError):
            engine.place_object(0, 1.0, 0.0, Direction.EAST)
        assert len(engine.store) == 0
