"""Placement of waypoint and object reports into a waypoint store."""

from __future__ import annotations

import logging
from typing import Sequence

from .constants import POSITION_KEEP_WEIGHT, POSITION_OBSERVATION_WEIGHT
from .store import WaypointStore
from .types import Direction, GraphConfig, Waypoint

logger = logging.getLogger(__name__)

_ALL_BLOCKED = (True, True, True, True)


class PlacementEngine:
    """Merge reports into nearby waypoints or create new ones.

    Repeated reports of the same spot converge onto one waypoint: anything
    closer than ``config.dedup_distance_threshold`` to an existing waypoint is
    treated as that waypoint.
    """

    def __init__(self, store: WaypointStore, config: GraphConfig) -> None:
        self.store = store
        self.config = config

    def place_waypoint(
        self,
        x: float,
        y: float,
        blocked: Sequence[bool],
        origin_id: int,
        direction: Direction | int | str,
    ) -> int:
        """Place a navigation waypoint reached from ``origin_id``.

        Args:
            x: Reported x coordinate.
            y: Reported y coordinate.
            blocked: Blocked flags ordered North, East, South, West, used only
                if a new waypoint is created.
            origin_id: Waypoint the robot came from. Ignored for the first
                waypoint of the map.
            direction: Direction travelled from ``origin_id``.

        Returns:
            Id of the merged or newly created waypoint.
        """
        store = self.store
        existing = store.nearest_within(x, y, self.config.dedup_distance_threshold)
        if existing is not None:
            logger.info("On waypoint %d", existing)
            self._merge_position(store.get(existing), x, y)
            return existing

        if len(store) == 0:
            waypoint_id = store.create(x, y, blocked)
            logger.debug("Created first waypoint %d at (%.3f, %.3f)", waypoint_id, x, y)
            return waypoint_id

        # Validate before creating so a bad request leaves the map untouched.
        direction = Direction.coerce(direction)
        store.get(origin_id)

        waypoint_id = store.create(x, y, blocked)
        store.connect(origin_id, direction, waypoint_id)
        logger.debug(
            "Created waypoint %d at (%.3f, %.3f), %s of %d",
            waypoint_id, x, y, direction.name.lower(), origin_id,
        )
        return waypoint_id

    def place_object(
        self,
        origin_id: int,
        object_x: float,
        object_y: float,
        direction: Direction | int | str,
    ) -> int:
        """Place an object seen from ``origin_id`` and link it from there.

        A report close to an existing object waypoint reuses it; otherwise a
        new object waypoint is created with every direction blocked. In both
        cases ``origin_id`` is connected to the object in ``direction``.

        Returns:
            Id of the object waypoint.
        """
        store = self.store
        direction = Direction.coerce(direction)
        store.get(origin_id)

        neighbor = store.nearest_within(object_x, object_y, self.config.dedup_distance_threshold)
        if neighbor is not None and store.get(neighbor).has_object:
            object_id = neighbor
            logger.info("On object waypoint %d", object_id)
            self._merge_position(store.get(object_id), object_x, object_y)
        else:
            object_id = store.create(object_x, object_y, _ALL_BLOCKED, has_object=True)
            logger.debug("Created object waypoint %d at (%.3f, %.3f)", object_id, object_x, object_y)

        store.connect(origin_id, direction, object_id)
        return object_id

    def _merge_position(self, waypoint: Waypoint, x: float, y: float) -> None:
        if not self.config.smooth_positions:
            return
        waypoint.x = POSITION_KEEP_WEIGHT * waypoint.x + POSITION_OBSERVATION_WEIGHT * float(x)
        waypoint.y = POSITION_KEEP_WEIGHT * waypoint.y + POSITION_OBSERVATION_WEIGHT * float(y)
