"""Append-only waypoint storage with reciprocal directional links."""

from __future__ import annotations

import logging
import numbers
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .constants import BLOCKED, UNKNOWN
from .errors import OutOfRangeError
from .types import Direction, Waypoint

logger = logging.getLogger(__name__)


class WaypointStore:
    """Dense arena of waypoints where a waypoint's id is its list position.

    Waypoints are never removed, so ids stay valid for the lifetime of the
    store and lookups are O(1).
    """

    def __init__(self) -> None:
        self._waypoints: List[Waypoint] = []

    def __len__(self) -> int:
        return len(self._waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self._waypoints)

    def is_valid_id(self, waypoint_id: object) -> bool:
        if isinstance(waypoint_id, bool) or not isinstance(waypoint_id, numbers.Integral):
            return False
        return 0 <= int(waypoint_id) < len(self._waypoints)

    def create(
        self,
        x: float,
        y: float,
        blocked: Sequence[bool] = (False, False, False, False),
        has_object: bool = False,
    ) -> int:
        """Append a waypoint and return its id.

        Args:
            x: Planar x coordinate.
            y: Planar y coordinate.
            blocked: Blocked flags ordered North, East, South, West. Blocked
                directions start as ``BLOCKED``, the others as ``UNKNOWN``.
            has_object: Mark the waypoint as an object waypoint.
        """
        if len(blocked) != 4:
            raise ValueError(f"Expected 4 blocked flags (N, E, S, W), got {len(blocked)}")
        waypoint_id = len(self._waypoints)
        links = [BLOCKED if flag else UNKNOWN for flag in blocked]
        self._waypoints.append(
            Waypoint(id=waypoint_id, x=float(x), y=float(y), links=links, has_object=bool(has_object))
        )
        return waypoint_id

    def get(self, waypoint_id: int) -> Waypoint:
        """Return the stored waypoint (not a copy).

        Raises:
            OutOfRangeError: If ``waypoint_id`` is not in ``[0, len(self))``.
        """
        if not self.is_valid_id(waypoint_id):
            raise OutOfRangeError(waypoint_id, len(self._waypoints))
        return self._waypoints[int(waypoint_id)]

    def connect(self, id_a: int, direction: Direction | int | str, id_b: int) -> None:
        """Link ``id_a`` to ``id_b`` in ``direction`` and ``id_b`` back to ``id_a``.

        A link that gets overwritten leaves its former partner pointing at a
        waypoint that no longer points back; that partner's link is set to
        ``BLOCKED`` so that links stay reciprocal. The direction has been
        explored, so it does not turn the partner back into a frontier.

        Raises:
            InvalidDirectionError: If ``direction`` is not a cardinal direction.
            OutOfRangeError: If either id is invalid.
        """
        direction = Direction.coerce(direction)
        opposite = direction.opposite
        node = self.get(id_a)
        other = self.get(id_b)

        self._detach(node, direction, other.id)
        self._detach(other, opposite, node.id)

        node.links[direction] = other.id
        other.links[opposite] = node.id

    def _detach(self, node: Waypoint, direction: Direction, new_partner: int) -> None:
        previous = node.links[direction]
        if previous < 0 or previous == new_partner:
            return
        stale = self._waypoints[previous]
        if stale.links[direction.opposite] == node.id:
            logger.warning(
                "Waypoint %d: replacing %s link to %d, marking %d %s blocked",
                node.id, direction.name.lower(), previous, previous,
                direction.opposite.name.lower(),
            )
            stale.links[direction.opposite] = BLOCKED

    def positions(self) -> np.ndarray:
        """Return an Nx2 array of waypoint coordinates in id order."""
        if not self._waypoints:
            return np.empty((0, 2))
        return np.array([(w.x, w.y) for w in self._waypoints], dtype=float)

    def nearest_within(self, x: float, y: float, threshold: float) -> Optional[int]:
        """Return the id of the closest waypoint if it is closer than ``threshold``.

        Ties go to the lowest id.
        """
        if not self._waypoints:
            return None
        sq_dists = np.sum((self.positions() - np.array([x, y], dtype=float)) ** 2, axis=1)
        closest = int(np.argmin(sq_dists))
        if sq_dists[closest] < threshold * threshold:
            return closest
        return None

    def has_unexplored_direction(self, waypoint_id: int) -> bool:
        return self.get(waypoint_id).has_unknown_direction

    def squared_distance(self, id_a: int, id_b: int) -> float:
        a = self._waypoints[id_a]
        b = self._waypoints[id_b]
        return (b.x - a.x) ** 2 + (b.y - a.y) ** 2
