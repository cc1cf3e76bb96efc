"""Topological map of an explored environment."""

from __future__ import annotations

import threading
from typing import Iterator, List, Optional, Sequence

from . import search
from .placement import PlacementEngine
from .store import WaypointStore
from .types import Direction, GraphConfig, Waypoint


class TopologicalGraph:
    """Waypoint graph built from exploration reports.

    This is the surface offered to the exploration controller and the motion
    planner. Every call holds an internal lock for its whole duration, so one
    graph can be shared between concurrent request handlers. Waypoints handed
    out are snapshots; use ``get_waypoint`` again to observe later changes.

    Example:
        graph = TopologicalGraph(GraphConfig(dedup_distance_threshold=0.1))
        start = graph.place_waypoint(0.0, 0.0, (True, False, True, True), 0, Direction.EAST)
        nxt = graph.place_waypoint(0.5, 0.0, (True, False, True, False), start, Direction.EAST)
        graph.path_to_nearest_frontier(start)  # [start, nxt]
    """

    def __init__(self, config: Optional[GraphConfig] = None) -> None:
        self._lock = threading.RLock()
        self._store = WaypointStore()
        self._placement = PlacementEngine(self._store, config or GraphConfig())

    @property
    def config(self) -> GraphConfig:
        return self._placement.config

    def reload_config(self, config: GraphConfig) -> None:
        """Replace the configuration; applies to subsequent placements."""
        with self._lock:
            self._placement.config = config

    @property
    def dedup_threshold(self) -> float:
        return self.config.dedup_distance_threshold

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Waypoint]:
        with self._lock:
            snapshot = [w.copy() for w in self._store]
        return iter(snapshot)

    def place_waypoint(
        self,
        x: float,
        y: float,
        blocked: Sequence[bool],
        origin_id: int,
        direction: Direction | int | str,
    ) -> int:
        """Place a navigation waypoint; see ``PlacementEngine.place_waypoint``."""
        with self._lock:
            return self._placement.place_waypoint(x, y, blocked, origin_id, direction)

    def place_object(
        self,
        origin_id: int,
        object_x: float,
        object_y: float,
        direction: Direction | int | str,
    ) -> int:
        """Place an object waypoint; see ``PlacementEngine.place_object``."""
        with self._lock:
            return self._placement.place_object(origin_id, object_x, object_y, direction)

    def get_waypoint(self, waypoint_id: int) -> Waypoint:
        """Return a snapshot of a waypoint.

        Raises:
            OutOfRangeError: If the id is not a valid waypoint id.
        """
        with self._lock:
            return self._store.get(waypoint_id).copy()

    def has_nearby_waypoint(self, x: float, y: float) -> Optional[Waypoint]:
        """Return the waypoint a report at ``(x, y)`` would merge into, if any."""
        with self._lock:
            nearby = self._store.nearest_within(x, y, self.dedup_threshold)
            if nearby is None:
                return None
            return self._store.get(nearby).copy()

    def has_unexplored_direction(self, waypoint_id: int) -> bool:
        with self._lock:
            return self._store.has_unexplored_direction(waypoint_id)

    def path_to_nearest_frontier(self, from_id: int) -> List[int]:
        """Path to the closest waypoint with an unexplored direction, or ``[]``."""
        with self._lock:
            return search.path_to_nearest_frontier(self._store, from_id)

    def path_to_nearest_object(self, from_id: int) -> List[int]:
        """Path to the closest object waypoint, or ``[]``."""
        with self._lock:
            return search.path_to_nearest_object(self._store, from_id)
