"""Shortest-path search from a waypoint to the nearest waypoint of interest.

The relaxation is breadth-first over a FIFO queue and finalises a waypoint
the first time it is popped. On trees and on uniform-cost grids, which is
what orthogonal waypoint placement produces, this yields shortest paths. On
irregular graphs a waypoint may be finalised before its cheapest predecessor
has been expanded; the queue order, and with it the tie-breaking, is kept as
is because path consumers rely on it.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Callable, List, Optional, Tuple

from .store import WaypointStore

WaypointPredicate = Callable[[int], bool]


def relax_distances(
    store: WaypointStore, from_id: int
) -> Tuple[List[float], List[Optional[int]]]:
    """Run the label-correcting relaxation starting at ``from_id``.

    Step cost between neighbouring waypoints is their squared Euclidean
    distance.

    Returns:
        ``(distances, predecessors)`` indexed by waypoint id. Unreached
        waypoints have distance ``inf`` and predecessor ``None``.

    Raises:
        OutOfRangeError: If ``from_id`` is not a valid id.
    """
    start = store.get(from_id).id
    count = len(store)
    distances = [math.inf] * count
    predecessors: List[Optional[int]] = [None] * count
    visited = [False] * count

    distances[start] = 0.0
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if visited[current]:
            continue
        visited[current] = True

        for _, neighbor in store.get(current).neighbors():
            d = distances[current] + store.squared_distance(current, neighbor)
            if d < distances[neighbor]:
                distances[neighbor] = d
                predecessors[neighbor] = current
                queue.append(neighbor)

    return distances, predecessors


def find_path_to_nearest(
    store: WaypointStore, from_id: int, predicate: WaypointPredicate
) -> List[int]:
    """Return the path from ``from_id`` to the closest waypoint matching ``predicate``.

    The path starts with ``from_id`` and ends with the match, both included.
    Among equally distant matches the lowest id wins. An empty list means no
    reachable waypoint matches.
    """
    distances, predecessors = relax_distances(store, from_id)

    target = None
    best = math.inf
    for waypoint_id, d in enumerate(distances):
        if d < best and predicate(waypoint_id):
            best = d
            target = waypoint_id

    if target is None:
        return []

    start = store.get(from_id).id
    path = [target]
    current = target
    while current != start:
        current = predecessors[current]
        path.append(current)
    path.reverse()
    return path


def is_frontier(store: WaypointStore) -> WaypointPredicate:
    """Predicate: the waypoint has at least one unexplored direction."""
    return store.has_unexplored_direction


def is_object(store: WaypointStore) -> WaypointPredicate:
    """Predicate: the waypoint holds an object."""
    return lambda waypoint_id: store.get(waypoint_id).has_object


def path_to_nearest_frontier(store: WaypointStore, from_id: int) -> List[int]:
    return find_path_to_nearest(store, from_id, is_frontier(store))


def path_to_nearest_object(store: WaypointStore, from_id: int) -> List[int]:
    return find_path_to_nearest(store, from_id, is_object(store))
