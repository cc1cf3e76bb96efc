"""Topological waypoint maps for exploring robots.

Waypoints are connected along the four cardinal directions as the robot
reports them. The map answers two questions: the path to the nearest
waypoint with an unexplored direction, and the path to the nearest object.
"""

from .constants import BLOCKED, UNKNOWN
from .errors import InvalidDirectionError, OutOfRangeError, TopoMapError
from .graph import TopologicalGraph
from .types import Direction, GraphConfig, Waypoint

__all__ = [
    "BLOCKED",
    "UNKNOWN",
    "Direction",
    "GraphConfig",
    "InvalidDirectionError",
    "OutOfRangeError",
    "TopoMapError",
    "TopologicalGraph",
    "Waypoint",
]
