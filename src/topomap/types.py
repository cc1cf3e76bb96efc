"""Types for the topological waypoint map."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any, Iterator, List, Mapping, Tuple

from .constants import BLOCKED, DEFAULT_WHEEL_DISTANCE, UNKNOWN
from .errors import InvalidDirectionError


_DIRECTION_ALIASES = {
    "n": "NORTH",
    "e": "EAST",
    "s": "SOUTH",
    "w": "WEST",
}


class Direction(IntEnum):
    """Cardinal connection directions, numbered as on the wire."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    @classmethod
    def coerce(cls, value: Any) -> "Direction":
        """Convert a Direction, an integer 0..3 or a direction name.

        Raises:
            InvalidDirectionError: If ``value`` names no cardinal direction.
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, bool):
            raise InvalidDirectionError(value)
        if isinstance(value, numbers.Integral):
            try:
                return cls(int(value))
            except ValueError:
                raise InvalidDirectionError(value) from None
        if isinstance(value, str):
            key = value.strip().lower()
            name = _DIRECTION_ALIASES.get(key, key.upper())
            if name in cls.__members__:
                return cls[name]
        raise InvalidDirectionError(value)


def link_label(link: int) -> str:
    """Human-readable form of a link state."""
    if link == UNKNOWN:
        return "unknown"
    if link == BLOCKED:
        return "blocked"
    return str(link)


@dataclass
class Waypoint:
    """A node of the navigation graph.

    Attributes:
        id: Dense index of the waypoint in its store.
        x: Planar x coordinate.
        y: Planar y coordinate.
        links: One entry per ``Direction``: ``UNKNOWN``, ``BLOCKED`` or the id
            of the connected waypoint.
        has_object: Whether a detected object sits at this waypoint.
    """

    id: int
    x: float
    y: float
    links: List[int] = field(default_factory=lambda: [UNKNOWN] * 4)
    has_object: bool = False

    @property
    def north(self) -> int:
        return self.links[Direction.NORTH]

    @property
    def east(self) -> int:
        return self.links[Direction.EAST]

    @property
    def south(self) -> int:
        return self.links[Direction.SOUTH]

    @property
    def west(self) -> int:
        return self.links[Direction.WEST]

    @property
    def has_unknown_direction(self) -> bool:
        return UNKNOWN in self.links

    def neighbors(self) -> Iterator[Tuple[Direction, int]]:
        """Yield ``(direction, id)`` for every connected link, North first."""
        for direction in Direction:
            link = self.links[direction]
            if link >= 0:
                yield direction, link

    def copy(self) -> "Waypoint":
        return Waypoint(self.id, self.x, self.y, list(self.links), self.has_object)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "north": self.north,
            "east": self.east,
            "south": self.south,
            "west": self.west,
            "has_object": self.has_object,
        }


@dataclass(frozen=True)
class GraphConfig:
    """Configuration of a topological map.

    Attributes:
        dedup_distance_threshold: Reports closer than this to an existing
            waypoint are merged into it. Same unit as the coordinates.
        smooth_positions: Blend merged observations into the stored
            coordinate instead of keeping the first one.
    """

    dedup_distance_threshold: float = DEFAULT_WHEEL_DISTANCE / 2.0
    smooth_positions: bool = False

    def __post_init__(self) -> None:
        threshold = self.dedup_distance_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise ValueError(f"dedup_distance_threshold must be a number, got {threshold!r}")
        if not math.isfinite(threshold) or threshold <= 0:
            raise ValueError(
                f"dedup_distance_threshold must be positive and finite, got {threshold!r}"
            )
        object.__setattr__(self, "dedup_distance_threshold", float(threshold))
        object.__setattr__(self, "smooth_positions", bool(self.smooth_positions))

    @classmethod
    def from_robot_geometry(cls, wheel_distance: float, smooth_positions: bool = False) -> "GraphConfig":
        """Derive the merge distance from the robot's wheel base (half of it)."""
        return cls(dedup_distance_threshold=wheel_distance / 2.0, smooth_positions=smooth_positions)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "GraphConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown graph config keys: {sorted(unknown)}")
        return cls(**values)
