"""Exceptions raised for caller contract violations."""


class TopoMapError(Exception):
    """Base class for all topological map errors."""


class OutOfRangeError(TopoMapError, IndexError):
    """A waypoint id outside the currently valid range was used."""

    def __init__(self, waypoint_id: object, count: int) -> None:
        super().__init__(f"Waypoint id {waypoint_id!r} out of range (map holds {count} waypoints)")
        self.waypoint_id = waypoint_id
        self.count = count


class InvalidDirectionError(TopoMapError, ValueError):
    """A direction other than North, East, South or West was given."""

    def __init__(self, direction: object) -> None:
        super().__init__(f"Direction {direction!r} does not exist")
        self.direction = direction
