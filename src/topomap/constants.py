"""Shared constants for the topological waypoint map."""

UNKNOWN = -1
BLOCKED = -2

DEFAULT_WHEEL_DISTANCE = 0.2
"""Distance between the drive wheels of the reference robot (metres)."""

POSITION_KEEP_WEIGHT = 0.3
POSITION_OBSERVATION_WEIGHT = 0.7
