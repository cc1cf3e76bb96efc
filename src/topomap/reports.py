"""Exploration reports and their ingestion into a topological graph.

A report file is a JSON list. Waypoint reports look like::

    {"type": "waypoint", "x": 1.0, "y": 0.0,
     "blocked": {"north": true, "south": true},
     "origin": 0, "direction": "east"}

``blocked`` may also be a list of four booleans ordered North, East, South,
West. Object reports look like::

    {"type": "object", "origin": 1, "x": 1.0, "y": 0.5, "direction": "north"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Tuple, Union

from .graph import TopologicalGraph
from .types import Direction


@dataclass(frozen=True)
class WaypointReport:
    """The robot reached a spot and sensed which directions are blocked."""

    x: float
    y: float
    blocked: Tuple[bool, bool, bool, bool]
    origin: int
    direction: Direction


@dataclass(frozen=True)
class ObjectReport:
    """The robot, standing at ``origin``, saw an object at ``(x, y)``."""

    origin: int
    x: float
    y: float
    direction: Direction


Report = Union[WaypointReport, ObjectReport]


def _parse_blocked(value: Any) -> Tuple[bool, bool, bool, bool]:
    if value is None:
        return (False, False, False, False)
    if isinstance(value, Mapping):
        flags = [False] * 4
        for key, flag in value.items():
            flags[Direction.coerce(key)] = bool(flag)
        return (flags[0], flags[1], flags[2], flags[3])
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return (bool(value[0]), bool(value[1]), bool(value[2]), bool(value[3]))
    raise ValueError(f"Invalid blocked flags: {value!r}")


def _require(entry: Mapping[str, Any], key: str) -> Any:
    if key not in entry:
        raise ValueError(f"Report is missing '{key}': {dict(entry)!r}")
    return entry[key]


def _as_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Report field '{key}' must be a number, got {value!r}") from None


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Report field '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Report field '{key}' must be an integer, got {value!r}") from None


def parse_report(entry: Mapping[str, Any]) -> Report:
    """Build a report from its JSON mapping.

    Raises:
        ValueError: If the entry is not a mapping, has an unknown type, or a
            field is missing or of the wrong kind.
    """
    if not isinstance(entry, Mapping):
        raise ValueError(f"Report must be a mapping, got {entry!r}")
    kind = entry.get("type", "waypoint")
    if kind == "waypoint":
        return WaypointReport(
            x=_as_float("x", _require(entry, "x")),
            y=_as_float("y", _require(entry, "y")),
            blocked=_parse_blocked(entry.get("blocked")),
            origin=_as_int("origin", entry.get("origin", 0)),
            direction=Direction.coerce(entry.get("direction", Direction.NORTH)),
        )
    if kind == "object":
        return ObjectReport(
            origin=_as_int("origin", _require(entry, "origin")),
            x=_as_float("x", _require(entry, "x")),
            y=_as_float("y", _require(entry, "y")),
            direction=Direction.coerce(_require(entry, "direction")),
        )
    raise ValueError(f"Unknown report type: {kind!r}")


def load_reports(path: Union[str, Path]) -> List[Report]:
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a JSON list of reports")
    return [parse_report(entry) for entry in entries]


def apply_reports(graph: TopologicalGraph, reports: List[Report]) -> List[int]:
    """Feed reports to ``graph`` in order and return the resulting waypoint ids."""
    ids = []
    for report in reports:
        if isinstance(report, ObjectReport):
            ids.append(graph.place_object(report.origin, report.x, report.y, report.direction))
        else:
            ids.append(graph.place_waypoint(
                report.x, report.y, report.blocked, report.origin, report.direction
            ))
    return ids
