"""Plotting utilities for topological waypoint maps."""

from typing import Any, Optional, Sequence

from .graph import TopologicalGraph

_EXPLORED_COLOR = "tab:blue"
_FRONTIER_COLOR = "tab:orange"
_OBJECT_COLOR = "tab:red"
_PATH_COLOR = "tab:green"


def plot_waypoint_graph(
    ax: Any,
    graph: TopologicalGraph,
    path: Optional[Sequence[int]] = None,
    show_ids: bool = True,
) -> None:
    """Render waypoints and their links on a matplotlib axis.

    Explored waypoints are blue circles, frontiers orange circles and objects
    red squares. Each link is drawn once. If *path* is given, its consecutive
    waypoints are joined by a thick green line on top.
    """
    waypoints = list(graph)

    for waypoint in waypoints:
        for _, neighbor_id in waypoint.neighbors():
            if neighbor_id < waypoint.id:
                continue
            neighbor = waypoints[neighbor_id]
            ax.plot(
                [waypoint.x, neighbor.x], [waypoint.y, neighbor.y],
                color="black", linewidth=0.8, zorder=1,
            )

    for waypoint in waypoints:
        if waypoint.has_object:
            color, marker = _OBJECT_COLOR, "s"
        elif waypoint.has_unknown_direction:
            color, marker = _FRONTIER_COLOR, "o"
        else:
            color, marker = _EXPLORED_COLOR, "o"
        ax.scatter(waypoint.x, waypoint.y, color=color, marker=marker, s=30, zorder=2)
        if show_ids:
            ax.text(waypoint.x, waypoint.y, str(waypoint.id), fontsize=6, zorder=3)

    if path:
        xs = [waypoints[i].x for i in path]
        ys = [waypoints[i].y for i in path]
        ax.plot(xs, ys, color=_PATH_COLOR, linewidth=2.5, alpha=0.8, zorder=4)

    ax.set_aspect("equal")
