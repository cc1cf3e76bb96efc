"""Topomap command-line interface."""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from topomap.errors import TopoMapError
from topomap.graph import TopologicalGraph
from topomap.reports import apply_reports, load_reports
from topomap.types import GraphConfig, link_label

_LINK_COLUMNS = ("north", "east", "south", "west")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(
    config_file: Optional[str],
    dist_thresh: Optional[float],
    smooth: bool,
) -> GraphConfig:
    """Read a JSON config file, then apply command-line overrides."""
    values: Dict[str, Any] = {}
    if config_file is not None:
        with open(config_file, encoding="utf-8") as f:
            values = json.load(f)
        if not isinstance(values, dict):
            raise ValueError(f"{config_file}: expected a JSON object of graph settings")
    if dist_thresh is not None:
        values["dedup_distance_threshold"] = dist_thresh
    if smooth:
        values["smooth_positions"] = True
    return GraphConfig.from_dict(values)


def _waypoint_table(graph: TopologicalGraph) -> Table:
    table = Table(title=f"Waypoints ({graph.count()})")
    for column in ("id", "x", "y") + _LINK_COLUMNS + ("object",):
        table.add_column(column, justify="right" if column in ("id", "x", "y") else "left")
    for waypoint in graph:
        row = waypoint.as_dict()
        table.add_row(
            str(row["id"]),
            f"{row['x']:.3f}",
            f"{row['y']:.3f}",
            *(link_label(row[name]) for name in _LINK_COLUMNS),
            "yes" if row["has_object"] else "",
        )
    return table


def _format_path(path: List[int]) -> str:
    if not path:
        return "none found"
    return " -> ".join(str(i) for i in path)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="topomap")
def main() -> None:
    """Topomap: topological waypoint maps for exploring robots."""
    pass


@main.command("replay")
@click.argument("reports_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON file of graph settings (dedup_distance_threshold, smooth_positions)")
@click.option("--dist-thresh", type=float, default=None,
              help="Merge distance for waypoint reports (default: half the reference wheel base)")
@click.option("--smooth", is_flag=True, default=False,
              help="Blend repeated observations into stored waypoint positions")
@click.option("--frontier-from", type=int, default=None,
              help="Print the path from this waypoint to the nearest frontier")
@click.option("--object-from", type=int, default=None,
              help="Print the path from this waypoint to the nearest object")
@click.option("--save-plot", default=None,
              help="Save a plot of the map to file (e.g. map.png); the frontier path is drawn if requested, else the object path")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging verbosity")
def replay(
    reports_file: str,
    config_file: Optional[str],
    dist_thresh: Optional[float],
    smooth: bool,
    frontier_from: Optional[int],
    object_from: Optional[int],
    save_plot: Optional[str],
    log_level: str,
) -> None:
    """Build a map from a JSON file of exploration reports."""
    _configure_logging(log_level)
    console = Console()

    try:
        config = _load_config(config_file, dist_thresh, smooth)
        reports = load_reports(reports_file)
        graph = TopologicalGraph(config)
        apply_reports(graph, reports)

        frontier_path = None
        if frontier_from is not None:
            frontier_path = graph.path_to_nearest_frontier(frontier_from)
        object_path = None
        if object_from is not None:
            object_path = graph.path_to_nearest_object(object_from)
    except (TopoMapError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    console.print(_waypoint_table(graph))
    if frontier_path is not None:
        console.print(f"Nearest frontier from {frontier_from}: {_format_path(frontier_path)}")
    if object_path is not None:
        console.print(f"Nearest object from {object_from}: {_format_path(object_path)}")

    if save_plot:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from topomap.plotting import plot_waypoint_graph

        plot_path = frontier_path if frontier_path is not None else object_path
        fig, ax = plt.subplots(figsize=(6, 6))
        plot_waypoint_graph(ax, graph, path=plot_path)
        fig.savefig(save_plot, dpi=150, bbox_inches="tight")
        plt.close(fig)
        console.print(f"Saved plot to {save_plot}")
        if plot_path:
            console.print(f"Plotted path: {_format_path(plot_path)}")


if __name__ == "__main__":
    main()
