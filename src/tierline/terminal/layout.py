# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from tierline.configuration import metrics_from_config
from tierline.errors import LayoutError
from tierline.repository.configuration import CONFIGURATION_REPO
from tierline.service.grid import grid_lines
from tierline.service.mapping import TimeAxisMapper
from tierline.service.timeline import Timeline
from tierline.template.placed_interval import get_placed_interval_template
from tierline.terminal.parse import (
    parse_interval,
    parse_moment,
    parse_probe,
    parse_scale,
)
from tierline.time import millis_to_iso_str
from tierline.view.layout import grid_view, layout_view, probes_view

console = Console()


def layout(
    intervals: Annotated[
        list[str],
        typer.Option(
            "--interval",
            "-i",
            help="START/END or LABEL=START/END, repeatable "
            "(e.g. launch=2024-05-01/2024-05-03)",
        ),
    ],
    scale: Annotated[
        Optional[str],
        typer.Option(
            "--scale",
            "-s",
            help="second, minute, hour, day, week, month or year",
        ),
    ] = None,
    cyclic: Annotated[
        Optional[bool],
        typer.Option(
            "--cyclic/--linear",
            help="Fold every year onto one leap-year template",
        ),
    ] = None,
    probes: Annotated[
        Optional[list[str]],
        typer.Option(
            "--probe",
            "-p",
            help="X,Y pixel point to hit test (repeatable)",
        ),
    ] = None,
    show_grid: Annotated[
        bool,
        typer.Option("--grid", "-g", help="Also list the grid lines across the pane"),
    ] = False,
) -> None:
    """Lay out intervals on a timeline and print their placement."""
    config = CONFIGURATION_REPO.get_config()
    tz = config["timezone"]

    layout_scale = parse_scale(scale) if scale is not None else config["default_scale"]
    cyclic_view = cyclic if cyclic is not None else config["cyclic_view"]

    placed_intervals = []
    for value in intervals:
        label, start, end = parse_interval(value, tz)
        placed_intervals.append(get_placed_interval_template(start, end, label))
    probe_points = [parse_probe(probe) for probe in probes or []]

    mapper = TimeAxisMapper(
        scale=layout_scale,
        cyclic_view=cyclic_view,
        metrics=metrics_from_config(config),
        tz=tz,
    )
    try:
        timeline = Timeline(mapper)
        timeline.add_intervals(placed_intervals)

        layout_view(timeline)
        if probe_points:
            probes_view(timeline, probe_points)
        if show_grid:
            width, _ = timeline.pane_size()
            grid_view(grid_lines(mapper, 0, width), tz)
    except LayoutError as e:
        console.print(f"[red]Layout failed: {e}[/red]")
        raise typer.Exit(1)


def snap(
    moment: str,
    scale: Annotated[
        Optional[str],
        typer.Option(
            "--scale",
            "-s",
            help="second, minute, hour, day, week, month or year",
        ),
    ] = None,
) -> None:
    """Round a moment to the nearest boundary of a calendar unit."""
    config = CONFIGURATION_REPO.get_config()
    tz = config["timezone"]
    snap_scale = parse_scale(scale) if scale is not None else config["default_scale"]

    mapper = TimeAxisMapper(scale=snap_scale, tz=tz)
    snapped = mapper.snap_to_unit(parse_moment(moment, tz))
    console.print(millis_to_iso_str(snapped, tz))
