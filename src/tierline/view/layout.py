# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from tierline.model.grid_line import GridLine
from tierline.model.placed_interval import PlacedInterval
from tierline.service.timeline import Timeline
from tierline.time import millis_to_display_str
from tierline.view.header import header


def layout_view(timeline: Timeline) -> None:
    """Print the mapping summary and one row per placed interval, top level first."""
    header("layout")

    mapper = timeline.mapper
    placer = timeline.placer
    console = Console()

    summary_table = Table(box=box.SIMPLE)
    summary_table.add_column("property")
    summary_table.add_column("value")

    width, height = timeline.pane_size()
    summary_table.add_row("scale", mapper.scale)
    summary_table.add_row("view", "cyclic" if mapper.is_cyclic_view else "linear")
    summary_table.add_row("millis per pixel", str(mapper.millis_per_pixel))
    if mapper.is_mapped:
        summary_table.add_row(
            "origin",
            millis_to_display_str(mapper.origin_millis, mapper.scale, mapper.tz),
        )
    summary_table.add_row("levels", str(placer.level_count))
    summary_table.add_row("pane size", f"{width} x {height}")
    console.print(summary_table)

    placements_table = Table(box=box.SIMPLE)
    for column in ["label", "start", "end", "x", "width", "level", "y"]:
        placements_table.add_column(column)

    for level in placer.levels():
        for interval in level:
            placements_table.add_row(*_interval_row(interval, timeline))

    console.print(placements_table)


def probes_view(
    timeline: Timeline, probes: list[tuple[int, int]]
) -> list[Optional[PlacedInterval]]:
    console = Console()
    probes_table = Table(box=box.SIMPLE)
    probes_table.add_column("x")
    probes_table.add_column("y")
    probes_table.add_column("hit")

    hits: list[Optional[PlacedInterval]] = []
    for x, y in probes:
        hit = timeline.hit_test(x, y)
        hits.append(hit)
        probes_table.add_row(
            str(x), str(y), _label_of(hit) if hit is not None else "[dim]none[/dim]"
        )

    console.print(probes_table)
    return hits


def grid_view(lines: list[GridLine], tz: str) -> None:
    console = Console()
    grid_table = Table(box=box.SIMPLE)
    grid_table.add_column("kind")
    grid_table.add_column("moment")
    grid_table.add_column("x")

    for line in lines:
        style = "bold" if line["kind"] == "major" else "dim"
        grid_table.add_row(
            f"[{style}]{line['kind']}[/{style}]",
            millis_to_display_str(line["millis"], line["scale"], tz),
            str(line["x"]),
        )

    console.print(grid_table)


def _interval_row(interval: PlacedInterval, timeline: Timeline) -> list[str]:
    mapper = timeline.mapper
    return [
        _label_of(interval),
        millis_to_display_str(interval["span"]["start"], mapper.scale, mapper.tz),
        millis_to_display_str(interval["span"]["end"], mapper.scale, mapper.tz),
        str(interval["x"]),
        str(interval["width"]),
        str(interval["level"]),
        str(interval["y"]),
    ]


def _label_of(interval: PlacedInterval) -> str:
    if interval["label"] is not None:
        return interval["label"]
    return interval["id"][:8]
