# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from tierline import configuration
from tierline.log import LOG_LEVELS
from tierline.repository.configuration import CONFIGURATION_REPO
from tierline.terminal.custom_typer import AliasedTyperGroup
from tierline.terminal.parse import parse_scale

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("default_scale", config["default_scale"])
    table.add_row(
        "cyclic_view",
        "✓ Enabled" if config["cyclic_view"] else "✗ Disabled",
    )
    table.add_row("timezone", config["timezone"])
    table.add_row("unit_pixel_width", str(config["unit_pixel_width"]))
    table.add_row("end_margin_units", str(config["end_margin_units"]))
    table.add_row("level_spacing", str(config["level_spacing"]))
    table.add_row("top_margin", str(config["top_margin"]))
    table.add_row("body_height", str(config["body_height"]))
    table.add_row("minimum_body_width", str(config["minimum_body_width"]))
    table.add_row("log_level", config["log_level"])

    console.print(table)
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")


@app.command("set, s")
def set(
    default_scale: Annotated[
        Optional[str],
        typer.Option("--default-scale", help="Scale used when none is given"),
    ] = None,
    cyclic_view: Annotated[
        Optional[bool],
        typer.Option(
            "--cyclic-view/--no-cyclic-view",
            help="Enable/disable the cyclic view by default",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", help="Timezone for calendar arithmetic"),
    ] = None,
    unit_pixel_width: Annotated[
        Optional[int],
        typer.Option("--unit-pixel-width", min=1, help="Pixels per scale unit"),
    ] = None,
    end_margin_units: Annotated[
        Optional[int],
        typer.Option("--end-margin-units", min=0, help="Scale units of margin"),
    ] = None,
    level_spacing: Annotated[
        Optional[int],
        typer.Option("--level-spacing", min=1, help="Pixels between levels"),
    ] = None,
    top_margin: Annotated[
        Optional[int],
        typer.Option("--top-margin", min=0, help="Pixels above the first level"),
    ] = None,
    body_height: Annotated[
        Optional[int],
        typer.Option("--body-height", min=1, help="Height of an interval body"),
    ] = None,
    minimum_body_width: Annotated[
        Optional[int],
        typer.Option("--minimum-body-width", min=0, help="Narrowest interval body"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Unknown log level '{log_level}'")

    CONFIGURATION_REPO.update_config(
        default_scale=parse_scale(default_scale) if default_scale is not None else None,
        cyclic_view=cyclic_view,
        timezone=timezone,
        unit_pixel_width=unit_pixel_width,
        end_margin_units=end_margin_units,
        level_spacing=level_spacing,
        top_margin=top_margin,
        body_height=body_height,
        minimum_body_width=minimum_body_width,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()

    view()
