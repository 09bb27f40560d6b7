# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from tierline.log import LOG_LEVELS, configure_logging
from tierline.terminal import configuration
from tierline.terminal.custom_typer import AliasedTyperGroup
from tierline.terminal.layout import layout, snap

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="tierline - Timeline layout engine",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.command(name="layout, l", no_args_is_help=True)(layout)
app.command(name="snap, sn", no_args_is_help=True)(snap)


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help=f"Override the configured log level ({', '.join(LOG_LEVELS)})",
        ),
    ] = None,
) -> None:
    """
    tierline - Timeline layout engine

    Global options that apply to all commands.
    """
    if log_level is not None:
        if log_level.upper() not in LOG_LEVELS:
            raise typer.BadParameter(f"Unknown log level '{log_level}'")
        configure_logging(log_level)


def run() -> None:
    app()
