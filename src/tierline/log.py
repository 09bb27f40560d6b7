# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str) -> None:
    """Route log records through rich at the given level name."""
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {level}")

    logging.basicConfig(
        level=level_name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
