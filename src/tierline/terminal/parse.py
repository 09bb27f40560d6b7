# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from tierline.model.scale import SCALES, ScaleType, is_scale
from tierline.time import millis_from_datetime, millis_from_str


def parse_moment(value: str, tz: str = "UTC") -> int:
    """
    Parse a moment given as an ISO 8601 date or datetime, or "now".

    Returns:
        Milliseconds since the epoch
    """
    value = value.strip()
    if value == "now" or value == "n":
        return millis_from_datetime(pendulum.now(tz))

    if not re.match(r"^-?\d{4}-\d{2}-\d{2}", value):
        raise typer.BadParameter(f"Incorrect datetime format: '{value}'")
    try:
        return millis_from_str(value, tz)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid datetime '{value}': {e}")


def parse_interval(value: str, tz: str = "UTC") -> tuple[Optional[str], int, int]:
    """
    Parse an interval given as `START/END`, optionally prefixed with `LABEL=`.

    Args:
        value: Text like "2024-01-01/2024-03-01" or "launch=2024-05-01/2024-05-03"
        tz: Timezone for datetimes without an explicit offset

    Returns:
        Tuple of (label or None, start millis, end millis)

    Raises:
        typer.BadParameter: If the format is invalid or the end precedes the start
    """
    label: Optional[str] = None
    if "=" in value:
        label, value = value.split("=", 1)
        label = label.strip() or None

    parts = value.split("/")
    if len(parts) != 2:
        raise typer.BadParameter(
            f"Invalid interval: '{value}' (expected format: 'START/END')"
        )

    start = parse_moment(parts[0], tz)
    end = parse_moment(parts[1], tz)
    if start > end:
        raise typer.BadParameter(f"Invalid interval: '{value}' (start must be <= end)")

    return label, start, end


def parse_probe(value: str) -> tuple[int, int]:
    """Parse a probe point given as `X,Y` in pixels."""
    probe_match = re.match(r"^\s*(-?\d+)\s*,\s*(-?\d+)\s*$", value)
    if not probe_match:
        raise typer.BadParameter(f"Probe must be in X,Y format, got '{value}'")
    return int(probe_match.group(1)), int(probe_match.group(2))


def parse_scale(value: str) -> ScaleType:
    if not is_scale(value):
        raise typer.BadParameter(
            f"Unknown scale '{value}' (valid scales: {', '.join(SCALES)})"
        )
    return value  # type: ignore[return-value]
