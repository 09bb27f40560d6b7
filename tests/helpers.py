# SPDX-License-Identifier: MIT

from typing import Optional

from tierline.model.placed_interval import PlacedInterval
from tierline.template.placed_interval import get_placed_interval_template
from tierline.time import millis_from_str


def at(value: str) -> int:
    return millis_from_str(value)


def positioned(
    x: int,
    width: int,
    duration: Optional[int] = None,
    label: Optional[str] = None,
) -> PlacedInterval:
    """An interval with its pixel geometry already set."""
    interval = get_placed_interval_template(
        0, duration if duration is not None else width, label
    )
    interval["x"] = x
    interval["width"] = width
    return interval


def dated(start: str, end: str, label: Optional[str] = None) -> PlacedInterval:
    return get_placed_interval_template(at(start), at(end), label)
