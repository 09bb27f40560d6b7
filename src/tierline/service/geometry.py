# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

from tierline.model.placed_interval import PlacedInterval
from tierline.service.mapping import TimeAxisMapper


def geometry_of(
    interval: PlacedInterval,
    mapper: TimeAxisMapper,
    minimum_body_width: Optional[int] = None,
) -> tuple[int, int]:
    """
    Return the interval's pixel X and width for the mapper's current mapping.

    Bodies are never narrower than `minimum_body_width` (by default the
    mapper's configured minimum), so instantaneous intervals stay visible
    and hittable.
    """
    if minimum_body_width is None:
        minimum_body_width = mapper.metrics["minimum_body_width"]

    x_start = mapper.time_to_x(interval["span"]["start"])
    x_end = mapper.time_to_x(interval["span"]["end"])
    return x_start, max(x_end - x_start, minimum_body_width)


def compute_geometry(
    interval: PlacedInterval,
    mapper: TimeAxisMapper,
    minimum_body_width: Optional[int] = None,
) -> None:
    """Write the interval's pixel X and width, see `geometry_of`."""
    interval["x"], interval["width"] = geometry_of(
        interval, mapper, minimum_body_width
    )


def compute_all_geometry(
    intervals: Iterable[PlacedInterval], mapper: TimeAxisMapper
) -> None:
    """
    Write pixel geometry for every interval, or for none of them.

    Raises:
        CoordinateOverflow: Some interval does not fit the mapping; no
            interval has been touched
    """
    intervals = list(intervals)
    geometries = [geometry_of(interval, mapper) for interval in intervals]
    for interval, (x, width) in zip(intervals, geometries):
        interval["x"] = x
        interval["width"] = width
