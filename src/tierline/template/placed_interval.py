# SPDX-License-Identifier: MIT

from typing import Optional

from tierline.model.interval_id import IntervalId, generate_interval_id
from tierline.model.placed_interval import PlacedInterval
from tierline.service.timespan import make_timespan


def get_placed_interval_template(
    start: int,
    end: int,
    label: Optional[str] = None,
    id: Optional[IntervalId] = None,
) -> PlacedInterval:
    return {
        "id": id if id is not None else generate_interval_id(),
        "label": label,
        "span": make_timespan(start, end),
        "x": None,
        "width": None,
        "level": None,
        "y": None,
    }
