# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from tierline.model.interval_id import IntervalId
from tierline.model.timespan import TimeSpan


class PlacedInterval(TypedDict):
    id: IntervalId
    label: Optional[str]
    span: TimeSpan
    # Pixel geometry, written by the geometry pass after each mapping change.
    x: Optional[int]
    width: Optional[int]
    # Row assignment, written by the placer.
    level: Optional[int]
    y: Optional[int]
