# SPDX-License-Identifier: MIT

from typing import Literal, Optional

ScaleType = Literal["second", "minute", "hour", "day", "week", "month", "year"]

# Ordered from finest to coarsest.
SCALES: tuple[ScaleType, ...] = (
    "second",
    "minute",
    "hour",
    "day",
    "week",
    "month",
    "year",
)

MILLIS_IN_SECOND = 1000
MILLIS_IN_MINUTE = 60 * MILLIS_IN_SECOND
MILLIS_IN_HOUR = 60 * MILLIS_IN_MINUTE
MILLIS_IN_DAY = 24 * MILLIS_IN_HOUR

# Typical length of each unit. Months and years vary in length, so these are
# only used to pick a pixel density, never for calendar arithmetic.
APPROX_MILLIS_IN_UNIT: dict[ScaleType, int] = {
    "second": MILLIS_IN_SECOND,
    "minute": MILLIS_IN_MINUTE,
    "hour": MILLIS_IN_HOUR,
    "day": MILLIS_IN_DAY,
    "week": 7 * MILLIS_IN_DAY,
    "month": 31 * MILLIS_IN_DAY,
    "year": 365 * MILLIS_IN_DAY,
}


def is_scale(value: str) -> bool:
    return value in SCALES


def scale_index(scale: ScaleType) -> int:
    return SCALES.index(scale)


def next_larger_scale(scale: ScaleType) -> Optional[ScaleType]:
    """Return the unit one step coarser than `scale`, or None for "year"."""
    index = scale_index(scale)
    if index + 1 >= len(SCALES):
        return None
    return SCALES[index + 1]
