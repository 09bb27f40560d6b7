# SPDX-License-Identifier: MIT

import datetime
from typing import cast

import pendulum

from tierline.model.scale import (
    MILLIS_IN_DAY,
    MILLIS_IN_HOUR,
    MILLIS_IN_MINUTE,
    MILLIS_IN_SECOND,
    ScaleType,
)

EPOCH = pendulum.datetime(1970, 1, 1, tz="UTC")
_EPOCH_ORDINAL = EPOCH.date().toordinal()

# Display format for each scale, from coarse to fine detail.
_DISPLAY_FORMATS: dict[ScaleType, str] = {
    "second": "YYYY-MM-DD HH:mm:ss",
    "minute": "YYYY-MM-DD HH:mm",
    "hour": "YYYY-MM-DD HH:mm",
    "day": "YYYY-MM-DD",
    "week": "YYYY-MM-DD ddd",
    "month": "YYYY-MM",
    "year": "YYYY",
}


def millis_from_datetime(value: pendulum.DateTime) -> int:
    """Convert a DateTime to whole milliseconds since the Unix epoch.

    Works on the calendar fields directly so that no float rounding creeps
    into times far from the epoch.
    """
    utc = value.in_tz("UTC")
    days = utc.date().toordinal() - _EPOCH_ORDINAL
    return (
        days * MILLIS_IN_DAY
        + utc.hour * MILLIS_IN_HOUR
        + utc.minute * MILLIS_IN_MINUTE
        + utc.second * MILLIS_IN_SECOND
        + utc.microsecond // 1000
    )


def datetime_from_millis(millis: int, tz: str = "UTC") -> pendulum.DateTime:
    utc = EPOCH + datetime.timedelta(milliseconds=millis)
    return utc.in_tz(tz)


def datetime_from_str(value: str, tz: str = "UTC") -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(value, tz=tz))


def millis_from_str(value: str, tz: str = "UTC") -> int:
    return millis_from_datetime(datetime_from_str(value, tz))


def truncate_to_unit(millis: int, scale: ScaleType, tz: str = "UTC") -> int:
    """Return the start of the `scale` unit containing `millis`."""
    return millis_from_datetime(datetime_from_millis(millis, tz).start_of(scale))


def add_units(millis: int, scale: ScaleType, count: int, tz: str = "UTC") -> int:
    """Advance `millis` by `count` calendar units of `scale`."""
    moment = datetime_from_millis(millis, tz)
    return millis_from_datetime(moment.add(**{f"{scale}s": count}))


def year_start(year: int, tz: str = "UTC") -> int:
    return millis_from_datetime(pendulum.datetime(year, 1, 1, tz=tz))


def year_of(millis: int, tz: str = "UTC") -> int:
    return datetime_from_millis(millis, tz).year


def is_leap_year(year: int) -> bool:
    return pendulum.date(year, 1, 1).is_leap_year()


def millis_to_display_str(millis: int, scale: ScaleType, tz: str = "UTC") -> str:
    return datetime_from_millis(millis, tz).format(_DISPLAY_FORMATS[scale])


def millis_to_iso_str(millis: int, tz: str = "UTC") -> str:
    return datetime_from_millis(millis, tz).isoformat()


def wall_offset_in_year(millis: int, tz: str = "UTC") -> tuple[int, int]:
    """Return the local year of `millis` and its wall-clock offset into that year.

    The offset counts whole calendar days plus the local time of day, so it
    ignores daylight saving shifts: noon on the tenth day is always
    9 days and 12 hours in.
    """
    moment = datetime_from_millis(millis, tz)
    return moment.year, (
        (moment.day_of_year - 1) * MILLIS_IN_DAY
        + moment.hour * MILLIS_IN_HOUR
        + moment.minute * MILLIS_IN_MINUTE
        + moment.second * MILLIS_IN_SECOND
        + moment.microsecond // 1000
    )


def millis_from_wall_offset(year: int, offset: int, tz: str = "UTC") -> int:
    """Inverse of `wall_offset_in_year`.

    Wall times that fall in a daylight saving gap move forward to the first
    valid time.
    """
    days, time_of_day = divmod(offset, MILLIS_IN_DAY)
    date = pendulum.datetime(year, 1, 1, tz=tz).add(days=days)
    hour, time_of_day = divmod(time_of_day, MILLIS_IN_HOUR)
    minute, time_of_day = divmod(time_of_day, MILLIS_IN_MINUTE)
    second, millis = divmod(time_of_day, MILLIS_IN_SECOND)
    return millis_from_datetime(
        pendulum.datetime(
            date.year,
            date.month,
            date.day,
            hour,
            minute,
            second,
            millis * 1000,
            tz=tz,
        )
    )
