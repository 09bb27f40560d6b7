# SPDX-License-Identifier: MIT

"""Mapping between moments in time and horizontal pixel positions.

A mapping has two parts: the density (how many milliseconds one pixel
covers, chosen so that one unit of the current scale is about
`unit_pixel_width` pixels wide) and the mapped window, the range of times
the mapping is valid for. Only the start of the window matters for the
transform itself, since it fixes the pixel origin.

In cyclic view every year is folded onto one leap-year-long template, so
that the same calendar date from different years lands on the same pixel.
"""

import logging
from bisect import bisect_right
from typing import Callable, Optional, TypeAlias

from tierline.errors import CoordinateOverflow, PreconditionViolation
from tierline.model.layout_metrics import DEFAULT_LAYOUT_METRICS, LayoutMetrics
from tierline.model.scale import (
    APPROX_MILLIS_IN_UNIT,
    MILLIS_IN_DAY,
    ScaleType,
    is_scale,
)
from tierline.model.timespan import TimeSpan
from tierline.service.timespan import cover, make_timespan
from tierline.time import (
    add_units,
    is_leap_year,
    millis_from_wall_offset,
    truncate_to_unit,
    wall_offset_in_year,
    year_of,
    year_start,
)

logger = logging.getLogger(__name__)

PIXEL_MIN = -(2**31)
PIXEL_MAX = 2**31 - 1

# Offset of March 1 from January 1 in a non-leap year.
MILLIS_THROUGH_FEBRUARY_28 = 59 * MILLIS_IN_DAY

MappingListener: TypeAlias = Callable[["TimeAxisMapper"], None]


class TimeAxisMapper:
    """
    Converts between time (milliseconds since the epoch) and pixel columns.

    Every change of scale, mapped window or view mode recomputes the whole
    mapping and then calls each registered listener exactly once. Calendar
    arithmetic (truncation to a unit, year boundaries) happens in the
    mapper's timezone.

    Instances are meant to be driven from a single thread; they are not
    safe for concurrent mutation.
    """

    def __init__(
        self,
        scale: ScaleType = "day",
        mapped_window: Optional[TimeSpan] = None,
        cyclic_view: bool = False,
        metrics: LayoutMetrics = DEFAULT_LAYOUT_METRICS,
        tz: str = "UTC",
    ) -> None:
        if not is_scale(scale):
            raise ValueError(f"unknown scale: {scale}")
        self._scale: ScaleType = scale
        self._mapped_window: Optional[TimeSpan] = cover(mapped_window, None)
        self._cyclic_view = cyclic_view
        self._metrics = metrics
        self._tz = tz
        self._listeners: list[MappingListener] = []

        self._origin_millis = 0
        self._millis_per_pixel = self.__compute_millis_per_pixel()
        self._cyclic_boundaries: list[int] = []
        self._leap_years: list[bool] = []
        if self._mapped_window is not None:
            self.__compute_mapping()

    @property
    def scale(self) -> ScaleType:
        return self._scale

    @property
    def mapped_window(self) -> Optional[TimeSpan]:
        return cover(self._mapped_window, None)

    @property
    def is_mapped(self) -> bool:
        return self._mapped_window is not None

    @property
    def is_cyclic_view(self) -> bool:
        return self._cyclic_view

    @property
    def tz(self) -> str:
        return self._tz

    @property
    def metrics(self) -> LayoutMetrics:
        return self._metrics

    @property
    def origin_millis(self) -> int:
        self.__require_mapped()
        return self._origin_millis

    @property
    def millis_per_pixel(self) -> int:
        return self._millis_per_pixel

    @property
    def cyclic_boundaries(self) -> tuple[int, ...]:
        return tuple(self._cyclic_boundaries)

    @property
    def leap_years(self) -> tuple[bool, ...]:
        return tuple(self._leap_years)

    def add_change_listener(self, listener: MappingListener) -> None:
        self._listeners.append(listener)

    def remove_change_listener(self, listener: MappingListener) -> None:
        self._listeners.remove(listener)

    def set_scale(self, scale: ScaleType) -> None:
        if not is_scale(scale):
            raise ValueError(f"unknown scale: {scale}")
        self._scale = scale
        self.__recompute()

    def set_mapped_window(self, window: Optional[TimeSpan]) -> None:
        """Bind the pixel space to `window`, or unmap it with None."""
        self._mapped_window = cover(window, None)
        self.__recompute()

    def set_cyclic_view(self, cyclic_view: bool) -> None:
        self._cyclic_view = cyclic_view
        self.__recompute()

    def ensure_included(
        self, span: TimeSpan, document_window: Optional[TimeSpan] = None
    ) -> bool:
        """
        Make the mapped window cover `span` together with the document's range.

        The extra span stays in effect until another one is requested. The
        mapping is only recomputed (and listeners notified) if the resulting
        window differs from the current one.

        Returns:
            True if the mapped window changed
        """
        new_window = cover(document_window, span)
        if new_window == self._mapped_window:
            return False
        self._mapped_window = new_window
        self.__recompute()
        return True

    def time_to_x(self, millis: int) -> int:
        self.__require_mapped()
        if self._cyclic_view:
            pixel = self.__cyclic_offset(millis) // self._millis_per_pixel
        else:
            pixel = (millis - self._origin_millis) // self._millis_per_pixel
        if pixel < PIXEL_MIN or pixel > PIXEL_MAX:
            raise CoordinateOverflow(millis, pixel)
        return pixel

    def x_to_time(self, x: int) -> int:
        """
        Return the moment at pixel column `x`.

        The conversion has pixel granularity, so `time_to_x(x_to_time(x)) == x`
        holds but the reverse generally does not. In cyclic view the result
        lies in the template year that starts at the origin.
        """
        self.__require_mapped()
        if self._cyclic_view:
            return millis_from_wall_offset(
                year_of(self._origin_millis, self._tz),
                x * self._millis_per_pixel,
                self._tz,
            )
        return x * self._millis_per_pixel + self._origin_millis

    def time_delta_to_x_delta(self, delta: int) -> int:
        return delta // self._millis_per_pixel

    def x_delta_to_time_delta(self, delta: int) -> int:
        return delta * self._millis_per_pixel

    def snap_to_unit(self, millis: int, scale: Optional[ScaleType] = None) -> int:
        """
        Round `millis` to the nearest boundary of a calendar unit.

        Boundaries follow the real calendar, so months and years have their
        actual lengths. A moment exactly halfway between two boundaries
        rounds up. Weeks start on Monday.

        Args:
            millis: The moment to round
            scale: The unit to round to (defaults to the current scale)
        """
        unit = scale if scale is not None else self._scale
        lower = truncate_to_unit(millis, unit, self._tz)
        if lower == millis:
            return millis
        upper = add_units(lower, unit, 1, self._tz)
        if millis - lower >= upper - millis:
            return upper
        return lower

    def total_width_pixels(self) -> int:
        """Return the width of the drawing surface, or 0 when unmapped."""
        if self._mapped_window is None:
            return 0
        if self._cyclic_view:
            return self.time_delta_to_x_delta(
                APPROX_MILLIS_IN_UNIT["year"] + APPROX_MILLIS_IN_UNIT["day"]
            )
        end_with_margin = (
            self._mapped_window["end"]
            + self._metrics["end_margin_units"] * APPROX_MILLIS_IN_UNIT[self._scale]
        )
        return self.time_to_x(end_with_margin)

    def __compute_millis_per_pixel(self) -> int:
        # The +1 keeps the ratio at least 1 and makes one unit at least
        # unit_pixel_width pixels wide.
        return (
            APPROX_MILLIS_IN_UNIT[self._scale] // self._metrics["unit_pixel_width"]
            + 1
        )

    def __recompute(self) -> None:
        self._millis_per_pixel = self.__compute_millis_per_pixel()
        if self._mapped_window is None:
            self._origin_millis = 0
            self._cyclic_boundaries = []
            self._leap_years = []
        else:
            self.__compute_mapping()
        self.__fire_state_changed()

    def __compute_mapping(self) -> None:
        window = self._mapped_window
        assert window is not None

        if self._cyclic_view:
            # The boundary list encloses the mapped window: it starts at the
            # nearest leap year at or before the window's first year and ends
            # with the start of the year after the window's last year.
            starting_year = year_of(window["start"], self._tz)
            ending_year = year_of(window["end"], self._tz) + 1
            while not is_leap_year(starting_year):
                starting_year -= 1

            years = range(starting_year, ending_year + 1)
            self._cyclic_boundaries = [year_start(year, self._tz) for year in years]
            self._leap_years = [is_leap_year(year) for year in years]
            self._origin_millis = self._cyclic_boundaries[0]
        else:
            # The origin is the window start less the end margin, truncated
            # down to a whole unit of the current scale.
            start_with_margin = (
                window["start"]
                - self._metrics["end_margin_units"] * APPROX_MILLIS_IN_UNIT[self._scale]
            )
            self._origin_millis = truncate_to_unit(
                start_with_margin, self._scale, self._tz
            )
            self._cyclic_boundaries = []
            self._leap_years = []

        logger.debug(
            "Mapping recomputed: scale=%s cyclic=%s origin=%d millis_per_pixel=%d",
            self._scale,
            self._cyclic_view,
            self._origin_millis,
            self._millis_per_pixel,
        )

    def __cyclic_offset(self, millis: int) -> int:
        index = bisect_right(self._cyclic_boundaries, millis) - 1
        if index < 0 or index >= len(self._cyclic_boundaries) - 1:
            raise PreconditionViolation(
                f"time {millis} is outside the years covered by the cyclic mapping"
            )

        # Wall-clock offset, so daylight saving shifts never move a date.
        _, millis_since_start_of_year = wall_offset_in_year(millis, self._tz)

        # The template year is a leap year. Dates after February 28 in a
        # common year move forward one day so that, for example, July 1
        # lands on the template's July 1.
        if (
            not self._leap_years[index]
            and millis_since_start_of_year >= MILLIS_THROUGH_FEBRUARY_28
        ):
            millis_since_start_of_year += MILLIS_IN_DAY
        return millis_since_start_of_year

    def __fire_state_changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def __require_mapped(self) -> None:
        if self._mapped_window is None:
            raise PreconditionViolation("no time window has been mapped")


def mapped_window_for(spans: list[TimeSpan]) -> Optional[TimeSpan]:
    """Return the window covering every span, or None for an empty list."""
    if not spans:
        return None
    return make_timespan(
        min(span["start"] for span in spans), max(span["end"] for span in spans)
    )
