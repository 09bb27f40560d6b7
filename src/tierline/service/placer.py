# SPDX-License-Identifier: MIT

"""Vertical placement of positioned intervals into non-overlapping levels.

Placement only decides rows. Each interval's pixel X and width must already
have been computed from the current mapping (see
`tierline.service.geometry`).

Two intervals collide in a level when `a.x + a.width >= b.x`, so bodies that
merely touch never share a row.
"""

import logging
import time
from bisect import bisect_left
from typing import Iterable, Optional

from tierline.errors import NotFound, PreconditionViolation
from tierline.model.interval_id import IntervalId
from tierline.model.layout_metrics import DEFAULT_LAYOUT_METRICS, LayoutMetrics
from tierline.model.placed_interval import PlacedInterval
from tierline.service.timespan import duration

logger = logging.getLogger(__name__)


class PlacementTable:
    """
    Levels of placed intervals, from the top of the pane down.

    The table owns an arena of interval records keyed by id; each level is a
    list of ids kept sorted by pixel X. Since no level holds overlapping
    intervals, element n of a level also ends before element n + 1 begins.
    """

    def __init__(self) -> None:
        self._arena: dict[IntervalId, PlacedInterval] = {}
        self._levels: list[list[IntervalId]] = []

    @property
    def level_count(self) -> int:
        return len(self._levels)

    def level_size(self, level: int) -> int:
        return len(self._levels[level])

    def is_placed(self, id: IntervalId) -> bool:
        return id in self._arena

    def interval_at(self, level: int, position: int) -> PlacedInterval:
        return self._arena[self._levels[level][position]]

    def level_intervals(self, level: int) -> list[PlacedInterval]:
        return [self._arena[id] for id in self._levels[level]]

    def search(self, level: int, x: int) -> tuple[int, bool]:
        """
        Binary-search a level for pixel column `x`.

        Returns:
            The insertion point for `x`, and whether an interval in the level
            starts exactly at `x` (in which case it sits at that position)
        """
        ids = self._levels[level]
        position = bisect_left(ids, x, key=self.__x_of)
        exact = position < len(ids) and self.__x_of(ids[position]) == x
        return position, exact

    def insert(self, level: int, position: int, interval: PlacedInterval) -> None:
        self._levels[level].insert(position, interval["id"])
        self._arena[interval["id"]] = interval

    def append_level(self, interval: PlacedInterval) -> int:
        self._levels.append([interval["id"]])
        self._arena[interval["id"]] = interval
        return len(self._levels) - 1

    def clear(self) -> None:
        """Empty every level but keep the level slots themselves."""
        for level in self._levels:
            level.clear()
        for interval in self._arena.values():
            interval["level"] = None
            interval["y"] = None
        self._arena.clear()

    def __x_of(self, id: IntervalId) -> int:
        x = self._arena[id]["x"]
        assert x is not None
        return x


class IntervalPlacer:
    """
    Greedy level assignment for timeline intervals.

    Intervals are placed longest first, each into the topmost level where it
    collides with nothing, so long-running intervals settle toward the top of
    the pane. A new level is opened whenever no existing level has room.

    Not safe for concurrent mutation.
    """

    def __init__(self, metrics: LayoutMetrics = DEFAULT_LAYOUT_METRICS) -> None:
        self._metrics = metrics
        self._table = PlacementTable()
        self._has_assigned = False

    @property
    def table(self) -> PlacementTable:
        return self._table

    @property
    def level_count(self) -> int:
        return self._table.level_count

    def levels(self) -> list[list[PlacedInterval]]:
        return [
            self._table.level_intervals(level)
            for level in range(self._table.level_count)
        ]

    def assign(self, intervals: Iterable[PlacedInterval]) -> None:
        """
        Place each interval in a level and write back its level and Y.

        Intervals already placed must be forgotten first (see
        `forget_placements`). Intervals are processed by descending duration
        in time; equal durations keep their input order.

        Raises:
            PreconditionViolation: An interval has no pixel geometry yet, or
                is already placed. Nothing is placed in that case.
        """
        start_time = time.perf_counter()

        sorted_intervals = sorted(
            intervals, key=lambda interval: duration(interval["span"]), reverse=True
        )

        # Check everything up front so a rejected call places nothing.
        seen: set[IntervalId] = set()
        for interval in sorted_intervals:
            if interval["x"] is None or interval["width"] is None:
                raise PreconditionViolation(
                    f"interval {interval['id']} has no pixel geometry"
                )
            if self._table.is_placed(interval["id"]) or interval["id"] in seen:
                raise PreconditionViolation(
                    f"interval {interval['id']} is already placed"
                )
            seen.add(interval["id"])

        self._has_assigned = True
        for interval in sorted_intervals:
            level = self.__insert_into_existing_level(interval)
            if level is None:
                level = self._table.append_level(interval)

            interval["level"] = level
            interval["y"] = self.level_to_y(level)

        logger.debug(
            "Placed %d intervals in %d levels in %.2f ms",
            len(sorted_intervals),
            self._table.level_count,
            (time.perf_counter() - start_time) * 1000,
        )

    def forget_placements(self) -> None:
        """Forget every placement, keeping the level slots so rows don't jump."""
        self._table.clear()

    def max_y_used(self) -> int:
        return self.level_to_y(self._table.level_count)

    def level_to_y(self, level: int) -> int:
        return self._metrics["top_margin"] + level * self._metrics["level_spacing"]

    def y_to_level(self, y: int) -> Optional[int]:
        """
        Return the level whose body covers pixel row `y`.

        None if `y` is in the top margin, below the last level, or in the gap
        between two levels' bodies.
        """
        normalized_y = y - self._metrics["top_margin"]
        if normalized_y < 0:
            return None

        level = normalized_y // self._metrics["level_spacing"]
        if level >= self._table.level_count:
            return None

        offset_in_level = normalized_y % self._metrics["level_spacing"]
        if offset_in_level > self._metrics["body_height"]:
            return None

        return level

    def level_of(self, interval: PlacedInterval) -> int:
        """
        Return the index of the level holding `interval`.

        Raises:
            PreconditionViolation: Nothing has been assigned yet
            NotFound: The interval is not placed
        """
        if not self._has_assigned:
            raise PreconditionViolation("level_of called before any assignment")

        x = interval["x"]
        if x is not None:
            for level in range(self._table.level_count):
                position, exact = self._table.search(level, x)
                if (
                    exact
                    and self._table.interval_at(level, position)["id"] == interval["id"]
                ):
                    return level

        raise NotFound(f"interval {interval['id']} is not placed")

    def hit_test(self, x: int, y: int) -> Optional[PlacedInterval]:
        """Return the interval whose body contains the point, or None."""
        if not self._has_assigned:
            raise PreconditionViolation("hit_test called before any assignment")

        level = self.y_to_level(y)
        if level is None:
            return None

        # A probe that lands exactly on an interval's start is a hit.
        position, exact = self._table.search(level, x)
        if exact:
            return self._table.interval_at(level, position)

        # Otherwise only the interval starting before the probe can contain it.
        if position == 0:
            return None
        candidate = self._table.interval_at(level, position - 1)
        candidate_x = candidate["x"]
        candidate_width = candidate["width"]
        assert candidate_x is not None and candidate_width is not None
        if candidate_x <= x <= candidate_x + candidate_width:
            return candidate
        return None

    def __insert_into_existing_level(self, interval: PlacedInterval) -> Optional[int]:
        x_start = interval["x"]
        width = interval["width"]
        assert x_start is not None and width is not None
        x_end = x_start + width

        for level in range(self._table.level_count):
            position, exact = self._table.search(level, x_start)

            # Two intervals starting at the same column always collide.
            if exact:
                continue

            if position > 0:
                before = self._table.interval_at(level, position - 1)
                before_x = before["x"]
                before_width = before["width"]
                assert before_x is not None and before_width is not None
                if before_x + before_width >= x_start:
                    continue

            if position < self._table.level_size(level):
                after = self._table.interval_at(level, position)
                after_x = after["x"]
                assert after_x is not None
                if after_x <= x_end:
                    continue

            self._table.insert(level, position, interval)
            return level

        return None
