# SPDX-License-Identifier: MIT

import logging
from typing import Iterable, Optional

from tierline.model.interval_id import IntervalId
from tierline.model.placed_interval import PlacedInterval
from tierline.model.timespan import TimeSpan
from tierline.service.geometry import compute_all_geometry
from tierline.service.mapping import TimeAxisMapper, mapped_window_for
from tierline.service.placer import IntervalPlacer

logger = logging.getLogger(__name__)


class Timeline:
    """
    Keeps a set of intervals positioned and placed for one mapper.

    This is the host side of the engine: it listens for mapping changes,
    recomputes every interval's pixel geometry and re-places all of them from
    scratch. Adding or removing intervals grows the mapped window to cover
    the document (and the visible window, if one is set) before laying out.
    """

    def __init__(
        self,
        mapper: TimeAxisMapper,
        placer: Optional[IntervalPlacer] = None,
        visible_window: Optional[TimeSpan] = None,
    ) -> None:
        self._mapper = mapper
        self._placer = placer if placer is not None else IntervalPlacer(mapper.metrics)
        self._visible_window = visible_window
        self._intervals: dict[IntervalId, PlacedInterval] = {}

        self._mapper.add_change_listener(self.__mapping_changed)
        self.relayout()

    @property
    def mapper(self) -> TimeAxisMapper:
        return self._mapper

    @property
    def placer(self) -> IntervalPlacer:
        return self._placer

    @property
    def intervals(self) -> list[PlacedInterval]:
        return list(self._intervals.values())

    def get_interval(self, id: IntervalId) -> PlacedInterval:
        return self._intervals[id]

    def document_window(self) -> Optional[TimeSpan]:
        return mapped_window_for(
            [interval["span"] for interval in self._intervals.values()]
        )

    def add_intervals(self, intervals: Iterable[PlacedInterval]) -> None:
        for interval in intervals:
            if interval["id"] in self._intervals:
                raise ValueError(
                    f"interval {interval['id']} is already on the timeline"
                )
            self._intervals[interval["id"]] = interval
        self.__document_changed()

    def remove_intervals(self, ids: Iterable[IntervalId]) -> None:
        for id in ids:
            interval = self._intervals.pop(id)
            interval["x"] = None
            interval["width"] = None
        self.__document_changed()

    def set_visible_window(self, visible_window: Optional[TimeSpan]) -> None:
        self._visible_window = visible_window
        self.__document_changed()

    def relayout(self) -> None:
        """
        Recompute every interval's geometry, then place them all again.

        If the mapping cannot represent some interval, CoordinateOverflow
        propagates and the previous geometry and placements stay in effect.
        """
        if not self._mapper.is_mapped:
            self._placer.forget_placements()
            return
        compute_all_geometry(self._intervals.values(), self._mapper)
        self._placer.forget_placements()
        self._placer.assign(self._intervals.values())

    def pane_size(self) -> tuple[int, int]:
        return self._mapper.total_width_pixels(), self._placer.max_y_used()

    def hit_test(self, x: int, y: int) -> Optional[PlacedInterval]:
        return self._placer.hit_test(x, y)

    def close(self) -> None:
        self._mapper.remove_change_listener(self.__mapping_changed)

    def __document_changed(self) -> None:
        document_window = self.document_window()
        extra_window = self._visible_window
        if extra_window is None:
            extra_window = document_window
        # A changed window notifies us, which already lays everything out.
        if extra_window is not None and self._mapper.ensure_included(
            extra_window, document_window
        ):
            return
        self.relayout()

    def __mapping_changed(self, mapper: TimeAxisMapper) -> None:
        logger.debug(
            "Relaying out %d intervals after mapping change", len(self._intervals)
        )
        self.relayout()
