# SPDX-License-Identifier: MIT

from typing import Optional

from tierline.model.timespan import TimeSpan


def make_timespan(start: int, end: int) -> TimeSpan:
    if start > end:
        raise ValueError(f"timespan start {start} is after its end {end}")
    return {"start": start, "end": end}


def duration(span: TimeSpan) -> int:
    return span["end"] - span["start"]


def contains(span: TimeSpan, millis: int) -> bool:
    return span["start"] <= millis <= span["end"]


def overlaps(a: TimeSpan, b: TimeSpan) -> bool:
    """
    Return True if the two spans share more than a single instant.

    Spans that merely touch (one ends exactly where the other starts) do not
    overlap in time. Pixel-space placement uses a stricter rule, see
    `tierline.service.placer`.
    """
    return a["start"] < b["end"] and b["start"] < a["end"]


def cover(a: Optional[TimeSpan], b: Optional[TimeSpan]) -> Optional[TimeSpan]:
    """Return the smallest span containing both arguments, ignoring None."""
    if a is None:
        return None if b is None else make_timespan(b["start"], b["end"])
    if b is None:
        return make_timespan(a["start"], a["end"])
    return make_timespan(min(a["start"], b["start"]), max(a["end"], b["end"]))
