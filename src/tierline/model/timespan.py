# SPDX-License-Identifier: MIT

from typing import TypedDict


class TimeSpan(TypedDict):
    """A closed range of milliseconds since the epoch, start <= end."""

    start: int
    end: int
