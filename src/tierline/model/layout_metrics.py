# SPDX-License-Identifier: MIT

from typing import TypedDict


class LayoutMetrics(TypedDict):
    unit_pixel_width: int
    end_margin_units: int
    level_spacing: int
    top_margin: int
    body_height: int
    minimum_body_width: int


DEFAULT_LAYOUT_METRICS: LayoutMetrics = {
    "unit_pixel_width": 20,
    "end_margin_units": 3,
    "level_spacing": 25,
    "top_margin": 10,
    "body_height": 15,
    "minimum_body_width": 4,
}
