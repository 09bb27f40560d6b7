# SPDX-License-Identifier: MIT

from typing import TypedDict

import platformdirs

from tierline.model.layout_metrics import LayoutMetrics
from tierline.model.scale import ScaleType

APP_NAME = "tierline"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"


class Configuration(TypedDict):
    default_scale: ScaleType
    cyclic_view: bool
    timezone: str
    unit_pixel_width: int
    end_margin_units: int
    level_spacing: int
    top_margin: int
    body_height: int
    minimum_body_width: int
    log_level: str


DEFAULT_CONFIGURATION: Configuration = {
    "default_scale": "day",
    "cyclic_view": False,
    "timezone": "UTC",
    "unit_pixel_width": 20,
    "end_margin_units": 3,
    "level_spacing": 25,
    "top_margin": 10,
    "body_height": 15,
    "minimum_body_width": 4,
    "log_level": "WARNING",
}


def metrics_from_config(config: Configuration) -> LayoutMetrics:
    return {
        "unit_pixel_width": config["unit_pixel_width"],
        "end_margin_units": config["end_margin_units"],
        "level_spacing": config["level_spacing"],
        "top_margin": config["top_margin"],
        "body_height": config["body_height"],
        "minimum_body_width": config["minimum_body_width"],
    }
