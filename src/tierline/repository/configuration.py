# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from tierline import configuration
from tierline.model.scale import ScaleType, is_scale


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded: Any = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(
                f"{configuration.APP_CONFIG_PATH} does not contain a mapping"
            )

        # Migration: fill in any setting added since the file was written
        for key, value in configuration.DEFAULT_CONFIGURATION.items():
            if key not in loaded:
                loaded[key] = value

        if not is_scale(loaded["default_scale"]):
            raise ValueError(f"unknown default_scale: {loaded['default_scale']}")

        self._config = cast(configuration.Configuration, loaded)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        """Drop the cached configuration so the next access reads the file again."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        default_scale: Optional[ScaleType] = None,
        cyclic_view: Optional[bool] = None,
        timezone: Optional[str] = None,
        unit_pixel_width: Optional[int] = None,
        end_margin_units: Optional[int] = None,
        level_spacing: Optional[int] = None,
        top_margin: Optional[int] = None,
        body_height: Optional[int] = None,
        minimum_body_width: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if default_scale is not None:
            if not is_scale(default_scale):
                raise ValueError(f"unknown scale: {default_scale}")
            self.config["default_scale"] = default_scale
        if cyclic_view is not None:
            self.config["cyclic_view"] = cyclic_view
        if timezone is not None:
            self.config["timezone"] = timezone
        if unit_pixel_width is not None:
            self.config["unit_pixel_width"] = unit_pixel_width
        if end_margin_units is not None:
            self.config["end_margin_units"] = end_margin_units
        if level_spacing is not None:
            self.config["level_spacing"] = level_spacing
        if top_margin is not None:
            self.config["top_margin"] = top_margin
        if body_height is not None:
            self.config["body_height"] = body_height
        if minimum_body_width is not None:
            self.config["minimum_body_width"] = minimum_body_width
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
