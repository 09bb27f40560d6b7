# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Iterator

import pytest
from helpers import at

from tierline import configuration
from tierline.repository.configuration import CONFIGURATION_REPO
from tierline.service.mapping import TimeAxisMapper
from tierline.service.timespan import make_timespan


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    path = tmp_path / "config" / "config.yaml"
    monkeypatch.setattr(configuration, "CONFIG_PATH", path.parent)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", path)
    CONFIGURATION_REPO.reset()
    yield path
    CONFIGURATION_REPO.reset()


@pytest.fixture
def day_mapper() -> TimeAxisMapper:
    return TimeAxisMapper(
        scale="day",
        mapped_window=make_timespan(at("2024-01-01"), at("2024-01-31")),
    )


@pytest.fixture
def cyclic_mapper() -> TimeAxisMapper:
    return TimeAxisMapper(
        scale="day",
        mapped_window=make_timespan(at("2023-06-01"), at("2025-02-01")),
        cyclic_view=True,
    )
