# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from tierline.model.scale import ScaleType

GridLineKind = Literal["minor", "major"]


class GridLine(TypedDict):
    kind: GridLineKind
    scale: ScaleType
    millis: int
    x: int
