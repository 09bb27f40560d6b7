# SPDX-License-Identifier: MIT

from tierline.model.grid_line import GridLine, GridLineKind
from tierline.model.scale import ScaleType, next_larger_scale
from tierline.service.mapping import TimeAxisMapper
from tierline.time import add_units, truncate_to_unit


def grid_lines(mapper: TimeAxisMapper, x_start: int, x_end: int) -> list[GridLine]:
    """
    Compute the grid lines falling between two pixel columns.

    Minor lines sit on every boundary of the mapper's scale unit, major lines
    on every boundary of the next larger unit (there are none at year
    scale). Boundaries follow the real calendar, so month lines are unevenly
    spaced. The first line of each kind is the start of the unit containing
    `x_start` and may lie left of it.

    Args:
        mapper: A mapped TimeAxisMapper
        x_start: First pixel column of the range
        x_end: Pixel column just past the end of the range

    Returns:
        Minor lines in time order, followed by major lines in time order
    """
    start_millis = mapper.x_to_time(x_start)
    end_millis = mapper.x_to_time(x_end)

    # Cyclic views only show the template year.
    if mapper.is_cyclic_view:
        end_millis = min(end_millis, mapper.cyclic_boundaries[1])

    lines = _lines_for_unit(mapper, "minor", mapper.scale, start_millis, end_millis)

    major_scale = next_larger_scale(mapper.scale)
    if major_scale is not None:
        lines.extend(
            _lines_for_unit(mapper, "major", major_scale, start_millis, end_millis)
        )

    return lines


def _lines_for_unit(
    mapper: TimeAxisMapper,
    kind: GridLineKind,
    scale: ScaleType,
    start_millis: int,
    end_millis: int,
) -> list[GridLine]:
    lines: list[GridLine] = []

    # Align the first line with the boundary between two units.
    current = truncate_to_unit(start_millis, scale, mapper.tz)
    if mapper.is_cyclic_view:
        while current < mapper.cyclic_boundaries[0]:
            current = add_units(current, scale, 1, mapper.tz)

    while current < end_millis:
        lines.append(
            {
                "kind": kind,
                "scale": scale,
                "millis": current,
                "x": mapper.time_to_x(current),
            }
        )
        current = add_units(current, scale, 1, mapper.tz)

    return lines
