"""
Seat layout calculator

Pure geometry: where each seat of a table goes, relative to the table's own
top-left corner. Nothing here reads or changes layout state.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from app.core.config import settings
from app.models.table import Table, TableShape


@dataclass(frozen=True)
class SeatAnchor:
    """Top-left corner of a seat's square footprint"""
    x: float
    y: float


def compute_seat_anchors(
    shape: Union[TableShape, str],
    seat_count: int,
    table_width: float,
    table_height: float,
    seat_size: float,
    margin: float = 20,
    gap: float = 5,
) -> List[SeatAnchor]:
    """Compute seat anchors for a table; element ``i - 1`` is seat ``i``.

    Round tables spread seats at equal angles on a circle of radius
    ``table_width / 2 + margin``, seat 1 due east of the center.

    Rectangle tables put seat 1 centered above the table and seat 2 centered
    below it. The remaining seats are split between the right edge (filled
    top to bottom, takes the odd seat) and the left edge (filled bottom to
    top), evenly spaced with clearance at both corners.

    Counts below 2 are rejected by table creation, but 0 and 1 still give
    an empty or single-element result here.
    """
    shape = TableShape(shape)

    if shape is TableShape.ROUND:
        return _round_anchors(seat_count, table_width, table_height, seat_size, margin)
    elif shape is TableShape.RECTANGLE:
        return _rectangle_anchors(seat_count, table_width, table_height, seat_size, gap)
    raise ValueError(f"Unsupported table shape: {shape}")


def _round_anchors(
    seat_count: int,
    table_width: float,
    table_height: float,
    seat_size: float,
    margin: float,
) -> List[SeatAnchor]:
    anchors = []
    center_x = table_width / 2
    center_y = table_height / 2
    radius = table_width / 2 + margin
    half_seat = seat_size / 2

    for seat in range(1, seat_count + 1):
        angle = 2 * math.pi * (seat - 1) / seat_count
        anchors.append(SeatAnchor(
            center_x + math.cos(angle) * radius - half_seat,
            center_y + math.sin(angle) * radius - half_seat,
        ))
    return anchors


def _rectangle_anchors(
    seat_count: int,
    table_width: float,
    table_height: float,
    seat_size: float,
    gap: float,
) -> List[SeatAnchor]:
    anchors = []
    half_seat = seat_size / 2

    side_seats = max(0, seat_count - 2)
    per_side = side_seats // 2
    first_side = per_side + side_seats % 2
    second_side = per_side

    for seat in range(1, seat_count + 1):
        if seat == 1:
            anchors.append(SeatAnchor(table_width / 2 - half_seat, -seat_size - gap))
        elif seat == 2:
            anchors.append(SeatAnchor(table_width / 2 - half_seat, table_height + gap))
        else:
            index = seat - 3
            if index < first_side:
                spacing = table_height / (first_side + 1)
                anchors.append(SeatAnchor(
                    table_width + gap,
                    spacing * (index + 1) - half_seat,
                ))
            else:
                index -= first_side
                spacing = table_height / (second_side + 1)
                anchors.append(SeatAnchor(
                    -seat_size - gap,
                    table_height - spacing * (index + 1) - half_seat,
                ))
    return anchors


def table_dimensions(shape: Union[TableShape, str]) -> Tuple[float, float]:
    """Configured (width, height) footprint for a table shape"""
    shape = TableShape(shape)
    if shape is TableShape.ROUND:
        return settings.ROUND_TABLE_SIZE, settings.ROUND_TABLE_SIZE
    return settings.RECT_TABLE_WIDTH, settings.RECT_TABLE_HEIGHT


def seat_anchors_for(table: Table) -> List[SeatAnchor]:
    """Seat anchors for a table using the configured footprints"""
    width, height = table_dimensions(table.shape)
    return compute_seat_anchors(
        table.shape,
        table.seat_count,
        width,
        height,
        settings.SEAT_SIZE,
        margin=settings.ROUND_SEAT_MARGIN,
        gap=settings.RECT_SEAT_GAP,
    )


def hit_test_seat(table: Table, local_x: float, local_y: float) -> Optional[int]:
    """Return the seat number under a table-local point, if any.

    Seats are drawn in order, so on overlap the highest seat number wins.
    """
    size = settings.SEAT_SIZE
    hit = None
    for seat, anchor in enumerate(seat_anchors_for(table), start=1):
        if anchor.x <= local_x <= anchor.x + size and anchor.y <= local_y <= anchor.y + size:
            hit = seat
    return hit
