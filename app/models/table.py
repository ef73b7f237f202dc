"""
Table model
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from app.models.guest import Guest


class TableShape(str, Enum):
    ROUND = "round"
    RECTANGLE = "rectangle"


@dataclass
class Table:
    """A table on the layout canvas.

    ``shape`` and ``seat_count`` are fixed once the table exists; ``guests``
    maps seat numbers (1..seat_count) to the guest sitting there.
    """

    id: str
    number: int
    shape: TableShape
    seat_count: int
    x: float = 0.0
    y: float = 0.0
    guests: Dict[int, Guest] = field(default_factory=dict)
    description: Optional[str] = None

    @property
    def occupied_count(self) -> int:
        return len(self.guests)

    def has_seat(self, seat_number: int) -> bool:
        return 1 <= seat_number <= self.seat_count

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "number": self.number,
            "shape": self.shape.value,
            "seat_count": self.seat_count,
            "x": self.x,
            "y": self.y,
            "description": self.description,
            "guests": {
                str(seat): guest.to_dict()
                for seat, guest in sorted(self.guests.items())
            },
        }
