"""
Derived layout statistics
"""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class LayoutStatistics:
    total_seats: int
    guests_placed: int
    seats_remaining: int

    def to_dict(self) -> dict:
        return asdict(self)
