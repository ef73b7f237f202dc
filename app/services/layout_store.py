"""
Layout store: the authoritative in-memory seating layout
"""

import copy
import logging
import secrets
import threading
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from app.core.config import settings
from app.core.errors import ValidationError
from app.models import Guest, LayoutStatistics, Table, TableShape

logger = logging.getLogger(__name__)


class LayoutStore:
    """Owns the tables, guest assignments and custom entrée options.

    Every operation holds the store lock for its whole duration, so calls
    coming from different threads are applied one after another. Mutations
    addressed to a table id that no longer exists are dropped and return
    ``None`` instead of raising.
    """

    def __init__(self, default_entrees: Optional[List[str]] = None):
        self._lock = threading.RLock()
        self._default_entrees = list(
            settings.DEFAULT_ENTREES if default_entrees is None else default_entrees
        )
        self._tables: List[Table] = []
        self._issued_ids: Set[str] = set()
        self._custom_entrees: List[str] = []
        self._next_table_number = 1

    # -------- tables --------

    def add_table(self, shape: Union[TableShape, str], seat_count: int) -> Table:
        """Append a new table and return it"""
        with self._lock:
            errors = []
            try:
                shape = TableShape(shape)
            except ValueError:
                errors.append(f"Unknown table shape '{shape}'")
            if seat_count < settings.MIN_SEATS:
                errors.append(f"A table needs at least {settings.MIN_SEATS} seats (got {seat_count})")
            if errors:
                logger.warning(f"Rejected new table: {'; '.join(errors)}")
                raise ValidationError("Invalid table", errors)

            offset = settings.TABLE_ORIGIN + len(self._tables) * settings.TABLE_STAGGER
            table = Table(
                id=self._generate_table_id(),
                number=self._next_table_number,
                shape=shape,
                seat_count=seat_count,
                x=offset,
                y=offset,
            )
            self._tables.append(table)
            self._next_table_number += 1

            logger.info(f"Table {table.number} added ({shape.value}, {seat_count} seats, id={table.id})")
            return copy.deepcopy(table)

    def remove_table(self, table_id: str) -> Optional[Table]:
        """Remove a table together with its guest assignments"""
        with self._lock:
            table = self._find(table_id)
            if table is None:
                return None
            self._tables.remove(table)
            logger.info(f"Table {table.number} removed ({table.occupied_count} guests unseated)")
            return copy.deepcopy(table)

    def reposition(self, table_id: str, x: float, y: float) -> Optional[Table]:
        """Move a table; coordinates are clamped to the positive quadrant"""
        with self._lock:
            table = self._find(table_id)
            if table is None:
                return None
            table.x = max(0.0, float(x))
            table.y = max(0.0, float(y))
            return copy.deepcopy(table)

    def renumber_table(self, table_id: str, number: int) -> Optional[Table]:
        """Change a table's display number. Duplicates are allowed."""
        with self._lock:
            table = self._find(table_id)
            if table is None:
                return None
            previous = table.number
            table.number = number
            logger.info(f"Table {previous} renumbered to {number}")
            return copy.deepcopy(table)

    def set_description(self, table_id: str, text: Optional[str]) -> Optional[Table]:
        with self._lock:
            table = self._find(table_id)
            if table is None:
                return None
            table.description = text
            return copy.deepcopy(table)

    # -------- guests --------

    def assign_guest(self, table_id: str, seat_number: int, guest: Guest) -> Optional[Table]:
        """Seat a guest, replacing whoever sat there before"""
        with self._lock:
            errors = []
            if not guest.first_name.strip():
                errors.append("First name is required")
            if not guest.last_name.strip():
                errors.append("Last name is required")

            table = self._find(table_id)
            if table is not None and not table.has_seat(seat_number):
                errors.append(
                    f"Seat {seat_number} does not exist at table {table.number} "
                    f"(seats 1-{table.seat_count})"
                )

            if errors:
                logger.warning(f"Rejected guest assignment: {'; '.join(errors)}")
                raise ValidationError("Invalid guest assignment", errors)
            if table is None:
                return None

            table.guests[seat_number] = guest
            logger.info(f"{guest.full_name} seated at table {table.number}, seat {seat_number}")
            return copy.deepcopy(table)

    def remove_guest(self, table_id: str, seat_number: int) -> Optional[Table]:
        with self._lock:
            table = self._find(table_id)
            if table is None:
                return None
            guest = table.guests.pop(seat_number, None)
            if guest is not None:
                logger.info(f"{guest.full_name} removed from table {table.number}, seat {seat_number}")
            return copy.deepcopy(table)

    # -------- entrée options --------

    def entree_options(self) -> List[str]:
        """Default menu followed by custom options, in insertion order"""
        with self._lock:
            return self._default_entrees + self._custom_entrees

    def custom_entrees(self) -> List[str]:
        with self._lock:
            return list(self._custom_entrees)

    def add_entree_option(self, name: str) -> List[str]:
        with self._lock:
            name = (name or "").strip()
            if not name:
                raise ValidationError("Entrée name is required")
            if name in self._default_entrees or name in self._custom_entrees:
                logger.warning(f"Entrée option '{name}' already exists")
                raise ValidationError(f"Entrée '{name}' already exists")
            self._custom_entrees.append(name)
            logger.info(f"Entrée option '{name}' added")
            return self.entree_options()

    def remove_entree_option(self, name: str) -> List[str]:
        with self._lock:
            name = (name or "").strip()
            if name in self._custom_entrees:
                self._custom_entrees.remove(name)
                logger.info(f"Entrée option '{name}' removed")
            return self.entree_options()

    # -------- reads --------

    def get_table(self, table_id: str) -> Optional[Table]:
        """Return a copy of a table, or None"""
        with self._lock:
            table = self._find(table_id)
            return copy.deepcopy(table) if table is not None else None

    def list_tables(self) -> List[Table]:
        """Copies of all tables in z-order"""
        with self._lock:
            return copy.deepcopy(self._tables)

    def occupied_seats(self) -> Iterator[Tuple[Table, int, Guest]]:
        """(table, seat number, guest) for every occupied seat, table order then seat order"""
        for table in self.list_tables():
            for seat_number in sorted(table.guests):
                yield table, seat_number, table.guests[seat_number]

    def duplicate_numbers(self) -> List[int]:
        """Table numbers shared by more than one table"""
        with self._lock:
            counts: Dict[int, int] = {}
            for table in self._tables:
                counts[table.number] = counts.get(table.number, 0) + 1
            return sorted(number for number, count in counts.items() if count > 1)

    def compute_statistics(self) -> LayoutStatistics:
        with self._lock:
            total_seats = sum(table.seat_count for table in self._tables)
            guests_placed = sum(len(table.guests) for table in self._tables)
            return LayoutStatistics(
                total_seats=total_seats,
                guests_placed=guests_placed,
                seats_remaining=total_seats - guests_placed,
            )

    def snapshot(self) -> dict:
        """Serializable view of the whole layout"""
        with self._lock:
            return {
                "tables": [table.to_dict() for table in self._tables],
                "next_table_number": self._next_table_number,
                "entree_options": self.entree_options(),
                "custom_entrees": list(self._custom_entrees),
                "statistics": self.compute_statistics().to_dict(),
            }

    def reset(self) -> None:
        """Drop every table and custom entrée. Issued ids stay reserved."""
        with self._lock:
            self._tables.clear()
            self._custom_entrees.clear()
            self._next_table_number = 1
            logger.info("Layout reset")

    # -------- internals --------

    def _find(self, table_id: str) -> Optional[Table]:
        for table in self._tables:
            if table.id == table_id:
                return table
        logger.debug(f"No table with id {table_id}")
        return None

    def _generate_table_id(self) -> str:
        table_id = f"table-{secrets.token_urlsafe(8)}"
        while table_id in self._issued_ids:
            table_id = f"table-{secrets.token_urlsafe(8)}"
        self._issued_ids.add(table_id)
        return table_id


# Process-wide store used by the API
layout_store = LayoutStore()


def get_layout_store() -> LayoutStore:
    """FastAPI dependency returning the shared layout store"""
    return layout_store
