"""
Layout-related Pydantic schemas
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from app.models import TableShape
from app.schemas.guest import GuestResponse

class TableCreate(BaseModel):
    """Schema for adding a table"""
    shape: TableShape
    seat_count: int = Field(..., description="Number of seats, at least 2")

class TablePosition(BaseModel):
    """New canvas position; negative values are clamped to 0"""
    x: float
    y: float

class TableNumberUpdate(BaseModel):
    number: int

class TableDescriptionUpdate(BaseModel):
    description: Optional[str] = None

class EntreeCreate(BaseModel):
    name: str

class TableResponse(BaseModel):
    """Table response schema"""
    id: str
    number: int
    shape: TableShape
    seat_count: int
    x: float
    y: float
    description: Optional[str] = None
    guests: Dict[int, GuestResponse] = {}

    class Config:
        from_attributes = True

class LayoutStatisticsResponse(BaseModel):
    total_seats: int
    guests_placed: int
    seats_remaining: int

    class Config:
        from_attributes = True

class SeatInfo(BaseModel):
    """Seat anchor and occupant for rendering"""
    seat_number: int
    x: float
    y: float
    occupied: bool
    guest: Optional[GuestResponse] = None

class TableSeats(BaseModel):
    table_id: str
    table_number: int
    shape: TableShape
    width: float
    height: float
    seat_size: float
    seats: List[SeatInfo]
