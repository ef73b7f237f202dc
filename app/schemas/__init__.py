"""
Pydantic schemas package
"""

from .common import *
from .guest import *
from .layout import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "GuestAssign",
    "GuestResponse",
    "TableCreate",
    "TablePosition",
    "TableNumberUpdate",
    "TableDescriptionUpdate",
    "EntreeCreate",
    "TableResponse",
    "LayoutStatisticsResponse",
    "SeatInfo",
    "TableSeats",
]
