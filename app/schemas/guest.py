"""
Guest-related Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel

from app.models import Guest

class GuestAssign(BaseModel):
    """Schema for seating a guest.

    Blank names are accepted here and rejected by the layout store, so the
    caller gets the store's validation messages.
    """
    first_name: str
    last_name: str
    entree: str = ""
    has_allergy: bool = False
    allergy_details: Optional[str] = None

    def to_guest(self) -> Guest:
        return Guest(
            first_name=self.first_name,
            last_name=self.last_name,
            entree=self.entree,
            has_allergy=self.has_allergy,
            allergy_details=self.allergy_details if self.has_allergy else None,
        )

class GuestResponse(BaseModel):
    """Guest response schema"""
    first_name: str
    last_name: str
    entree: str
    has_allergy: bool
    allergy_details: Optional[str] = None

    class Config:
        from_attributes = True
