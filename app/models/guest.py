"""
Guest model
"""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class Guest:
    """Guest seated at a table. Only exists as the value held at a seat."""

    first_name: str
    last_name: str
    entree: str = ""
    has_allergy: bool = False
    allergy_details: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}"

    @property
    def allergy_info(self) -> str:
        """Allergy column text used by exports"""
        if not self.has_allergy:
            return "No"
        return self.allergy_details or "Yes"

    def to_dict(self) -> dict:
        return asdict(self)
