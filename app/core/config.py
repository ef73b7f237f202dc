"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 120

    # Table footprints (layout canvas units)
    ROUND_TABLE_SIZE: float = 120
    RECT_TABLE_WIDTH: float = 160
    RECT_TABLE_HEIGHT: float = 80
    SEAT_SIZE: float = 24
    ROUND_SEAT_MARGIN: float = 20  # distance from table edge to seat ring
    RECT_SEAT_GAP: float = 5

    # New tables are staggered diagonally from the origin
    TABLE_ORIGIN: float = 200
    TABLE_STAGGER: float = 50
    MIN_SEATS: int = 2

    # Menu offered before any custom entrée is added
    DEFAULT_ENTREES: List[str] = [
        "Beef Tenderloin",
        "Grilled Salmon",
        "Chicken Breast",
        "Vegetarian Pasta",
        "Vegan Buddha Bowl",
    ]

    # PNG export
    EXPORT_PNG_SCALE: int = 1
    EXPORT_PNG_PADDING: int = 60

    class Config:
        env_file = ".env"

settings = Settings()
