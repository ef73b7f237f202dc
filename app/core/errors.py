"""
Domain errors raised by the layout services
"""

from typing import List, Optional


class ValidationError(ValueError):
    """Caller supplied structurally invalid input; nothing was changed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or [message]
