"""
Exceptions raised by the Species population engine.

Strategy-function failures are never wrapped: whatever a seed, fitness,
breed or mutate function raises propagates unchanged to the caller.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SpeciesError(Exception):
    """Base exception for population errors."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)


class EmptyPopulationError(SpeciesError):
    """Raised when an operation needs members but the population has none."""
