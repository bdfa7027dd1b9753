"""
Core functionality for Species.

This package contains application configuration and observability setup
shared by the population engine and its drivers.
"""

from src.core.config import settings
from src.core.observability import configure_observability

__all__ = [
    "settings",
    "configure_observability",
]
