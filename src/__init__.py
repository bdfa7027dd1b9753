"""
Species - Source Package

This package contains the evolutionary population engine together with
the application settings and observability setup it is run with.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__",
]
