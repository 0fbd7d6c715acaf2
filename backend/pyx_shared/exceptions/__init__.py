"""
Importer exception definitions
"""

from .base import (
    ImporterException,
    ConfigurationError,
    SourceReadError
)

__all__ = [
    "ImporterException",
    "ConfigurationError",
    "SourceReadError",
]
