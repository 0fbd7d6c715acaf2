"""
Utility functions for the card importer
"""

from .app_logger import configure_logging, get_importer_logger, get_logger

__all__ = ["configure_logging", "get_importer_logger", "get_logger"]
