"""
Unified configuration access point for the card importer

    from pyx_shared.config import get_settings, load_import_config

    settings = get_settings()
    config = load_import_config(settings.config_path)
"""

from .import_config import load_import_config
from .settings import ImporterSettings, get_settings, reload_settings

__all__ = [
    "ImporterSettings",
    "get_settings",
    "load_import_config",
    "reload_settings",
]
