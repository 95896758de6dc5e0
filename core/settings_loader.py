"""
Settings loader module for the library account area.
Provides centralized access to all configuration settings from the combined settings.yaml file.
"""

import os
import yaml
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Path to the combined settings file
# Always resolve relative to the project root (parent of core/)
_CORE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CORE_DIR.parent
SETTINGS_FILE = Path(os.environ.get("ACCOUNT_SETTINGS_FILE", _PROJECT_ROOT / "settings.yaml"))

# Cache for loaded settings to avoid repeated file reads
_settings_cache = None
_cache_mtime = None

def load_settings():
    """
    Load settings from the combined YAML file with caching.
    Returns the full settings dictionary.
    """
    global _settings_cache, _cache_mtime

    try:
        settings_path = Path(SETTINGS_FILE)

        # Check if we need to reload (file changed or not cached)
        if settings_path.exists():
            current_mtime = settings_path.stat().st_mtime
            if _settings_cache is None or _cache_mtime != current_mtime:
                with open(settings_path, "r") as f:
                    _settings_cache = yaml.safe_load(f) or {}
                _cache_mtime = current_mtime
                logger.info(f"Loaded settings from {settings_path}")
            return _settings_cache
        else:
            logger.warning(f"Settings file {SETTINGS_FILE} not found, using defaults")
            return {}
    except Exception as e:
        logger.error(f"Error loading settings: {e}")
        return {}

def get_section(name):
    """Get a top-level settings section, always as a dict."""
    section = load_settings().get(name)
    return section if isinstance(section, dict) else {}

def get_app_config():
    """Get application configuration settings."""
    return get_section("app_config")

def get_catalog_config():
    """Get the [Catalog] section (ILS driver, library cards)."""
    return get_section("Catalog")

def get_driver_config(driver_name):
    """Get the settings section named after an ILS driver (Demo, NoILS)."""
    return get_section(driver_name)

def get_account_menu_config():
    """
    Get the account menu configuration.

    Either a mapping of groups, a legacy mapping with a flat ``MenuItems``
    list, or empty when the built-in default menu should be used.
    """
    return get_section("account_menu")

def reload_settings():
    """Force reload of settings from disk."""
    global _settings_cache, _cache_mtime
    _settings_cache = None
    _cache_mtime = None
    logger.info("Settings cache cleared, will reload on next access")
