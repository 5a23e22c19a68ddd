"""Settings loading and the active-settings slot."""

from nexus_spec.config.loader import ConfigLoadError, load_settings, load_settings_file
from nexus_spec.config.settings import SpecSettings, configure, get_settings, use_settings

__all__ = [
    "ConfigLoadError",
    "SpecSettings",
    "configure",
    "get_settings",
    "load_settings",
    "load_settings_file",
    "use_settings",
]
