"""Configuration package exports."""

from .loader import CONFIG_ENV_VAR, ConfigLoader
from .models import KNOWN_SOURCES, HarvestSettings

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigLoader",
    "HarvestSettings",
    "KNOWN_SOURCES",
]
