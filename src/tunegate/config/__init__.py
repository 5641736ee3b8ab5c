"""Configuration module for tunegate."""

from .settings import (
    APISettings,
    CatalogSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "APISettings",
    "CatalogSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
