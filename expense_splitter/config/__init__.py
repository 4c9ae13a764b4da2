"""Configuration package."""

from expense_splitter.config.settings import (
    Settings,
    SplitterSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "Settings",
    "SplitterSettings",
    "get_settings",
    "validate_all_settings",
]
