"""Config module - system prompt configuration loading and validation."""

from .manager import ConfigManager
from .schema import (
    ProviderEntry,
    SettingsEntry,
    SystemPromptConfigModel,
    format_location,
)

__all__ = [
    "ConfigManager",
    "ProviderEntry",
    "SettingsEntry",
    "SystemPromptConfigModel",
    "format_location",
]
