"""Providers - pluggable units contributing one fragment each to the prompt."""

from .base import PromptProvider, ProviderState
from .static import StaticProvider
from .dynamic import DynamicProvider
from .file_based import FileBasedProvider
from .factory import ProviderFactory, FactoryResult

__all__ = [
    "PromptProvider",
    "ProviderState",
    "StaticProvider",
    "DynamicProvider",
    "FileBasedProvider",
    "ProviderFactory",
    "FactoryResult",
]
