"""Core module - foundational types, exceptions, settings and registries."""

from .types import (
    ProviderType,
    ProviderContext,
    ProviderConfig,
    GenerationSettings,
    SystemPromptConfig,
    ProviderResult,
    PromptGenerationResult,
    PerformanceStats,
    sort_by_priority,
)
from .config import Settings, get_settings, reload_settings
from .exceptions import (
    PromptComposerError,
    ConfigurationError,
    ConfigValidationError,
    ProviderError,
    ProviderInitError,
    GeneratorNotFoundError,
    GeneratorError,
    FileReadError,
    GenerationTimeoutError,
)
from .registry import ProviderRegistry, provider_registry
from .templating import substitute_variables, substitute_env, EnvSubstitution
from .logging import configure_logging

__all__ = [
    # Types
    "ProviderType",
    "ProviderContext",
    "ProviderConfig",
    "GenerationSettings",
    "SystemPromptConfig",
    "ProviderResult",
    "PromptGenerationResult",
    "PerformanceStats",
    "sort_by_priority",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "configure_logging",
    # Exceptions
    "PromptComposerError",
    "ConfigurationError",
    "ConfigValidationError",
    "ProviderError",
    "ProviderInitError",
    "GeneratorNotFoundError",
    "GeneratorError",
    "FileReadError",
    "GenerationTimeoutError",
    # Registry
    "ProviderRegistry",
    "provider_registry",
    # Templating
    "substitute_variables",
    "substitute_env",
    "EnvSubstitution",
]
