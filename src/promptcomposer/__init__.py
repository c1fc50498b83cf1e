"""
PromptComposer - System prompts assembled from pluggable providers

Providers (static text, generator functions, files on disk) each contribute
one fragment; the engine runs them concurrently under a deadline and joins
the results in priority order.

Basic Usage:
    >>> from promptcomposer import EnhancedPromptManager, ProviderContext
    >>> manager = EnhancedPromptManager()
    >>> await manager.load_from_file("prompts.json")
    >>> result = await manager.generate(ProviderContext(user_id="alice"))
    >>> print(result.content)

Legacy contract:
    >>> from promptcomposer import LegacyPromptAdapter
    >>> adapter = LegacyPromptAdapter()
    >>> adapter.load("You are a helpful assistant.")
    >>> adapter.get_complete_system_prompt()

Modules:
    - promptcomposer.core: types, exceptions, settings, registries
    - promptcomposer.providers: provider variants and factory
    - promptcomposer.generators: generator registry and built-ins
    - promptcomposer.config: configuration loading and validation
    - promptcomposer.engine: concurrent generation engine
    - promptcomposer.legacy: single-string compatibility facade
    - promptcomposer.cli: command-line interface
"""

from .core.types import (
    ProviderType,
    ProviderContext,
    ProviderConfig,
    GenerationSettings,
    SystemPromptConfig,
    ProviderResult,
    PromptGenerationResult,
    PerformanceStats,
)
from .core.exceptions import (
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
from .core.logging import configure_logging
from .generators import generator_registry, register_generator
from .providers import (
    PromptProvider,
    ProviderState,
    StaticProvider,
    DynamicProvider,
    FileBasedProvider,
    ProviderFactory,
)
from .config import ConfigManager
from .engine import EnhancedPromptManager
from .legacy import LegacyPromptAdapter, BUILT_IN_INSTRUCTIONS


__version__ = "1.0.0"
__all__ = [
    # Main classes
    "EnhancedPromptManager",
    "LegacyPromptAdapter",
    "ConfigManager",
    # Core types
    "ProviderType",
    "ProviderContext",
    "ProviderConfig",
    "GenerationSettings",
    "SystemPromptConfig",
    "ProviderResult",
    "PromptGenerationResult",
    "PerformanceStats",
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
    # Providers
    "PromptProvider",
    "ProviderState",
    "StaticProvider",
    "DynamicProvider",
    "FileBasedProvider",
    "ProviderFactory",
    # Generators
    "generator_registry",
    "register_generator",
    # Misc
    "BUILT_IN_INSTRUCTIONS",
    "configure_logging",
]
