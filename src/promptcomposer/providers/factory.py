"""Provider factory - builds providers from declarative config entries."""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.exceptions import ProviderInitError
from ..core.registry import ProviderRegistry, provider_registry
from ..core.types import ProviderConfig, sort_by_priority
from .base import PromptProvider

logger = logging.getLogger(__name__)


@dataclass
class FactoryResult:
    """Providers built for one load cycle, plus the ones that failed."""
    providers: List[PromptProvider] = field(default_factory=list)
    errors: List[ProviderInitError] = field(default_factory=list)

    @property
    def failed_names(self) -> List[str]:
        return [e.provider for e in self.errors if e.provider]


class ProviderFactory:
    """
    Creates providers by dispatching on the config ``type`` tag.

    Construction failures are captured per provider; they never abort the
    whole load.
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        base_dir: Optional[str] = None
    ):
        """
        Initialize the factory.

        Args:
            registry: Provider type registry (defaults to the global one)
            base_dir: Default directory for relative file paths
        """
        self.registry = registry or provider_registry
        self.base_dir = base_dir

    def build(self, provider_config: ProviderConfig) -> PromptProvider:
        """Instantiate the provider class for a config without initializing it."""
        try:
            cls = self.registry.get_provider_class(provider_config.type)
        except KeyError as e:
            raise ProviderInitError(
                f"Unknown provider type '{provider_config.type}'",
                provider=provider_config.name,
                provider_type=provider_config.type,
                cause=e
            ) from e

        if "default_base_dir" in inspect.signature(cls.__init__).parameters:
            return cls(provider_config, default_base_dir=self.base_dir)
        return cls(provider_config)

    async def create(self, provider_config: ProviderConfig) -> PromptProvider:
        """
        Build, validate and initialize a single provider.

        Raises:
            ProviderInitError: If any step fails
        """
        provider = self.build(provider_config)
        try:
            await provider.initialize()
        except ProviderInitError:
            await provider.destroy()
            raise
        except Exception as e:
            await provider.destroy()
            raise ProviderInitError(
                f"Provider '{provider_config.name}' failed to initialize: {e}",
                provider=provider_config.name,
                provider_type=provider_config.type,
                cause=e
            ) from e
        return provider

    async def create_all(self, configs: Iterable[ProviderConfig]) -> FactoryResult:
        """
        Create every enabled provider.

        Returns:
            FactoryResult with providers in descending priority order
            (config order on ties) and the errors of excluded providers
        """
        result = FactoryResult()

        for provider_config in sort_by_priority([c for c in configs if c.enabled]):
            try:
                provider = await self.create(provider_config)
            except ProviderInitError as e:
                logger.warning(
                    "Excluding provider '%s' (%s): %s",
                    provider_config.name, provider_config.type, e.message
                )
                result.errors.append(e)
                continue
            result.providers.append(provider)

        return result
