"""Generation engine - concurrent provider fan-out and deterministic merge."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set, Union

from ..config.manager import ConfigManager
from ..core.exceptions import (
    ConfigurationError,
    GenerationTimeoutError,
    ProviderInitError,
    PromptComposerError,
)
from ..core.types import (
    GenerationSettings,
    PerformanceStats,
    PromptGenerationResult,
    ProviderContext,
    ProviderResult,
    SystemPromptConfig,
)
from ..providers.base import PromptProvider
from ..providers.factory import ProviderFactory

logger = logging.getLogger(__name__)


class EnhancedPromptManager:
    """
    Assembles the system prompt from every active provider.

    ``generate`` starts one task per provider, waits for all of them or the
    ``max_generation_time`` deadline, then joins the successful contents in
    priority order with ``content_separator``. Providers still running at
    the deadline are reported as timed out; their tasks keep running in the
    background and whatever they produce is discarded.

    Example:
        >>> manager = EnhancedPromptManager()
        >>> await manager.load_from_object({
        ...     "providers": [
        ...         {"name": "A", "type": "static", "priority": 100, "config": {"content": "Hello"}},
        ...         {"name": "B", "type": "static", "priority": 50, "config": {"content": "World"}},
        ...     ],
        ...     "settings": {"contentSeparator": " "},
        ... })
        >>> (await manager.generate()).content
        'Hello World'
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        factory: Optional[ProviderFactory] = None
    ):
        """
        Initialize the manager.

        Args:
            config_manager: Loader/validator for configurations
            factory: Provider factory (a default one is created per load)
        """
        self.config_manager = config_manager or ConfigManager()
        self._factory = factory
        self._providers: List[PromptProvider] = []
        self._init_errors: List[ProviderInitError] = []
        self._config: Optional[SystemPromptConfig] = None
        self._stragglers: Set[asyncio.Task] = set()

        self._generation_count = 0
        self._average_generation_time = 0.0

    # Loading
    async def load_from_object(
        self,
        config: Mapping[str, Any],
        base_dir: Optional[Union[str, Path]] = None,
        env_variables: Optional[Mapping[str, str]] = None,
        validate: bool = True
    ) -> SystemPromptConfig:
        """
        Load a configuration and (re)build the providers.

        Raises:
            ConfigValidationError: If the config is invalid. Providers from the
                previous load stay in place.
        """
        loaded = self.config_manager.load_from_object(
            config, base_dir=base_dir, env_variables=env_variables, validate=validate
        )
        await self._activate(loaded)
        return loaded

    async def load_from_file(
        self,
        path: Union[str, Path],
        base_dir: Optional[Union[str, Path]] = None,
        env_variables: Optional[Mapping[str, str]] = None,
        validate: bool = True
    ) -> SystemPromptConfig:
        """Load a JSON configuration file and (re)build the providers."""
        loaded = self.config_manager.load_from_file(
            path, base_dir=base_dir, env_variables=env_variables, validate=validate
        )
        await self._activate(loaded)
        return loaded

    async def _activate(self, config: SystemPromptConfig) -> None:
        if self._factory is not None:
            factory = self._factory
            factory.base_dir = config.base_dir
        else:
            factory = ProviderFactory(
                registry=self.config_manager.registry, base_dir=config.base_dir
            )

        built = await factory.create_all(config.providers)

        previous = self._providers
        self._providers = built.providers
        self._init_errors = built.errors
        self._config = config

        for provider in previous:
            await provider.destroy()

        logger.info(
            "Activated %d provider(s); %d excluded",
            len(built.providers), len(built.errors)
        )

    # Introspection
    @property
    def config(self) -> Optional[SystemPromptConfig]:
        return self._config

    @property
    def settings(self) -> GenerationSettings:
        if self._config is None:
            return self.config_manager.settings
        return self._config.settings

    @property
    def initialization_errors(self) -> List[ProviderInitError]:
        """Providers excluded during the last load, with the reason."""
        return list(self._init_errors)

    def get_enabled_providers(self) -> List[PromptProvider]:
        """Active providers in merge order."""
        return list(self._providers)

    def get_provider(self, name: str) -> Optional[PromptProvider]:
        for provider in self._providers:
            if provider.name == name:
                return provider
        return None

    # Generation
    async def generate(self, context: Optional[ProviderContext] = None) -> PromptGenerationResult:
        """
        Run every active provider and merge their output.

        Args:
            context: Per-call input (a fresh one is created when omitted)

        Returns:
            PromptGenerationResult; ``success`` is False only when
            ``fail_on_provider_error`` is set and some provider failed
        """
        if self._config is None:
            raise ConfigurationError("No configuration loaded; call load_from_object or load_from_file")

        context = context or ProviderContext()
        providers = list(self._providers)
        settings = self._config.settings
        timeout_ms = settings.max_generation_time

        start_time = time.perf_counter()

        tasks = [
            asyncio.create_task(self._run_provider(provider, context),
                                name=f"promptcomposer-{provider.name}")
            for provider in providers
        ]
        if tasks:
            await asyncio.wait(tasks, timeout=timeout_ms / 1000)

        results: List[ProviderResult] = []
        for provider, task in zip(providers, tasks):
            if task.done():
                results.append(task.result())
                continue

            self._detach(task)
            error = GenerationTimeoutError(
                f"Provider '{provider.name}' exceeded {timeout_ms}ms",
                timeout_ms=timeout_ms,
                provider=provider.name
            )
            logger.warning(error.message)
            results.append(ProviderResult(
                provider_id=provider.name,
                content="",
                success=False,
                error=error.message,
                generation_time_ms=self._elapsed(start_time),
                error_type=type(error).__name__
            ))

        generation_time = self._elapsed(start_time)
        errors = [f"{r.provider_id}: {r.error}" for r in results if not r.success]
        success = not (settings.fail_on_provider_error and errors)

        # Results are already in priority order; completion order plays no part.
        content = settings.content_separator.join(
            r.content for r in results if r.success and r.content
        )

        self._record(generation_time)

        return PromptGenerationResult(
            content=content,
            provider_results=results,
            generation_time_ms=generation_time,
            success=success,
            errors=errors
        )

    def generate_sync(self, context: Optional[ProviderContext] = None) -> PromptGenerationResult:
        """Synchronous version of generate."""
        return asyncio.run(self.generate(context))

    async def _run_provider(self, provider: PromptProvider, context: ProviderContext) -> ProviderResult:
        start_time = time.perf_counter()
        try:
            content = await provider.generate_content(context)
        except PromptComposerError as e:
            logger.warning("Provider '%s' failed: %s", provider.name, e.message)
            return ProviderResult(
                provider_id=provider.name,
                content="",
                success=False,
                error=e.message,
                generation_time_ms=self._elapsed(start_time),
                error_type=type(e).__name__
            )
        except Exception as e:
            logger.exception("Provider '%s' raised an unexpected error", provider.name)
            return ProviderResult(
                provider_id=provider.name,
                content="",
                success=False,
                error=str(e) or type(e).__name__,
                generation_time_ms=self._elapsed(start_time),
                error_type=type(e).__name__
            )

        return ProviderResult(
            provider_id=provider.name,
            content=content,
            success=True,
            generation_time_ms=self._elapsed(start_time)
        )

    def _detach(self, task: asyncio.Task) -> None:
        """Keep a timed-out task referenced until it finishes on its own."""
        self._stragglers.add(task)
        task.add_done_callback(self._stragglers.discard)

    @property
    def pending_tasks(self) -> int:
        """Timed-out provider tasks still running in the background."""
        return len(self._stragglers)

    # Statistics
    def _record(self, generation_time: float) -> None:
        self._generation_count += 1
        self._average_generation_time += (
            (generation_time - self._average_generation_time) / self._generation_count
        )

    def get_performance_stats(self) -> PerformanceStats:
        """Running statistics updated after every generate call."""
        return PerformanceStats(
            average_generation_time=self._average_generation_time,
            total_providers=len(self._config.providers) if self._config else 0,
            enabled_providers=len(self._providers),
            total_generations=self._generation_count
        )

    @staticmethod
    def _elapsed(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    # Lifecycle
    async def shutdown(self) -> None:
        """Destroy all providers and cancel timed-out tasks still running."""
        providers, self._providers = self._providers, []
        for provider in providers:
            await provider.destroy()

        stragglers = list(self._stragglers)
        for task in stragglers:
            task.cancel()
        if stragglers:
            await asyncio.gather(*stragglers, return_exceptions=True)
        self._stragglers.clear()

    async def __aenter__(self) -> "EnhancedPromptManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
