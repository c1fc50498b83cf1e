"""Abstract base class for system prompt content providers."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging

from ..core.exceptions import ProviderError, ProviderInitError
from ..core.types import ProviderConfig, ProviderContext

logger = logging.getLogger(__name__)

ConfigIssue = Tuple[str, str]  # (field, message)


class ProviderState(Enum):
    """Lifecycle state of a provider instance."""
    UNCONFIGURED = "unconfigured"
    INITIALIZED = "initialized"
    ACTIVE = "active"
    DESTROYED = "destroyed"
    FAILED = "failed"


class PromptProvider(ABC):
    """
    Abstract base class for all content providers.

    A provider contributes one text fragment to the final system prompt.
    Instances move through ``UNCONFIGURED -> INITIALIZED -> ACTIVE ->
    DESTROYED``; a failed ``initialize`` leaves the provider ``FAILED`` for
    the rest of the load cycle.

    Subclasses implement ``_validate`` and ``_generate`` and may override
    ``_setup`` / ``_teardown`` for resources they own.
    """

    provider_type: str = "base"
    description: str = "Base provider"

    def __init__(self, provider_config: ProviderConfig):
        self.provider_config = provider_config
        self.state = ProviderState.UNCONFIGURED

    @property
    def name(self) -> str:
        return self.provider_config.name

    @property
    def priority(self) -> int:
        return self.provider_config.priority

    @property
    def config(self) -> Dict[str, Any]:
        return self.provider_config.config

    @property
    def is_active(self) -> bool:
        return self.state == ProviderState.ACTIVE

    @classmethod
    def validate_config(cls, config: Dict[str, Any]) -> List[ConfigIssue]:
        """
        Check variant-specific config fields.

        Pure: never touches files, generators or any other resource.

        Returns:
            List of (field, message) pairs; empty when the config is valid
        """
        if not isinstance(config, dict):
            return [("config", "must be an object")]
        return cls._validate(config)

    @classmethod
    @abstractmethod
    def _validate(cls, config: Dict[str, Any]) -> List[ConfigIssue]:
        """Variant-specific validation. Returns (field, message) pairs."""
        pass

    async def initialize(self) -> None:
        """
        Validate the config and perform one-time setup.

        Raises:
            ProviderInitError: If validation or setup fails. The provider
                releases anything it acquired and stays FAILED.
        """
        if self.state != ProviderState.UNCONFIGURED:
            raise ProviderInitError(
                f"Provider '{self.name}' cannot be initialized from state {self.state.value}",
                provider=self.name,
                provider_type=self.provider_type
            )

        issues = self.validate_config(self.config)
        if issues:
            self.state = ProviderState.FAILED
            raise ProviderInitError(
                f"Invalid config for provider '{self.name}': "
                + "; ".join(f"{f}: {m}" for f, m in issues),
                provider=self.name,
                provider_type=self.provider_type,
                details={"issues": [f"{f}: {m}" for f, m in issues]}
            )
        self.state = ProviderState.INITIALIZED

        try:
            await self._setup()
        except Exception as e:
            await self._teardown()
            self.state = ProviderState.FAILED
            raise ProviderInitError(
                f"Provider '{self.name}' failed to initialize: {e}",
                provider=self.name,
                provider_type=self.provider_type,
                cause=e
            ) from e

        self.state = ProviderState.ACTIVE
        logger.debug("Provider '%s' (%s) active", self.name, self.provider_type)

    async def generate_content(self, context: ProviderContext) -> str:
        """
        Produce this provider's fragment for one generation call.

        Raises:
            ProviderError: If the provider is not active or generation fails
        """
        if self.state != ProviderState.ACTIVE:
            raise ProviderError(
                f"Provider '{self.name}' is not active (state: {self.state.value})",
                provider=self.name,
                provider_type=self.provider_type
            )
        content = await self._generate(context)
        if not isinstance(content, str):
            raise ProviderError(
                f"Provider '{self.name}' produced {type(content).__name__}, expected str",
                provider=self.name,
                provider_type=self.provider_type
            )
        return content

    @abstractmethod
    async def _generate(self, context: ProviderContext) -> str:
        pass

    async def destroy(self) -> None:
        """Release all resources. Safe to call repeatedly."""
        if self.state == ProviderState.DESTROYED:
            return
        try:
            await self._teardown()
        finally:
            self.state = ProviderState.DESTROYED

    async def _setup(self) -> None:
        """Override to acquire resources during initialize."""
        pass

    async def _teardown(self) -> None:
        """Override to release resources. Must tolerate partial setup."""
        pass

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, priority={self.priority}, "
            f"state={self.state.value})"
        )


def require_string(config: Dict[str, Any], key: str, allow_empty: bool = True) -> Optional[ConfigIssue]:
    """Issue for a missing or non-string required field, else None."""
    if key not in config or config[key] is None:
        return (key, "is required")
    if not isinstance(config[key], str):
        return (key, "must be a string")
    if not allow_empty and not config[key].strip():
        return (key, "must not be empty")
    return None


def optional_type(config: Dict[str, Any], key: str, expected: type, label: str) -> Optional[ConfigIssue]:
    """Issue for an optional field present with the wrong type, else None."""
    if key in config and config[key] is not None and not isinstance(config[key], expected):
        return (key, f"must be {label}")
    return None
