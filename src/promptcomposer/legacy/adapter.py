"""Legacy adapter - the original single-string system prompt contract."""

import logging
from typing import Any, Dict, Optional

from ..core.config import get_settings
from ..core.exceptions import ConfigurationError
from ..core.types import PerformanceStats, PromptGenerationResult, ProviderContext
from ..engine.manager import EnhancedPromptManager
from .instructions import BUILT_IN_INSTRUCTIONS

logger = logging.getLogger(__name__)


class LegacyPromptAdapter:
    """
    Facade preserving the pre-provider prompt contract.

    ``load`` + ``get_complete_system_prompt`` always return
    ``instruction + separator + built_in_instructions``, computed
    synchronously with no providers involved. The enhanced path is only
    reachable after ``enable_enhanced_mode``; the two paths share no state.

    Example:
        >>> adapter = LegacyPromptAdapter()
        >>> adapter.load("You are a helpful assistant.")
        >>> prompt = adapter.get_complete_system_prompt()
    """

    def __init__(
        self,
        separator: Optional[str] = None,
        built_in_instructions: str = BUILT_IN_INSTRUCTIONS,
        manager: Optional[EnhancedPromptManager] = None
    ):
        """
        Initialize the adapter.

        Args:
            separator: Text between instruction and built-ins (default from settings)
            built_in_instructions: Text appended after the instruction
            manager: Engine for the enhanced path; enables enhanced mode when given
        """
        self.separator = separator if separator is not None else get_settings().legacy.separator
        self.built_in_instructions = built_in_instructions
        self._instruction = ""
        self._manager = manager

    # Legacy contract
    def load(self, instruction: str) -> None:
        """Set the user instruction."""
        self._instruction = instruction

    @property
    def instruction(self) -> str:
        return self._instruction

    def get_complete_system_prompt(self) -> str:
        """The instruction followed by the separator and the built-in instructions."""
        return self._instruction + self.separator + self.built_in_instructions

    # Enhanced mode
    @property
    def is_enhanced_mode(self) -> bool:
        return self._manager is not None

    @property
    def manager(self) -> Optional[EnhancedPromptManager]:
        return self._manager

    def enable_enhanced_mode(self, manager: EnhancedPromptManager) -> None:
        """Route ``get_system_prompt`` through the given engine."""
        self._manager = manager
        logger.info("Enhanced prompt mode enabled")

    def disable_enhanced_mode(self) -> Optional[EnhancedPromptManager]:
        """Return to the legacy path. The detached engine is returned, not shut down."""
        manager, self._manager = self._manager, None
        return manager

    async def get_enhanced_system_prompt(
        self,
        context: Optional[ProviderContext] = None,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        memory_context: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> PromptGenerationResult:
        """
        Generate through the engine.

        A context is built from the keyword arguments when none is given.

        Raises:
            ConfigurationError: If enhanced mode is not enabled
        """
        if self._manager is None:
            raise ConfigurationError(
                "Enhanced mode is not enabled; call enable_enhanced_mode first",
                config_key="enhanced_mode"
            )
        if context is None:
            context = ProviderContext(
                user_id=user_id,
                session_id=session_id,
                memory_context=dict(memory_context or {}),
                metadata=dict(metadata or {}),
            )
        return await self._manager.generate(context)

    async def get_system_prompt(self, context: Optional[ProviderContext] = None) -> str:
        """The system prompt for the current mode."""
        if self._manager is None:
            return self.get_complete_system_prompt()
        result = await self.get_enhanced_system_prompt(context)
        return result.content

    def get_performance_stats(self) -> Optional[PerformanceStats]:
        """Engine statistics, or None in legacy mode."""
        if self._manager is None:
            return None
        return self._manager.get_performance_stats()
