"""Tests for the legacy prompt adapter."""

import pytest

from promptcomposer.core.exceptions import ConfigurationError
from promptcomposer.engine import EnhancedPromptManager
from promptcomposer.legacy import LegacyPromptAdapter, BUILT_IN_INSTRUCTIONS


class TestLegacyContract:
    """Tests for the single-string contract."""

    def test_exact_output(self):
        """Test instruction + separator + built-ins, byte for byte."""
        adapter = LegacyPromptAdapter()
        adapter.load("You are a helpful assistant.")
        assert adapter.get_complete_system_prompt() == (
            "You are a helpful assistant." + "\n\n" + BUILT_IN_INSTRUCTIONS
        )

    def test_empty_instruction(self):
        """Test the separator is kept for an empty instruction."""
        adapter = LegacyPromptAdapter()
        assert adapter.get_complete_system_prompt() == "\n\n" + BUILT_IN_INSTRUCTIONS

    def test_load_replaces(self):
        """Test later loads replace the instruction."""
        adapter = LegacyPromptAdapter(separator="\n")
        adapter.load("first")
        adapter.load("second")
        assert adapter.instruction == "second"
        assert adapter.get_complete_system_prompt().startswith("second\n## Operating Instructions")

    def test_custom_built_ins(self):
        """Test the appended text can be swapped."""
        adapter = LegacyPromptAdapter(separator=" | ", built_in_instructions="RULES")
        adapter.load("Hi")
        assert adapter.get_complete_system_prompt() == "Hi | RULES"

    def test_separator_from_settings(self, monkeypatch):
        """Test the default separator comes from settings."""
        from promptcomposer.core.config import reload_settings

        monkeypatch.setenv("PC_LEGACY_SEPARATOR", "::")
        reload_settings()
        try:
            adapter = LegacyPromptAdapter()
            adapter.load("x")
            assert adapter.get_complete_system_prompt() == "x::" + BUILT_IN_INSTRUCTIONS
        finally:
            monkeypatch.delenv("PC_LEGACY_SEPARATOR")
            reload_settings()

    @pytest.mark.asyncio
    async def test_get_system_prompt_legacy_mode(self):
        """Test the mode switch defaults to the legacy path."""
        adapter = LegacyPromptAdapter()
        adapter.load("Be brief.")
        assert not adapter.is_enhanced_mode
        assert await adapter.get_system_prompt() == adapter.get_complete_system_prompt()
        assert adapter.get_performance_stats() is None

    @pytest.mark.asyncio
    async def test_enhanced_requires_opt_in(self):
        """Test the enhanced path is unreachable without a manager."""
        with pytest.raises(ConfigurationError):
            await LegacyPromptAdapter().get_enhanced_system_prompt()


class TestEnhancedMode:
    """Tests for routing through the engine."""

    @pytest.mark.asyncio
    async def test_enhanced_generation(self, hello_world_config):
        """Test get_system_prompt uses the engine once enabled."""
        adapter = LegacyPromptAdapter()
        adapter.load("ignored in enhanced mode")

        async with EnhancedPromptManager() as manager:
            await manager.load_from_object(hello_world_config)
            adapter.enable_enhanced_mode(manager)

            assert adapter.is_enhanced_mode
            assert await adapter.get_system_prompt() == "Hello World"
            assert adapter.get_performance_stats().total_generations == 1

            # Legacy output is unaffected by enhanced mode
            assert adapter.get_complete_system_prompt().startswith("ignored in enhanced mode")

    @pytest.mark.asyncio
    async def test_context_from_keywords(self):
        """Test keyword arguments build the provider context."""
        config = {"providers": [{
            "name": "session", "type": "dynamic", "priority": 1,
            "config": {"generator": "session-context",
                       "generatorConfig": {"includeFields": ["userId"], "format": "sentence"}},
        }]}
        async with EnhancedPromptManager() as manager:
            await manager.load_from_object(config)
            adapter = LegacyPromptAdapter(manager=manager)
            result = await adapter.get_enhanced_system_prompt(user_id="alice")

        assert result.content == "The current User ID is alice."

    @pytest.mark.asyncio
    async def test_disable(self, hello_world_config):
        """Test disabling returns the manager and restores the legacy path."""
        async with EnhancedPromptManager() as manager:
            await manager.load_from_object(hello_world_config)
            adapter = LegacyPromptAdapter(manager=manager)
            adapter.load("legacy")

            assert adapter.disable_enhanced_mode() is manager
            assert adapter.manager is None
            assert await adapter.get_system_prompt() == "legacy\n\n" + BUILT_IN_INSTRUCTIONS
