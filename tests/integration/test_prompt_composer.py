"""Integration tests for composing a full system prompt."""

import json
import pytest

from promptcomposer import (
    EnhancedPromptManager,
    LegacyPromptAdapter,
    ProviderContext,
    register_generator,
)


class TestPromptComposerIntegration:
    """End-to-end runs through file loading, every provider type and the adapter."""

    @pytest.fixture
    def prompt_dir(self, tmp_path):
        """A config directory with a persona file and a JSON config."""
        (tmp_path / "fragments").mkdir()
        (tmp_path / "fragments" / "persona.md").write_text(
            "You are {{assistant}}, built by {{company}}.", encoding="utf-8"
        )
        config = {
            "providers": [
                {"name": "persona", "type": "file-based", "priority": 100,
                 "config": {"filePath": "fragments/persona.md",
                            "variables": {"assistant": "Atlas", "company": "${COMPANY}"}}},
                {"name": "environment", "type": "dynamic", "priority": 80,
                 "config": {"generator": "environment"}},
                {"name": "plan", "type": "dynamic", "priority": 60,
                 "config": {"generator": "conditional", "generatorConfig": {
                     "conditions": [
                         {"if": {"field": "metadata.plan", "operator": "equals", "value": "pro"},
                          "then": "The user has a pro plan; enable advanced features."},
                     ],
                     "else": "The user is on the free plan.",
                 }}},
                {"name": "memory", "type": "dynamic", "priority": 40,
                 "config": {"generator": "memory-context", "generatorConfig": {"maxEntries": 1}}},
                {"name": "custom", "type": "dynamic", "priority": 20,
                 "config": {"generator": "signature", "template": "-- {{content}} --"}},
                {"name": "footer", "type": "static", "priority": 0,
                 "config": {"content": "Answer in {{language}}.", "variables": {"language": "English"}}},
                {"name": "draft", "type": "static", "priority": 90, "enabled": False,
                 "config": {"content": "Never shown."}},
            ],
            "settings": {"maxGenerationTime": 2000, "contentSeparator": "\n\n"},
        }
        (tmp_path / "prompts.json").write_text(json.dumps(config), encoding="utf-8")
        return tmp_path

    @pytest.mark.asyncio
    async def test_full_composition(self, prompt_dir, context, monkeypatch):
        """Test every provider type contributes in priority order."""
        monkeypatch.setenv("COMPANY", "Example Corp")

        @register_generator("signature")
        async def signature(ctx, config):
            return f"session {ctx.session_id}"

        async with EnhancedPromptManager() as manager:
            await manager.load_from_file(prompt_dir / "prompts.json")
            result = await manager.generate(context)

        assert result.success
        assert result.errors == []
        sections = result.content.split("\n\n")
        assert sections[0] == "You are Atlas, built by Example Corp."
        assert sections[1].startswith("You are running in a production environment.")
        assert sections[2] == "The user has a pro plan; enable advanced features."
        assert sections[3] == (
            "Relevant memory context:\n- favorite_language: Python\n- ... (1 more)"
        )
        assert sections[4] == "-- session session-7 --"
        assert sections[5] == "Answer in English."
        assert "Never shown." not in result.content

    @pytest.mark.asyncio
    async def test_missing_generator_degrades(self, prompt_dir, empty_context):
        """Test an unregistered generator only removes its own section."""
        async with EnhancedPromptManager() as manager:
            await manager.load_from_file(prompt_dir / "prompts.json", env_variables={})
            result = await manager.generate(empty_context)

        assert result.success
        assert result.failed_providers == ["custom"]
        assert result.content.startswith("You are Atlas, built by ${COMPANY}.")
        assert "The user is on the free plan." in result.content
        assert "No relevant memory context available." in result.content
        assert result.content.endswith("Answer in English.")

    @pytest.mark.asyncio
    async def test_adapter_switches_modes(self, prompt_dir):
        """Test the legacy adapter before and after enabling the engine."""
        adapter = LegacyPromptAdapter()
        adapter.load("You are a helpful assistant.")
        legacy = await adapter.get_system_prompt()
        assert legacy == adapter.get_complete_system_prompt()

        register_generator("signature", lambda ctx, cfg: "sig")
        async with EnhancedPromptManager() as manager:
            await manager.load_from_file(prompt_dir / "prompts.json", env_variables={"COMPANY": "ACME"})
            adapter.enable_enhanced_mode(manager)
            enhanced = await adapter.get_system_prompt(ProviderContext(metadata={"plan": "pro"}))

        assert enhanced.startswith("You are Atlas, built by ACME.")
        assert "-- sig --" in enhanced
        assert adapter.get_complete_system_prompt() == legacy
