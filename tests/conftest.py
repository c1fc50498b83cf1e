"""Shared pytest fixtures for PromptComposer tests."""

import pytest
import sys
import asyncio
from datetime import datetime, timezone
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from promptcomposer.core.types import ProviderConfig, ProviderContext
from promptcomposer.generators import generator_registry


@pytest.fixture(autouse=True)
def reset_generators():
    """Give every test the built-in generator set and nothing else."""
    generator_registry.reset()
    yield
    generator_registry.reset()


@pytest.fixture
def fixed_time():
    return datetime(2024, 3, 15, 14, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def context(fixed_time):
    """A fully populated provider context."""
    return ProviderContext(
        timestamp=fixed_time,
        user_id="user-42",
        session_id="session-7",
        memory_context={"favorite_language": "Python", "project": "promptcomposer"},
        metadata={"environment": "production", "plan": "pro", "tags": ["beta"]},
    )


@pytest.fixture
def empty_context(fixed_time):
    """A context with nothing but a timestamp."""
    return ProviderContext(timestamp=fixed_time)


@pytest.fixture
def hello_world_config():
    """Two static providers joined by a single space."""
    return {
        "providers": [
            {"name": "A", "type": "static", "priority": 100, "enabled": True,
             "config": {"content": "Hello"}},
            {"name": "B", "type": "static", "priority": 50, "enabled": True,
             "config": {"content": "World"}},
        ],
        "settings": {"maxGenerationTime": 1000, "failOnProviderError": False,
                     "contentSeparator": " "},
    }


@pytest.fixture
def prompt_file(tmp_path):
    """A prompt fragment on disk."""
    path = tmp_path / "persona.md"
    path.write_text("You are {{name}}, an assistant.", encoding="utf-8")
    return path


def static_config(name="static", content="text", priority=0, **extra):
    """Build a static ProviderConfig."""
    return ProviderConfig(
        name=name,
        type="static",
        priority=priority,
        config={"content": content, **extra},
    )


class SlowGenerator:
    """Generator that sleeps before answering; records completion order."""

    def __init__(self, delay: float, text: str, log=None):
        self.delay = delay
        self.text = text
        self.log = log if log is not None else []

    async def __call__(self, context, config):
        await asyncio.sleep(self.delay)
        self.log.append(self.text)
        return self.text


async def never_resolves(context, config):
    """Generator that never finishes on its own."""
    await asyncio.Event().wait()
    return "unreachable"


@pytest.fixture
def slow_generator():
    return SlowGenerator


def note_registry():
    """A private provider registry holding only a ``note`` type."""
    from promptcomposer.core.registry import ProviderRegistry
    from promptcomposer.providers.base import PromptProvider, require_string

    registry = ProviderRegistry()

    @registry.register("note")
    class NoteProvider(PromptProvider):
        provider_type = "note"
        description = "A short note"

        @classmethod
        def _validate(cls, config):
            issue = require_string(config, "text")
            return [issue] if issue else []

        async def _generate(self, context):
            return f"Note: {self.config['text']}"

    return registry
