"""Engine module - concurrent provider execution and prompt assembly."""

from .manager import EnhancedPromptManager

__all__ = [
    "EnhancedPromptManager",
]
