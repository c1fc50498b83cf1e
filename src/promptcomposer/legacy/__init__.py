"""Legacy module - compatibility facade for the single-string prompt contract."""

from .adapter import LegacyPromptAdapter
from .instructions import BUILT_IN_INSTRUCTIONS

__all__ = [
    "LegacyPromptAdapter",
    "BUILT_IN_INSTRUCTIONS",
]
