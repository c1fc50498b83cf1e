"""CLI commands."""

from .compose import compose, validate

__all__ = [
    "compose",
    "validate",
]
