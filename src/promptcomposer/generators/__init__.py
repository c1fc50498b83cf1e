"""Generators - named content functions used by dynamic providers."""

from .registry import (
    GeneratorRegistry,
    GeneratorFunc,
    generator_registry,
    register_generator,
    get_generator,
)
from .builtin import (
    BUILTIN_GENERATORS,
    register_builtin_generators,
    evaluate_condition,
    timestamp_generator,
    session_context_generator,
    memory_context_generator,
    environment_generator,
    conditional_generator,
)

generator_registry.set_builtin_installer(register_builtin_generators)
register_builtin_generators(generator_registry)

__all__ = [
    "GeneratorRegistry",
    "GeneratorFunc",
    "generator_registry",
    "register_generator",
    "get_generator",
    "BUILTIN_GENERATORS",
    "register_builtin_generators",
    "evaluate_condition",
    "timestamp_generator",
    "session_context_generator",
    "memory_context_generator",
    "environment_generator",
    "conditional_generator",
]
