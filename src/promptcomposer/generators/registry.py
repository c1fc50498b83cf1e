"""Process-wide registry of named content generators.

Lifecycle:
    init      - the module-level ``generator_registry`` is created on import and
                the built-ins are installed by ``promptcomposer.generators``
    register  - ``register(name, fn)`` binds a name; the last writer wins
    lookup    - ``get(name)`` is called by dynamic providers on every call,
                never cached, so registration order is irrelevant
    reset     - ``reset()`` restores the built-in set (test isolation)
"""

import logging
import threading
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..core.exceptions import GeneratorNotFoundError
from ..core.types import ProviderContext

logger = logging.getLogger(__name__)

GeneratorFunc = Callable[[ProviderContext, Dict[str, Any]], Union[str, Awaitable[str]]]


class GeneratorRegistry:
    """
    Mapping from generator name to content-producing function.

    Writes are serialized with a lock and a binding is only published once
    complete, so concurrent lookups see either the old or the new function.
    """

    def __init__(self):
        self._generators: Dict[str, GeneratorFunc] = {}
        self._lock = threading.RLock()
        self._builtin_installer: Optional[Callable[["GeneratorRegistry"], None]] = None

    def register(self, name: str, func: Optional[GeneratorFunc] = None):
        """
        Register a generator, overwriting any previous binding.

        Usable directly or as a decorator:

            registry.register("greeting", greet)

            @registry.register("greeting")
            async def greet(context, config):
                ...
        """
        if func is None:
            def decorator(fn: GeneratorFunc) -> GeneratorFunc:
                self.register(name, fn)
                return fn
            return decorator

        if not callable(func):
            raise TypeError(f"Generator '{name}' must be callable, got {type(func)}")

        with self._lock:
            if name in self._generators:
                logger.debug("Overriding generator '%s'", name)
            self._generators[name] = func
        return func

    def get(self, name: str) -> GeneratorFunc:
        """Look up a generator. Raises GeneratorNotFoundError if absent."""
        func = self._generators.get(name)
        if func is None:
            raise GeneratorNotFoundError(
                f"Generator '{name}' is not registered",
                generator=name,
                details={"available": self.list_registered()}
            )
        return func

    def is_registered(self, name: str) -> bool:
        return name in self._generators

    def unregister(self, name: str) -> None:
        with self._lock:
            self._generators.pop(name, None)

    def list_registered(self) -> List[str]:
        with self._lock:
            return sorted(self._generators)

    def set_builtin_installer(self, installer: Callable[["GeneratorRegistry"], None]) -> None:
        """Set the hook used by ``reset`` to reinstall built-in generators."""
        self._builtin_installer = installer

    def reset(self, include_builtins: bool = True) -> None:
        """Drop every registration, then reinstall the built-ins unless told not to."""
        with self._lock:
            self._generators = {}
            if include_builtins and self._builtin_installer is not None:
                self._builtin_installer(self)

    def __contains__(self, name: str) -> bool:
        return self.is_registered(name)

    def __len__(self) -> int:
        return len(self._generators)


# Global registry instance
generator_registry = GeneratorRegistry()


def register_generator(name: str, func: Optional[GeneratorFunc] = None):
    """Register a generator in the process-wide registry."""
    return generator_registry.register(name, func)


def get_generator(name: str) -> GeneratorFunc:
    """Look up a generator in the process-wide registry."""
    return generator_registry.get(name)
