"""Registry of provider variants keyed by their config ``type`` tag."""

from typing import Any, Callable, Dict, List, Optional, Type


class ProviderRegistry:
    """
    Maps ``type`` tags to provider classes.

    Adding a variant means registering a class here; the factory and the
    config validator pick it up without further changes.

    Usage:
        @provider_registry.register("static", aliases=["text"])
        class StaticProvider(PromptProvider):
            ...
    """

    def __init__(self):
        self._types: Dict[str, Type[Any]] = {}
        self._aliases: Dict[str, str] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        tag: str,
        aliases: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Callable[[Type[Any]], Type[Any]]:
        """Decorator registering a provider class under ``tag``."""
        def decorator(cls: Type[Any]) -> Type[Any]:
            self.register_class(tag, cls, aliases=aliases, metadata=metadata)
            return cls
        return decorator

    def register_class(
        self,
        tag: str,
        cls: Type[Any],
        aliases: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Non-decorator form of :meth:`register`. Re-registering a tag replaces it."""
        self._types[tag] = cls
        self._metadata[tag] = dict(metadata or {})
        for alias in aliases or []:
            self._aliases[alias] = tag

    def resolve(self, tag: str) -> str:
        """Canonical tag for a tag or alias."""
        return self._aliases.get(tag, tag)

    def get_provider_class(self, tag: str) -> Type[Any]:
        """
        Provider class for a tag or alias.

        Raises:
            KeyError: If nothing is registered under ``tag``
        """
        canonical = self.resolve(tag)
        if canonical not in self._types:
            raise KeyError(
                f"Provider type '{tag}' is not registered. Available: {self.list_registered()}"
            )
        return self._types[canonical]

    def is_registered(self, tag: str) -> bool:
        return self.resolve(tag) in self._types

    def list_registered(self) -> List[str]:
        return list(self._types)

    def get_metadata(self, tag: str) -> Dict[str, Any]:
        return self._metadata.get(self.resolve(tag), {})

    def unregister(self, tag: str) -> None:
        """Drop a tag and every alias pointing at it."""
        self._types.pop(tag, None)
        self._metadata.pop(tag, None)
        self._aliases = {alias: target for alias, target in self._aliases.items() if target != tag}

    def list_types(self) -> List[Dict[str, Any]]:
        """Every registered type with its description and metadata."""
        return [
            {
                "type": tag,
                "description": getattr(cls, "description", ""),
                **self._metadata[tag],
            }
            for tag, cls in self._types.items()
        ]


# Global registry instance
provider_registry = ProviderRegistry()
