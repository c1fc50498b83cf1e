"""Core type definitions for the prompt composition system."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
from enum import Enum
from datetime import datetime, timezone
import re


class ProviderType(Enum):
    """Type tag of a content provider."""
    STATIC = "static"
    DYNAMIC = "dynamic"
    FILE_BASED = "file-based"


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class ProviderContext:
    """
    Per-call input handed to every provider.

    Read-only for the duration of a generation call. Providers must never
    mutate the maps it carries.
    """
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    memory_context: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_field(self, name: str) -> Any:
        """
        Resolve a field by name.

        Accepts camelCase (``userId``) or snake_case (``user_id``) names for
        context attributes, ``metadata.<key>`` dotted paths, and bare keys
        which fall back to ``metadata``. Returns None when nothing matches.
        """
        if name.startswith("metadata."):
            return self._lookup(self.metadata, name[len("metadata."):].split("."))
        if name.startswith("memoryContext.") or name.startswith("memory_context."):
            return self._lookup(self.memory_context, name.split(".", 1)[1].split("."))

        attr = _snake_case(name)
        if attr in ("timestamp", "user_id", "session_id", "memory_context", "metadata"):
            return getattr(self, attr)

        return self._lookup(self.metadata, name.split("."))

    @staticmethod
    def _lookup(data: Dict[str, Any], parts: List[str]) -> Any:
        current: Any = data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current


@dataclass(frozen=True)
class ProviderConfig:
    """Declarative configuration of a single provider."""
    name: str
    type: str
    priority: int = 0
    enabled: bool = True
    config: Dict[str, Any] = field(default_factory=dict)

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType(self.type)


@dataclass(frozen=True)
class GenerationSettings:
    """Engine settings applied to every generation call."""
    max_generation_time: int = 5000  # milliseconds
    fail_on_provider_error: bool = False
    content_separator: str = "\n\n"


def sort_by_priority(items: List[Any], key=lambda item: item.priority) -> List[Any]:
    """Sort by descending priority. Equal priorities keep their input order."""
    return sorted(items, key=lambda item: -key(item))


@dataclass(frozen=True)
class SystemPromptConfig:
    """A fully validated system prompt configuration."""
    providers: Tuple[ProviderConfig, ...] = ()
    settings: GenerationSettings = field(default_factory=GenerationSettings)
    base_dir: Optional[str] = None

    def enabled_providers(self) -> List[ProviderConfig]:
        """Enabled provider configs in merge order."""
        return sort_by_priority([p for p in self.providers if p.enabled])

    def get_provider(self, name: str) -> Optional[ProviderConfig]:
        for provider in self.providers:
            if provider.name == name:
                return provider
        return None


@dataclass
class ProviderResult:
    """Outcome of one provider for one generation call."""
    provider_id: str
    content: str = ""
    success: bool = True
    error: Optional[str] = None
    generation_time_ms: float = 0.0
    error_type: Optional[str] = None


@dataclass
class PromptGenerationResult:
    """Aggregate result of a generation call."""
    content: str = ""
    provider_results: List[ProviderResult] = field(default_factory=list)
    generation_time_ms: float = 0.0
    success: bool = True
    errors: List[str] = field(default_factory=list)

    @property
    def failed_providers(self) -> List[str]:
        """Names of providers that failed in this call."""
        return [r.provider_id for r in self.provider_results if not r.success]

    def get_result(self, provider_id: str) -> Optional[ProviderResult]:
        for result in self.provider_results:
            if result.provider_id == provider_id:
                return result
        return None


@dataclass
class PerformanceStats:
    """Running statistics reported by the generation engine."""
    average_generation_time: float = 0.0
    total_providers: int = 0
    enabled_providers: int = 0
    total_generations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "average_generation_time": self.average_generation_time,
            "total_providers": self.total_providers,
            "enabled_providers": self.enabled_providers,
            "total_generations": self.total_generations,
        }
