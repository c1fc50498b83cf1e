"""Dynamic provider - content produced by a named generator."""

import inspect
from typing import Any, Dict, List, Optional

from ..core.exceptions import GeneratorNotFoundError, ProviderError
from ..core.registry import provider_registry
from ..core.templating import substitute_variables
from ..core.types import ProviderConfig, ProviderContext
from ..generators.registry import GeneratorRegistry, generator_registry
from .base import PromptProvider, ConfigIssue, require_string, optional_type


@provider_registry.register("dynamic", metadata={"io": True})
class DynamicProvider(PromptProvider):
    """
    Invokes ``config.generator`` with ``(context, config.generatorConfig)``.

    The generator is looked up on every call, never at construction, so a
    generator registered after the provider was built still resolves. When
    ``config.template`` is set, the generated text replaces its
    ``{{content}}`` token.
    """

    provider_type = "dynamic"
    description = "Content from a registered generator function"

    def __init__(
        self,
        provider_config: ProviderConfig,
        registry: Optional[GeneratorRegistry] = None
    ):
        super().__init__(provider_config)
        self._registry = registry or generator_registry

    @classmethod
    def _validate(cls, config: Dict[str, Any]) -> List[ConfigIssue]:
        issues = [
            require_string(config, "generator", allow_empty=False),
            optional_type(config, "generatorConfig", dict, "an object"),
            optional_type(config, "template", str, "a string"),
        ]
        return [issue for issue in issues if issue]

    @property
    def generator_name(self) -> str:
        return self.config["generator"]

    async def _generate(self, context: ProviderContext) -> str:
        try:
            generator = self._registry.get(self.generator_name)
        except GeneratorNotFoundError as e:
            raise GeneratorNotFoundError(
                f"Generator '{self.generator_name}' is not registered",
                generator=self.generator_name,
                provider=self.name,
                cause=e
            ) from e

        result = generator(context, dict(self.config.get("generatorConfig") or {}))
        if inspect.isawaitable(result):
            result = await result

        if not isinstance(result, str):
            raise ProviderError(
                f"Generator '{self.generator_name}' returned {type(result).__name__}, expected str",
                provider=self.name,
                provider_type=self.provider_type
            )

        template = self.config.get("template")
        if template:
            return substitute_variables(template, {"content": result})
        return result
