"""Static provider - fixed text with variable substitution."""

from typing import Any, Dict, List

from ..core.registry import provider_registry
from ..core.templating import substitute_variables
from ..core.types import ProviderContext
from .base import PromptProvider, ConfigIssue, require_string, optional_type


@provider_registry.register("static", metadata={"io": False})
class StaticProvider(PromptProvider):
    """
    Returns ``config.content`` with ``{{var}}`` tokens taken from
    ``config.variables``. Unresolved tokens are kept as written.
    """

    provider_type = "static"
    description = "Fixed text with {{variable}} substitution"

    @classmethod
    def _validate(cls, config: Dict[str, Any]) -> List[ConfigIssue]:
        issues = [
            require_string(config, "content"),
            optional_type(config, "variables", dict, "an object"),
        ]
        return [issue for issue in issues if issue]

    async def _generate(self, context: ProviderContext) -> str:
        return substitute_variables(self.config["content"], self.config.get("variables"))
