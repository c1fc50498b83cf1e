"""Token substitution shared by providers and the config loader.

Two token syntaxes exist:

- ``{{name}}`` template variables, resolved when a provider renders content.
- ``${NAME}`` environment references, resolved once at config load time.

In both cases an unresolved token is left in the text verbatim.
"""

import os
import re
from typing import Any, Dict, List, Mapping, Optional, Set

VARIABLE_PATTERN = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")
ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_variables(template: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace ``{{name}}`` tokens with values from ``variables``.

    Non-string values are converted with ``str()``.

    Example:
        >>> substitute_variables("Hello, {{name}}!", {"name": "World"})
        'Hello, World!'
        >>> substitute_variables("Hello, {{name}}!", {})
        'Hello, {{name}}!'
    """
    if not variables:
        return template

    def replace_var(match: re.Match) -> str:
        var_name = match.group(1)
        if var_name in variables:
            value = variables[var_name]
            return value if isinstance(value, str) else str(value)
        return match.group(0)

    return VARIABLE_PATTERN.sub(replace_var, template)


def find_variables(template: str) -> Set[str]:
    """Names of all ``{{name}}`` tokens in a template."""
    return set(VARIABLE_PATTERN.findall(template))


class EnvSubstitution:
    """
    Recursively substitutes ``${NAME}`` tokens in configuration values.

    Only string values are touched; dictionary keys and non-string
    scalars pass through unchanged. Inputs are never mutated.
    """

    def __init__(self, env_variables: Optional[Mapping[str, str]] = None):
        self.env_variables = os.environ if env_variables is None else env_variables

    def substitute(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, dict):
            return {key: self.substitute(item) for key, item in value.items()}
        elif isinstance(value, list):
            return [self.substitute(item) for item in value]
        elif isinstance(value, tuple):
            return tuple(self.substitute(item) for item in value)
        return value

    def _substitute_string(self, text: str) -> str:
        def replacer(match: re.Match) -> str:
            name = match.group(1)
            if name in self.env_variables:
                return str(self.env_variables[name])
            return match.group(0)

        return ENV_PATTERN.sub(replacer, text)

    def unresolved(self, value: Any) -> List[str]:
        """Names referenced in ``value`` that have no binding."""
        if isinstance(value, str):
            return [n for n in ENV_PATTERN.findall(value) if n not in self.env_variables]
        elif isinstance(value, dict):
            return [n for item in value.values() for n in self.unresolved(item)]
        elif isinstance(value, (list, tuple)):
            return [n for item in value for n in self.unresolved(item)]
        return []


def substitute_env(value: Any, env_variables: Optional[Mapping[str, str]] = None) -> Any:
    """Convenience wrapper around :class:`EnvSubstitution`."""
    return EnvSubstitution(env_variables).substitute(value)
