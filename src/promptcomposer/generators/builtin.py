"""Built-in generators available to dynamic providers."""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import GeneratorError
from ..core.types import ProviderContext
from .registry import GeneratorRegistry

NO_MEMORY_FALLBACK = "No relevant memory context available."
NO_SESSION_FALLBACK = "No session context available."

FIELD_LABELS = {
    "sessionId": "Session ID",
    "userId": "User ID",
    "timestamp": "Timestamp",
}

ENVIRONMENT_INSTRUCTIONS = {
    "development": (
        "You are running in a development environment. Verbose explanations, "
        "debugging details and experimental suggestions are welcome."
    ),
    "staging": (
        "You are running in a staging environment. Behave as in production, "
        "but flag anything that looks like a release blocker."
    ),
    "production": (
        "You are running in a production environment. Be concise and accurate, "
        "avoid speculative actions and never expose internal details."
    ),
    "test": (
        "You are running in a test environment. Prefer deterministic, "
        "reproducible answers."
    ),
}


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return str(value)


async def timestamp_generator(context: ProviderContext, config: Dict[str, Any]) -> str:
    """
    Render the context timestamp.

    Config:
        format: "locale" (default), "iso" or a strftime pattern
        timezone: IANA zone name to convert to before formatting
        includeTimezone: append the zone name
        prefix: text placed before the formatted value
    """
    ts = context.timestamp
    tz_name = config.get("timezone")
    if tz_name:
        try:
            zone = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise GeneratorError(
                f"Unknown timezone: {tz_name}", generator="timestamp", cause=e
            )
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        ts = ts.astimezone(zone)

    fmt = config.get("format", "locale")
    if fmt == "locale":
        formatted = ts.strftime("%c")
    elif fmt == "iso":
        formatted = ts.isoformat()
    else:
        formatted = ts.strftime(fmt)

    if config.get("includeTimezone"):
        zone_label = tz_name or ts.tzname() or "local time"
        formatted = f"{formatted} ({zone_label})"

    prefix = config.get("prefix", "Current date and time: ")
    return f"{prefix}{formatted}"


async def session_context_generator(context: ProviderContext, config: Dict[str, Any]) -> str:
    """
    Render selected context fields.

    Config:
        includeFields: field names (default sessionId, userId, timestamp)
        format: "list" (default) or "sentence"
        header: heading line for the list format
        fallback: text used when none of the fields are set
    """
    fields: List[str] = config.get("includeFields") or ["sessionId", "userId", "timestamp"]

    pairs = []
    for name in fields:
        value = context.get_field(name)
        if value is None or value == "":
            continue
        label = FIELD_LABELS.get(name, name)
        pairs.append((label, _format_value(value)))

    if not pairs:
        return config.get("fallback", NO_SESSION_FALLBACK)

    if config.get("format", "list") == "sentence":
        clauses = [f"{label} is {value}" for label, value in pairs]
        return "The current " + ", ".join(clauses) + "."

    header = config.get("header", "Session context:")
    lines = [f"- {label}: {value}" for label, value in pairs]
    return "\n".join([header] + lines) if header else "\n".join(lines)


async def memory_context_generator(context: ProviderContext, config: Dict[str, Any]) -> str:
    """
    Summarize ``context.memory_context``.

    An empty memory map yields the fallback text rather than an error.

    Config:
        maxEntries: maximum number of entries rendered (default 10)
        header: heading line
        fallback: text used when there is no memory
    """
    max_entries = config.get("maxEntries", 10)
    if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries < 1:
        raise GeneratorError(
            f"maxEntries must be a positive integer, got {max_entries!r}",
            generator="memory-context"
        )

    memory = context.memory_context or {}
    if not memory:
        return config.get("fallback", NO_MEMORY_FALLBACK)

    items = list(memory.items())
    lines = [f"- {key}: {_format_value(value)}" for key, value in items[:max_entries]]
    if len(items) > max_entries:
        lines.append(f"- ... ({len(items) - max_entries} more)")

    header = config.get("header", "Relevant memory context:")
    return "\n".join([header] + lines) if header else "\n".join(lines)


async def environment_generator(context: ProviderContext, config: Dict[str, Any]) -> str:
    """
    Emit instructions for the configured environment tag.

    Config:
        environment: tag, falling back to ``metadata.environment`` then "development"
        instructions: mapping of tag to text overriding the built-in texts
    """
    environment = (
        config.get("environment")
        or context.metadata.get("environment")
        or "development"
    )
    instructions = {**ENVIRONMENT_INSTRUCTIONS, **(config.get("instructions") or {})}
    if environment in instructions:
        return instructions[environment]
    return f"You are running in the '{environment}' environment."


def _greater(actual: Any, expected: Any) -> bool:
    try:
        return actual is not None and actual > expected
    except TypeError:
        return False


def _less(actual: Any, expected: Any) -> bool:
    try:
        return actual is not None and actual < expected
    except TypeError:
        return False


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, (str, list, tuple, dict, set)):
        try:
            return expected in actual
        except TypeError:
            return False
    return False


OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "exists": lambda actual, _: actual is not None,
    "notExists": lambda actual, _: actual is None,
    "equals": lambda actual, expected: actual == expected,
    "notEquals": lambda actual, expected: actual != expected,
    "contains": _contains,
    "greaterThan": _greater,
    "lessThan": _less,
}


def evaluate_condition(context: ProviderContext, condition: Dict[str, Any]) -> bool:
    """Evaluate one ``{field, operator, value}`` clause against the context."""
    field_name = condition.get("field")
    operator = condition.get("operator", "exists")
    if not field_name:
        raise GeneratorError("Condition is missing 'field'", generator="conditional")
    if operator not in OPERATORS:
        raise GeneratorError(
            f"Unknown condition operator: {operator}",
            generator="conditional",
            details={"supported": list(OPERATORS)}
        )
    return OPERATORS[operator](context.get_field(field_name), condition.get("value"))


async def conditional_generator(context: ProviderContext, config: Dict[str, Any]) -> str:
    """
    Return the ``then`` text of the first matching clause.

    Clauses are evaluated in order and the first match wins. When none
    matches, ``else`` is returned (empty string by default).
    """
    for clause in config.get("conditions") or []:
        condition: Optional[Dict[str, Any]] = clause.get("if")
        if not isinstance(condition, dict):
            raise GeneratorError("Conditional clause is missing 'if'", generator="conditional")
        if evaluate_condition(context, condition):
            return clause.get("then", "")
    return config.get("else", "")


BUILTIN_GENERATORS = {
    "timestamp": timestamp_generator,
    "session-context": session_context_generator,
    "memory-context": memory_context_generator,
    "environment": environment_generator,
    "conditional": conditional_generator,
}


def register_builtin_generators(registry: GeneratorRegistry) -> None:
    """Install every built-in generator into ``registry``."""
    for name, func in BUILTIN_GENERATORS.items():
        registry.register(name, func)
