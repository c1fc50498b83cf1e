"""Pydantic schema for system prompt configuration files."""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)

from ..core.registry import provider_registry


class ProviderEntry(BaseModel):
    """One entry of the ``providers`` list."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(..., min_length=1, description="Unique provider name")
    type: StrictStr = Field(..., description="Provider type tag")
    priority: StrictInt = Field(..., description="Merge position, higher first")
    enabled: StrictBool = Field(True, description="Whether the provider takes part")
    config: Dict[str, Any] = Field(default_factory=dict, description="Variant-specific fields")

    @field_validator("type")
    @classmethod
    def type_is_registered(cls, value: str, info: ValidationInfo) -> str:
        registry = (info.context or {}).get("registry") or provider_registry
        if not registry.is_registered(value):
            raise ValueError(
                f"unknown provider type '{value}', expected one of "
                f"{registry.list_registered()}"
            )
        return registry.resolve(value)


class SettingsEntry(BaseModel):
    """The ``settings`` block. Missing values are filled from global settings."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    max_generation_time: Optional[StrictInt] = Field(
        None, alias="maxGenerationTime", gt=0, description="Deadline in milliseconds"
    )
    fail_on_provider_error: Optional[StrictBool] = Field(
        None, alias="failOnProviderError"
    )
    content_separator: Optional[StrictStr] = Field(None, alias="contentSeparator")


class SystemPromptConfigModel(BaseModel):
    """Top-level configuration document."""

    model_config = ConfigDict(extra="ignore")

    providers: List[ProviderEntry] = Field(..., description="Provider entries, may be empty")
    settings: SettingsEntry = Field(default_factory=SettingsEntry)


def format_location(loc: Tuple[Union[str, int], ...]) -> str:
    """
    Render a pydantic error location as a field path.

    Example:
        >>> format_location(("providers", 1, "priority"))
        'providers[1].priority'
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path
