"""Configuration manager - loads, substitutes and validates provider configs."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings, get_settings
from ..core.exceptions import ConfigurationError, ConfigValidationError
from ..core.registry import ProviderRegistry, provider_registry
from ..core.templating import EnvSubstitution
from ..core.types import GenerationSettings, ProviderConfig, SystemPromptConfig
from .. import providers  # noqa: F401  registers the built-in provider types
from .schema import SystemPromptConfigModel, format_location

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Loads a SystemPromptConfig from an in-memory object or a JSON file.

    Loading runs in a fixed order: ``${NAME}`` substitution over every
    string value, structural validation, variant field validation, name
    uniqueness, then settings defaults. Any violation raises
    ConfigValidationError and nothing is kept from the failed load.

    Example:
        >>> manager = ConfigManager()
        >>> config = manager.load_from_object({
        ...     "providers": [
        ...         {"name": "A", "type": "static", "priority": 100,
        ...          "config": {"content": "Hello"}},
        ...     ],
        ... })
        >>> [p.name for p in manager.get_enabled_providers()]
        ['A']
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize the config manager.

        Args:
            registry: Provider type registry used for variant validation
            settings: Global settings supplying defaults
        """
        self.registry = registry or provider_registry
        self._global_settings = settings
        self._config: Optional[SystemPromptConfig] = None

    @property
    def config(self) -> Optional[SystemPromptConfig]:
        """The last successfully loaded config, if any."""
        return self._config

    @property
    def settings(self) -> GenerationSettings:
        """Settings of the loaded config, or the defaults when nothing is loaded."""
        if self._config is None:
            return self._default_settings()
        return self._config.settings

    def load_from_object(
        self,
        data: Mapping[str, Any],
        base_dir: Optional[Union[str, Path]] = None,
        env_variables: Optional[Mapping[str, str]] = None,
        validate: bool = True
    ) -> SystemPromptConfig:
        """
        Load a configuration from a dictionary.

        Args:
            data: Configuration document
            base_dir: Directory relative file paths resolve against
            env_variables: Values for ``${NAME}`` tokens (default: os.environ)
            validate: Check variant-specific provider fields. When False those
                problems surface later as per-provider init errors instead.

        Returns:
            The validated SystemPromptConfig

        Raises:
            ConfigValidationError: If the document is structurally invalid
        """
        substituted = EnvSubstitution(env_variables).substitute(copy.deepcopy(data))
        config = self._build(substituted, base_dir, validate)
        self._config = config
        logger.info(
            "Loaded %d provider config(s), %d enabled",
            len(config.providers), len(config.enabled_providers())
        )
        return config

    def load_from_file(
        self,
        path: Union[str, Path],
        base_dir: Optional[Union[str, Path]] = None,
        env_variables: Optional[Mapping[str, str]] = None,
        validate: bool = True
    ) -> SystemPromptConfig:
        """
        Load a configuration from a JSON file.

        ``base_dir`` defaults to the directory containing the file.

        Raises:
            ConfigurationError: If the file cannot be read
            ConfigValidationError: If the JSON is malformed or invalid
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file '{path}': {e}",
                config_key=str(path),
                cause=e
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(
                f"Invalid JSON in '{path}': {e.msg} (line {e.lineno}, column {e.colno})",
                field_path="<root>",
                cause=e
            ) from e

        if base_dir is None:
            base_dir = path.resolve().parent
        return self.load_from_object(data, base_dir=base_dir,
                                     env_variables=env_variables, validate=validate)

    def get_enabled_providers(self) -> List[ProviderConfig]:
        """Enabled provider configs, descending priority, config order on ties."""
        if self._config is None:
            return []
        return self._config.enabled_providers()

    def validate(self, data: Mapping[str, Any]) -> List[str]:
        """
        Validate a document without loading it.

        Returns:
            List of error messages, empty when valid
        """
        try:
            self._build(copy.deepcopy(data), None, True)
        except ConfigValidationError as e:
            return e.validation_errors or [e.message]
        return []

    def _build(
        self,
        data: Any,
        base_dir: Optional[Union[str, Path]],
        validate: bool
    ) -> SystemPromptConfig:
        if not isinstance(data, Mapping):
            raise ConfigValidationError(
                "Configuration must be an object",
                field_path="<root>",
                validation_errors=["<root>: must be an object"]
            )

        try:
            model = SystemPromptConfigModel.model_validate(
                dict(data), context={"registry": self.registry}
            )
        except PydanticValidationError as e:
            errors = [
                f"{format_location(err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            first = format_location(e.errors()[0]["loc"]) or "<root>"
            raise ConfigValidationError(
                f"Configuration validation failed at '{first}': {errors[0].split(': ', 1)[1]}",
                field_path=first,
                validation_errors=errors,
                cause=e
            ) from e

        errors: List[str] = []
        paths: List[str] = []

        seen: Dict[str, int] = {}
        for index, entry in enumerate(model.providers):
            if entry.name in seen:
                paths.append(f"providers[{index}].name")
                errors.append(
                    f"providers[{index}].name: duplicate provider name '{entry.name}' "
                    f"(first defined at providers[{seen[entry.name]}])"
                )
            else:
                seen[entry.name] = index

            if validate:
                cls = self.registry.get_provider_class(entry.type)
                for field_name, message in cls.validate_config(entry.config):
                    path = f"providers[{index}].config.{field_name}"
                    paths.append(path)
                    errors.append(f"{path}: {message}")

        if errors:
            raise ConfigValidationError(
                f"Configuration validation failed at '{paths[0]}': {errors[0].split(': ', 1)[1]}",
                field_path=paths[0],
                validation_errors=errors
            )

        providers = tuple(
            ProviderConfig(
                name=entry.name,
                type=entry.type,
                priority=entry.priority,
                enabled=entry.enabled,
                config=entry.config,
            )
            for entry in model.providers
        )
        return SystemPromptConfig(
            providers=providers,
            settings=self._merge_settings(model),
            base_dir=str(base_dir) if base_dir is not None else None,
        )

    def _merge_settings(self, model: SystemPromptConfigModel) -> GenerationSettings:
        defaults = self._default_settings()
        given = model.settings
        return GenerationSettings(
            max_generation_time=(
                given.max_generation_time
                if given.max_generation_time is not None
                else defaults.max_generation_time
            ),
            fail_on_provider_error=(
                given.fail_on_provider_error
                if given.fail_on_provider_error is not None
                else defaults.fail_on_provider_error
            ),
            content_separator=(
                given.content_separator
                if given.content_separator is not None
                else defaults.content_separator
            ),
        )

    def _default_settings(self) -> GenerationSettings:
        defaults = (self._global_settings or get_settings()).generation
        return GenerationSettings(
            max_generation_time=defaults.max_generation_time,
            fail_on_provider_error=defaults.fail_on_provider_error,
            content_separator=defaults.content_separator,
        )
