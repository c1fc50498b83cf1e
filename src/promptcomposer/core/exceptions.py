"""Custom exceptions for the prompt composition system."""

from typing import Optional, Dict, Any, List


class PromptComposerError(Exception):
    """Base exception for all prompt composer errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PromptComposerError):
    """Error in configuration loading or usage."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class ConfigValidationError(ConfigurationError):
    """
    Structural violation in a system prompt configuration.

    The whole load fails; ``field_path`` points at the first offending
    field and ``validation_errors`` lists every violation found.
    """

    def __init__(
        self,
        message: str,
        field_path: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details=details, cause=cause)
        self.field_path = field_path
        self.validation_errors = validation_errors or []
        if field_path:
            self.details["field_path"] = field_path
        if validation_errors:
            self.details["validation_errors"] = validation_errors


class ProviderError(PromptComposerError):
    """Error raised by a content provider."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        provider_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.provider = provider
        self.provider_type = provider_type
        if provider:
            self.details["provider"] = provider
        if provider_type:
            self.details["provider_type"] = provider_type


class ProviderInitError(ProviderError):
    """A provider failed validation or initialization and was excluded."""


class GeneratorNotFoundError(ProviderError):
    """A dynamic provider referenced a generator that is not registered."""

    def __init__(
        self,
        message: str,
        generator: Optional[str] = None,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, provider=provider, provider_type="dynamic",
                         details=details, cause=cause)
        self.generator = generator
        if generator:
            self.details["generator"] = generator


class GeneratorError(ProviderError):
    """A generator was invoked with an unusable configuration."""

    def __init__(
        self,
        message: str,
        generator: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, provider_type="dynamic", details=details, cause=cause)
        self.generator = generator
        if generator:
            self.details["generator"] = generator


class FileReadError(ProviderError):
    """A file-based provider could not read its source and has no cached content."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, provider=provider, provider_type="file-based",
                         details=details, cause=cause)
        self.file_path = file_path
        if file_path:
            self.details["file_path"] = file_path


class GenerationTimeoutError(ProviderError):
    """A provider did not produce content within the generation deadline."""

    def __init__(
        self,
        message: str,
        timeout_ms: Optional[int] = None,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, provider=provider, details=details, cause=cause)
        self.timeout_ms = timeout_ms
        if timeout_ms is not None:
            self.details["timeout_ms"] = timeout_ms
