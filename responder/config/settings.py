"""Typed runtime settings with dotenv support and startup validation."""

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from responder.builder import BuilderConfig


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class ResponderSettings(BaseSettings):
    """Settings for response builder construction.

    Environment variable names map directly to field names in uppercase.
    Example: `response_log_path` reads from `RESPONSE_LOG_PATH`.

    Attributes:
        response_context: Context tag attached to every envelope.
        response_log_path: Directory for rotating log files.
        response_debug: Mirror every envelope to the debug sink.
        response_log_info: Log success-tier envelopes.
        response_log_client_errors: Log client-error-tier envelopes.
        response_log_internal_errors: Log server-error-tier envelopes.
        response_template: JSON object merged into every envelope at lowest precedence.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    response_context: str = Field(default="")
    response_log_path: str = Field(default="logs/", min_length=1)
    response_debug: bool = Field(default=False)
    response_log_info: bool = Field(default=False)
    response_log_client_errors: bool = Field(default=False)
    response_log_internal_errors: bool = Field(default=True)
    response_template: dict[str, Any] = Field(default_factory=dict)

    @field_validator("response_context")
    @classmethod
    def _validate_context(cls, value: str) -> str:
        return value.strip()

    @field_validator("response_log_path")
    @classmethod
    def _validate_log_path(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value


def config_load_settings() -> ResponderSettings:
    """Load and validate builder settings from environment and dotenv.

    Returns:
        ResponderSettings: Validated settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return ResponderSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_build_builder_config(settings: ResponderSettings) -> BuilderConfig:
    """Convert validated settings into an immutable builder configuration.

    Args:
        settings: Validated settings object.

    Returns:
        BuilderConfig: Builder configuration with equivalent values.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return BuilderConfig(
        context=settings.response_context,
        log_path=settings.response_log_path,
        debug=settings.response_debug,
        log_info=settings.response_log_info,
        log_client_errors=settings.response_log_client_errors,
        log_internal_errors=settings.response_log_internal_errors,
        response_template=settings.response_template,
    )
