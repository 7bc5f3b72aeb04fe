"""Builder bootstrap wiring for startup validation and dependency assembly."""

from responder.builder import ResponseBuilder
from responder.config import config_build_builder_config, config_load_settings
from responder.sinks import ResponseSinkFactoryPort


def bootstrap_create_response_builder(sink_factory: ResponseSinkFactoryPort | None = None) -> ResponseBuilder:
    """Assemble a response builder after validating startup configuration.

    Args:
        sink_factory: Optional sink factory override; rotating file sinks are used when omitted.

    Returns:
        ResponseBuilder: Fully initialized builder instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        LogDirectoryError: Raised when the configured log directory is unavailable.
    """

    settings = config_load_settings()
    return ResponseBuilder(
        config=config_build_builder_config(settings),
        sink_factory=sink_factory,
    )
