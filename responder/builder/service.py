"""Response envelope builder with severity-tier sink dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Final

from responder.domain import (
    SeverityTier,
    domain_merge_layers,
    domain_status_is_code_type,
    domain_status_lookup,
    domain_status_severity_tier,
)
from responder.sinks import (
    ResponseSinkFactoryPort,
    ResponseSinkPort,
    RotatingFileSinkFactory,
    SinkLevel,
    sink_ensure_log_directory,
)

from .errors import (
    InvalidArgumentsError,
    InvalidCodeTypeError,
    LogDirectoryError,
    ResponseBuilderError,
    UnknownStatusCodeError,
)
from .interfaces import BuilderConfig, ResponseCallback, ResponseEnvelope, ResponseResult

logger = logging.getLogger(__name__)

HTTP_SUMMARY_KEY: Final[str] = "http$"
JSON_CONTENT_TYPE: Final[str] = "application/json"

_TIER_DESCRIPTIONS: Final[dict[SeverityTier, str]] = {
    SeverityTier.SUCCESS: "Response",
    SeverityTier.CLIENT_ERROR: "Client error response",
    SeverityTier.SERVER_ERROR: "Internal error response",
}


class ResponseBuilder:
    """Build status envelopes and route them to leveled sinks.

    The builder owns three sinks (info, error, debug) created from the
    injected factory at construction. Client-error envelopes share the info
    sink; server-error envelopes go to the error sink.
    """

    def __init__(
        self,
        config: BuilderConfig | None = None,
        sink_factory: ResponseSinkFactoryPort | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize builder, log directory and instance-owned sinks.

        Args:
            config: Builder configuration; defaults apply when omitted.
            sink_factory: Factory for leveled sinks; rotating file sinks under `log_path` when omitted.
            clock: UTC clock used for forwarded `date` headers.

        Raises:
            LogDirectoryError: Raised when the log directory cannot be created or written, or a sink cannot be opened.
        """

        self._config = config or BuilderConfig()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        try:
            sink_ensure_log_directory(self._config.log_path)
        except OSError as error:
            raise LogDirectoryError(f"Log directory is unavailable: {self._config.log_path}. Details: {error}") from error

        resolved_factory = sink_factory or RotatingFileSinkFactory(self._config.log_path)
        self._sinks: dict[SinkLevel, ResponseSinkPort] = {}
        try:
            for level in (SinkLevel.INFO, SinkLevel.ERROR, SinkLevel.DEBUG):
                self._sinks[level] = resolved_factory.sink_create(context=self._config.context, level=level)
        except OSError as error:
            self.builder_close()
            raise LogDirectoryError(f"Log sinks are unavailable under {self._config.log_path}. Details: {error}") from error

    @property
    def config(self) -> BuilderConfig:
        return self._config

    def make(
        self,
        code: object,
        args: Mapping[str, Any] | None = None,
        callback: ResponseCallback | None = None,
    ) -> ResponseResult:
        """Build a new envelope for a status code.

        Layers merge in order: template, `{status: descriptor}`, args, `{context}`. The merged
        `status.code` must still be in the status table and selects the sink tier.

        Args:
            code: Numeric status code present in the status table.
            args: Call-specific fields.
            callback: Optional `(error, envelope)` mirror of the returned result.

        Returns:
            ResponseResult: Envelope on success, validation error otherwise.

        Raises:
            RuntimeError: Validation failures are returned, never raised.
        """

        try:
            if not domain_status_is_code_type(code):
                raise InvalidCodeTypeError(status_code=code)
            descriptor = domain_status_lookup(code)
            if descriptor is None:
                raise UnknownStatusCodeError(status_code=code)
            self._builder_validate_mapping(args, "args")
            envelope = domain_merge_layers(
                self._config.response_template,
                {"status": descriptor.status_payload()},
                args,
                {"context": self._config.context},
            )
            status_code = self._builder_resolve_status_code(envelope.get("status"))
        except ResponseBuilderError as error:
            return self._builder_deliver_failure(error, callback)

        self._builder_dispatch(envelope, status_code)
        return self._builder_deliver_success(envelope, callback)

    def forward(
        self,
        message: Mapping[str, Any],
        args: Mapping[str, Any] | None = None,
        callback: ResponseCallback | None = None,
    ) -> ResponseResult:
        """Relay a built message as an HTTP-shaped envelope.

        Layers merge in order: template, message, args, `{context}`. Sinks
        receive the merged envelope; the returned envelope drops `error` for
        server errors and replaces `status` with an `http$` summary.

        Args:
            message: Previously built envelope carrying a `status` mapping.
            args: Call-specific fields.
            callback: Optional `(error, envelope)` mirror of the returned result.

        Returns:
            ResponseResult: Forwarded envelope on success, validation error otherwise.

        Raises:
            RuntimeError: Validation failures are returned, never raised.
        """

        try:
            if not isinstance(message, Mapping):
                raise InvalidArgumentsError("message must be a mapping")
            self._builder_validate_mapping(args, "args")
            envelope = domain_merge_layers(
                self._config.response_template,
                message,
                args,
                {"context": self._config.context},
            )
            status_code = self._builder_resolve_status_code(envelope.get("status"))
        except ResponseBuilderError as error:
            return self._builder_deliver_failure(error, callback)

        self._builder_dispatch(envelope, status_code)

        forwarded = dict(envelope)
        if domain_status_severity_tier(status_code) is SeverityTier.SERVER_ERROR:
            forwarded.pop("error", None)
        forwarded.pop("status", None)
        forwarded[HTTP_SUMMARY_KEY] = {
            "status": status_code,
            "headers": {
                "date": format_datetime(self._clock().astimezone(timezone.utc), usegmt=True),
                "content-type": JSON_CONTENT_TYPE,
            },
        }
        return self._builder_deliver_success(forwarded, callback)

    def builder_close(self) -> None:
        """Close every sink owned by this builder.

        Returns:
            None: This method does not return a value.

        Raises:
            OSError: Raised when a sink cannot be closed.
        """

        for sink in self._sinks.values():
            sink.sink_close()

    def _builder_resolve_status_code(self, status: object) -> int:
        if not isinstance(status, Mapping):
            raise InvalidCodeTypeError(status_code=None)
        code = status.get("code")
        if not domain_status_is_code_type(code):
            raise InvalidCodeTypeError(status_code=code)
        descriptor = domain_status_lookup(code)
        if descriptor is None:
            raise UnknownStatusCodeError(status_code=code)
        return descriptor.code

    @staticmethod
    def _builder_validate_mapping(value: object, name: str) -> None:
        if value is not None and not isinstance(value, Mapping):
            raise InvalidArgumentsError(f"{name} must be a mapping, got {type(value).__name__}")

    def _builder_dispatch(self, envelope: ResponseEnvelope, status_code: int) -> None:
        tier = domain_status_severity_tier(status_code)
        description = _TIER_DESCRIPTIONS[tier]
        record = {"response": envelope}

        if tier is SeverityTier.SUCCESS and self._config.log_info:
            self._sinks[SinkLevel.INFO].sink_write(record, description)
        elif tier is SeverityTier.CLIENT_ERROR and self._config.log_client_errors:
            self._sinks[SinkLevel.INFO].sink_write(record, description)
        elif tier is SeverityTier.SERVER_ERROR and self._config.log_internal_errors:
            self._sinks[SinkLevel.ERROR].sink_write(record, description)

        if self._config.debug:
            self._sinks[SinkLevel.DEBUG].sink_write(record, description)

    @staticmethod
    def _builder_deliver_success(
        envelope: ResponseEnvelope,
        callback: ResponseCallback | None,
    ) -> ResponseResult:
        if callback is not None:
            callback(None, envelope)
        return ResponseResult(envelope=envelope)

    @staticmethod
    def _builder_deliver_failure(
        error: ResponseBuilderError,
        callback: ResponseCallback | None,
    ) -> ResponseResult:
        logger.debug("Envelope construction rejected: %s", error)
        if callback is not None:
            callback(error, None)
        return ResponseResult(error=error)
