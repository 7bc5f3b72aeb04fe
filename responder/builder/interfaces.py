"""Typed contracts for builder configuration and call results."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import ResponseBuilderError

ResponseEnvelope = dict[str, Any]
ResponseCallback = Callable[[ResponseBuilderError | None, ResponseEnvelope | None], object]


@dataclass(frozen=True)
class BuilderConfig:
    """Immutable configuration for one response builder.

    Attributes:
        context: Context tag attached to every envelope; never overridable by callers.
        log_path: Directory for rotating log files.
        debug: Mirror every envelope to the debug sink.
        log_info: Log success-tier envelopes.
        log_client_errors: Log client-error-tier envelopes.
        log_internal_errors: Log server-error-tier envelopes.
        response_template: Lowest-precedence fields merged into every envelope.
    """

    context: str = ""
    log_path: str = "logs/"
    debug: bool = False
    log_info: bool = False
    log_client_errors: bool = False
    log_internal_errors: bool = True
    response_template: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.response_template, Mapping):
            raise TypeError("response_template must be a mapping")
        object.__setattr__(self, "response_template", MappingProxyType(copy.deepcopy(dict(self.response_template))))


@dataclass(frozen=True)
class ResponseResult:
    """Tagged success or failure outcome of `make` and `forward`.

    Exactly one of `envelope` and `error` is set.

    Attributes:
        envelope: Built envelope on success.
        error: Validation failure on failure.
    """

    envelope: ResponseEnvelope | None = None
    error: ResponseBuilderError | None = None

    def __post_init__(self) -> None:
        if (self.envelope is None) == (self.error is None):
            raise ValueError("ResponseResult requires exactly one of envelope or error")

    def result_is_success(self) -> bool:
        """Return whether the call produced an envelope.

        Returns:
            bool: True when `envelope` is set.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self.error is None

    def result_unwrap(self) -> ResponseEnvelope:
        """Return the envelope or raise the captured validation error.

        Returns:
            ResponseEnvelope: Built envelope.

        Raises:
            ResponseBuilderError: Raised when the result holds a failure.
        """

        if self.error is not None:
            raise self.error
        return self.envelope
