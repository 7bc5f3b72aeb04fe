"""Builder layer for response envelope construction and forwarding."""

from .errors import (
    InvalidArgumentsError,
    InvalidCodeTypeError,
    LogDirectoryError,
    ResponseBuilderError,
    UnknownStatusCodeError,
)
from .interfaces import BuilderConfig, ResponseCallback, ResponseEnvelope, ResponseResult
from .service import HTTP_SUMMARY_KEY, JSON_CONTENT_TYPE, ResponseBuilder

__all__ = [
    "BuilderConfig",
    "HTTP_SUMMARY_KEY",
    "InvalidArgumentsError",
    "InvalidCodeTypeError",
    "JSON_CONTENT_TYPE",
    "LogDirectoryError",
    "ResponseBuilder",
    "ResponseBuilderError",
    "ResponseCallback",
    "ResponseEnvelope",
    "ResponseResult",
    "UnknownStatusCodeError",
]
