"""Logging sink layer for leveled envelope destinations."""

from .interfaces import (
    SINK_ROTATION_POLICIES,
    ResponseSinkFactoryPort,
    ResponseSinkPort,
    SinkLevel,
    SinkRotationPolicy,
)
from .rotating import (
    LoggerResponseSink,
    ResponseRecordFormatter,
    RotatingFileSinkFactory,
    sink_ensure_log_directory,
    sink_file_prefix,
)

__all__ = [
    "LoggerResponseSink",
    "ResponseRecordFormatter",
    "ResponseSinkFactoryPort",
    "ResponseSinkPort",
    "RotatingFileSinkFactory",
    "SINK_ROTATION_POLICIES",
    "SinkLevel",
    "SinkRotationPolicy",
    "sink_ensure_log_directory",
    "sink_file_prefix",
]
