"""Typed interfaces for response logging sinks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final
from typing import Protocol


class SinkLevel(str, Enum):
    """Leveled destinations a builder writes envelopes to."""

    INFO = "info"
    ERROR = "error"
    DEBUG = "debug"


@dataclass(frozen=True)
class SinkRotationPolicy:
    """Rotation settings for one leveled sink.

    Attributes:
        when: Rotation interval unit accepted by `TimedRotatingFileHandler`.
        interval: Number of `when` units between rotations.
        backup_count: Rotated files to retain; zero keeps every file.
        mirror_stdout: Whether records are also written to standard output.
    """

    when: str
    interval: int
    backup_count: int
    mirror_stdout: bool = False


SINK_ROTATION_POLICIES: Final[dict[SinkLevel, SinkRotationPolicy]] = {
    SinkLevel.INFO: SinkRotationPolicy(when="D", interval=2, backup_count=1),
    SinkLevel.ERROR: SinkRotationPolicy(when="D", interval=7, backup_count=2, mirror_stdout=True),
    SinkLevel.DEBUG: SinkRotationPolicy(when="H", interval=4, backup_count=0),
}


class ResponseSinkPort(Protocol):
    """Port definition for one leveled envelope destination."""

    def sink_write(self, record: dict[str, Any], description: str) -> None:
        """Write one structured record.

        Args:
            record: Structured payload, `{"response": envelope}` for builder writes.
            description: Short human-readable description of the record.

        Returns:
            None: Writes are fire-and-forget.

        Raises:
            OSError: Raised when the underlying destination rejects the write.
        """

    def sink_close(self) -> None:
        """Release resources held by the sink.

        Returns:
            None: This method does not return a value.

        Raises:
            OSError: Raised when the underlying destination cannot be closed.
        """


class ResponseSinkFactoryPort(Protocol):
    """Port definition for creating leveled sinks from a context tag."""

    def sink_create(self, context: str, level: SinkLevel) -> ResponseSinkPort:
        """Create one sink for a context tag and severity level.

        Args:
            context: Builder context tag used to name the destination.
            level: Sink severity level.

        Returns:
            ResponseSinkPort: Sink owned by the caller.

        Raises:
            OSError: Raised when the destination cannot be opened.
        """
