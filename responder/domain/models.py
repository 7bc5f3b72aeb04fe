"""Typed domain models shared across builder and sink layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SeverityTier(str, Enum):
    """Severity classification of a status code by its leading digit."""

    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class StatusDescriptor:
    """Fixed status descriptor attached to every built envelope.

    Attributes:
        code: Positive integer status code.
        message: Short status message.
        description: Optional human-readable description.
    """

    code: int
    message: str
    description: str | None = None

    def status_payload(self) -> dict[str, Any]:
        """Render descriptor as a plain envelope `status` mapping.

        Returns:
            dict[str, Any]: Mapping with `code`, `message` and, when present, `description`.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.description is not None:
            payload["description"] = self.description
        return payload
