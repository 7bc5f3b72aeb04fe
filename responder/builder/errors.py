"""Project-native typed exceptions for response envelope construction."""

from __future__ import annotations


class ResponseBuilderError(Exception):
    """Base exception for envelope construction failures.

    Attributes:
        status_code: Offending status code value, when relevant.
    """

    def __init__(self, message: str, status_code: object = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidCodeTypeError(ResponseBuilderError, TypeError):
    """Status code is missing or not a number."""

    def __init__(self, status_code: object = None):
        super().__init__("Code is missing or not a number.", status_code=status_code)


class UnknownStatusCodeError(ResponseBuilderError, LookupError):
    """Numeric status code is absent from the status table."""

    def __init__(self, status_code: object = None):
        super().__init__(f"Provided code is invalid: {status_code!r}.", status_code=status_code)


class InvalidArgumentsError(ResponseBuilderError, TypeError):
    """Call arguments or forwarded message are not mappings."""


class LogDirectoryError(ResponseBuilderError, OSError):
    """Log directory cannot be created or written at builder construction."""
