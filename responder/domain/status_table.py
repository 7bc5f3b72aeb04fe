"""Canonical status descriptor table and severity-tier classification."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Final

from .models import SeverityTier, StatusDescriptor


class StatusCode(IntEnum):
    """Status codes recognized by the envelope builder."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    RANGE_NOT_SATISFIABLE = 416
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


STATUS_DESCRIPTORS: Final[dict[int, StatusDescriptor]] = {
    descriptor.code: descriptor
    for descriptor in (
        StatusDescriptor(code=StatusCode.OK.value, message="OK"),
        StatusDescriptor(code=StatusCode.CREATED.value, message="Created"),
        StatusDescriptor(
            code=StatusCode.NO_CONTENT.value,
            message="No Content",
            description="Request was successful, but payload has no content.",
        ),
        StatusDescriptor(
            code=StatusCode.RESET_CONTENT.value,
            message="Reset Content",
            description="Request was successful, user agent needs to reset the document view for updated content.",
        ),
        StatusDescriptor(
            code=StatusCode.PARTIAL_CONTENT.value,
            message="Partial Content",
            description="Request was successful in fulfilling the range request of the content.",
        ),
        StatusDescriptor(
            code=StatusCode.BAD_REQUEST.value,
            message="Bad Request",
            description="Required argument is missing or an argument is of wrong type.",
        ),
        # Wire message is the correctly spelled "Unauthorized"; earlier releases emitted "Unathorized".
        StatusDescriptor(
            code=StatusCode.UNAUTHORIZED.value,
            message="Unauthorized",
            description="Required authorization credentials are missing or not valid.",
        ),
        StatusDescriptor(
            code=StatusCode.NOT_FOUND.value,
            message="Not Found",
            description="Resource does not exist.",
        ),
        StatusDescriptor(
            code=StatusCode.METHOD_NOT_ALLOWED.value,
            message="Not Allowed",
            description="The specified method is not allowed on this resource.",
        ),
        StatusDescriptor(
            code=StatusCode.REQUEST_TIMEOUT.value,
            message="Request timeout",
            description="The server timed out when trying to fulfill the request.",
        ),
        StatusDescriptor(
            code=StatusCode.CONFLICT.value,
            message="Conflict",
            description="Resource already exists.",
        ),
        StatusDescriptor(
            code=StatusCode.RANGE_NOT_SATISFIABLE.value,
            message="Range Not Satisfiable",
            description=(
                "None of the ranges in the request's range field overlap the current extent of the selected "
                "resource or the set of ranges requested has been rejected due to invalid ranges or an "
                "excessive request of small or overlapping ranges."
            ),
        ),
        StatusDescriptor(code=StatusCode.INTERNAL_SERVER_ERROR.value, message="Internal Server Error"),
        StatusDescriptor(
            code=StatusCode.SERVICE_UNAVAILABLE.value,
            message="Service Unavailable",
            description=(
                "the server is currently unable to handle the request due to a temporary overload or "
                "scheduled maintenance."
            ),
        ),
    )
}


def domain_status_is_code_type(code: object) -> bool:
    """Return whether a value is an acceptable numeric status code type.

    Args:
        code: Candidate status code value.

    Returns:
        bool: True for `int` and `float` values; `bool` is rejected.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(code, bool):
        return False
    return isinstance(code, (int, float))


def domain_status_lookup(code: object) -> StatusDescriptor | None:
    """Resolve the descriptor for a status code.

    Args:
        code: Numeric status code. Integral floats resolve like their integer value.

    Returns:
        StatusDescriptor | None: Table descriptor, or None for any code outside the table.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not domain_status_is_code_type(code):
        return None
    if isinstance(code, float) and not (math.isfinite(code) and code.is_integer()):
        return None
    return STATUS_DESCRIPTORS.get(int(code))


def domain_status_severity_tier(code: int) -> SeverityTier:
    """Classify a status code into its severity tier.

    Args:
        code: Numeric status code.

    Returns:
        SeverityTier: Tier derived from `floor(code / 100)`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    status_class = math.floor(code / 100)
    if status_class < 4:
        return SeverityTier.SUCCESS
    if status_class < 5:
        return SeverityTier.CLIENT_ERROR
    return SeverityTier.SERVER_ERROR
