"""FastAPI response adapter for forwarded envelopes."""

from collections.abc import Mapping
from typing import Any

from fastapi.responses import JSONResponse

from responder.builder import HTTP_SUMMARY_KEY


def api_build_json_response(envelope: Mapping[str, Any]) -> JSONResponse:
    """Convert a forwarded envelope into a framework JSON response.

    Args:
        envelope: Envelope returned by `ResponseBuilder.forward`.

    Returns:
        JSONResponse: Response with `http$` status and headers; body excludes `http$`.

    Raises:
        ValueError: Raised when the envelope carries no `http$` summary.
    """

    http_summary = envelope.get(HTTP_SUMMARY_KEY)
    if not isinstance(http_summary, Mapping):
        raise ValueError(f"envelope is missing the `{HTTP_SUMMARY_KEY}` summary")

    headers = dict(http_summary.get("headers") or {})
    headers.pop("content-type", None)
    content = {key: value for key, value in envelope.items() if key != HTTP_SUMMARY_KEY}
    return JSONResponse(
        content=content,
        status_code=int(http_summary["status"]),
        headers=headers,
    )
