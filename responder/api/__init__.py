"""API adapter package for HTTP-shaped envelopes."""

from .responses import api_build_json_response

__all__ = ["api_build_json_response"]
