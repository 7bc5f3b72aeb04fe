"""Main module entrypoint for command-line envelope construction.

This module validates startup configuration and prints built or forwarded
envelopes as JSON.
"""

import argparse
import json
import sys
from typing import Any, Sequence

from responder.bootstrap import bootstrap_create_response_builder
from responder.builder import ResponseBuilderError
from responder.config import SettingsLoadError


def main(argv: Sequence[str] | None = None) -> None:
    """Run selected envelope command with validated startup configuration.

    Args:
        argv: Optional argument list; process arguments are used when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 when settings, the log directory, input JSON or the envelope is invalid.
    """

    argument_parser = argparse.ArgumentParser(description="Service response envelope builder")
    subparsers = argument_parser.add_subparsers(dest="command", required=True)

    make_parser = subparsers.add_parser("make", help="Build a new envelope for a status code")
    make_parser.add_argument("code", type=int, help="Status code present in the status table")
    make_parser.add_argument("--args", dest="args", type=str, default=None, help="JSON object of call fields")

    forward_parser = subparsers.add_parser("forward", help="Relay a built envelope as an HTTP-shaped envelope")
    forward_parser.add_argument("--message", dest="message", type=str, required=True, help="JSON envelope to relay")
    forward_parser.add_argument("--args", dest="args", type=str, default=None, help="JSON object of call fields")

    parsed_arguments = argument_parser.parse_args(argv)

    try:
        call_arguments = main_parse_json_object(parsed_arguments.args)
        message = main_parse_json_object(parsed_arguments.message) if parsed_arguments.command == "forward" else None
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        raise SystemExit(1) from error

    try:
        builder = bootstrap_create_response_builder()
    except (ResponseBuilderError, SettingsLoadError) as error:
        print(f"error: {error}", file=sys.stderr)
        raise SystemExit(1) from error

    try:
        if parsed_arguments.command == "forward":
            result = builder.forward(message, call_arguments)
        else:
            result = builder.make(parsed_arguments.code, call_arguments)
    finally:
        builder.builder_close()

    if not result.result_is_success():
        print(f"error: {result.error}", file=sys.stderr)
        raise SystemExit(1)
    print(json.dumps(result.envelope, sort_keys=True))


def main_parse_json_object(raw_value: str | None) -> dict[str, Any] | None:
    """Parse an optional JSON object argument.

    Args:
        raw_value: Raw JSON text, or None when the option was omitted.

    Returns:
        dict[str, Any] | None: Parsed object, or None when omitted.

    Raises:
        ValueError: Raised when the text is not a JSON object.
    """

    if raw_value is None:
        return None
    parsed_value = json.loads(raw_value)
    if not isinstance(parsed_value, dict):
        raise ValueError("expected a JSON object")
    return parsed_value


if __name__ == "__main__":
    main()
